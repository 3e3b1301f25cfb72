"""Bookshelf — named routes, a redirecting before-hook, and back navigation.

Run with::

    python examples/bookshelf.py
"""

import logging

import anyio

from tern import MemoryHistory, Router

logging.basicConfig(level=logging.DEBUG, format="[%(name)s] %(message)s")

history = MemoryHistory("/")
router = Router(history)


@router.route("/", name="index")
def index(name, params, query):
    print("index")


@router.route("/b/{id:[0-9]+}", name="book")
async def book(name, params, query):
    await anyio.sleep(0)
    print(f"book {params['id']} tab={query.get('tab', 'summary')}")


def legacy_books(transition, replace, push):
    replace("book", transition.params, transition.query)


router.add_route("/books/{id:[0-9]+}", index, name="legacy", on_before=legacy_books)
router.on_not_found(lambda path: print(f"not found: {path}"))


async def main() -> None:
    async with router:
        await router.push_state("legacy", {"id": "100"}, {"tab": "reviews"})
        await router.on_change_path("/missing")
        history.back()
        await router.settled()
    print(history.entries)


if __name__ == "__main__":
    anyio.run(main)
