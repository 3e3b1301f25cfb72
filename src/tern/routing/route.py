"""Route template compiler, matcher and resolver.

A template mixes literal path text with ``{name}`` or ``{name:pattern}``
placeholders::

    /users/{id:[0-9]+}
    /r/{topic:[0-9]+}/{kind:[a-z]{1}}
    /tabs/{tab:([a-z]+)?}

The pattern body may contain its own brace quantifiers (``{1,3}``) and
braces inside character classes; only a ``}`` at nesting depth zero
closes the placeholder.
"""

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from tern.config import DEFAULT_PATTERN
from tern.errors import DuplicateParam, MalformedTemplate

PARAM_START = "{"
PARAM_END = "}"
PARAM_SEPARATOR = ":"

_REPEATED_SLASHES = re.compile(r"/{2,}")


def sanitize(value: str) -> str:
    """Normalize a path or template.

    Examples::

        "/a/b//c/d//e/" -> "/a/b/c/d/e"
        "users/"        -> "/users"
        "users"         -> "/users"
        ""              -> "/"
    """
    value = _REPEATED_SLASHES.sub("/", value)
    if value.endswith("/"):
        value = value[:-1]
    if not value.startswith("/"):
        value = "/" + value
    return value


@dataclass(frozen=True, slots=True)
class Param:
    """A compiled ``{...}`` placeholder.

    ``start``/``end`` delimit the placeholder inside the sanitized
    template. ``previous_contents`` is the literal text between the end of
    the previous placeholder (or the start of the template) and this one;
    it anchors where the value is expected to begin.
    """

    name: str
    start: int
    end: int
    pattern: str
    previous_contents: str
    matcher: re.Pattern[str] = field(repr=False, compare=False)

    @property
    def length(self) -> int:
        return self.end - self.start

    def accepts(self, value: str) -> bool:
        """Return True if *value* matches the whole pattern."""
        return self.matcher.fullmatch(value) is not None

    def prefixes(self, value: str) -> Iterator[str]:
        """Yield the prefixes of *value* the pattern accepts, longest first."""
        for end in range(len(value), -1, -1):
            candidate = value[:end]
            if self.accepts(candidate):
                yield candidate


class _TemplateReader:
    """Cursor over a sanitized template. Mutable during compilation only."""

    __slots__ = ("offset", "template")

    def __init__(self, template: str) -> None:
        self.template = template
        self.offset = 0

    def eof(self) -> bool:
        return self.offset >= len(self.template)

    def peek(self, ch: str) -> bool:
        return not self.eof() and self.template[self.offset] == ch

    def consume(self, ch: str) -> bool:
        if self.peek(ch):
            self.offset += 1
            return True
        return False

    def expect(self, ch: str) -> None:
        if not self.consume(ch):
            got = "end of template" if self.eof() else repr(self.template[self.offset])
            raise MalformedTemplate(self.template, self.offset, f"Expected {ch!r} but got {got}")

    def read_name(self) -> str:
        start = self.offset
        while not self.eof() and not self.peek(PARAM_SEPARATOR) and not self.peek(PARAM_END):
            if self.template[self.offset] in (PARAM_START, "/"):
                raise MalformedTemplate(
                    self.template,
                    self.offset,
                    f"Unexpected {self.template[self.offset]!r} in param name",
                )
            self.offset += 1
        return self.template[start : self.offset]

    def read_pattern(self) -> str:
        """Read a regex body up to the ``}`` that closes the placeholder.

        Braces inside a character class (``[^}]``) are literal.
        """
        start = self.offset
        depth = 0
        in_class = False
        while not self.eof():
            ch = self.template[self.offset]
            if ch == "\\":
                self.offset += 2
                continue
            if in_class:
                if ch == "]":
                    in_class = False
            elif ch == "[":
                in_class = True
                # A ']' right after '[' or '[^' is a member, not the close
                self.offset += 1
                self.consume("^")
                self.consume("]")
                continue
            elif ch == PARAM_START:
                depth += 1
            elif ch == PARAM_END:
                if depth == 0:
                    return self.template[start : self.offset]
                depth -= 1
            self.offset += 1
        raise MalformedTemplate(
            self.template, len(self.template), f"Expected {PARAM_END!r} but got end of template"
        )


def compile_params(template: str, default_pattern: str = DEFAULT_PATTERN) -> tuple[Param, ...]:
    """Scan a sanitized template left to right and compile its placeholders.

    Raises ``MalformedTemplate`` for unterminated placeholders or invalid
    patterns, and ``DuplicateParam`` when a name repeats.
    """
    reader = _TemplateReader(template)
    params: list[Param] = []
    seen: set[str] = set()
    previous_end = 0

    while not reader.eof():
        if not reader.peek(PARAM_START):
            reader.offset += 1
            continue

        start = reader.offset
        reader.expect(PARAM_START)
        name = reader.read_name()
        if reader.consume(PARAM_SEPARATOR):
            pattern = reader.read_pattern()
        else:
            pattern = default_pattern
        reader.expect(PARAM_END)

        if name in seen:
            raise DuplicateParam(template, name)
        seen.add(name)

        try:
            matcher = re.compile(pattern)
        except re.error as exc:
            raise MalformedTemplate(
                template, start, f"Invalid pattern {pattern!r} for param {name!r} ({exc})"
            ) from exc

        params.append(
            Param(
                name=name,
                start=start,
                end=reader.offset,
                pattern=pattern,
                previous_contents=template[previous_end:start],
                matcher=matcher,
            )
        )
        previous_end = reader.offset

    return tuple(params)


class Route:
    """A compiled route template.

    Usage::

        route = Route("/books/{id:[0-9]+}")
        route.parse("/books/100")         # {"id": "100"}
        route.resolve({"id": "100"})      # "/books/100"
        route.parse("/books/10a")         # None

    Built once and immutable thereafter.
    """

    __slots__ = ("_suffix", "original", "params")

    def __init__(self, template: str, default_pattern: str = DEFAULT_PATTERN) -> None:
        self.original = sanitize(template)
        self.params = compile_params(self.original, default_pattern)
        last_end = self.params[-1].end if self.params else len(self.original)
        self._suffix = self.original[last_end:]

    def __repr__(self) -> str:
        return f"Route({self.original!r})"

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.params)

    def resolve(self, params: Mapping[str, object] | None = None) -> str | None:
        """Build a concrete path from *params*.

        Returns ``None`` if a value is missing or fails its pattern. A
        missing value is treated as the empty string, so templates whose
        pattern accepts emptiness resolve without it::

            Route("/tabs/{tab:([a-z]+)?}").resolve()  # "/tabs"
        """
        if not self.params:
            return self.original

        values = params or {}
        parts: list[str] = []
        for param in self.params:
            value = str(values.get(param.name, ""))
            if not param.accepts(value):
                return None
            parts.append(param.previous_contents)
            parts.append(value)
        parts.append(self._suffix)
        return sanitize("".join(parts))

    def parse(self, path: str) -> dict[str, str] | None:
        """Match *path* against the template and extract its params.

        Each value starts where the literal preceding its placeholder
        ends, and is the longest prefix of the remaining segment (up to
        the next ``/``) the param pattern accepts and that leaves the
        following literal in place. The literal after the last
        placeholder must follow exactly. Returns ``None`` on any mismatch.

        Adjacent placeholders with no literal between them are split
        greedily: the earlier param takes as much as it accepts.
        """
        path = sanitize(path)
        if not self.params:
            if path != self.original:
                return None
            return {}

        values: dict[str, str] = {}
        cursor = 0
        # Placeholder width minus value width, summed so far
        delta = 0

        for index, param in enumerate(self.params):
            if not path.startswith(param.previous_contents, cursor):
                return None
            cursor += len(param.previous_contents)

            slash = path.find("/", cursor)
            segment = path[cursor:] if slash == -1 else path[cursor:slash]
            for value in param.prefixes(segment):
                if self._literal_follows(path, cursor + len(value), index):
                    break
            else:
                return None

            cursor += len(value)
            delta += param.length - len(value)
            values[param.name] = value

        if len(path) + delta != len(self.original):
            return None
        return values

    def _literal_follows(self, path: str, offset: int, index: int) -> bool:
        if index == len(self.params) - 1:
            return path[offset:] == self._suffix
        return path.startswith(self.params[index + 1].previous_contents, offset)
