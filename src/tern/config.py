"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass

DEFAULT_PATTERN = r"[0-9a-zA-Z_-]+"
"""Matcher for ``{name}`` placeholders that carry no ``:pattern`` suffix."""


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(default_pattern=r"[a-z]+", log_not_found=False)
    """

    # Templates
    default_pattern: str = DEFAULT_PATTERN

    # Query strings — keep ``?a=&b`` keys with empty values
    keep_blank_values: bool = True

    # Logging
    log_not_found: bool = True
