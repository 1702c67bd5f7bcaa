"""Router and application configuration.

Both configs are frozen dataclasses — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass
from typing import Literal, TypeAlias

DuplicatePolicy: TypeAlias = Literal["warn", "error", "ignore"]


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Compile-time settings for a ``ResourceRouter``.

    ``duplicates`` decides what happens when a declaration can never be
    reached because an earlier one has the same pattern::

        RouterConfig(duplicates="error")
    """

    duplicates: DuplicatePolicy = "warn"

    # Content type written by the fallback responder
    not_found_content_type: str = "application/vnd.api+json"

    def __post_init__(self) -> None:
        if self.duplicates not in ("warn", "error", "ignore"):
            msg = f"duplicates must be 'warn', 'error' or 'ignore', got {self.duplicates!r}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class AppConfig:
    """ASGI application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=3000)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    workers: int = 1

    # Logging
    log_level: str = "info"

    # Trailing "/" produces an empty final segment unless stripped
    strip_trailing_slash: bool = True
