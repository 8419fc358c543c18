"""Unified exception taxonomy.

Every domain exception inherits from ``WorldMapError`` and carries
structured context fields so that load failures can be logged and
surfaced for diagnostics in a consistent shape.

Taxonomy categories
-------------------
- ``ValidationError``: bad input or configuration.
- ``PermanentError``: unrecoverable failures (e.g. the country dataset
  could not be loaded). There is no retry policy: a failed load stays
  failed for the lifetime of the registry.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for logging.
"""

from __future__ import annotations


class WorldMapError(Exception):
    """Base exception for all world-map errors.

    Attributes:
        message: Human-readable error description.
        stage: Processing stage where the error occurred
            (e.g. ``"parse_geojson"``, ``"load_countries"``).
        code: Machine-readable error code (e.g. ``"GEOJSON_PARSE_FAILED"``).
        retryable: Whether repeating the operation could succeed.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool = False,
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ValidationError):
            return "validation"
        if isinstance(self, PermanentError):
            return "permanent"
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(WorldMapError):
    """Input, argument or configuration validation failure. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class PermanentError(WorldMapError):
    """Unrecoverable failure. Not retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------


class ParseError(ValidationError):
    """Raised when a GeoJSON document is malformed or structurally incomplete."""

    default_stage = "parse_geojson"
    default_code = "GEOJSON_PARSE_FAILED"


class GeometryError(ValidationError):
    """Raised when a geometry operation receives invalid arguments."""

    default_stage = "geometry"
    default_code = "GEOMETRY_INVALID_ARGUMENT"


class LoadError(PermanentError):
    """Raised when the country dataset cannot be loaded."""

    default_stage = "load_countries"
    default_code = "LOAD_FAILED"


class ResourceMissingError(LoadError):
    """The GeoJSON document was not found at the expected location."""

    default_code = "RESOURCE_MISSING"


class DecodeFailedError(LoadError):
    """The GeoJSON document could not be read or decoded.

    Attributes:
        detail: Underlying reader or parser message.
    """

    default_code = "DECODE_FAILED"

    def __init__(self, detail: str, **kwargs: object) -> None:
        self.detail = detail
        super().__init__(f"Failed to decode GeoJSON: {detail}", **kwargs)
