"""Pydantic schemas for image transform requests."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from photoapp.config import get_settings


class TransformRequest(BaseModel):
    """Requested operations for a single transform call.

    Every field is optional. A missing width or height is derived from the
    aspect ratio; non-positive dimensions count as missing.
    """

    model_config = ConfigDict(frozen=True)

    width: int | None = Field(None, description="Target width in pixels")
    height: int | None = Field(None, description="Target height in pixels")
    format: str | None = Field(None, description="Output format: jpg, jpeg, png, bmp")
    sepia: bool = Field(False, description="Apply sepia tone")
    blur: bool = Field(False, description="Apply 3x3 box blur")

    @field_validator("width", "height")
    @classmethod
    def _check_dimension(cls, value: int | None) -> int | None:
        if value is None or value <= 0:
            return None
        limit = get_settings().max_transform_dimension
        if value > limit:
            raise ValueError(f"dimension {value} exceeds maximum {limit}")
        return value

    @field_validator("format")
    @classmethod
    def _normalize_format(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip().lower()
        return value or None

    @property
    def wants_resize(self) -> bool:
        """True when either dimension is set."""
        return self.width is not None or self.height is not None

    @property
    def has_filters(self) -> bool:
        """True when a resize or a color filter is requested."""
        return self.wants_resize or self.sepia or self.blur

    @property
    def is_noop(self) -> bool:
        """True when nothing at all was requested."""
        return not self.has_filters and self.format is None
