"""Display preference model."""

from pydantic import BaseModel

DEFAULT_FONT_FAMILY = "'Roboto', sans-serif"
DEFAULT_BORDER_RADIUS = 8


class DisplayPreferences(BaseModel):
    """User-adjustable presentation settings shared across contexts."""

    font_family: str = DEFAULT_FONT_FAMILY
    border_radius: int = DEFAULT_BORDER_RADIUS
