# =============================================================================
# core/models/badge.py - Badge Rendering Options
# =============================================================================
# Validated, per-request inputs to the badge renderer:
# - Layout: horizontal row or square-ish grid
# - Theme: light or dark color palette
# - RenderOptions: layout + theme + whether to print contribution counts
# - BadgeHeader: optional title/subtitle block drawn above the avatars
#
# None of these outlive the request that built them.
# =============================================================================

from dataclasses import dataclass
from enum import Enum


class Layout(str, Enum):
    """
    How contributors are arranged on the canvas.

    - horizontal: a single row, left to right
    - grid: ceil(sqrt(n)) columns, filled row-major
    """
    HORIZONTAL = "horizontal"
    GRID = "grid"


class Theme(str, Enum):
    """Color palette used for background, borders and text."""
    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True)
class RenderOptions:
    """Everything the renderer needs besides the contributors themselves."""
    layout: Layout = Layout.HORIZONTAL
    theme: Theme = Theme.LIGHT
    show_contributions: bool = False


@dataclass(frozen=True)
class BadgeHeader:
    """
    Title block drawn above the contributor items.

    An empty header (no title and no subtitle) takes no space.
    """
    title: str | None = None
    subtitle: str | None = None

    @property
    def is_empty(self) -> bool:
        return not (self.title or self.subtitle)
