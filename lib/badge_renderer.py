# =============================================================================
# lib/badge_renderer.py - SVG Badge Renderer
# =============================================================================
# Turns a list of contributors into a self-contained SVG document.
#
# This module is pure: no network, no clock, no globals that change. The
# same contributors and options always produce the same string, which is
# what lets cached badges come back byte-identical.
#
# Geometry (all values in px):
#
#   item width  = max(AVATAR_SIZE + PADDING, MIN_ITEM_WIDTH)         = 70
#   item height = AVATAR_SIZE + LABEL_HEIGHT + SPACING + PADDING     = 74
#   canvas      = cols * item width + PADDING
#               x rows * item height + PADDING + header height
#
#   horizontal: cols = n, rows = 1
#   grid:       cols = ceil(sqrt(n)), rows = ceil(n / cols), row-major
#
# Usage:
#   from lib.badge_renderer import render_badge, resolve_layout
#   layout = resolve_layout(len(records), requested_layout)
#   svg = render_badge(records, RenderOptions(layout=layout, theme=Theme.DARK))
# =============================================================================

from __future__ import annotations

import math
from dataclasses import dataclass
from html import escape
from typing import Sequence

from core.models.badge import BadgeHeader, Layout, RenderOptions, Theme
from core.models.contributor import ContributorRecord


# =============================================================================
# Layout Constants
# =============================================================================

AVATAR_SIZE = 40
AVATAR_RADIUS = AVATAR_SIZE // 2
PADDING = 12
LABEL_HEIGHT = 16
SPACING = 6
MIN_ITEM_WIDTH = 70

ITEM_WIDTH = max(AVATAR_SIZE + PADDING, MIN_ITEM_WIDTH)
ITEM_HEIGHT = AVATAR_SIZE + LABEL_HEIGHT + SPACING + PADDING

HEADER_HEIGHT = 60
CONTRIBUTIONS_HEIGHT = 14

MAX_LABEL_LENGTH = 8
ELLIPSIS = "..."

# Horizontal badges with more contributors than this become grids
AUTO_GRID_THRESHOLD = 20

FONT_FAMILY = "-apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif"

PLACEHOLDER_COLORS = (
    "#FF6B6B", "#4ECDC4", "#45B7D1", "#96CEB4", "#FFEAA7",
    "#DDA0DD", "#98D8C8", "#FFB6C1", "#87CEEB", "#DEB887",
    "#F0E68C", "#FFE4B5", "#D3D3D3", "#B0C4DE", "#FFA07A",
)


# =============================================================================
# Themes
# =============================================================================

@dataclass(frozen=True)
class Palette:
    background: str
    border: str
    text: str
    shadow: str
    hover: str
    glyph: str
    title: str


THEMES: dict[Theme, Palette] = {
    Theme.LIGHT: Palette(
        background="#ffffff",
        border="#e1e4e8",
        text="#586069",
        shadow="rgba(0,0,0,0.1)",
        hover="rgba(3,102,214,0.1)",
        glyph="#ffffff",
        title="#24292e",
    ),
    Theme.DARK: Palette(
        background="#161b22",
        border="#30363d",
        text="#8b949e",
        shadow="rgba(0,0,0,0.3)",
        hover="rgba(56,139,253,0.1)",
        glyph="#ffffff",
        title="#c9d1d9",
    ),
}


def palette_for(theme: Theme | str) -> Palette:
    """Palette for a theme; anything unrecognized gets the light palette."""
    try:
        return THEMES[Theme(theme)]
    except (ValueError, KeyError):
        return THEMES[Theme.LIGHT]


# =============================================================================
# Geometry
# =============================================================================

@dataclass(frozen=True)
class BadgeGeometry:
    """Canvas size and grid shape for one badge."""
    columns: int
    rows: int
    width: int
    height: int
    item_height: int
    header_height: int

    def origin(self, index: int) -> tuple[int, int]:
        """Top-left corner of item `index` (row-major)."""
        col = index % self.columns
        row = index // self.columns
        x = col * ITEM_WIDTH + PADDING
        y = row * self.item_height + PADDING + self.header_height
        return x, y


def grid_shape(count: int, layout: Layout) -> tuple[int, int]:
    """
    Columns and rows needed to place `count` items.

    Example:
        grid_shape(5, Layout.GRID)        # (3, 2)
        grid_shape(5, Layout.HORIZONTAL)  # (5, 1)
    """
    if count <= 0:
        return 0, 0
    if layout == Layout.GRID:
        cols = math.ceil(math.sqrt(count))
        return cols, math.ceil(count / cols)
    return count, 1


def compute_geometry(
    count: int,
    layout: Layout,
    header: BadgeHeader | None = None,
    show_contributions: bool = False,
) -> BadgeGeometry:
    """Canvas dimensions for `count` items."""
    cols, rows = grid_shape(count, layout)
    item_height = ITEM_HEIGHT + (CONTRIBUTIONS_HEIGHT if show_contributions else 0)
    header_height = HEADER_HEIGHT if header is not None and not header.is_empty else 0
    return BadgeGeometry(
        columns=cols,
        rows=rows,
        width=cols * ITEM_WIDTH + PADDING,
        height=rows * item_height + PADDING + header_height,
        item_height=item_height,
        header_height=header_height,
    )


def resolve_layout(count: int, requested: Layout) -> Layout:
    """Switch wide horizontal badges to a grid."""
    if requested == Layout.HORIZONTAL and count > AUTO_GRID_THRESHOLD:
        return Layout.GRID
    return requested


# =============================================================================
# Labels & Placeholders
# =============================================================================

def truncate_label(handle: str, max_length: int = MAX_LABEL_LENGTH) -> str:
    """
    Shorten a login for display.

    Example:
        truncate_label("octocat")          # "octocat"
        truncate_label("averylonghandle")  # "averylon..."
    """
    if len(handle) <= max_length:
        return handle
    return handle[:max_length] + ELLIPSIS


@dataclass(frozen=True)
class Placeholder:
    color: str
    glyph: str


def placeholder_for(handle: str, index: int) -> Placeholder:
    """Deterministic fallback avatar: palette color by position, first letter."""
    color = PLACEHOLDER_COLORS[index % len(PLACEHOLDER_COLORS)]
    glyph = handle[:1].upper() or "?"
    return Placeholder(color=color, glyph=glyph)


# =============================================================================
# Rendering
# =============================================================================

def _attr(value: object) -> str:
    return escape(str(value), quote=True)


def _render_avatar(contributor: ContributorRecord, index: int, x: int, y: int, palette: Palette) -> str:
    cx, cy = x + AVATAR_RADIUS, y + AVATAR_RADIUS

    if contributor.avatar is not None:
        return (
            f'<image href="{_attr(contributor.avatar.data_uri)}" x="{x}" y="{y}" '
            f'width="{AVATAR_SIZE}" height="{AVATAR_SIZE}" '
            f'clip-path="url(#clip{index})" class="avatar-image"/>'
        )

    placeholder = placeholder_for(contributor.login, index)
    return (
        f'<circle cx="{cx}" cy="{cy}" r="{AVATAR_RADIUS}" fill="{placeholder.color}" class="avatar-fallback"/>\n'
        f'<text x="{cx}" y="{cy + 5}" text-anchor="middle" font-family="{_attr(FONT_FAMILY)}" '
        f'font-size="18" font-weight="bold" fill="{palette.glyph}" class="avatar-initial">'
        f'{escape(placeholder.glyph)}</text>'
    )


def _render_item(
    contributor: ContributorRecord,
    index: int,
    geometry: BadgeGeometry,
    palette: Palette,
    show_contributions: bool,
) -> str:
    x, y = geometry.origin(index)
    cx, cy = x + AVATAR_RADIUS, y + AVATAR_RADIUS
    label_y = y + AVATAR_SIZE + SPACING + 12

    parts = [
        f'<g class="contributor" data-username="{_attr(contributor.login)}">',
        f'<a href="{_attr(contributor.profile_url)}" target="_blank">',
        f'<circle cx="{cx}" cy="{cy}" r="{AVATAR_RADIUS + 2}" fill="{palette.border}" class="avatar-border"/>',
        f'<circle cx="{cx}" cy="{cy}" r="{AVATAR_RADIUS}" fill="transparent" class="avatar-hover"/>',
        _render_avatar(contributor, index, x, y, palette),
        f'<text x="{cx}" y="{label_y}" text-anchor="middle" font-family="{_attr(FONT_FAMILY)}" '
        f'font-size="11" fill="{palette.text}" class="username">{escape(truncate_label(contributor.login))}</text>',
    ]
    if show_contributions:
        parts.append(
            f'<text x="{cx}" y="{label_y + CONTRIBUTIONS_HEIGHT}" text-anchor="middle" '
            f'font-family="{_attr(FONT_FAMILY)}" font-size="10" fill="{palette.text}" '
            f'class="contributions">{contributor.contributions}</text>'
        )
    parts.append("</a>")
    parts.append("</g>")
    return "\n".join(parts)


def _render_header(header: BadgeHeader, geometry: BadgeGeometry, palette: Palette) -> str:
    center = geometry.width / 2
    lines = []
    if header.title:
        lines.append(
            f'<text x="{center:g}" y="30" text-anchor="middle" font-family="{_attr(FONT_FAMILY)}" '
            f'font-size="16" font-weight="bold" fill="{palette.title}" class="badge-title">'
            f'{escape(header.title)}</text>'
        )
    if header.subtitle:
        lines.append(
            f'<text x="{center:g}" y="50" text-anchor="middle" font-family="{_attr(FONT_FAMILY)}" '
            f'font-size="12" fill="{palette.text}" class="badge-subtitle">'
            f'{escape(header.subtitle)}</text>'
        )
    return "\n".join(lines)


def _render_style(palette: Palette) -> str:
    return f"""<style>
<![CDATA[
.contributor {{ cursor: pointer; transition: all 0.2s ease; }}
.contributor:hover .avatar-hover {{ fill: {palette.hover}; }}
.contributor:hover .username {{ fill: #0366d6; font-weight: 600; }}
.contributor:hover .avatar-border {{ stroke: #0366d6; stroke-width: 2; }}
.contributor:hover .avatar-image, .contributor:hover .avatar-fallback {{ filter: url(#avatarShadow); }}
.avatar-image, .avatar-fallback {{ transition: filter 0.2s ease; }}
.avatar-border {{ transition: all 0.2s ease; }}
.username, .contributions {{ pointer-events: none; user-select: none; transition: all 0.2s ease; }}
.avatar-initial {{ pointer-events: none; user-select: none; }}
]]>
</style>"""


def render_badge(
    contributors: Sequence[ContributorRecord],
    options: RenderOptions | None = None,
    header: BadgeHeader | None = None,
) -> str:
    """
    Render contributors as an SVG badge.

    The layout in `options` is used as given; callers that want the
    horizontal-to-grid switch for large lists apply `resolve_layout` first.

    Args:
        contributors: Records in display order
        options: Layout, theme and contribution-count toggle
        header: Optional title/subtitle drawn above the items

    Returns:
        SVG document as a string
    """
    options = options or RenderOptions()
    palette = palette_for(options.theme)
    geometry = compute_geometry(
        len(contributors),
        options.layout,
        header=header,
        show_contributions=options.show_contributions,
    )

    clip_paths = []
    for index in range(len(contributors)):
        x, y = geometry.origin(index)
        clip_paths.append(
            f'<clipPath id="clip{index}"><circle cx="{x + AVATAR_RADIUS}" cy="{y + AVATAR_RADIUS}" '
            f'r="{AVATAR_RADIUS}"/></clipPath>'
        )

    items = [
        _render_item(contributor, index, geometry, palette, options.show_contributions)
        for index, contributor in enumerate(contributors)
    ]

    parts = [
        f'<svg width="{geometry.width}" height="{geometry.height}" '
        f'viewBox="0 0 {geometry.width} {geometry.height}" '
        f'xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink">',
        "<defs>",
        *clip_paths,
        f'<filter id="shadow"><feDropShadow dx="0" dy="2" stdDeviation="3" flood-color="{palette.shadow}"/></filter>',
        f'<filter id="avatarShadow"><feDropShadow dx="0" dy="1" stdDeviation="2" flood-color="{palette.shadow}"/></filter>',
        "</defs>",
        _render_style(palette),
        f'<rect width="{geometry.width}" height="{geometry.height}" fill="{palette.background}" '
        f'stroke="{palette.border}" stroke-width="1" rx="8" filter="url(#shadow)"/>',
    ]
    if header is not None and not header.is_empty:
        parts.append(_render_header(header, geometry, palette))
    parts.extend(items)
    parts.append("</svg>")
    return "\n".join(parts) + "\n"
