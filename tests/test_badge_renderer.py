# =============================================================================
# tests/test_badge_renderer.py - SVG Renderer Tests
# =============================================================================
# Tests for lib/badge_renderer.py:
# - Grid shape and canvas geometry
# - Horizontal -> grid escalation threshold
# - Label truncation and placeholder avatars
# - Theme fallback, header block, escaping, determinism
#
# Run with: pytest tests/test_badge_renderer.py -v
# =============================================================================

import re

import pytest

from core.models import AvatarImage, BadgeHeader, ContributorRecord, Layout, RenderOptions, Theme
from lib.badge_renderer import (
    AUTO_GRID_THRESHOLD,
    CONTRIBUTIONS_HEIGHT,
    ELLIPSIS,
    HEADER_HEIGHT,
    ITEM_HEIGHT,
    ITEM_WIDTH,
    MAX_LABEL_LENGTH,
    PADDING,
    PLACEHOLDER_COLORS,
    THEMES,
    compute_geometry,
    grid_shape,
    palette_for,
    placeholder_for,
    render_badge,
    resolve_layout,
    truncate_label,
)


def make_records(count: int, with_avatars: bool = False) -> list[ContributorRecord]:
    return [
        ContributorRecord(
            login=f"user{i}",
            profile_url=f"https://github.com/user{i}",
            avatar_url=f"https://avatars.example/u/{i}",
            contributions=100 - i,
            avatar=AvatarImage(data=b"img", media_type="image/png") if with_avatars else None,
        )
        for i in range(count)
    ]


def svg_size(svg: str) -> tuple[int, int]:
    match = re.search(r'<svg width="(\d+)" height="(\d+)"', svg)
    assert match, "svg root element missing"
    return int(match.group(1)), int(match.group(2))


# =============================================================================
# Geometry
# =============================================================================

class TestGeometry:
    """Tests for grid_shape / compute_geometry."""

    @pytest.mark.parametrize(
        "count, cols, rows",
        [(1, 1, 1), (4, 2, 2), (5, 3, 2), (9, 3, 3), (13, 4, 4)],
    )
    def test_grid_shape(self, count, cols, rows):
        assert grid_shape(count, Layout.GRID) == (cols, rows)

    @pytest.mark.parametrize("count", [1, 4, 5, 9, 13])
    def test_grid_canvas_is_linear_in_cells(self, count):
        cols, rows = grid_shape(count, Layout.GRID)

        svg = render_badge(make_records(count), RenderOptions(layout=Layout.GRID))

        assert svg_size(svg) == (cols * ITEM_WIDTH + PADDING, rows * ITEM_HEIGHT + PADDING)

    def test_horizontal_is_single_row(self):
        assert grid_shape(7, Layout.HORIZONTAL) == (7, 1)
        geometry = compute_geometry(7, Layout.HORIZONTAL)
        assert geometry.width == 7 * ITEM_WIDTH + PADDING
        assert geometry.height == ITEM_HEIGHT + PADDING

    def test_known_dimensions(self):
        """Fixed cell size: 70 x 74 with 12px padding."""
        assert ITEM_WIDTH == 70
        assert ITEM_HEIGHT == 74
        assert svg_size(render_badge(make_records(3))) == (222, 86)

    def test_zero_items(self):
        assert grid_shape(0, Layout.GRID) == (0, 0)
        assert svg_size(render_badge([])) == (PADDING, PADDING)

    def test_grid_is_row_major(self):
        geometry = compute_geometry(5, Layout.GRID)
        assert geometry.origin(0) == (PADDING, PADDING)
        assert geometry.origin(2) == (2 * ITEM_WIDTH + PADDING, PADDING)
        assert geometry.origin(3) == (PADDING, ITEM_HEIGHT + PADDING)


class TestResolveLayout:
    """Tests for horizontal -> grid escalation."""

    def test_threshold_is_twenty(self):
        assert AUTO_GRID_THRESHOLD == 20

    def test_at_threshold_stays_horizontal(self):
        assert resolve_layout(20, Layout.HORIZONTAL) == Layout.HORIZONTAL

    def test_above_threshold_becomes_grid(self):
        assert resolve_layout(21, Layout.HORIZONTAL) == Layout.GRID

    def test_grid_stays_grid(self):
        assert resolve_layout(3, Layout.GRID) == Layout.GRID


# =============================================================================
# Labels & Placeholders
# =============================================================================

class TestTruncateLabel:

    def test_short_handle_unchanged(self):
        assert truncate_label("octocat") == "octocat"

    def test_handle_at_limit_unchanged(self):
        handle = "a" * MAX_LABEL_LENGTH
        assert truncate_label(handle) == handle

    def test_long_handle_truncated(self):
        label = truncate_label("averylonghandle")
        assert label == "averylon" + ELLIPSIS
        assert len(label) - len(ELLIPSIS) == MAX_LABEL_LENGTH

    def test_truncated_label_rendered(self):
        record = ContributorRecord("averylonghandle", "https://github.com/x", "", 1)
        svg = render_badge([record])
        assert ">averylon...</text>" in svg
        # Full handle survives only as the data attribute
        assert 'data-username="averylonghandle"' in svg


class TestPlaceholder:

    def test_color_by_position(self):
        assert placeholder_for("alice", 0).color == PLACEHOLDER_COLORS[0]
        assert placeholder_for("alice", 16).color == PLACEHOLDER_COLORS[1]

    def test_glyph_is_upper_initial(self):
        assert placeholder_for("alice", 3).glyph == "A"

    def test_empty_handle(self):
        assert placeholder_for("", 0).glyph == "?"

    def test_deterministic(self):
        assert placeholder_for("bob", 7) == placeholder_for("bob", 7)

    def test_rendered_without_avatar(self):
        svg = render_badge(make_records(3))
        assert svg.count('class="avatar-fallback"') == 3
        assert f'fill="{PLACEHOLDER_COLORS[2]}"' in svg
        assert 'class="avatar-image"' not in svg

    def test_embedded_avatar(self):
        svg = render_badge(make_records(2, with_avatars=True))
        assert svg.count('class="avatar-image"') == 2
        assert "data:image/png;base64,aW1n" in svg
        assert 'class="avatar-fallback"' not in svg


# =============================================================================
# Themes, Header, Escaping
# =============================================================================

class TestThemes:

    def test_dark_palette(self):
        svg = render_badge(make_records(1), RenderOptions(theme=Theme.DARK))
        assert THEMES[Theme.DARK].background in svg

    def test_unknown_theme_falls_back_to_light(self):
        assert palette_for("purple") == THEMES[Theme.LIGHT]
        svg = render_badge(make_records(1), RenderOptions(theme="purple"))
        assert f'fill="{THEMES[Theme.LIGHT].background}"' in svg


class TestHeader:

    def test_header_adds_height(self):
        plain = svg_size(render_badge(make_records(3)))
        titled = svg_size(render_badge(make_records(3), header=BadgeHeader(title="Our Team")))

        assert titled == (plain[0], plain[1] + HEADER_HEIGHT)

    def test_header_text(self):
        svg = render_badge(make_records(1), header=BadgeHeader(title="Team", subtitle="Thanks!"))
        assert ">Team</text>" in svg
        assert ">Thanks!</text>" in svg

    def test_empty_header_takes_no_space(self):
        plain = render_badge(make_records(2))
        assert render_badge(make_records(2), header=BadgeHeader()) == plain

    def test_contribution_counts(self):
        options = RenderOptions(show_contributions=True)
        svg = render_badge(make_records(2), options)

        assert svg_size(svg)[1] == ITEM_HEIGHT + CONTRIBUTIONS_HEIGHT + PADDING
        assert ">100</text>" in svg
        assert ">99</text>" in svg


class TestOutput:

    def test_escapes_markup(self):
        record = ContributorRecord('<b>&"x', 'https://e.com/?a=1&b="2"', "", 1)
        svg = render_badge([record], header=BadgeHeader(title="<script>"))

        assert "<script>" not in svg
        assert "&lt;script&gt;" in svg
        assert "<b>" not in svg
        assert 'href="https://e.com/?a=1&amp;b=&quot;2&quot;"' in svg

    def test_deterministic(self):
        records = make_records(9, with_avatars=True)
        options = RenderOptions(layout=Layout.GRID, theme=Theme.DARK)
        assert render_badge(records, options) == render_badge(records, options)

    def test_clip_paths_follow_items(self):
        svg = render_badge(make_records(2))
        assert '<clipPath id="clip1"><circle cx="102" cy="32" r="20"/></clipPath>' in svg
