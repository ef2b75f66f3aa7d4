# =============================================================================
# tests/test_validation.py - Query Parameter Validation Tests
# =============================================================================

import pytest

from app.exceptions import InvalidParameterError
from core.models import Layout, Theme
from lib.utils import parse_flag
from lib.validation import parse_layout, parse_limit, parse_theme, validate_repo


class TestValidateRepo:

    @pytest.mark.parametrize(
        "repo",
        ["octocat/hello-world", "a/b", "  psf/requests  ", "my.org/repo_name-2", "a/.github"],
    )
    def test_valid(self, repo):
        assert validate_repo(repo) == repo.strip()

    @pytest.mark.parametrize("repo", [None, "", "   ", "noSlash", "a/b/c", "/b", "a/", "/"])
    def test_invalid(self, repo):
        with pytest.raises(InvalidParameterError) as exc_info:
            validate_repo(repo)

        assert exc_info.value.status_code == 400
        assert exc_info.value.details == {"parameter": "repo"}

    @pytest.mark.parametrize(
        "repo",
        ["octo/repo#x", "octo/repo?x=1", "../..", "octo/..", "./repo", "octo/re po", "octo/%2e%2e", "octo/repo\\x"],
    )
    def test_rejects_characters_outside_names(self, repo):
        with pytest.raises(InvalidParameterError):
            validate_repo(repo)


class TestParseLimit:

    def test_default(self):
        assert parse_limit(None) == 10
        assert parse_limit("") == 10

    @pytest.mark.parametrize("value, expected", [("1", 1), ("42", 42), ("100", 100)])
    def test_valid(self, value, expected):
        assert parse_limit(value) == expected

    @pytest.mark.parametrize("value", ["all", "ALL"])
    def test_all_means_unbounded(self, value):
        assert parse_limit(value) is None

    @pytest.mark.parametrize("value", ["0", "101", "abc", "-5", "1.5", "1_0"])
    def test_invalid(self, value):
        with pytest.raises(InvalidParameterError):
            parse_limit(value)


class TestParseLayoutAndTheme:

    def test_layout(self):
        assert parse_layout(None) == Layout.HORIZONTAL
        assert parse_layout(None, default=Layout.GRID) == Layout.GRID
        assert parse_layout("GRID") == Layout.GRID

    def test_bad_layout(self):
        with pytest.raises(InvalidParameterError):
            parse_layout("diagonal")

    def test_theme(self):
        assert parse_theme(None) == Theme.LIGHT
        assert parse_theme("dark") == Theme.DARK

    def test_bad_theme(self):
        with pytest.raises(InvalidParameterError):
            parse_theme("purple")


class TestParseFlag:

    def test_only_false_disables(self):
        assert parse_flag("false") is False
        assert parse_flag("FALSE") is False
        assert parse_flag("true") is True
        assert parse_flag("whatever") is True

    def test_default_when_missing(self):
        assert parse_flag(None) is True
        assert parse_flag(None, default=False) is False
