"""Unit tests for search path aggregation and path comparison."""

from __future__ import annotations

import pytest

from shipwright.deploy_runtime.execution.paths import (
    aggregate_search_path,
    parent_directory,
    paths_equal,
    prepend_to_search_path,
)

# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


def test_aggregate_drops_absent_and_empty_entries() -> None:
    result = aggregate_search_path([None, "/a", "", "/b", None, "/c"])
    assert result == ["/a", "/b", "/c"]


def test_aggregate_keeps_duplicates_in_given_order() -> None:
    result = aggregate_search_path(["/tools", "/scripts", "/tools"])
    assert result == ["/tools", "/scripts", "/tools"]


def test_aggregate_empty_input() -> None:
    assert aggregate_search_path([]) == []
    assert aggregate_search_path([None, ""]) == []


def test_aggregate_accepts_generators() -> None:
    result = aggregate_search_path(d for d in ("/x", None, "/y"))
    assert result == ["/x", "/y"]


# ---------------------------------------------------------------------------
# Prepending
# ---------------------------------------------------------------------------


def test_prepend_puts_prefix_before_inherited() -> None:
    assert prepend_to_search_path(["/a", "/b"], "/usr/bin:/bin", ":") == "/a:/b:/usr/bin:/bin"


def test_prepend_windows_separator() -> None:
    assert prepend_to_search_path([r"C:\git\bin"], r"C:\Windows", ";") == r"C:\git\bin;C:\Windows"


def test_prepend_without_inherited_path() -> None:
    assert prepend_to_search_path(["/a"], None, ":") == "/a"
    assert prepend_to_search_path(["/a"], "", ":") == "/a"


def test_prepend_with_empty_prefix() -> None:
    assert prepend_to_search_path([], "/usr/bin", ":") == "/usr/bin"


# ---------------------------------------------------------------------------
# Parent directory
# ---------------------------------------------------------------------------


def test_parent_directory() -> None:
    assert parent_directory("/usr/bin/git") == "/usr/bin"
    assert parent_directory(None) is None
    assert parent_directory("") is None
    assert parent_directory("git") is None


# ---------------------------------------------------------------------------
# Path equality
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("left", "right"),
    [
        ("/app", "/app"),
        ("/app", "/app/"),
        ("/App/Site", "/app/site"),
        ("/app/sub/../site", "/app/site"),
        (r"C:\Home\Site\wwwroot", "c:/home/site/wwwroot/"),
        ("/", "/"),
        ("//app", "/app"),
        ("///app/", "/app"),
        ("//", "/"),
        (r"\\Server\Share\site", "\\\\server\\share\\site\\"),
    ],
)
def test_paths_equal(left: str, right: str) -> None:
    assert paths_equal(left, right) is True


@pytest.mark.parametrize(
    ("left", "right"),
    [
        ("/app", "/app/site"),
        ("/app", "/apps"),
        ("/app", None),
        (None, None),
        ("", ""),
        (r"\\server\share", "/server/share"),
        (r"\\server\share", "//server/share"),
    ],
)
def test_paths_not_equal(left: str | None, right: str | None) -> None:
    assert paths_equal(left, right) is False
