"""Tests for PathKey."""

import pytest

from docstore.core.errors import InvalidSegmentError, ValidationError
from docstore.domains.documents.paths import PathKey


class TestPathKeyConstruction:
    """Tests for building and parsing paths."""

    def test_parse_splits_on_separator(self) -> None:
        """Split the dotted storage form into segments."""
        path = PathKey.parse("engineering.backend.api_design")

        assert path.segments == ("engineering", "backend", "api_design")
        assert str(path) == "engineering.backend.api_design"

    def test_rejects_empty_segment(self) -> None:
        """Reject an empty segment anywhere in the path."""
        with pytest.raises(InvalidSegmentError):
            PathKey.parse("a..b")

    def test_rejects_empty_path(self) -> None:
        """Reject a path without segments."""
        with pytest.raises(InvalidSegmentError):
            PathKey(())

    def test_invalid_segment_is_validation_error(self) -> None:
        """Surface segment problems as validation errors."""
        with pytest.raises(ValidationError):
            PathKey.root("")

    def test_parent_and_leaf(self) -> None:
        """Expose the parent path and the last segment."""
        path = PathKey.parse("a.b.c")

        assert path.parent == PathKey.parse("a.b")
        assert path.leaf == "c"
        assert path.depth == 3
        assert PathKey.root("a").parent is None


class TestPathKeyConcat:
    """Tests for PathKey.concat()."""

    def test_appends_segment(self) -> None:
        """Append one segment to the end."""
        assert PathKey.root("a").concat("b") == PathKey.parse("a.b")

    def test_rejects_segment_with_separator(self) -> None:
        """Fail when the segment contains the separator."""
        with pytest.raises(InvalidSegmentError):
            PathKey.root("a").concat("b.c")

    def test_rejects_empty_segment(self) -> None:
        """Fail when the segment is empty."""
        with pytest.raises(InvalidSegmentError):
            PathKey.root("a").concat("")


class TestPathKeyPrefix:
    """Tests for prefix containment."""

    def test_path_is_prefix_of_itself(self) -> None:
        """Treat a path as a prefix of itself."""
        path = PathKey.parse("a.b")

        assert path.is_prefix_of(path)
        assert not path.is_strict_prefix_of(path)

    def test_ancestor_is_prefix_of_descendant(self) -> None:
        """Detect ancestry by segment prefix."""
        assert PathKey.parse("a").is_prefix_of(PathKey.parse("a.b.c"))
        assert PathKey.parse("a.b").is_strict_prefix_of(PathKey.parse("a.b.c"))

    def test_string_prefix_is_not_segment_prefix(self) -> None:
        """Compare whole segments, not characters."""
        assert not PathKey.parse("a").is_prefix_of(PathKey.parse("ab.c"))
        assert not PathKey.parse("a.b").is_prefix_of(PathKey.parse("a"))


class TestPathKeyRebase:
    """Tests for PathKey.rebase()."""

    def test_replaces_prefix_and_keeps_suffix(self) -> None:
        """Swap the leading prefix and keep the remaining segments."""
        path = PathKey.parse("root.a.b.c")

        result = path.rebase(PathKey.parse("root.a"), PathKey.parse("r.a"))

        assert result == PathKey.parse("r.a.b.c")

    def test_rebase_of_prefix_itself(self) -> None:
        """Rebasing the prefix yields the new prefix."""
        path = PathKey.parse("x.y")

        assert path.rebase(path, PathKey.root("y")) == PathKey.root("y")

    def test_requires_prefix(self) -> None:
        """Refuse to rebase a path outside the old prefix."""
        with pytest.raises(ValueError):
            PathKey.parse("b.c").rebase(PathKey.root("a"), PathKey.root("z"))


class TestPathKeyOrdering:
    """Tests for the total order."""

    def test_sorted_paths_give_preorder(self) -> None:
        """Parents sort before all of their descendants."""
        paths = [
            PathKey.parse("r.b"),
            PathKey.parse("r.a.a1"),
            PathKey.parse("r"),
            PathKey.parse("r.a"),
        ]

        assert [str(p) for p in sorted(paths)] == ["r", "r.a", "r.a.a1", "r.b"]

    def test_segment_order_differs_from_string_order(self) -> None:
        """Order by segments so a subtree stays contiguous."""
        paths = [PathKey.parse("a0"), PathKey.parse("a.z"), PathKey.root("a")]

        assert [str(p) for p in sorted(paths)] == ["a", "a.z", "a0"]

    def test_paths_are_hashable(self) -> None:
        """Use paths as set members and dict keys."""
        assert len({PathKey.parse("a.b"), PathKey.parse("a.b"), PathKey.root("a")}) == 2
