"""Unit tests for CategoryPath."""

import pytest
from pydantic import ValidationError

from hotdeals.domain.value import CategoryPath


class TestCategoryPathFormat:
    """Tests for path validation."""

    @pytest.mark.parametrize(
        "raw",
        ["/", "/computers", "/computers/video-cards", "/free_shipping", "/a1/b2/c3"],
    )
    def test_accepts_canonical_paths(self, raw):
        assert CategoryPath(raw).root == raw

    @pytest.mark.parametrize(
        "raw",
        ["", "computers", "/Computers", "/computers/", "//computers", "/a b", "/-x"],
    )
    def test_rejects_malformed_paths(self, raw):
        with pytest.raises(ValidationError):
            CategoryPath(raw)

    def test_rejects_overlong_path(self):
        with pytest.raises(ValidationError):
            CategoryPath("/" + "a" * 255)


class TestCategoryPathStructure:
    """Tests for structural helpers."""

    def test_parent_of_nested_path(self):
        assert CategoryPath("/computers/video-cards").parent == CategoryPath("/computers")

    def test_parent_of_top_level_is_root(self):
        assert CategoryPath("/computers").parent.is_root

    def test_root_is_its_own_parent(self):
        root = CategoryPath.root_path()
        assert root.parent == root

    def test_segments(self):
        assert CategoryPath("/a/b/c").segments == ["a", "b", "c"]
        assert CategoryPath("/").segments == []

    def test_descendant_is_segment_aware(self):
        computers = CategoryPath("/computers")
        assert CategoryPath("/computers/video-cards").is_descendant_of(computers)
        assert not CategoryPath("/computers-x").is_descendant_of(computers)

    def test_path_is_not_its_own_descendant(self):
        path = CategoryPath("/computers")
        assert not path.is_descendant_of(path)
        assert path.is_within(path)

    def test_everything_descends_from_root(self):
        assert CategoryPath("/a/b").is_descendant_of(CategoryPath("/"))

    def test_paths_sort_by_value(self):
        paths = [CategoryPath("/b"), CategoryPath("/a/c"), CategoryPath("/a")]
        assert [p.root for p in sorted(paths)] == ["/a", "/a/c", "/b"]
