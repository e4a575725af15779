"""Unit tests for the Category entity."""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from hotdeals.domain.model import Category
from hotdeals.domain.value import CategoryId, CategoryPath


def make_category(path: str, parent: str, names=None) -> Category:
    return Category(
        id=CategoryId(uuid4()),
        path=CategoryPath(path),
        parent=CategoryPath(parent),
        names=names if names is not None else {"en": "Name"},
    )


def test_parent_must_be_structural_parent():
    with pytest.raises(ValidationError):
        make_category("/computers/video-cards", "/")


def test_root_cannot_be_stored():
    with pytest.raises(ValidationError):
        make_category("/", "/")


def test_names_required():
    with pytest.raises(ValidationError):
        make_category("/computers", "/", names={})


def test_display_name_falls_back():
    category = make_category("/computers", "/", names={"tr": "Bilgisayar", "en": "Computers"})
    assert category.display_name("tr") == "Bilgisayar"
    assert category.display_name("de") == "Computers"

    only_tr = make_category("/computers", "/", names={"tr": "Bilgisayar"})
    assert only_tr.display_name("de") == "Bilgisayar"
