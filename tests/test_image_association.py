"""Tests for the image association rules."""

import pytest

from services.image_association import (
    StoredImage,
    assert_single_main,
    reconcile_car_images,
    remove_car_image,
    replace_single,
    replace_slots,
)
from utils.errors import InvariantViolationError, NotFoundError, ValidationError


def _mains(images):
    return [img.url for img in images if img.is_main]


def test_first_upload_makes_position_zero_main():
    rec = reconcile_car_images([], ["a", "b", "c"])
    assert [img.url for img in rec.images] == ["a", "b", "c"]
    assert _mains(rec.images) == ["a"]
    assert rec.removed == []


def test_append_keeps_existing_main():
    existing = [StoredImage("a"), StoredImage("b", is_main=True)]
    rec = reconcile_car_images(existing, ["c", "d"])
    assert [img.url for img in rec.images] == ["a", "b", "c", "d"]
    assert _mains(rec.images) == ["b"]
    assert rec.added == ["c", "d"]


def test_replace_drops_old_images_and_reports_them():
    existing = [StoredImage("a", is_main=True), StoredImage("b")]
    rec = reconcile_car_images(existing, ["c"], replace=True)
    assert [img.url for img in rec.images] == ["c"]
    assert _mains(rec.images) == ["c"]
    assert rec.removed == ["a", "b"]


def test_replace_without_new_files_keeps_collection():
    existing = [StoredImage("a", is_main=True), StoredImage("b")]
    rec = reconcile_car_images(existing, [], replace=True)
    assert [img.url for img in rec.images] == ["a", "b"]
    assert rec.removed == []


def test_explicit_main_image_wins():
    existing = [StoredImage("a", is_main=True), StoredImage("b")]
    rec = reconcile_car_images(existing, ["c"], main_image="c")
    assert _mains(rec.images) == ["c"]


def test_unknown_main_image_is_rejected():
    with pytest.raises(ValidationError):
        reconcile_car_images([StoredImage("a", is_main=True)], [], main_image="zzz")


def test_removing_main_promotes_position_zero():
    existing = [StoredImage("a"), StoredImage("b", is_main=True), StoredImage("c")]
    rec = remove_car_image(existing, "b")
    assert [img.url for img in rec.images] == ["a", "c"]
    assert _mains(rec.images) == ["a"]
    assert rec.removed == ["b"]


def test_removing_last_image_leaves_no_main():
    rec = remove_car_image([StoredImage("a", is_main=True)], "a")
    assert rec.images == []


def test_removing_unknown_image_is_not_found():
    with pytest.raises(NotFoundError):
        remove_car_image([StoredImage("a", is_main=True)], "b")


def test_assert_single_main():
    assert_single_main([])
    assert_single_main([StoredImage("a", True), StoredImage("b")])
    with pytest.raises(InvariantViolationError):
        assert_single_main([StoredImage("a"), StoredImage("b")])
    with pytest.raises(InvariantViolationError):
        assert_single_main([StoredImage("a", True), StoredImage("b", True)])


def test_replace_single():
    assert replace_single("old", "new") == ("new", ["old"])
    assert replace_single("old", None) == ("old", [])
    assert replace_single(None, "new") == ("new", [])


def test_replace_slots_only_touches_uploaded_slots():
    current = {"brands": "/b-old", "news": "/n-old", "terms": None}
    updated, removed = replace_slots(current, {"brands": "/b-new", "terms": "/t-new"})
    assert updated == {"brands": "/b-new", "news": "/n-old", "terms": "/t-new"}
    assert removed == ["/b-old"]
