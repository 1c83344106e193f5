"""Tests for multipart ingestion (utils.multipart)."""

import pytest

from conftest import json_request, multipart_request, small_jpeg
from utils.errors import PayloadTooLargeError, UnsupportedMediaTypeError, ValidationError
from utils.multipart import parse_upload


def test_form_fields_and_files_in_body_order():
    req = multipart_request([
        ("make", "BMW"),
        ("images", ("one.jpg", small_jpeg(), "image/jpeg")),
        ("images", ("two.png", b"\x89PNG fake", "image/png")),
    ])
    with parse_upload(req, {"images": 10}) as batch:
        files = batch.files_for("images")
        assert batch.form["make"] == "BMW"
        assert [f.original_name for f in files] == ["one.jpg", "two.png"]
        assert [f.ordinal_index for f in files] == [0, 1]
        assert files[0].read() == small_jpeg()
        assert files[1].mime_type == "image/png"


def test_indexed_field_names_are_normalized():
    req = multipart_request([("images[0]", ("a.jpg", small_jpeg(), "image/jpeg"))])
    with parse_upload(req, {"images": 10}) as batch:
        assert len(batch.files_for("images")) == 1


def test_disallowed_mime_type_is_rejected():
    req = multipart_request([("images", ("doc.pdf", b"%PDF-1.4", "application/pdf"))])
    with pytest.raises(UnsupportedMediaTypeError) as exc:
        parse_upload(req, {"images": 10})
    assert exc.value.status == 400


def test_oversized_part_is_rejected_before_decoding():
    req = multipart_request([("images", ("big.jpg", b"x" * 2048, "image/jpeg"))])
    with pytest.raises(PayloadTooLargeError):
        parse_upload(req, {"images": 10}, max_size=1024)


def test_mime_is_checked_before_size():
    req = multipart_request([("images", ("big.gif", b"x" * 2048, "image/gif"))])
    with pytest.raises(UnsupportedMediaTypeError):
        parse_upload(req, {"images": 10}, max_size=1024)


def test_too_many_files_for_field():
    req = multipart_request([
        ("image", ("a.jpg", small_jpeg(), "image/jpeg")),
        ("image", ("b.jpg", small_jpeg(), "image/jpeg")),
    ])
    with pytest.raises(ValidationError) as exc:
        parse_upload(req, {"image": 1})
    assert "image" in exc.value.message["en"]


def test_unexpected_file_field():
    req = multipart_request([("avatar", ("a.jpg", small_jpeg(), "image/jpeg"))])
    with pytest.raises(ValidationError):
        parse_upload(req, {"images": 10})


def test_missing_part_type_is_guessed_from_filename():
    req = multipart_request([("images", ("a.png", b"\x89PNG fake"))])
    with parse_upload(req, {"images": 10}) as batch:
        assert batch.first("images").mime_type == "image/png"


def test_empty_file_input_is_skipped():
    req = multipart_request([("name_en", "X5"), ("images", ("", b"", "application/octet-stream"))])
    with parse_upload(req, {"images": 10}) as batch:
        assert batch.all_files() == []


def test_zero_byte_named_file_is_rejected():
    req = multipart_request([("images", ("a.jpg", b"", "image/jpeg"))])
    with pytest.raises(ValidationError):
        parse_upload(req, {"images": 10})


def test_json_body_gives_form_without_files():
    req = json_request({"price": 10}, method="PUT")
    with parse_upload(req, {"images": 10}) as batch:
        assert batch.form == {"price": 10}
        assert batch.all_files() == []


def test_other_content_types_are_rejected():
    import azure.functions as func
    req = func.HttpRequest(
        method="POST", url="/api/cars", headers={"Content-Type": "text/plain"}, body=b"hello"
    )
    with pytest.raises(ValidationError):
        parse_upload(req, {"images": 10})
