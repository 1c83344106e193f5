"""Tests for utils.sanitize number coercion."""

import pytest

from utils.errors import ValidationError
from utils.sanitize import parse_float, parse_int


def test_parse_int_accepts_numeric_text():
    assert parse_int("2024", "year") == 2024
    assert parse_int("3.0", "page") == 3
    assert parse_int("", "page") is None


@pytest.mark.parametrize("raw", ["inf", "-inf", "1e400", "nan", "abc"])
def test_parse_int_rejects_non_finite_and_garbage(raw):
    with pytest.raises(ValidationError) as exc:
        parse_int(raw, "page")
    assert exc.value.status == 400
    assert "page" in exc.value.message["en"]


@pytest.mark.parametrize("raw", ["inf", "1e400", "nan"])
def test_parse_float_rejects_non_finite(raw):
    with pytest.raises(ValidationError):
        parse_float(raw, "price")


def test_parse_float_accepts_decimal():
    assert parse_float("250000.5", "price") == 250000.5
