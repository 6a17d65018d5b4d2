"""Tests for data URL helpers."""

import pytest

from nutrient_estimator.domain.errors import InputValidationError
from nutrient_estimator.services.images import decode_data_url, to_data_url


def test_to_data_url_uses_png_header() -> None:
    data = b"\x89PNG\r\n\x1a\n" + b"rest"
    url = to_data_url(data)

    assert url.startswith("data:image/png;base64,")


def test_to_data_url_defaults_to_jpeg() -> None:
    url = to_data_url(b"unknown")

    assert url.startswith("data:image/jpeg;base64,")


def test_to_data_url_keeps_given_mime_type() -> None:
    url = to_data_url(b"unknown", "image/heic")

    assert url.startswith("data:image/heic;base64,")


def test_decode_data_url_returns_bytes() -> None:
    assert decode_data_url(to_data_url(b"label-bytes")) == b"label-bytes"


@pytest.mark.parametrize(
    "value",
    [
        "not a data url",
        "data:image/png;base64,",
        "data:image/png;base64,@@@",
        "https://example.com/label.png",
    ],
)
def test_decode_data_url_rejects_malformed_input(value: str) -> None:
    with pytest.raises(InputValidationError):
        decode_data_url(value)
