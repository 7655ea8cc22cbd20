import pytest

from app.exceptions import ValidationError
from app.validation import (
    CLIENT_SIZE_MESSAGE,
    CLIENT_TYPE_MESSAGE,
    SERVER_SIZE_MESSAGE,
    SERVER_TYPE_MESSAGE,
    validate_image_descriptor,
    validate_upload,
)

TEN_MIB = 10 * 1024 * 1024


@pytest.mark.parametrize("content_type", ["image/jpeg", "image/jpg", "image/png", "image/webp", "IMAGE/PNG"])
def test_allowed_types_pass_both_checks(content_type):
    validate_image_descriptor(content_type, 1024)
    validate_upload(content_type, 1024)


@pytest.mark.parametrize("content_type", ["application/pdf", "image/gif", "image/svg+xml", "", None])
def test_disallowed_types_rejected_with_type_message(content_type):
    with pytest.raises(ValidationError) as client_err:
        validate_image_descriptor(content_type, 1024)
    assert client_err.value.message == CLIENT_TYPE_MESSAGE

    with pytest.raises(ValidationError) as server_err:
        validate_upload(content_type, 1024)
    assert server_err.value.message == SERVER_TYPE_MESSAGE
    assert "JPEG, PNG, or WebP" in server_err.value.message


def test_exactly_ten_mib_is_accepted():
    validate_image_descriptor("image/png", TEN_MIB)
    validate_upload("image/png", TEN_MIB)


def test_oversized_rejected_with_size_message():
    with pytest.raises(ValidationError) as client_err:
        validate_image_descriptor("image/jpeg", TEN_MIB + 1)
    assert client_err.value.message == CLIENT_SIZE_MESSAGE

    with pytest.raises(ValidationError) as server_err:
        validate_upload("image/jpeg", TEN_MIB + 1)
    assert server_err.value.message == SERVER_SIZE_MESSAGE


def test_validation_error_maps_to_400():
    assert ValidationError("x").status_code == 400
