"""Tests for the exception hierarchy and exit codes."""

import pytest

from tfexport.utils.exceptions import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    ExporterError,
    FetchError,
    ResourceNotFoundError,
    SavingFilesError,
    UnsupportedTypeError,
)


@pytest.mark.parametrize(
    "error, code",
    [
        (ConfigurationError("bad"), 1),
        (ResourceNotFoundError("policy", "p"), 3),
        (UnsupportedTypeError("cloudlet", "XX"), 4),
        (FetchError("fetching policy", "boom"), 5),
        (APIError("boom"), 5),
        (AuthenticationError(), 5),
        (SavingFilesError("policy.tf.j2", "boom"), 6),
    ],
)
def test_exit_codes(error, code):
    assert isinstance(error, ExporterError)
    assert error.exit_code == code


def test_messages_name_the_subject():
    assert str(ResourceNotFoundError("zone", "example.com")) == "zone 'example.com' does not exist"
    assert str(UnsupportedTypeError("cloudlet", "XX")) == "cloudlet type not supported: XX"
    assert "fetching policy" in str(FetchError("fetching policy", APIError("500")))
    assert "imports.sh.j2" in str(SavingFilesError("imports.sh.j2", "disk full"))


def test_fetch_error_keeps_cause():
    cause = APIError("API Error 500: down", status_code=500)
    error = FetchError("fetching domain", cause)

    assert error.phase == "fetching domain"
    assert error.cause is cause


def test_authentication_error_is_api_error():
    error = AuthenticationError("forbidden", status_code=403)

    assert isinstance(error, APIError)
    assert error.status_code == 403
