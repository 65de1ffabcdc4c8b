"""
Name: S3 File Storage Unit Tests

Responsibilities:
  - Validate config fail-fast
  - Validate download and ClientError mapping with a mocked client
"""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from fragment_extraction.infrastructure.storage import (
    S3Config,
    S3FileStorageAdapter,
    StorageConfigurationError,
    StorageError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageUnavailableError,
)

pytestmark = pytest.mark.unit

CONFIG = S3Config(bucket="docs", access_key="ak", secret_key="sk")


def _client_error(code):
    return ClientError({"Error": {"Code": code, "Message": code}}, "GetObject")


def test_missing_bucket_rejected():
    with pytest.raises(StorageConfigurationError):
        S3FileStorageAdapter(S3Config(bucket="", access_key="a", secret_key="b"), client=MagicMock())


def test_missing_credentials_rejected():
    with pytest.raises(StorageConfigurationError):
        S3FileStorageAdapter(S3Config(bucket="b", access_key="", secret_key=""), client=MagicMock())


def test_download_reads_and_closes_body():
    client = MagicMock()
    body = MagicMock()
    body.read.return_value = b"pdf-bytes"
    client.get_object.return_value = {"Body": body}

    storage = S3FileStorageAdapter(CONFIG, client=client)

    assert storage.download_file("u/cv.pdf") == b"pdf-bytes"
    client.get_object.assert_called_once_with(Bucket="docs", Key="u/cv.pdf")
    body.close.assert_called_once()


@pytest.mark.parametrize(
    "code, expected",
    [
        ("NoSuchKey", StorageNotFoundError),
        ("AccessDenied", StoragePermissionError),
        ("SlowDown", StorageUnavailableError),
        ("InternalError", StorageError),
    ],
)
def test_client_errors_are_mapped(code, expected):
    client = MagicMock()
    client.get_object.side_effect = _client_error(code)
    storage = S3FileStorageAdapter(CONFIG, client=client)

    with pytest.raises(expected):
        storage.download_file("u/cv.pdf")


def test_connection_error_is_unavailable():
    client = MagicMock()
    client.get_object.side_effect = EndpointConnectionError(endpoint_url="http://minio:9000")
    storage = S3FileStorageAdapter(CONFIG, client=client)

    with pytest.raises(StorageUnavailableError):
        storage.download_file("u/cv.pdf")


def test_blank_key_rejected():
    storage = S3FileStorageAdapter(CONFIG, client=MagicMock())

    with pytest.raises(StorageError):
        storage.download_file("")
