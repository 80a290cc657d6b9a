import asyncio

import pytest
from botocore.exceptions import ClientError

from agenda_service.services import storage
from agenda_service.services.storage import StorageUploadError, get_public_url, upload_image, upload_image_async


class FakeR2Client:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.uploads = []

    def put_object(self, **kwargs):
        if self.error:
            raise self.error
        self.uploads.append(kwargs)
        return {'ETag': '"abc"'}


@pytest.fixture
def r2_client(monkeypatch):
    client = FakeR2Client()
    monkeypatch.setattr(storage, 'get_r2_client', lambda: client)
    return client


def test_upload_puts_png_and_returns_public_url(r2_client) -> None:
    url = upload_image(b'\x89PNG', 'agenda-1-2025-03-07-1.png')

    assert url == 'https://images.example.com/agenda-1-2025-03-07-1.png'
    upload = r2_client.uploads[0]
    assert upload['Bucket'] == 'agenda-images'
    assert upload['Key'] == 'agenda-1-2025-03-07-1.png'
    assert upload['Body'] == b'\x89PNG'
    assert upload['ContentType'] == 'image/png'
    assert upload['CacheControl'] == 'public, max-age=3600'


def test_async_upload_runs_the_same_upload(r2_client) -> None:
    url = asyncio.run(upload_image_async(b'\x89PNG', 'reports/day.png'))

    assert url == 'https://images.example.com/reports/day.png'
    assert r2_client.uploads[0]['Key'] == 'reports/day.png'


def test_client_errors_are_wrapped(monkeypatch) -> None:
    error = ClientError({'Error': {'Code': 'AccessDenied', 'Message': 'Access Denied'}}, 'PutObject')
    monkeypatch.setattr(storage, 'get_r2_client', lambda: FakeR2Client(error=error))

    with pytest.raises(StorageUploadError, match='AccessDenied'):
        upload_image(b'\x89PNG', 'a.png')


def test_public_url_joins_without_double_slashes(monkeypatch) -> None:
    monkeypatch.setattr(storage, 'R2_PUBLIC_URL', 'https://pub.example.r2.dev/')

    assert get_public_url('/a/b.png') == 'https://pub.example.r2.dev/a/b.png'
