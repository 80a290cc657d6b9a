import pytest
from fastapi.testclient import TestClient

from agenda_service.main import app
from agenda_service.routes import images
from agenda_service.services.renderer import HIGH_DPI_VIEWPORT, RenderError
from agenda_service.services.storage import StorageUploadError

client = TestClient(app)


class FakeBrowserManager:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls = []

    async def html_to_image(self, html_content, viewport=None, settle_delay_ms=0, **kwargs):
        self.calls.append({'html': html_content, 'viewport': viewport, 'settle_delay_ms': settle_delay_ms})
        if self.error:
            raise self.error
        return b'\x89PNG fake'


@pytest.fixture
def fake_browser(monkeypatch):
    browser = FakeBrowserManager()
    monkeypatch.setattr(images, 'browser_manager', browser)
    return browser


@pytest.fixture
def uploaded_keys(monkeypatch):
    keys = []

    async def fake_upload(image_bytes: bytes, key: str) -> str:
        keys.append(key)
        return f'https://images.example.com/{key}'

    monkeypatch.setattr(images, 'upload_image_async', fake_upload)
    return keys


def test_generate_image_returns_public_url(fake_browser, uploaded_keys) -> None:
    response = client.post('/generate-image', json={'htmlContent': '<h1>Hi</h1>', 'filename': 'reports/day'})

    assert response.status_code == 200
    body = response.json()
    assert body['success'] is True
    assert body['imageUrl'] == 'https://images.example.com/reports/day.png'
    assert body['message'] == 'Image generated and uploaded successfully'
    assert isinstance(body['processingTime'], int)
    assert uploaded_keys == ['reports/day.png']
    assert fake_browser.calls[0]['viewport'] == HIGH_DPI_VIEWPORT
    assert fake_browser.calls[0]['html'] == '<h1>Hi</h1>'


@pytest.mark.parametrize(
    ('payload', 'error'),
    [
        ({'filename': 'a.png'}, 'htmlContent is required'),
        ({'htmlContent': '', 'filename': 'a.png'}, 'htmlContent is required'),
        ({'htmlContent': '<p>x</p>'}, 'filename is required'),
        ({'htmlContent': '<p>x</p>', 'filename': ''}, 'filename is required'),
    ],
)
def test_missing_fields_are_rejected(fake_browser, uploaded_keys, payload: dict, error: str) -> None:
    response = client.post('/generate-image', json=payload)

    assert response.status_code == 400
    assert response.json() == {'success': False, 'error': error}
    assert fake_browser.calls == []


def test_unsafe_filename_is_rejected(fake_browser, uploaded_keys) -> None:
    response = client.post('/generate-image', json={'htmlContent': '<p>x</p>', 'filename': '../etc/passwd'})

    assert response.status_code == 400
    assert response.json()['success'] is False
    assert uploaded_keys == []


@pytest.mark.parametrize(
    'error',
    [RenderError('Image generation error: Timeout 30000ms exceeded'), StorageUploadError('Error uploading image: denied')],
)
def test_render_or_upload_failure_returns_500(monkeypatch, uploaded_keys, error: Exception) -> None:
    monkeypatch.setattr(images, 'browser_manager', FakeBrowserManager(error=error))

    response = client.post('/generate-image', json={'htmlContent': '<p>x</p>', 'filename': 'a.png'})

    assert response.status_code == 500
    body = response.json()
    assert body['success'] is False
    assert body['error'] == str(error)
    assert 'processingTime' in body


def test_malformed_json_uses_error_envelope() -> None:
    response = client.post('/generate-image', content='not json', headers={'Content-Type': 'application/json'})

    assert response.status_code == 400
    assert response.json()['success'] is False

