import asyncio
import json

import httpx

from agenda_service.services import webhook
from agenda_service.services.webhook import send_webhook

PAYLOAD = {'event_type': 'daily_agenda', 'total_appointments': 3}


def deliver(handler, url: str | None = 'https://hooks.example.com/daily_agenda') -> bool:
    async def run() -> bool:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await send_webhook(PAYLOAD, url=url, client=client)

    return asyncio.run(run())


def test_posts_payload_as_json() -> None:
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={'ok': True})

    assert deliver(handler) is True
    assert requests[0].method == 'POST'
    assert str(requests[0].url) == 'https://hooks.example.com/daily_agenda'
    assert json.loads(requests[0].content) == PAYLOAD


def test_non_success_status_is_reported_not_raised() -> None:
    assert deliver(lambda request: httpx.Response(502)) is False


def test_connection_error_is_reported_not_raised() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError('connection refused', request=request)

    assert deliver(handler) is False


def test_default_url_comes_from_config(monkeypatch) -> None:
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(204)

    monkeypatch.setattr(webhook, 'AGENDA_WEBHOOK_URL', 'https://hooks.example.com/other')

    assert deliver(handler, url=None) is True
    assert str(requests[0].url) == 'https://hooks.example.com/other'


def test_missing_url_skips_delivery(monkeypatch) -> None:
    monkeypatch.setattr(webhook, 'AGENDA_WEBHOOK_URL', None)

    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError('no request expected')

    assert deliver(handler, url=None) is False
