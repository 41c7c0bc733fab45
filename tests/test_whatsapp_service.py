import asyncio
import json

import httpx

from diaristas.services.whatsapp_service import WhatsAppGateway


def make_gateway(handler, **overrides):
    settings = {
        "api_url": "https://api.ultramsg.com/instance123",
        "instance_id": "instance123",
        "api_token": "secret-token",
    }
    settings.update(overrides)
    return WhatsAppGateway(transport=httpx.MockTransport(handler), **settings)


def test_send_posts_chat_message():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={"sent": "true", "message": "ok", "id": 1})

    gateway = make_gateway(handler)
    assert asyncio.run(gateway.send("5511999999999", "Olá", "high")) is True

    assert len(requests) == 1
    assert str(requests[0].url) == "https://api.ultramsg.com/instance123/messages/chat"
    assert json.loads(requests[0].content) == {
        "token": "secret-token",
        "to": "5511999999999",
        "body": "Olá",
        "priority": "high",
    }


def test_http_error_status_is_not_delivered():
    gateway = make_gateway(lambda request: httpx.Response(500, text="boom"))
    assert asyncio.run(gateway.send("5511999999999", "Olá")) is False


def test_gateway_error_field_is_not_delivered():
    gateway = make_gateway(lambda request: httpx.Response(200, json={"error": "invalid token"}))
    assert asyncio.run(gateway.send("5511999999999", "Olá")) is False


def test_network_failure_is_not_delivered():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    gateway = make_gateway(handler)
    assert asyncio.run(gateway.send("5511999999999", "Olá")) is False


def test_unconfigured_gateway_skips_request():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={})

    gateway = make_gateway(handler, api_token=None)
    assert gateway.configured is False
    assert asyncio.run(gateway.send("5511999999999", "Olá")) is False
    assert requests == []


def test_empty_recipient_skips_request():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={})

    gateway = make_gateway(handler)
    assert asyncio.run(gateway.send("", "Olá")) is False
    assert requests == []
