import base64

import pytest
import requests

from meteora_pool_launcher.utils import rate_limiter as net
from meteora_pool_launcher.utils import solana_rpc


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def json(self):
        return self.payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"HTTP {self.status_code}", response=self)


class FakePost:
    """Replays queued responses (or exceptions) and records each request."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, url, json=None, timeout=None):
        self.requests.append((url, json))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture(autouse=True)
def no_waiting(monkeypatch):
    monkeypatch.setattr(solana_rpc.rate_limiter, "acquire", lambda: None)
    monkeypatch.setattr(net, "exponential_backoff_sleep", lambda *args, **kwargs: None)
    monkeypatch.setattr(solana_rpc, "get_solana_rpc_url", lambda: "https://primary.example")
    monkeypatch.setattr(solana_rpc, "get_fallback_rpc_url", lambda: None)


def install_post(monkeypatch, *responses):
    fake = FakePost(*responses)
    monkeypatch.setattr(solana_rpc.requests, "post", fake)
    return fake


def test_make_rpc_request_returns_response(monkeypatch):
    fake = install_post(monkeypatch, FakeResponse({"jsonrpc": "2.0", "result": 5}))

    data = solana_rpc.make_rpc_request({"method": "getSlot"})

    assert data["result"] == 5
    assert fake.requests[0][0] == "https://primary.example"


def test_make_rpc_request_retries_after_rate_limit(monkeypatch):
    fake = install_post(
        monkeypatch,
        FakeResponse(status_code=429),
        FakeResponse({"result": 1}),
    )

    assert solana_rpc.make_rpc_request({"method": "getSlot"}) == {"result": 1}
    assert len(fake.requests) == 2


def test_make_rpc_request_gives_up_after_retries(monkeypatch):
    install_post(
        monkeypatch,
        requests.exceptions.ConnectionError("down"),
        FakeResponse(status_code=500),
        requests.exceptions.Timeout("slow"),
    )

    assert solana_rpc.make_rpc_request({"method": "getSlot"}) is None


def test_make_rpc_request_returns_none_on_rpc_error(monkeypatch):
    install_post(monkeypatch, FakeResponse({"error": {"code": -32600, "message": "bad"}}))

    assert solana_rpc.make_rpc_request({"method": "getSlot"}) is None


def test_make_rpc_request_uses_fallback(monkeypatch):
    monkeypatch.setattr(solana_rpc, "get_fallback_rpc_url", lambda: "https://fallback.example")
    fake = install_post(
        monkeypatch,
        requests.exceptions.ConnectionError("down"),
        FakeResponse({"result": 2}),
    )

    assert solana_rpc.make_rpc_request({"method": "getSlot"}, max_retries=1) == {"result": 2}
    assert [url for url, _ in fake.requests] == ["https://primary.example", "https://fallback.example"]


def test_memcmp_filter_encodes_base64():
    assert solana_rpc.memcmp_filter(8, b"\x01\x02") == {
        "memcmp": {"offset": 8, "bytes": "AQI=", "encoding": "base64"}
    }


def test_get_program_accounts_decodes_data(monkeypatch):
    raw = b"\x00\x01\x02"
    fake = install_post(monkeypatch, FakeResponse({"result": [
        {"pubkey": "abc", "account": {"data": [base64.b64encode(raw).decode(), "base64"]}},
    ]}))

    accounts = solana_rpc.get_program_accounts("Program111", [{"dataSize": 3}])

    assert accounts == [("abc", raw)]
    payload = fake.requests[0][1]
    assert payload["method"] == "getProgramAccounts"
    assert payload["params"] == ["Program111", {"encoding": "base64", "filters": [{"dataSize": 3}]}]


def test_get_account_info_missing_account(monkeypatch):
    install_post(monkeypatch, FakeResponse({"result": {"context": {"slot": 1}, "value": None}}))

    assert solana_rpc.get_account_info("Missing111") is None


def test_get_account_info_decodes_data(monkeypatch):
    install_post(monkeypatch, FakeResponse({"result": {"value": {"data": ["AQI=", "base64"]}}}))

    assert solana_rpc.get_account_info("Acc111") == b"\x01\x02"


def test_get_account_info_null_result(monkeypatch):
    install_post(monkeypatch, FakeResponse({"jsonrpc": "2.0", "id": 1, "result": None}))

    assert solana_rpc.get_account_info("Acc111") is None
