import http.client
import io
import json
import socket
import threading
from urllib.error import HTTPError, URLError

import pytest

from langsvc.adapters.errors import MalformedResponseError, TransientServiceError
from langsvc.adapters.language_http import UrllibTransport, post_json


class _FakeResponse:
    def __init__(self, status: int, body: bytes) -> None:
        self.status = status
        self._body = body
        self.closed = False

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "_FakeResponse":
        return self

    def __exit__(self, *exc_info) -> None:  # type: ignore[no-untyped-def]
        self.closed = True


def test_transport_posts_json_to_joined_url(monkeypatch: pytest.MonkeyPatch) -> None:
    seen = {}
    response = _FakeResponse(200, b'{"answers": []}')

    def _fake_urlopen(req, timeout):  # type: ignore[no-untyped-def]
        seen["url"] = req.full_url
        seen["method"] = req.get_method()
        seen["body"] = json.loads(req.data.decode("utf-8"))
        seen["key"] = req.get_header("Ocp-apim-subscription-key")
        seen["timeout"] = timeout
        return response

    monkeypatch.setattr("langsvc.adapters.language_http.urlopen", _fake_urlopen)

    transport = UrllibTransport("https://example.test/", timeout_seconds=7)
    out = transport.send("/language/:query-knowledgebases?api-version=1", {"question": "q"}, {"Ocp-Apim-Subscription-Key": "k"})

    assert out.status == 200
    assert out.text == '{"answers": []}'
    assert seen == {
        "url": "https://example.test/language/:query-knowledgebases?api-version=1",
        "method": "POST",
        "body": {"question": "q"},
        "key": "k",
        "timeout": 7,
    }
    assert response.closed


def test_transport_returns_http_error_status(monkeypatch: pytest.MonkeyPatch) -> None:
    def _fake_urlopen(req, timeout):  # type: ignore[no-untyped-def]
        raise HTTPError(req.full_url, 401, "Unauthorized", {}, io.BytesIO(b'{"error":{"code":"401"}}'))

    monkeypatch.setattr("langsvc.adapters.language_http.urlopen", _fake_urlopen)

    out = UrllibTransport("https://example.test").send("/x", {}, {})
    assert out.status == 401
    assert "401" in out.text


@pytest.mark.parametrize(
    "exc",
    [
        URLError("name resolution failed"),
        socket.timeout("timed out"),
        ConnectionResetError(),
        http.client.BadStatusLine("GARBAGE"),
        http.client.RemoteDisconnected("Remote end closed connection without response"),
        http.client.LineTooLong("header line"),
    ],
)
def test_transport_network_failures_are_transient(monkeypatch: pytest.MonkeyPatch, exc: Exception) -> None:
    calls = []

    def _fake_urlopen(req, timeout):  # type: ignore[no-untyped-def]
        calls.append(req)
        raise exc

    monkeypatch.setattr("langsvc.adapters.language_http.urlopen", _fake_urlopen)

    with pytest.raises(TransientServiceError):
        UrllibTransport("https://example.test").send("/x", {}, {})
    assert len(calls) == 1


class _TruncatedResponse(_FakeResponse):
    def read(self) -> bytes:
        raise http.client.IncompleteRead(b"x" * 10, 90)


def test_transport_truncated_body_is_transient(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "langsvc.adapters.language_http.urlopen",
        lambda req, timeout: _TruncatedResponse(200, b""),
    )

    with pytest.raises(TransientServiceError):
        UrllibTransport("https://example.test").send("/x", {}, {})


def _serve_once(reply: bytes) -> tuple[str, threading.Thread]:
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(("127.0.0.1", 0))
    server.listen(1)
    port = server.getsockname()[1]

    def _handle() -> None:
        conn, _ = server.accept()
        with conn:
            conn.settimeout(5)
            received = b""
            while b"\r\n\r\n" not in received:
                chunk = conn.recv(4096)
                if not chunk:
                    break
                received += chunk
            conn.sendall(reply)
        server.close()

    thread = threading.Thread(target=_handle, daemon=True)
    thread.start()
    return f"http://127.0.0.1:{port}", thread


@pytest.mark.parametrize(
    "reply",
    [
        b"GARBAGE\r\n\r\n",
        b"HTTP/1.1 200 OK\r\nContent-Type: application/json\r\nContent-Length: 100\r\n\r\n0123456789",
    ],
)
def test_transport_protocol_errors_from_live_socket_are_transient(reply: bytes) -> None:
    base_url, thread = _serve_once(reply)

    with pytest.raises(TransientServiceError):
        UrllibTransport(base_url, timeout_seconds=5).send("/x", {"question": "q"}, {})
    thread.join(timeout=5)


def test_transport_flags_invalid_utf8_body(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "langsvc.adapters.language_http.urlopen",
        lambda req, timeout: _FakeResponse(200, b'{"answers": [{"answer": "\xff"}]}'),
    )

    transport = UrllibTransport("https://example.test")
    out = transport.send("/x", {}, {})
    assert out.status == 200
    assert out.decode_error

    with pytest.raises(MalformedResponseError):
        post_json(transport, path="/x", body={}, api_key="k", auth_header="h", operation="query-knowledgebases")


def test_transport_keeps_non_ascii_text_verbatim(monkeypatch: pytest.MonkeyPatch) -> None:
    body = '{"answers": [{"answer": "Jusqu’à 12 heures ✓", "confidenceScore": 0.9}]}'
    monkeypatch.setattr(
        "langsvc.adapters.language_http.urlopen",
        lambda req, timeout: _FakeResponse(200, body.encode("utf-8")),
    )

    transport = UrllibTransport("https://example.test")
    payload = post_json(transport, path="/x", body={}, api_key="k", auth_header="h", operation="query-knowledgebases")

    assert payload["answers"][0]["answer"] == "Jusqu’à 12 heures ✓"
