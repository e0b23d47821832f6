"""Minimal language service HTTP transport (no external SDK dependency)."""

from __future__ import annotations

import http.client
import json
import logging
import socket
from dataclasses import dataclass
from typing import Any, Optional, Protocol
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from langsvc.adapters.errors import MalformedResponseError, TransientServiceError, error_for_status

AUTH_HEADER = "Ocp-Apim-Subscription-Key"

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    status: int
    text: str
    decode_error: Optional[str] = None


class Transport(Protocol):
    def send(self, path: str, body: dict[str, Any], headers: dict[str, str]) -> HttpResponse:
        """POST a JSON body to path and return the raw response; raise TransientServiceError on network failure."""


class UrllibTransport:
    def __init__(self, base_url: str, timeout_seconds: int = 30) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds

    def send(self, path: str, body: dict[str, Any], headers: dict[str, str]) -> HttpResponse:
        data = json.dumps(body, ensure_ascii=True).encode("utf-8")
        req = Request(
            url=self._base_url + path,
            data=data,
            method="POST",
            headers={"content-type": "application/json", "accept": "application/json", **headers},
        )

        try:
            with urlopen(req, timeout=self._timeout_seconds) as resp:
                raw = resp.read()
                try:
                    return HttpResponse(status=resp.status, text=raw.decode("utf-8"))
                except UnicodeDecodeError as exc:
                    return HttpResponse(
                        status=resp.status,
                        text=raw.decode("utf-8", errors="replace"),
                        decode_error=str(exc),
                    )
        except HTTPError as exc:
            detail = ""
            try:
                detail = exc.read().decode("utf-8", errors="replace")
            except OSError:
                detail = ""
            finally:
                exc.close()
            return HttpResponse(status=exc.code, text=detail)
        except URLError as exc:
            reason = exc.reason if getattr(exc, "reason", None) else str(exc)
            raise TransientServiceError(f"language service connection error: {reason}") from exc
        except (socket.timeout, TimeoutError) as exc:
            raise TransientServiceError(
                f"language service did not respond within {self._timeout_seconds}s"
            ) from exc
        except http.client.HTTPException as exc:
            raise TransientServiceError(f"language service protocol error: {exc!r}") from exc
        except OSError as exc:
            raise TransientServiceError(f"language service request failed: {exc}") from exc


def post_json(
    transport: Transport,
    *,
    path: str,
    body: dict[str, Any],
    api_key: str,
    auth_header: str,
    operation: str,
    logger: Optional[logging.Logger] = None,
) -> dict[str, Any]:
    """Send one request and return the decoded JSON object of a 2xx response."""
    log = logger or LOGGER
    log.debug("%s request POST %s", operation, path)
    response = transport.send(path, body, {auth_header: api_key})
    log.debug("%s response HTTP %s (%d bytes)", operation, response.status, len(response.text or ""))

    if not 200 <= response.status < 300:
        raise error_for_status(response.status, response.text, operation)

    if response.decode_error:
        raise MalformedResponseError(
            f"{operation} returned a body that is not valid UTF-8: {response.decode_error}",
            status=response.status,
        )

    try:
        payload = json.loads(response.text or "")
    except json.JSONDecodeError as exc:
        raise MalformedResponseError(
            f"{operation} returned non-JSON response", status=response.status
        ) from exc

    if not isinstance(payload, dict):
        raise MalformedResponseError(f"{operation} response must be an object", status=response.status)
    return payload
