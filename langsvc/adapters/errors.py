"""Error taxonomy shared by the language service clients."""

from __future__ import annotations

import json
from typing import Optional


class LanguageServiceError(RuntimeError):
    """Base class for failed language service calls."""

    def __init__(self, message: str, status: Optional[int] = None, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.status = status
        self.code = code


class AuthenticationError(LanguageServiceError):
    """Raised on 401/403: the API key was rejected."""


class NotFoundError(LanguageServiceError):
    """Raised on 404: the project or deployment does not resolve."""


class TransientServiceError(LanguageServiceError):
    """Raised on 5xx, throttling, timeouts and connection failures. Never retried here."""


class RequestRejectedError(LanguageServiceError):
    """Raised on any other non-2xx status, e.g. 400 for an invalid request."""


class MalformedResponseError(LanguageServiceError):
    """Raised when a 2xx body cannot be decoded into the expected shape."""


_TRANSIENT_4XX = {408, 429}


def _service_error_detail(text: str) -> tuple[Optional[str], str]:
    raw = (text or "").strip()
    if not raw:
        return None, ""
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError:
        return None, raw[:300]

    err = payload.get("error") if isinstance(payload, dict) else None
    if not isinstance(err, dict):
        return None, raw[:300]
    code = err.get("code")
    message = str(err.get("message") or "").strip()
    return (str(code) if code else None), message


def error_for_status(status: int, text: str, operation: str) -> LanguageServiceError:
    code, detail = _service_error_detail(text)
    message = f"{operation} failed with HTTP {status}"
    if code:
        message += f" ({code})"
    if detail:
        message += f": {detail}"

    if status in (401, 403):
        return AuthenticationError(message, status=status, code=code)
    if status == 404:
        return NotFoundError(message, status=status, code=code)
    if status >= 500 or status in _TRANSIENT_4XX:
        return TransientServiceError(message, status=status, code=code)
    return RequestRejectedError(message, status=status, code=code)
