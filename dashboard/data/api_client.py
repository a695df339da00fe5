import logging
import os
from typing import Any

import httpx
import requests
from requests.adapters import HTTPAdapter

from dashboard.errors import PersistenceError

logger = logging.getLogger(__name__)

_SECRET_GETTER = None
_USER_GETTER = None


def _build_session():
    session = requests.Session()
    # Failed calls are surfaced to the user, never retried automatically.
    adapter = HTTPAdapter(max_retries=0, pool_connections=10, pool_maxsize=10)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


_SESSION = _build_session()
_ASYNC_TRANSPORT = None


def configure(secret_getter, user_getter, async_transport=None):
    global _SECRET_GETTER, _USER_GETTER, _ASYNC_TRANSPORT
    _SECRET_GETTER = secret_getter
    _USER_GETTER = user_getter
    _ASYNC_TRANSPORT = async_transport


def _get_secret(path, default=None):
    if _SECRET_GETTER is None:
        return default
    return _SECRET_GETTER(path, default)


def api_base_url():
    return (
        _get_secret(("app", "API_BASE_URL"))
        or _get_secret(("API_BASE_URL",))
        or os.getenv("API_BASE_URL")
        or ""
    )


def backend_token():
    return (
        _get_secret(("app", "BACKEND_SESSION_SECRET"))
        or _get_secret(("BACKEND_SESSION_SECRET",))
        or os.getenv("BACKEND_SESSION_SECRET")
        or ""
    )


def is_enabled():
    return bool(api_base_url() and backend_token())


def _prepare(path):
    base = api_base_url().rstrip("/")
    if not base:
        raise RuntimeError("API_BASE_URL not configured")
    token = backend_token()
    if not token:
        raise RuntimeError("BACKEND_SESSION_SECRET not configured")
    user_id = _USER_GETTER() if _USER_GETTER else None
    if not user_id:
        raise RuntimeError("Missing user id for API request")
    headers = {
        "X-User-Id": str(user_id),
        "X-Backend-Token": token,
    }
    return f"{base}{path}", headers


def _error_from_response(method, path, status_code, reason, detail):
    logger.warning("API %s %s failed with %s: %s", method, path, status_code, detail)
    return PersistenceError(
        f"API error {status_code} {reason}: {detail}",
        status_code=status_code,
        detail=detail,
    )


def request(method: str, path: str, params: dict | None = None, json: Any = None, timeout: float | None = None) -> Any:
    url, headers = _prepare(path)
    try:
        response = _SESSION.request(method, url, params=params, json=json, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        raise PersistenceError(f"API request failed: {exc}") from exc
    if not response.ok:
        try:
            detail = response.json()
        except ValueError:
            detail = response.text
        raise _error_from_response(method, path, response.status_code, response.reason, detail)
    if response.status_code == 204:
        return None
    return response.json()


async def arequest(method: str, path: str, params: dict | None = None, json: Any = None, timeout: float | None = None) -> Any:
    url, headers = _prepare(path)
    client_kwargs = {"timeout": timeout}
    if _ASYNC_TRANSPORT is not None:
        client_kwargs["transport"] = _ASYNC_TRANSPORT
    try:
        async with httpx.AsyncClient(**client_kwargs) as client:
            response = await client.request(method, url, params=params, json=json, headers=headers)
    except httpx.HTTPError as exc:
        raise PersistenceError(f"API request failed: {exc}") from exc
    if response.is_error:
        try:
            detail = response.json()
        except ValueError:
            detail = response.text
        raise _error_from_response(method, path, response.status_code, response.reason_phrase, detail)
    if response.status_code == 204:
        return None
    return response.json()
