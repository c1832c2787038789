from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import ValidationError

from policy_markdown.compiler import compile_markdown
from policy_markdown.domain.models import PolicyDocument


class PolicyApiError(RuntimeError):
    pass


def fetch_policy(
    *,
    api_url: str,
    api_token: str | None = None,
    timeout_seconds: float = 20.0,
) -> PolicyDocument:
    if timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be > 0")
    payload = _fetch_policy_json(api_url=api_url, api_token=api_token, timeout_seconds=timeout_seconds)
    return parse_policy_payload(payload)


def parse_policy_payload(payload: Any) -> PolicyDocument:
    if isinstance(payload, str):
        return PolicyDocument(content=payload)
    if not isinstance(payload, Mapping):
        raise PolicyApiError("Policy API response must be an object.")
    if not isinstance(payload.get("content"), str):
        message = _extract_error_message(payload) or "Policy API response missing content."
        raise PolicyApiError(message)
    try:
        return PolicyDocument.model_validate(dict(payload))
    except ValidationError as exc:
        raise PolicyApiError(f"Policy API returned an invalid document: {exc}") from exc


def render_policy(document: PolicyDocument) -> str:
    return compile_markdown(document.content)


def _fetch_policy_json(*, api_url: str, api_token: str | None, timeout_seconds: float) -> Any:
    headers = {"Content-Type": "application/json"}
    if api_token:
        headers["API_TOKEN"] = api_token
    try:
        response = httpx.get(api_url, headers=headers, timeout=timeout_seconds, follow_redirects=True)
    except httpx.RequestError as exc:
        raise PolicyApiError(f"Failed to fetch policy: {exc}") from exc

    if response.status_code >= 400:
        message = _extract_error_message(_json_or_none(response)) or f"HTTP {response.status_code}"
        raise PolicyApiError(f"Policy API error ({response.status_code}): {message}")
    try:
        return response.json()
    except ValueError as exc:
        raise PolicyApiError("Policy API returned invalid JSON.") from exc


def _json_or_none(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError:
        return None


def _extract_error_message(payload: object) -> str | None:
    if not isinstance(payload, Mapping):
        return None
    for key in ("error", "message", "detail"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None
