from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

DEFAULT_API_URL = "https://green-analytics.com/api/database/cookie-policy"
DEFAULT_TIMEOUT_SECONDS = 20.0


class PolicyConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class PolicyConfig:
    api_url: str = DEFAULT_API_URL
    api_token: str | None = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    source: str | None = None


def global_config_path() -> Path:
    override = os.environ.get("POLICY_MARKDOWN_CONFIG")
    if override:
        return Path(override).expanduser()
    root = os.environ.get("XDG_CONFIG_HOME")
    if root:
        base = Path(root)
    else:
        base = Path.home() / ".config"
    return base / "policy-markdown" / "config.yaml"


def load_policy_config(*, path: Path | None = None) -> PolicyConfig:
    """Load the policy endpoint settings.

    Precedence: environment variables, then the YAML file, then defaults.
    """
    config_path = path or global_config_path()
    data = _load_yaml_mapping(config_path)
    api = _extract_api_section(data, source=config_path)
    source = str(config_path) if api else "defaults"

    api_url = _parse_optional_str(api.get("url"), DEFAULT_API_URL, source=source, key="api.url")
    api_token = _parse_optional_str(api.get("token"), None, source=source, key="api.token")
    timeout_seconds = _parse_timeout(api.get("timeout_seconds"), source=source)

    env_url = os.environ.get("POLICY_MARKDOWN_API_URL")
    if env_url:
        api_url = env_url
        source = "environment"
    env_token = os.environ.get("POLICY_MARKDOWN_API_TOKEN")
    if env_token:
        api_token = env_token

    return PolicyConfig(
        api_url=api_url or DEFAULT_API_URL,
        api_token=api_token,
        timeout_seconds=timeout_seconds,
        source=source,
    )


def _load_yaml_mapping(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise PolicyConfigError(f"Invalid YAML at {path}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise PolicyConfigError(f"Expected mapping YAML at {path}")
    return dict(loaded)


def _extract_api_section(data: Mapping[str, Any], *, source: Path) -> dict[str, Any]:
    raw = data.get("api")
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise PolicyConfigError(f"Expected mapping for api in {source}")
    return {str(key): value for key, value in raw.items() if isinstance(key, str)}


def _parse_optional_str(
    value: object,
    fallback: str | None,
    *,
    source: str,
    key: str,
) -> str | None:
    if value is None:
        return fallback
    if not isinstance(value, str) or not value.strip():
        raise PolicyConfigError(f"{key} must be a non-empty string in {source}")
    return value.strip()


def _parse_timeout(value: object, *, source: str) -> float:
    if value is None:
        return DEFAULT_TIMEOUT_SECONDS
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PolicyConfigError(f"api.timeout_seconds must be a number in {source}")
    if value <= 0:
        raise PolicyConfigError(f"api.timeout_seconds must be > 0 in {source}")
    return float(value)
