"""Gateway configuration: optional YAML file plus environment overrides."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

LOGGER = logging.getLogger("learnbot.common.config")

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.5-flash-preview-09-2025"


@dataclass(frozen=True)
class GatewayConfig:
    """Connection settings for the generation endpoint.

    ``timeout_s`` of ``None`` means the request waits until the server answers.
    """
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    timeout_s: float | None = None

    @property
    def endpoint(self) -> str:
        return f"{self.base_url.rstrip('/')}/models/{self.model}:generateContent"


def load_cfg(path: str) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}
    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data


def load_config(path: str = "configs/learnbot.yaml") -> GatewayConfig:
    """
    Build the gateway config from a YAML file and the environment.

    Args:
        path: Optional YAML file with ``base_url``, ``model``, ``timeout_s``.
            ``GEMINI_*`` environment variables take precedence.
    """
    cfg = load_cfg(path)
    config = GatewayConfig(
        api_key=str(cfg.get("api_key") or ""),
        base_url=str(cfg.get("base_url") or DEFAULT_BASE_URL),
        model=str(cfg.get("model") or DEFAULT_MODEL),
        timeout_s=_as_timeout(cfg.get("timeout_s")),
    )

    env_overrides: dict[str, Any] = {}
    if os.getenv("GEMINI_API_KEY"):
        env_overrides["api_key"] = os.environ["GEMINI_API_KEY"]
    if os.getenv("GEMINI_BASE_URL"):
        env_overrides["base_url"] = os.environ["GEMINI_BASE_URL"]
    if os.getenv("GEMINI_MODEL"):
        env_overrides["model"] = os.environ["GEMINI_MODEL"]
    if os.getenv("GEMINI_TIMEOUT_S"):
        env_overrides["timeout_s"] = _as_timeout(os.environ["GEMINI_TIMEOUT_S"])
    config = replace(config, **env_overrides)

    if not config.api_key:
        LOGGER.warning("GEMINI_API_KEY is not set; generation requests will be rejected upstream")
    return config


def _as_timeout(value: Any) -> float | None:
    if value is None or value == "":
        return None
    timeout = float(value)
    return timeout if timeout > 0 else None
