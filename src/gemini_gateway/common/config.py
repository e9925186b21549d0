"""Runtime configuration: YAML defaults overridden by environment variables."""
from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv, load_dotenv

DEFAULT_CFG_PATH = "configs/gateway.yaml"

DEFAULT_MODELS = {
    "text": "gemini-2.5-flash",
    "image": "gemini-1.5-flash",
    "document": "gemini-1.5-flash",
    "audio": "gemini-1.5-flash",
}

@dataclass
class Settings:
    api_key: str | None = None
    base_url: str = "https://generativelanguage.googleapis.com"
    timeout: float = 120.0
    host: str = "0.0.0.0"
    port: int = 3000
    upload_dir: str = "uploads"
    models: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_MODELS))

    def model_for(self, kind: str) -> str:
        """Model identifier for an endpoint kind; unknown kinds use the text model."""
        return self.models.get(kind) or self.models["text"]


def load_cfg(path: str) -> dict[str, Any]:
    if not Path(path).exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _pick(env_name: str, cfg: dict[str, Any], key: str) -> Any:
    # empty env vars and YAML nulls count as unset
    value = os.getenv(env_name)
    if value:
        return value
    if cfg.get(key) not in (None, ""):
        return cfg[key]
    return getattr(Settings, key)


def load_settings(cfg_path: str | None = None) -> Settings:
    """
    Build settings from .env, an optional YAML file and the environment.

    Args:
        cfg_path: YAML config path. Defaults to GATEWAY_CONFIG or configs/gateway.yaml.
    """
    load_dotenv(find_dotenv(usecwd=True))
    cfg = load_cfg(cfg_path or os.getenv("GATEWAY_CONFIG") or DEFAULT_CFG_PATH)

    models = dict(DEFAULT_MODELS)
    models.update({k: str(v) for k, v in (cfg.get("models") or {}).items()})
    for kind in DEFAULT_MODELS:
        override = os.getenv(f"GEMINI_{kind.upper()}_MODEL")
        if override:
            models[kind] = override

    return Settings(
        api_key=os.getenv("GEMINI_API_KEY") or cfg.get("api_key"),
        base_url=str(_pick("GEMINI_BASE_URL", cfg, "base_url")).rstrip("/"),
        timeout=float(_pick("GEMINI_TIMEOUT", cfg, "timeout")),
        host=str(_pick("HOST", cfg, "host")),
        port=int(_pick("PORT", cfg, "port")),
        upload_dir=str(_pick("UPLOAD_DIR", cfg, "upload_dir")),
        models=models,
    )
