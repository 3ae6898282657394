"""Runtime configuration.

Values come from an optional YAML file (``configs/generation.yaml`` by default)
and are overridden by environment variables or a ``.env`` file in the working
directory (real environment variables win over ``.env``). The result is frozen
into a :class:`Settings` instance once at startup.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict

LOGGER = logging.getLogger("stoic.config")

DEFAULT_CONFIG_PATH = "configs/generation.yaml"
DEFAULT_TEMPLATE_PATH = "configs/prompt_template.txt"
DEFAULT_ENV_FILE = ".env"


class EnvOverrides(BaseSettings):
    """Raw overrides from the process environment and ``.env``; unset fields stay None."""

    model_config = SettingsConfigDict(
        env_file=DEFAULT_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    DEEPSEEK_API_KEY: Optional[str] = None
    DEEPSEEK_BASE_URL: Optional[str] = None
    DEEPSEEK_MODEL: Optional[str] = None
    TEMPERATURE: Optional[str] = None
    TOP_P: Optional[str] = None
    REQUEST_TIMEOUT_S: Optional[str] = None
    BATCH_DELAY_MS: Optional[str] = None
    STOIC_PROXY_SECRET: Optional[str] = None
    UPGRADE_URL: Optional[str] = None
    STOIC_PROMPT_TEMPLATE: Optional[str] = None
    STOIC_CONFIG: Optional[str] = None
    HOST: Optional[str] = None
    PORT: Optional[str] = None
    LOG_LEVEL: Optional[str] = None


def read_env(env_file: str | None = DEFAULT_ENV_FILE) -> dict[str, str]:
    """Collect the set overrides from the environment and the optional ``.env`` file."""
    overrides = EnvOverrides(_env_file=env_file)
    return {k: v for k, v in overrides.model_dump().items() if v is not None}


@dataclass(frozen=True)
class Settings:
    api_key: str | None = None
    base_url: str = "https://api.deepseek.com/v1"
    model: str = "deepseek-chat"
    temperature: float = 0.8
    top_p: float = 0.95
    timeout_s: float = 60.0
    batch_delay_s: float = 0.5
    proxy_secret: str | None = None
    upgrade_url: str = "https://rapidapi.com/your-api/pricing"
    template_path: str = DEFAULT_TEMPLATE_PATH
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    @property
    def provider_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def completions_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/chat/completions"


def load_cfg(path: str) -> dict[str, Any]:
    """Read a YAML mapping; a missing file yields an empty config."""
    if not Path(path).exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data


def load_settings(
    cfg_path: str | None = None,
    env: Mapping[str, str] | None = None,
    env_file: str | None = DEFAULT_ENV_FILE,
) -> Settings:
    """
    Build settings from YAML defaults and environment overrides.

    Args:
        cfg_path: YAML config path. Defaults to STOIC_CONFIG or configs/generation.yaml.
        env: Override mapping; read from the environment and ``env_file`` when omitted.
        env_file: Dotenv file consulted when ``env`` is omitted.
    """
    env = read_env(env_file) if env is None else env
    cfg = load_cfg(cfg_path or env.get("STOIC_CONFIG", DEFAULT_CONFIG_PATH))
    defaults = Settings()

    def pick(env_name: str, key: str, default: Any) -> Any:
        value = env.get(env_name)
        if value is not None and value != "":
            return value
        return cfg.get(key, default)

    delay_ms = pick("BATCH_DELAY_MS", "batch_delay_ms", defaults.batch_delay_s * 1000)

    return Settings(
        api_key=env.get("DEEPSEEK_API_KEY") or None,
        base_url=str(pick("DEEPSEEK_BASE_URL", "base_url", defaults.base_url)),
        model=str(pick("DEEPSEEK_MODEL", "model", defaults.model)),
        temperature=float(pick("TEMPERATURE", "temperature", defaults.temperature)),
        top_p=float(pick("TOP_P", "top_p", defaults.top_p)),
        timeout_s=float(pick("REQUEST_TIMEOUT_S", "timeout_s", defaults.timeout_s)),
        batch_delay_s=float(delay_ms) / 1000.0,
        proxy_secret=env.get("STOIC_PROXY_SECRET") or None,
        upgrade_url=str(pick("UPGRADE_URL", "upgrade_url", defaults.upgrade_url)),
        template_path=str(pick("STOIC_PROMPT_TEMPLATE", "template_path", defaults.template_path)),
        host=str(pick("HOST", "host", defaults.host)),
        port=int(pick("PORT", "port", defaults.port)),
        log_level=str(pick("LOG_LEVEL", "log_level", defaults.log_level)),
    )
