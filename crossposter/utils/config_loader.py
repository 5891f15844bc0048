from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from ..errors import ConfigError

CONFIG_ENV_VAR = "CROSSPOSTER_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "article-crossposter" / "config.yaml"

_TEMPLATE = """\
# article-crossposter configuration
#
# API keys and tokens are stored in PLAIN TEXT in this file.
# Keep it readable by your user account only.
devto:
  api_key: "your_dev_to_api_key_here"
medium:
  access_token: "your_medium_access_token_here"
  # Optional; looked up via the API when empty
  user_id: ""
  # Optional; needed only to list articles from the Medium RSS feed
  username: ""
"""

_PLACEHOLDER_PREFIX = "your_"


@dataclass(slots=True)
class DevToConfig:
    api_key: Optional[str] = None


@dataclass(slots=True)
class MediumConfig:
    access_token: Optional[str] = None
    user_id: Optional[str] = None
    username: Optional[str] = None


@dataclass(slots=True)
class Config:
    devto: DevToConfig = field(default_factory=DevToConfig)
    medium: MediumConfig = field(default_factory=MediumConfig)


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override).expanduser() if override else DEFAULT_CONFIG_PATH


def _clean_value(value: object, *, key: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, (str, int)):
        raise ConfigError(f"'{key}' must be a string if provided")
    text = str(value).strip()
    if not text or text.startswith(_PLACEHOLDER_PREFIX):
        return None
    return text


def _section(data: dict, name: str) -> dict:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' must be a mapping in the YAML configuration")
    return section


def _env(name: str) -> Optional[str]:
    value = os.environ.get(name)
    return value.strip() if value and value.strip() else None


def load_config(path: Path | str | None = None) -> Config:
    """Load the YAML configuration and apply environment overrides.

    YAML structure:
      - ``devto.api_key``: dev.to API key
      - ``medium.access_token``: Medium integration token
      - ``medium.user_id``: optional Medium user id
      - ``medium.username``: optional Medium username (RSS listing)

    A missing file is not an error: credentials may come entirely from
    ``DEVTO_API_KEY``, ``MEDIUM_ACCESS_TOKEN``, ``MEDIUM_USER_ID`` and
    ``MEDIUM_USERNAME``, which always take precedence over the file.
    Template placeholder values are treated as unset.
    """
    cfg_path = Path(path) if path is not None else config_path()

    data: dict = {}
    if cfg_path.exists():
        try:
            with cfg_path.open("r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse config file {cfg_path}: {exc}") from exc
        if not isinstance(loaded, dict):
            raise ConfigError(f"Config file {cfg_path} must contain a mapping")
        data = loaded

    devto = _section(data, "devto")
    medium = _section(data, "medium")

    return Config(
        devto=DevToConfig(
            api_key=_env("DEVTO_API_KEY") or _clean_value(devto.get("api_key"), key="devto.api_key"),
        ),
        medium=MediumConfig(
            access_token=_env("MEDIUM_ACCESS_TOKEN")
            or _clean_value(medium.get("access_token"), key="medium.access_token"),
            user_id=_env("MEDIUM_USER_ID") or _clean_value(medium.get("user_id"), key="medium.user_id"),
            username=_env("MEDIUM_USERNAME") or _clean_value(medium.get("username"), key="medium.username"),
        ),
    )


def init_config(path: Path | str | None = None) -> tuple[Path, bool]:
    """Write the config template unless a file already exists.

    Returns (path, created). The file is created with 0600 permissions.
    """
    cfg_path = Path(path) if path is not None else config_path()
    if cfg_path.exists():
        return cfg_path, False

    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    fd = os.open(cfg_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(_TEMPLATE)
    return cfg_path, True


def _mask(value: Optional[str]) -> str:
    return "********" if value else "(not set)"


def describe_config(config: Config) -> str:
    """Human-readable configuration summary with secrets masked."""
    return (
        "Current configuration:\n"
        "  devto:\n"
        f"    api_key: {_mask(config.devto.api_key)}\n"
        "  medium:\n"
        f"    access_token: {_mask(config.medium.access_token)}\n"
        f"    user_id: {config.medium.user_id or '(not set)'}\n"
        f"    username: {config.medium.username or '(not set)'}\n"
    )
