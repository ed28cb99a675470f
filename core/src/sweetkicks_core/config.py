from __future__ import annotations

import json
import secrets
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, Field, StringConstraints

from sweetkicks_core.forms.binder import DEFAULT_BIND_ATTRIBUTE, DEFAULT_BOUND_TAGS
from sweetkicks_core.home import SweetKicksPaths

AttributeName = Annotated[
    str, StringConstraints(strip_whitespace=True, to_lower=True, min_length=1)
]


class NetworkConfig(BaseModel):
    bind_host: str = Field(default="127.0.0.1")
    core_port: int = Field(default=8000, ge=1, le=65535)


class LoggingConfig(BaseModel):
    max_size_mb: int = Field(
        default=10, ge=1, description="Max size of a log file in MB before rolling."
    )
    backup_count: int = Field(default=5, ge=1, description="Number of log archives to keep.")


class UiConfig(BaseModel):
    """Client-side component library settings used by the base template."""

    shoelace_version: str = Field(default="2.15.1")
    shoelace_cdn: str = Field(
        default="https://cdn.jsdelivr.net/npm/@shoelace-style/shoelace",
        description="CDN prefix; the version and dist path are appended by the template.",
    )
    theme: str = Field(default="light", description="'light' or 'dark'")
    reveal_elements: list[str] = Field(
        default_factory=lambda: ["sl-input", "sl-button", "sl-card"],
        description=(
            "Custom element names that must finish registering before the page content "
            "is revealed."
        ),
    )


class BindingConfig(BaseModel):
    bind_attribute: AttributeName = Field(
        default=DEFAULT_BIND_ATTRIBUTE,
        description="Attribute naming the page model field a tag is bound to.",
    )
    tags: list[AttributeName] = Field(
        default_factory=lambda: list(DEFAULT_BOUND_TAGS),
        description="Tag names the binder augments when they carry the bind attribute.",
    )


class SessionConfig(BaseModel):
    secret_key: str | None = Field(
        default=None,
        description="Signing key for the session cookie; generated on first start if missing.",
    )
    cookie_name: str = Field(default="sk_session", min_length=1)
    max_age_seconds: int = Field(default=14 * 24 * 60 * 60, ge=60)


class CoreConfig(BaseModel):
    version: str = Field(default="1")
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    ui: UiConfig = Field(default_factory=UiConfig)
    binding: BindingConfig = Field(default_factory=BindingConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)


def _read_json(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def load_core_config(paths: SweetKicksPaths) -> CoreConfig:
    """Load config from ${SWEETKICKS_HOME}/config/core.json.

    - If missing: returns defaults.
    - Validation is performed by Pydantic.
    """

    config_path = paths.core_config_path
    if not config_path.exists():
        return CoreConfig()

    raw = _read_json(config_path)
    return CoreConfig.model_validate(raw)


def write_core_config(paths: SweetKicksPaths, config: CoreConfig) -> None:
    """Persist config to ${SWEETKICKS_HOME}/config/core.json."""

    payload = config.model_dump(mode="json", exclude_none=True)
    paths.config_dir.mkdir(parents=True, exist_ok=True)
    paths.core_config_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")


def ensure_session_secret(paths: SweetKicksPaths, config: CoreConfig) -> CoreConfig:
    """Ensure a per-install session signing key exists and is stored in config.

    If missing, generate a new key and persist it to core.json.
    """

    raw = (config.session.secret_key or "").strip()
    if raw:
        return config

    secret = secrets.token_urlsafe(32)
    updated_session = config.session.model_copy(update={"secret_key": secret})
    updated = config.model_copy(update={"session": updated_session})
    write_core_config(paths, updated)
    return updated
