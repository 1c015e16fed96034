#!/usr/bin/env python3

import os
from dataclasses import dataclass, field
from typing import FrozenSet, List, Mapping, Optional, Tuple

DEFAULT_FILE_EXTENSIONS = (".js", ".java", ".php")
DEFAULT_TOKEN_USE = 700


@dataclass(frozen=True)
class ModelConfig:
    """Settings for the chat completion requests."""
    model: str = ""
    max_tokens: int = DEFAULT_TOKEN_USE
    temperature: float = 0.2
    top_p: float = 1.0
    # Ask for response_format={"type": "json_object"}; not every model accepts it
    supports_json_mode: bool = False
    openai_api_key: Optional[str] = None
    azure_openai_endpoint: Optional[str] = None
    azure_openai_key: Optional[str] = None
    azure_openai_api_version: Optional[str] = None

    @property
    def use_azure(self) -> bool:
        return bool(self.azure_openai_endpoint and self.azure_openai_key)


@dataclass(frozen=True)
class FilterConfig:
    """Settings that decide which files get reviewed."""
    allowed_extensions: FrozenSet[str] = frozenset(DEFAULT_FILE_EXTENSIONS)
    exclude_patterns: Tuple[str, ...] = ()
    report_skipped_files: bool = False


@dataclass(frozen=True)
class Config:
    github_token: Optional[str] = None
    model: ModelConfig = field(default_factory=ModelConfig)
    filters: FilterConfig = field(default_factory=FilterConfig)
    log_level: str = "INFO"

    def validate(self) -> List[str]:
        """
        Checks that the required settings are present.

        Returns:
            Names of the missing settings, empty if the config is usable
        """
        missing = []
        if not self.github_token:
            missing.append("GITHUB_TOKEN")
        if not self.model.use_azure and not self.model.openai_api_key:
            missing.append("OPENAI_API_KEY")
        if not self.model.model:
            missing.append("AZURE_OPENAI_DEPLOYMENT" if self.model.use_azure else "OPENAI_API_MODEL")
        return missing


def _get_input(env: Mapping[str, str], name: str, default: Optional[str] = None) -> Optional[str]:
    # Action inputs arrive as INPUT_<NAME>, plain variables are used for local runs
    for key in (f"INPUT_{name}", name):
        value = env.get(key)
        if value is not None and value.strip():
            return value.strip()
    return default


def _get_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    value = _get_input(env, name)
    if value is None:
        return default
    return value.lower() in ("1", "true", "yes", "on")


def _split_list(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [p.strip() for p in raw.split(",") if p.strip()]


def _normalize_extension(extension: str) -> str:
    return extension if extension.startswith(".") else f".{extension}"


def load_config(environ: Optional[Mapping[str, str]] = None) -> Config:
    """
    Loads configuration from environment variables.

    Args:
        environ: Mapping to read from, defaults to os.environ

    Returns:
        Config object

    Raises:
        ValueError: if TOKEN_USE is not an integer
    """
    env = os.environ if environ is None else environ

    token_use_raw = _get_input(env, "TOKEN_USE", str(DEFAULT_TOKEN_USE))
    try:
        token_use = int(token_use_raw)
    except ValueError:
        raise ValueError(f"TOKEN_USE must be an integer, got {token_use_raw!r}") from None

    azure_endpoint = _get_input(env, "AZURE_OPENAI_ENDPOINT")
    model_name = _get_input(env, "OPENAI_API_MODEL", "")
    if azure_endpoint:
        model_name = _get_input(env, "AZURE_OPENAI_DEPLOYMENT", model_name)

    extensions = _split_list(_get_input(env, "FILE_EXTENSIONS")) or list(DEFAULT_FILE_EXTENSIONS)

    return Config(
        # GitHub configuration
        github_token=_get_input(env, "GITHUB_TOKEN"),

        # Model configuration
        model=ModelConfig(
            model=model_name,
            max_tokens=token_use,
            supports_json_mode=_get_bool(env, "JSON_MODE", False),
            openai_api_key=_get_input(env, "OPENAI_API_KEY"),
            azure_openai_endpoint=azure_endpoint,
            azure_openai_key=_get_input(env, "AZURE_OPENAI_KEY"),
            azure_openai_api_version=_get_input(env, "AZURE_OPENAI_API_VERSION"),
        ),

        # File selection
        filters=FilterConfig(
            allowed_extensions=frozenset(_normalize_extension(e) for e in extensions),
            exclude_patterns=tuple(_split_list(_get_input(env, "EXCLUDE"))),
            report_skipped_files=_get_bool(env, "REPORT_SKIPPED_FILES", False),
        ),

        log_level=(_get_input(env, "LOG_LEVEL", "INFO") or "INFO").upper(),
    )
