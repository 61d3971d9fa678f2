"""Configuration for commitsmith.

Settings are read once at startup into an AppConfig and passed explicitly to
every component. Sources, lowest precedence first:

1. ~/.commitsmith/config.yaml (optional provider/model preferences)
2. The dotenv file (.env.local, then .env, or an explicit --env-file)
3. The process environment
4. Command-line overrides
"""

import json
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import pydantic
import yaml
from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, field_validator

from commitsmith.exceptions import ConfigurationError


class LLMProvider(Enum):
    """Supported text-generation backends."""

    GROQ = "groq"
    OPENAI = "openai"
    OPENROUTER = "openrouter"
    GOOGLE = "google"
    ANTHROPIC = "anthropic"


# ============================================================
# DEFAULT VALUES
# ============================================================

DEFAULT_PROVIDER = LLMProvider.GROQ
DEFAULT_MAX_TOKENS = 1024
DEFAULT_TEMPERATURE = 0.3
DEFAULT_TIMEOUT = 60.0

DEFAULT_MODELS = {
    LLMProvider.GROQ: "llama-3.3-70b-versatile",
    LLMProvider.OPENAI: "gpt-4o-mini",
    LLMProvider.OPENROUTER: "openai/gpt-4o-mini",
    LLMProvider.GOOGLE: "gemini-2.0-flash",
    LLMProvider.ANTHROPIC: "claude-sonnet-4-20250514",
}

# Environment variables holding each provider's API key, in lookup order
API_KEY_ENV_VARS = {
    LLMProvider.GROQ: ("GROQ_API_KEY",),
    LLMProvider.OPENAI: ("OPENAI_API_KEY",),
    LLMProvider.OPENROUTER: ("OPENROUTER_API_KEY",),
    LLMProvider.GOOGLE: ("GOOGLE_API_KEY", "GOOGLE_GEMINI_API_KEY"),
    LLMProvider.ANTHROPIC: ("ANTHROPIC_API_KEY",),
}

# Dotenv files looked up in the current directory when none is given
DEFAULT_ENV_FILES = (".env.local", ".env")

# Environment keys -> AppConfig fields (first key found wins)
ENV_KEYS = {
    "repo_dir": ("REPO_DIR", "PATH_TO_GIT_REPO"),
    "scopes": ("COMMIT_SCOPES", "REPO_SCOPES"),
    "show_logs": ("SHOW_LOGS",),
    "provider": ("COMMIT_PROVIDER",),
    "model": ("COMMIT_MODEL",),
    "base_url": ("COMMIT_BASE_URL",),
    "max_tokens": ("COMMIT_MAX_TOKENS",),
    "temperature": ("COMMIT_TEMPERATURE",),
    "timeout": ("COMMIT_TIMEOUT",),
}

# Keys accepted in ~/.commitsmith/config.yaml
GLOBAL_CONFIG_KEYS = ("provider", "model", "base_url", "max_tokens", "temperature", "timeout", "show_logs")

_CONFIG_DIR = Path.home() / ".commitsmith"


def parse_scopes(value: Any) -> tuple[str, ...]:
    """Parse a scope list given as a JSON array, a comma-separated string or a list.

    Args:
        value: The raw setting.

    Returns:
        The scopes in their given order, stripped, without blanks or duplicates.
    """
    if value is None:
        return ()

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return ()
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError:
            parsed = text.split(",")
        if isinstance(parsed, str):
            parsed = [parsed]
        elif not isinstance(parsed, list):
            raise ValueError(f"Scopes must be a list, got: {text}")
        value = parsed

    scopes = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"Scope must be a string, got: {item!r}")
        scope = item.strip()
        if scope and scope not in scopes:
            scopes.append(scope)
    return tuple(scopes)


class AppConfig(BaseModel):
    """Process-wide settings, built once and passed to each component."""

    model_config = ConfigDict(frozen=True)

    repo_dir: Path
    scopes: tuple[str, ...] = ()
    show_logs: bool = False
    provider: LLMProvider = DEFAULT_PROVIDER
    model: Optional[str] = None
    base_url: Optional[str] = None
    max_tokens: int = Field(DEFAULT_MAX_TOKENS, gt=0)
    temperature: float = Field(DEFAULT_TEMPERATURE, ge=0.0, le=2.0)
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0)
    api_keys: Dict[str, str] = Field(default_factory=dict, repr=False)

    @field_validator("repo_dir")
    @classmethod
    def repo_dir_must_exist(cls, v: Path) -> Path:
        """Ensure the repository directory exists."""
        path = v.expanduser()
        if not path.is_dir():
            raise ValueError(f"Repository directory does not exist: {path}")
        return path.resolve()

    @field_validator("scopes", mode="before")
    @classmethod
    def scopes_from_setting(cls, v: Any) -> tuple[str, ...]:
        return parse_scopes(v)

    @field_validator("show_logs", mode="before")
    @classmethod
    def blank_means_false(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return False
        return v

    @field_validator("provider", mode="before")
    @classmethod
    def provider_from_name(cls, v: Any) -> Any:
        if isinstance(v, str):
            try:
                return LLMProvider(v.strip().lower())
            except ValueError:
                valid = ", ".join(p.value for p in LLMProvider)
                raise ValueError(f"Unknown provider '{v}'. Valid providers: {valid}")
        return v

    @property
    def effective_model(self) -> str:
        return self.model or DEFAULT_MODELS[self.provider]

    def get_api_key(self, provider: Optional[LLMProvider] = None) -> Optional[str]:
        """Return the configured API key for a provider, if any."""
        for env_var in API_KEY_ENV_VARS[provider or self.provider]:
            api_key = self.api_keys.get(env_var)
            if api_key:
                return api_key
        return None


def get_global_config_path() -> Path:
    """Get path to the optional global config file.

    Returns:
        Path to ~/.commitsmith/config.yaml
    """
    return _CONFIG_DIR / "config.yaml"


def load_global_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load preferences from the global YAML config file.

    Args:
        path: Config file to read. Defaults to ~/.commitsmith/config.yaml.

    Returns:
        Dictionary of recognised settings. Empty if the file doesn't exist.

    Raises:
        ConfigurationError: If the file cannot be read or parsed.
    """
    config_file = path or get_global_config_path()
    if not config_file.exists():
        return {}

    try:
        with open(config_file, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to load config from {config_file}: {e}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_file} must contain a mapping.")

    return {key: data[key] for key in GLOBAL_CONFIG_KEYS if data.get(key) is not None}


def find_env_file(env_file: Optional[Path] = None, cwd: Optional[Path] = None) -> Optional[Path]:
    """Locate the dotenv file to read.

    Args:
        env_file: An explicit file; it must exist.
        cwd: Directory searched for the default files (current directory by default).

    Returns:
        The dotenv path, or None if no default file exists.

    Raises:
        ConfigurationError: If an explicit env_file does not exist.
    """
    if env_file is not None:
        if not env_file.is_file():
            raise ConfigurationError(f"Env file not found: {env_file}")
        return env_file

    base = cwd or Path.cwd()
    for name in DEFAULT_ENV_FILES:
        candidate = base / name
        if candidate.is_file():
            return candidate
    return None


def _settings_from_env(env: Mapping[str, Optional[str]]) -> Dict[str, Any]:
    settings: Dict[str, Any] = {}
    for field, keys in ENV_KEYS.items():
        for key in keys:
            value = env.get(key)
            if value is not None and value != "":
                settings[field] = value
                break

    api_keys = {}
    for env_vars in API_KEY_ENV_VARS.values():
        for env_var in env_vars:
            value = env.get(env_var)
            if value:
                api_keys[env_var] = value
    settings["api_keys"] = api_keys
    return settings


def load_config(
    env_file: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
    global_config_path: Optional[Path] = None,
) -> AppConfig:
    """Build the AppConfig for this run.

    Args:
        env_file: Explicit dotenv file (defaults to .env.local / .env lookup).
        overrides: Command-line values; None entries are ignored.
        environ: Process environment (defaults to os.environ).
        global_config_path: Global YAML config (defaults to ~/.commitsmith/config.yaml).

    Returns:
        The validated AppConfig.

    Raises:
        ConfigurationError: If REPO_DIR is missing or any value is invalid.
    """
    settings: Dict[str, Any] = dict(load_global_config(global_config_path))

    env: Dict[str, Optional[str]] = {}
    dotenv_path = find_env_file(env_file)
    if dotenv_path is not None:
        env.update(dotenv_values(dotenv_path))
    # Real environment variables win over the dotenv file
    env.update(os.environ if environ is None else environ)
    settings.update(_settings_from_env(env))

    for key, value in (overrides or {}).items():
        if value is not None:
            settings[key] = value

    if not settings.get("repo_dir"):
        raise ConfigurationError(
            "REPO_DIR is not set. Set REPO_DIR (or PATH_TO_GIT_REPO) in the environment "
            "or .env.local, pass --repo, or run 'commitsmith setup'."
        )

    try:
        return AppConfig(**settings)
    except pydantic.ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}")
