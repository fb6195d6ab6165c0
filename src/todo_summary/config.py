"""Configuration management for Todo Summary Assistant."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Literal, Optional

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, Field, ValidationError

from todo_summary.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

APP_NAME = "todo_summary"


class StoreConfig(BaseModel):
    """Task store configuration."""

    backend: Literal["sqlite", "supabase"] = Field(default="sqlite")
    url: Optional[str] = Field(default=None)
    key: Optional[str] = Field(default=None)
    table: str = Field(default="todos")
    db_path: Optional[str] = Field(default=None)


class LLMConfig(BaseModel):
    """Language model configuration."""

    api_key: Optional[str] = Field(default=None)
    model: str = Field(default="gpt-3.5-turbo-instruct")
    max_tokens: int = Field(default=200)
    temperature: float = Field(default=0.7)


class SlackConfig(BaseModel):
    """Slack webhook configuration."""

    webhook_url: Optional[str] = Field(default=None)
    timeout: float = Field(default=10.0)
    notify_actions: bool = Field(default=False)


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=5000)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class APIConfig(BaseModel):
    """Backend API client configuration."""

    endpoint: str = Field(default="http://localhost:5000/api")
    timeout: int = Field(default=30)


class ClientConfig(BaseModel):
    """Local task manager configuration."""

    storage_key: str = Field(default="todos")
    alert_seconds: float = Field(default=3.0)


class OutputConfig(BaseModel):
    """Output configuration."""

    format: str = Field(default="pretty")


class Config(BaseModel):
    """Main configuration."""

    store: StoreConfig = Field(default_factory=StoreConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    slack: SlackConfig = Field(default_factory=SlackConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    client: ClientConfig = Field(default_factory=ClientConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


# Environment variable -> dot-separated config key
ENV_OVERRIDES: dict[str, str] = {
    "SUPABASE_URL": "store.url",
    "SUPABASE_KEY": "store.key",
    "TODO_SUMMARY_STORE": "store.backend",
    "OPENAI_API_KEY": "llm.api_key",
    "SLACK_WEBHOOK_URL": "slack.webhook_url",
    "PORT": "server.port",
    "TODO_SUMMARY_API_URL": "api.endpoint",
}


def _set_path(data: dict[str, Any], key: str, value: Any) -> None:
    keys = key.split(".")
    current = data
    for k in keys[:-1]:
        current = current.setdefault(k, {})
    current[keys[-1]] = value


def _get_path(config: BaseModel, key: str) -> Any:
    value: Any = config
    for k in key.split("."):
        if isinstance(value, BaseModel):
            value = getattr(value, k, None)
        else:
            return None
    return value


class ConfigManager:
    """Manages Todo Summary configuration.

    Values come from a JSON file under the user config directory; environment
    variables listed in ENV_OVERRIDES take precedence when reading but are
    never written back to the file.
    """

    def __init__(
        self,
        profile: str = "default",
        config_dir: Optional[Path] = None,
        environ: Optional[dict[str, str]] = None,
    ):
        self.profile = profile
        self.config_dir = Path(config_dir or user_config_dir(APP_NAME))
        self.data_dir = Path(user_data_dir(APP_NAME))
        self.config_file = self.config_dir / f"{profile}.json"
        self.environ = os.environ if environ is None else environ

        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._stored: Optional[Config] = None

    @property
    def stored(self) -> Config:
        """Configuration as persisted, without environment overrides."""
        if self._stored is None:
            self._stored = self.load_config()
        return self._stored

    @property
    def config(self) -> Config:
        """Effective configuration: stored values with environment overrides applied.

        Raises:
            ConfigurationError: If an environment override has an invalid value
        """
        data = self.stored.model_dump()
        for var, key in ENV_OVERRIDES.items():
            value = self.environ.get(var)
            if not value:
                continue
            _set_path(data, key, value)
            try:
                Config(**data)
            except ValidationError as e:
                raise ConfigurationError(
                    f"Invalid value for {var}: {e.errors()[0]['msg']}"
                ) from e
        return Config(**data)

    def load_config(self) -> Config:
        """Load configuration from file."""
        if self.config_file.exists():
            try:
                with open(self.config_file, "r") as f:
                    data = json.load(f)
                return Config(**data)
            except (OSError, ValueError) as e:
                logger.warning("Config file %s is unreadable, using defaults: %s", self.config_file, e)
                return Config()
        return Config()

    def save_config(self, config: Optional[Config] = None) -> None:
        """Save configuration to file."""
        if config is None:
            config = self.stored

        with open(self.config_file, "w") as f:
            json.dump(config.model_dump(), f, indent=2)

    def get(self, key: str) -> Any:
        """Get an effective configuration value by dot-separated key."""
        return _get_path(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not name a known setting
            pydantic.ValidationError: If the value has the wrong type
        """
        if not self._is_known_key(key):
            raise KeyError(key)

        config_dict = self.stored.model_dump()
        _set_path(config_dict, key, value)

        self._stored = Config(**config_dict)
        self.save_config()

    def reset(self, key: Optional[str] = None) -> None:
        """Reset configuration to defaults."""
        if key is None:
            self._stored = Config()
        else:
            self.set(key, _get_path(Config(), key))
        self.save_config()

    @staticmethod
    def _is_known_key(key: str) -> bool:
        section, _, field = key.partition(".")
        model = Config.model_fields.get(section)
        if model is None or not field:
            return False
        return field in model.annotation.model_fields


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(profile: str = "default") -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None or _config_manager.profile != profile:
        _config_manager = ConfigManager(profile)
    return _config_manager
