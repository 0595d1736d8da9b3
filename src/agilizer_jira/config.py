"""
config.py

Configuration management for the Jira history extractor.

Loads settings from the project's `config.yaml`, explicitly expands
environment variables written as `${ENV_VAR_NAME}`, validates the result
with Pydantic and exposes it through a singleton instance of the Config class.

Usage Example:

1. Import the config instance:
   from agilizer_jira.config import config

2. Access a configuration value:
   db_url = config["database"]["url"]
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

# Only runtime variable the store needs; it selects the target database.
DB_URL_ENV_VAR = "DB_URL"


class DatabaseConfig(BaseModel):
    url: str = ""
    # Heroku Postgres hobby tier allows very few concurrent connections
    max_open_conns: int = Field(default=5, ge=1)


class ConfigModel(BaseModel):
    database: DatabaseConfig = DatabaseConfig()
    paths: Dict[str, Any] = Field(default_factory=dict)
    logging: Dict[str, Any] = Field(default_factory=dict)


class Config:
    """
    Manages application configuration, loading settings from a YAML file.

    Loads `config.yaml` from the project root, expands environment variables
    (format: ${ENV_VAR_NAME}) and provides dictionary-like access. Typically
    used as a singleton via the `config` instance defined at module level.
    """

    _instance = None
    _config: Optional[Dict[str, Any]] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
            cls._instance._config = cls._instance._load_config()
        return cls._instance

    @staticmethod
    def config_path() -> Path:
        # src/agilizer_jira/config.py -> project root
        return Path(__file__).resolve().parent.parent.parent / "config.yaml"

    def _load_config(self) -> Dict[str, Any]:
        config_path = self.config_path()

        config_dict: Dict[str, Any] = {}
        if config_path.exists():
            with open(config_path, "r") as stream:
                try:
                    config_dict = yaml.safe_load(stream) or {}
                except yaml.YAMLError as exc:
                    print(f"Error loading config.yaml: {exc}")
                    raise

        # Substitute environment variables
        config_str = json.dumps(config_dict)
        config_str = os.path.expandvars(config_str.replace("${", "${ENV_"))
        # Prefixing to avoid clashes
        config_dict = json.loads(config_str)

        def remove_prefix(data: Any) -> Any:
            if isinstance(data, dict):
                return {k: remove_prefix(v) for k, v in data.items()}
            elif isinstance(data, list):
                return [remove_prefix(item) for item in data]
            elif isinstance(data, str) and data.startswith("${ENV_"):
                env_var_name = data[6:-1]
                return os.getenv(env_var_name, "")
            return data

        final_config: Dict[str, Any] = remove_prefix(config_dict)

        for section in ("database", "paths", "logging"):
            if final_config.get(section) is None:
                final_config[section] = {}

        try:
            validated_config = ConfigModel(**final_config)
            final_config = validated_config.model_dump()
        except ValidationError as e:
            print(f"Configuration validation error: {e}")
            raise

        return final_config

    @property
    def config(self) -> Dict[str, Any]:
        if self._config is None:
            raise RuntimeError("Config not loaded")
        return self._config

    def get(self, key, default=None):
        """
        Retrieves a top-level configuration value, returning a default if not found.

        Args:
            key (str): The top-level key of the configuration setting.
            default (optional): Value returned when the key is missing.

        Returns:
            Any: The configuration value or the provided default.
        """
        return self.config.get(key, default)

    def __getitem__(self, key):
        return self.config[key]

    def __repr__(self):
        return f"Config(path={self.config_path()})"


def get_database_url(settings: Optional[Dict[str, Any]] = None) -> str:
    """
    Returns the effective database connection string.

    The `database.url` entry of the configuration wins when set; otherwise
    the `DB_URL` environment variable is read at call time.
    """
    settings = config if settings is None else settings
    url = (settings.get("database") or {}).get("url") or ""
    return url or os.getenv(DB_URL_ENV_VAR, "")


# Singleton instance
config = Config().config
