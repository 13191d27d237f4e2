"""Shared environment management for deployment configuration and tokens."""

import os
from configparser import ConfigParser
from configparser import Error as ConfigParserError
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .base_utils import BaseUtils
from .errors import ConfigurationError

DEPLOYMENT_CONFIG_ENV = "KB_DEPLOYMENT_CONFIG"
AUTH_TOKEN_ENV = "KB_AUTH_TOKEN"
DEFAULT_KBASE_TOKEN_FILE = Path.home() / ".kbase" / "token"


class SharedEnvUtils(BaseUtils):
    """Manages deployment configuration, authentication tokens and environment.

    Configuration priority order:
    1. Explicitly provided config dictionary
    2. Explicitly provided config_file parameter
    3. File named by the KB_DEPLOYMENT_CONFIG environment variable
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
        section: Optional[str] = None,
        token: Optional[str] = None,
        kbase_token_file: Optional[Union[str, Path]] = DEFAULT_KBASE_TOKEN_FILE,
        **kwargs: Any,
    ) -> None:
        """Initialize the shared environment.

        Args:
            config: Already-parsed settings, used as-is when given
            config_file: Optional explicit config file path (INI or YAML)
            section: Config section holding this service's settings
            token: Optional authentication token
            kbase_token_file: Fallback file holding a KBase token
            **kwargs: Additional arguments passed to BaseUtils
        """
        super().__init__(**kwargs)
        self._section = section
        self._config_file = None
        if config is not None:
            if section and isinstance(config.get(section), dict):
                config = config[section]
            self._config_hash = dict(config)
        else:
            self._config_file = self._find_config_file(config_file)
            self._config_hash = self.read_config() if self._config_file else {}
            if self._config_file:
                self.log_info(f"Loaded configuration from: {self._config_file}")

        self._kbase_token_file = kbase_token_file
        self._token = token if token is not None else self._load_token()

    def _find_config_file(
        self, explicit_path: Optional[Union[str, Path]] = None
    ) -> Optional[Path]:
        """Find the configuration file, explicit path first, then the environment."""
        if explicit_path:
            explicit = Path(explicit_path)
            if explicit.exists():
                return explicit
            self.log_warning(f"Explicit config file not found: {explicit_path}")
            return None

        env_path = os.environ.get(DEPLOYMENT_CONFIG_ENV)
        if env_path and Path(env_path).exists():
            return Path(env_path)

        self.log_debug("No configuration file found")
        return None

    def read_config(
        self, config_file: Optional[Union[str, Path]] = None
    ) -> Dict[str, Any]:
        """Read configuration from a file.

        Supports both YAML (.yaml, .yml) and INI formats. When a section name
        was given and the file has it, only that section is returned.
        """
        if config_file is None:
            config_file = self._config_file
        if config_file is None:
            return {}

        config_path = Path(config_file)
        confighash: Dict[str, Any] = {}
        try:
            if config_path.suffix in [".yaml", ".yml"]:
                with open(config_path, "r") as f:
                    confighash = yaml.safe_load(f) or {}
                self.log_debug(f"Loaded YAML config from {config_path}")
            else:
                config = ConfigParser(interpolation=None)
                config.read(config_path)
                for section in config.sections():
                    confighash[section] = dict(config.items(section))
                self.log_debug(f"Loaded INI config from {config_path}")
        except (OSError, ConfigParserError, yaml.YAMLError) as e:
            self.log_error(f"Error parsing config file {config_path}: {e}")
            raise ConfigurationError(
                f"Could not read config file {config_path}: {e}"
            ) from e

        if self._section and isinstance(confighash.get(self._section), dict):
            return dict(confighash[self._section])
        return confighash

    def get_config_value(self, key: str, default: Any = None) -> Any:
        """Get a configuration value, or default if it is not set."""
        value = self._config_hash.get(key)
        if value is None or value == "":
            return default
        return value

    def require_config(
        self, keys: List[str], labels: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        """Return the values of required settings, failing on the first one missing.

        ``labels`` maps a key to the wording used in its error message.
        """
        labels = labels or {}
        values = {}
        for key in keys:
            value = self.get_config_value(key)
            if value is None:
                message = f"no {labels.get(key, key)} defined"
                self.log_critical(message)
                raise ConfigurationError(message)
            values[key] = value
        return values

    def _load_token(self) -> Optional[str]:
        token = os.environ.get(AUTH_TOKEN_ENV)
        if token:
            return token
        if self._kbase_token_file and Path(self._kbase_token_file).exists():
            self.log_info(f"Loaded kbase token from {self._kbase_token_file}")
            return Path(self._kbase_token_file).read_text().strip() or None
        return None

    def get_token(self) -> Optional[str]:
        """Return the authentication token, if any."""
        return self._token

    def export_environment(self) -> Dict[str, Any]:
        """Export the current environment state for debugging or inspection."""
        return {
            "config": self._config_hash,
            "config_file": str(self._config_file) if self._config_file else None,
            "section": self._section,
            "has_token": self._token is not None,
        }
