"""Configuration loading for the entity provider.

Configuration comes from an optional YAML file and from environment
variables (a .env file is honoured through python-dotenv). Environment
variables take precedence over the file. The access token is not part of
this configuration; Authenticator reads it separately.

Configuration file structure (.git-entities.yaml):
    project_id: "group/project"
    ref: "master"
    host: "https://gitlab.example.com"
    data_base_path: "data"
    tree_per_page: 20
    timeout: 30
"""

import logging
import os
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from src.entity_store.models import ProviderConfig

from .errors import ConfigError, FilesystemError

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Builds the process-wide ProviderConfig at startup."""

    DEFAULT_CONFIG_PATH = '.git-entities.yaml'

    # Config field -> environment variable
    ENV_VARS = {
        'project_id': 'GITLAB_PROJECT_ID',
        'ref': 'GITLAB_REF',
        'host': 'GITLAB_API',
        'api_version': 'GITLAB_API_VERSION',
        'data_base_path': 'GITLAB_DATA_PATH',
        'tree_per_page': 'GITLAB_TREE_PER_PAGE',
        'timeout': 'GITLAB_TIMEOUT',
        'oauth_client_id': 'GITLAB_OAUTH_CLIENT_ID',
        'oauth_base_url': 'GITLAB_OAUTH_BASE_URL',
    }

    INT_FIELDS = {'tree_per_page', 'timeout'}

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> ProviderConfig:
        """Load configuration from YAML and the environment.

        Args:
            config_path: YAML file path. When omitted, the default file is
                read if present; an explicitly given path must exist.

        Returns:
            Validated ProviderConfig

        Raises:
            FilesystemError: If an explicit config file cannot be read
            ConfigError: If the configuration is invalid or incomplete
        """
        load_dotenv()

        values = cls._read_file(config_path or cls.DEFAULT_CONFIG_PATH, required=bool(config_path))

        for field_name, env_var in cls.ENV_VARS.items():
            env_value = os.getenv(env_var)
            if env_value:
                values[field_name] = env_value

        return cls._parse_config(values)

    @classmethod
    def _read_file(cls, config_path: str, required: bool) -> Dict[str, Any]:
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            if required:
                raise FilesystemError(config_path, 'read', 'Configuration file not found')
            return {}
        except PermissionError:
            raise FilesystemError(config_path, 'read', 'Permission denied')
        except OSError as e:
            raise FilesystemError(config_path, 'read', str(e))

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {str(e)}")

        if config_dict is None:
            return {}

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        logger.debug(f"Loaded configuration file {config_path}")
        return dict(config_dict)

    @classmethod
    def _parse_config(cls, values: Dict[str, Any]) -> ProviderConfig:
        unknown = set(values) - set(cls.ENV_VARS)
        if unknown:
            raise ConfigError(f"Unknown fields: {', '.join(sorted(unknown))}")

        if not values.get('project_id'):
            raise ConfigError(
                "project_id is required (set GITLAB_PROJECT_ID or add it to the config file)",
                config_field='project_id'
            )

        parsed: Dict[str, Any] = {}
        for field_name, value in values.items():
            if value is None:
                continue
            if field_name in cls.INT_FIELDS:
                parsed[field_name] = cls._parse_positive_int(field_name, value)
            else:
                parsed[field_name] = str(value)

        return ProviderConfig(**parsed)

    @staticmethod
    def _parse_positive_int(field_name: str, value: Any) -> int:
        try:
            number = int(value)
        except (TypeError, ValueError):
            raise ConfigError(f"Expected an integer, got '{value}'", config_field=field_name)
        if number < 1:
            raise ConfigError(f"Must be positive, got {number}", config_field=field_name)
        return number
