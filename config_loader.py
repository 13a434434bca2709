"""Configuration loader with YAML support and environment variable substitution."""

import copy
import os
import re
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG: Dict[str, Any] = {
    'conversion': {
        'max_depth': 200,
        'parser': 'lxml',
    },
    'export': {
        'overwrite': False,
        'output_extension': '.md',
        'encoding': 'utf-8',
    },
    'logging': {
        'level': 'WARNING',
        'file': None,
    },
}

SUPPORTED_PARSERS = ['lxml', 'html.parser']
LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


class ConfigLoader:
    """Handles loading and validation of configuration files."""

    ENV_VAR_PATTERN = re.compile(r'\$\{([A-Za-z_][A-Za-z0-9_]*)\}')

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Load configuration from a YAML file on top of the built-in defaults.

        Args:
            config_path: Path to YAML configuration file (None for defaults only)

        Returns:
            Parsed configuration dictionary

        Raises:
            FileNotFoundError: If config file doesn't exist
            yaml.YAMLError: If YAML parsing fails
        """
        config = copy.deepcopy(DEFAULT_CONFIG)
        if config_path is None:
            return config

        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            return config
        if not isinstance(config_data, dict):
            raise ValueError("Configuration file must contain a dictionary")

        # Substitute environment variables recursively
        config_data = cls._substitute_env_vars_recursive(config_data)

        return cls._deep_merge(config, config_data)

    @classmethod
    def validate(cls, config: Dict[str, Any]) -> None:
        """
        Validate configuration values.

        Args:
            config: Configuration dictionary to validate

        Raises:
            ValueError: If validation fails
        """
        max_depth = get_nested(config, 'conversion.max_depth', 200)
        if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
            raise ValueError("conversion.max_depth must be a positive integer")

        parser = get_nested(config, 'conversion.parser', 'lxml')
        if parser not in SUPPORTED_PARSERS:
            raise ValueError(f"conversion.parser must be one of: {SUPPORTED_PARSERS}")

        overwrite = get_nested(config, 'export.overwrite', False)
        if not isinstance(overwrite, bool):
            raise ValueError("export.overwrite must be a boolean")

        extension = get_nested(config, 'export.output_extension', '.md')
        if not isinstance(extension, str) or not extension.startswith('.') or len(extension) < 2:
            raise ValueError("export.output_extension must start with '.' (e.g. '.md')")

        cls._validate_required_field(config, 'export.encoding')
        encoding = get_nested(config, 'export.encoding')
        if not isinstance(encoding, str):
            raise ValueError("export.encoding must be a string")
        try:
            ''.encode(encoding)
        except LookupError:
            raise ValueError(f"export.encoding '{encoding}' is not a known text encoding")

        level = get_nested(config, 'logging.level', 'WARNING')
        if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
            raise ValueError(f"logging.level must be one of: {LOG_LEVELS}")

        log_file = get_nested(config, 'logging.file')
        if log_file is not None:
            if not isinstance(log_file, str):
                raise ValueError("logging.file must be a path string")
            cls._check_substituted('logging.file', log_file)

    @classmethod
    def merge_with_args(cls, config: Dict[str, Any], args) -> Dict[str, Any]:
        """
        Merge configuration file with CLI arguments.
        CLI arguments take precedence over config file values.

        Args:
            config: Base configuration dictionary
            args: CLI arguments with attributes matching config keys

        Returns:
            Merged configuration dictionary
        """
        merged = copy.deepcopy(config)

        # Ensure nested dictionaries exist
        for section in ('conversion', 'export', 'logging'):
            merged.setdefault(section, {})

        if getattr(args, 'force', False):
            merged['export']['overwrite'] = True

        if getattr(args, 'log_file', None):
            merged['logging']['file'] = args.log_file

        verbose = getattr(args, 'verbose', 0) or 0
        if verbose >= 2:
            merged['logging']['level'] = 'DEBUG'
        elif verbose == 1:
            merged['logging']['level'] = 'INFO'

        return merged

    @classmethod
    def _deep_merge(cls, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Merge override into base, recursing into nested sections."""
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                base[key] = cls._deep_merge(base[key], value)
            else:
                base[key] = value
        return base

    @classmethod
    def _substitute_env_vars_recursive(cls, data: Any) -> Any:
        """Recursively substitute environment variables in data structure."""
        if isinstance(data, dict):
            return {key: cls._substitute_env_vars_recursive(value) for key, value in data.items()}
        elif isinstance(data, list):
            return [cls._substitute_env_vars_recursive(item) for item in data]
        elif isinstance(data, str):
            return cls._substitute_env_vars(data)
        else:
            return data

    @classmethod
    def _substitute_env_vars(cls, value: str) -> str:
        """Substitute environment variables in a string value."""
        def replace_match(match):
            var_name = match.group(1)
            env_value = os.getenv(var_name)
            return env_value if env_value is not None else match.group(0)

        return cls.ENV_VAR_PATTERN.sub(replace_match, value)

    @staticmethod
    def _validate_required_field(config_section: dict, field: str) -> None:
        """Validate that a required field exists and has a value."""
        value = get_nested(config_section, field)
        if value is None or value == '':
            raise ValueError(f"Missing required configuration: {field}")

        if isinstance(value, str):
            ConfigLoader._check_substituted(field, value)

    @staticmethod
    def _check_substituted(field: str, value: str) -> None:
        """Reject values still holding a ${VAR} placeholder whose variable is unset."""
        match = ConfigLoader.ENV_VAR_PATTERN.search(value)
        if match:
            var_name = match.group(1)
            raise ValueError(
                f"Configuration field '{field}' contains unsubstituted environment variable: {value}. "
                f"Please set the {var_name} environment variable or provide a value in config file."
            )


def get_nested(config: dict, path: str, default: Any = None) -> Any:
    """Safely retrieve nested configuration values using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "export.overwrite")
        default: Default value if path doesn't exist

    Returns:
        Value at the nested path or default
    """
    keys = path.split('.')
    value = config

    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return value


__all__ = ['ConfigLoader', 'DEFAULT_CONFIG', 'get_nested']
