"""Global configuration management for gitmessage.

Handles user-level configuration stored in ~/.gitmessage/:
- config.yaml: Agent, endpoint, and pipeline settings
- credentials: API key for the remote agent
"""

import os
import stat
from pathlib import Path
from typing import Dict, Optional, Any

import yaml
from pydantic import ValidationError

from gitmessage.config import API_KEY_ENV_VAR, Settings


class GlobalConfigError(Exception):
    """Raised when there's an error with global configuration."""
    pass


_CONFIG_DIR = Path.home() / ".gitmessage"


def get_global_config_dir() -> Path:
    """Get the global gitmessage configuration directory.

    Returns:
        Path to ~/.gitmessage/
    """
    return _CONFIG_DIR


def ensure_global_config_dir() -> Path:
    """Ensure the global config directory exists.

    Returns:
        Path to ~/.gitmessage/
    """
    config_dir = get_global_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_file_path() -> Path:
    """Get path to config.yaml file."""
    return get_global_config_dir() / "config.yaml"


def get_credentials_file_path() -> Path:
    """Get path to credentials file."""
    return get_global_config_dir() / "credentials"


def load_global_config() -> Dict[str, Any]:
    """Load global configuration from ~/.gitmessage/config.yaml.

    Returns:
        Dictionary with configuration values. Empty dict if file doesn't exist.

    Raises:
        GlobalConfigError: If the file cannot be read or is not a mapping.
    """
    config_file = get_config_file_path()

    if not config_file.exists():
        return {}

    try:
        with open(config_file, "r") as f:
            config = yaml.safe_load(f) or {}
    except Exception as e:
        raise GlobalConfigError(f"Failed to load config from {config_file}: {e}")

    if not isinstance(config, dict):
        raise GlobalConfigError(f"Config file {config_file} must contain a mapping")
    return config


def save_global_config(config: Dict[str, Any]) -> None:
    """Save global configuration to ~/.gitmessage/config.yaml.

    Args:
        config: Configuration dictionary to save.
    """
    ensure_global_config_dir()
    config_file = get_config_file_path()

    try:
        with open(config_file, "w") as f:
            yaml.dump(config, f, default_flow_style=False, sort_keys=False)
    except Exception as e:
        raise GlobalConfigError(f"Failed to save config to {config_file}: {e}")


def load_settings() -> Settings:
    """Load and validate runtime settings from config.yaml.

    Keys missing from the file fall back to the defaults in gitmessage.config.

    Returns:
        A validated Settings object.

    Raises:
        GlobalConfigError: If the stored values are invalid.
    """
    config = load_global_config()
    known = {k: v for k, v in config.items() if k in Settings.model_fields}

    try:
        return Settings(**known)
    except ValidationError as e:
        raise GlobalConfigError(f"Invalid configuration in {get_config_file_path()}:\n{e}")


def set_agent_id(agent_id: str) -> None:
    """Set the remote agent identifier in global config.

    Args:
        agent_id: The agent identifier to store.
    """
    config = load_global_config()
    config["agent_id"] = agent_id
    save_global_config(config)


def _parse_credentials(lines) -> Dict[str, str]:
    credentials = {}
    for line in lines:
        line = line.strip()
        # Skip empty lines and comments
        if not line or line.startswith("#"):
            continue

        # Parse KEY=value format
        if "=" in line:
            key, value = line.split("=", 1)
            credentials[key.strip()] = value.strip()
    return credentials


def load_credentials() -> Dict[str, str]:
    """Load API keys from ~/.gitmessage/credentials.

    Returns:
        Dictionary mapping environment variable names to API keys.
    """
    credentials_file = get_credentials_file_path()

    if not credentials_file.exists():
        return {}

    try:
        with open(credentials_file, "r") as f:
            return _parse_credentials(f)
    except Exception as e:
        raise GlobalConfigError(f"Failed to load credentials from {credentials_file}: {e}")


def save_credential(key_name: str, api_key: str) -> None:
    """Save or update an API key in the credentials file.

    Args:
        key_name: Environment variable name (e.g., "MISTRAL_API_KEY")
        api_key: The API key value.
    """
    ensure_global_config_dir()
    credentials_file = get_credentials_file_path()

    existing_creds = load_credentials()
    existing_creds[key_name] = api_key

    try:
        with open(credentials_file, "w") as f:
            f.write("# gitmessage API credentials\n")
            f.write("# Format: MISTRAL_API_KEY=your_key_here\n\n")

            for key, value in existing_creds.items():
                f.write(f"{key}={value}\n")

        # Owner read/write only
        os.chmod(credentials_file, stat.S_IRUSR | stat.S_IWUSR)

    except Exception as e:
        raise GlobalConfigError(f"Failed to save credential: {e}")


def get_credential(key_name: str = API_KEY_ENV_VAR) -> Optional[str]:
    """Get an API key from the credentials file.

    Args:
        key_name: Environment variable name (e.g., "MISTRAL_API_KEY")

    Returns:
        The API key if found, None otherwise.
    """
    return load_credentials().get(key_name) or None


def is_configured() -> bool:
    """Check if a config.yaml has been written."""
    return get_config_file_path().exists()
