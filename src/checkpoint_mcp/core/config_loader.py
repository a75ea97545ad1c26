"""
Check Point MCP Server - Secure Configuration Loader

This module resolves management settings from multiple sources with cascading
priority: environment variables → config file profile (secrets optionally in keyring).
Credentials are never exposed to the LLM or stored in conversation logs.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import keyring
from keyring.errors import PasswordDeleteError
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigurationError
from .models import ManagementSettings, null_or_empty

logger = logging.getLogger("checkpoint-mcp")

SECRET_FIELDS = ("api_key", "username", "password")
PUBLIC_FIELDS = ("cloud_url", "management_host", "management_port", "origin", "verbose")


class ConfigLoader:
    """
    Secure configuration loader for Check Point management settings.

    Priority order for settings sources:
    1. Environment variables (highest priority) - for CI/CD and containers
    2. Config file (~/.checkpoint-mcp/config.json) - for multiple profiles

    A profile saved with ``use_keyring=True`` keeps its API key, user name and password
    in the system keyring; the config file only records where they live.

    Security features:
    - Automatic file permission enforcement (0600)
    - No credential logging
    - Profile-based multi-server support
    """

    DEFAULT_CONFIG_DIR = Path.home() / ".checkpoint-mcp"
    DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.json"
    REQUIRED_FILE_PERMISSIONS = 0o600
    KEYRING_SERVICE_NAME = "checkpoint-mcp-server"
    KEYRING_STORE = "keyring"

    @classmethod
    def load(cls, profile: str = "default") -> ManagementSettings:
        """
        Load management settings for the specified profile.

        Args:
            profile: Profile name to load (default: "default")

        Returns:
            ManagementSettings with credentials

        Raises:
            ConfigurationError: If no settings found or configuration invalid
        """
        logger.debug(f"Loading configuration for profile: {profile}")

        settings = cls._load_from_env()
        if settings:
            logger.info("Loaded configuration from environment variables")
            return settings

        settings = cls._load_from_config_file(profile)
        if settings:
            logger.info(f"Loaded configuration for profile '{profile}' from config file")
            return settings

        raise ConfigurationError(
            f"No management settings found for profile '{profile}'. "
            f"Please configure credentials using 'checkpoint-mcp setup' or set environment "
            f"variables (S1C_URL or MANAGEMENT_HOST, plus API_KEY or USERNAME/PASSWORD)"
        )

    @classmethod
    def _load_from_env(cls) -> Optional[ManagementSettings]:
        """Load settings from environment variables."""
        cloud_url = os.getenv("S1C_URL")
        management_host = os.getenv("MANAGEMENT_HOST")

        if null_or_empty(cloud_url) and null_or_empty(management_host):
            return None

        try:
            return ManagementSettings(
                api_key=os.getenv("API_KEY"),
                username=os.getenv("USERNAME"),
                password=os.getenv("PASSWORD"),
                cloud_url=cloud_url,
                management_host=management_host,
                management_port=os.getenv("MANAGEMENT_PORT", "443"),
                origin=os.getenv("ORIGIN"),
                verbose=os.getenv("VERBOSE", "false").lower() in ("true", "1", "yes"),
            )
        except PydanticValidationError as e:
            logger.error(f"Invalid settings in environment variables: {e}")
            raise ConfigurationError(f"Invalid settings in environment variables: {e}")

    @classmethod
    def _load_from_config_file(cls, profile: str) -> Optional[ManagementSettings]:
        """Load settings from config file, merging keyring secrets if the profile uses them."""
        config_file = cls.DEFAULT_CONFIG_FILE

        if not config_file.exists():
            logger.debug(f"Config file not found: {config_file}")
            return None

        cls._verify_file_permissions(config_file)

        try:
            config_data = cls._read_config_file()

            if profile not in config_data:
                logger.debug(f"Profile '{profile}' not found in config file")
                return None

            profile_config = dict(config_data[profile])
            if profile_config.pop("credential_store", None) == cls.KEYRING_STORE:
                profile_config.update(cls._load_secrets_from_keyring(profile))

            return ManagementSettings(**profile_config)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in config file: {e}")
            raise ConfigurationError(f"Invalid JSON in config file: {e}")
        except PydanticValidationError as e:
            logger.error(f"Invalid settings for profile '{profile}': {e}")
            raise ConfigurationError(f"Invalid settings for profile '{profile}': {e}")

    @classmethod
    def _load_secrets_from_keyring(cls, profile: str) -> Dict[str, Any]:
        """Read the secret fields of a profile from the system keyring."""
        stored = keyring.get_password(cls.KEYRING_SERVICE_NAME, profile)
        if not stored:
            raise ConfigurationError(
                f"Profile '{profile}' stores credentials in the keyring but none were found. "
                f"Run 'checkpoint-mcp setup --profile {profile}' again."
            )
        try:
            secrets = json.loads(stored)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Corrupt keyring entry for profile '{profile}': {e}")
        return {key: secrets.get(key) for key in SECRET_FIELDS}

    @classmethod
    def save_profile(
        cls, profile: str, settings: ManagementSettings, use_keyring: bool = False
    ) -> None:
        """
        Save a settings profile to the config file.

        Args:
            profile: Profile name
            settings: Management settings to save
            use_keyring: Store secrets in the system keyring instead of the file
        """
        config_file = cls.DEFAULT_CONFIG_FILE
        config_file.parent.mkdir(parents=True, exist_ok=True)

        if config_file.exists():
            cls._verify_file_permissions(config_file)
            config_data = cls._read_config_file()
        else:
            config_data = {}

        entry = {name: getattr(settings, name) for name in PUBLIC_FIELDS}
        secrets = {name: getattr(settings, name) for name in SECRET_FIELDS}

        if use_keyring:
            keyring.set_password(cls.KEYRING_SERVICE_NAME, profile, json.dumps(secrets))
            entry["credential_store"] = cls.KEYRING_STORE
            logger.debug(f"Stored secrets for profile '{profile}' in keyring")
        else:
            entry.update(secrets)

        config_data[profile] = entry
        cls._write_config_file(config_data)

        logger.info(f"Saved profile '{profile}' to config file")

    @classmethod
    def delete_profile(cls, profile: str) -> None:
        """
        Delete a profile from config file (and its keyring entry, if any).

        Raises:
            ConfigurationError: If profile doesn't exist
        """
        config_file = cls.DEFAULT_CONFIG_FILE

        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")

        cls._verify_file_permissions(config_file)
        config_data = cls._read_config_file()

        if profile not in config_data:
            raise ConfigurationError(f"Profile '{profile}' not found")

        entry = config_data.pop(profile)
        if entry.get("credential_store") == cls.KEYRING_STORE:
            try:
                keyring.delete_password(cls.KEYRING_SERVICE_NAME, profile)
            except PasswordDeleteError:
                logger.warning(f"No keyring entry to delete for profile '{profile}'")

        cls._write_config_file(config_data)

        logger.info(f"Deleted profile '{profile}' from config file")

    @classmethod
    def list_profiles(cls) -> List[str]:
        """List all configured profiles."""
        config_file = cls.DEFAULT_CONFIG_FILE

        if not config_file.exists():
            return []

        cls._verify_file_permissions(config_file)
        return list(cls._read_config_file().keys())

    @classmethod
    def get_profile_info(cls, profile: str) -> Dict[str, Any]:
        """
        Get non-sensitive information about a profile.

        Returns:
            Dictionary with backend kind, target and credential previews (never secrets)

        Raises:
            ConfigurationError: If profile doesn't exist
        """
        config_file = cls.DEFAULT_CONFIG_FILE

        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")

        cls._verify_file_permissions(config_file)
        config_data = cls._read_config_file()

        if profile not in config_data:
            raise ConfigurationError(f"Profile '{profile}' not found")

        return describe_settings(config_data[profile])

    @classmethod
    def _read_config_file(cls) -> Dict[str, Any]:
        with open(cls.DEFAULT_CONFIG_FILE, "r") as f:
            return json.load(f)

    @classmethod
    def _write_config_file(cls, config_data: Dict[str, Any]) -> None:
        with open(cls.DEFAULT_CONFIG_FILE, "w") as f:
            json.dump(config_data, f, indent=2)
        cls._set_secure_permissions(cls.DEFAULT_CONFIG_FILE)

    @classmethod
    def _set_secure_permissions(cls, file_path: Path) -> None:
        """Set secure file permissions (0600 - owner read/write only)."""
        try:
            os.chmod(file_path, cls.REQUIRED_FILE_PERMISSIONS)
            logger.debug(f"Set secure permissions on {file_path}")
        except OSError as e:
            logger.warning(f"Could not set secure permissions on {file_path}: {e}")

    @classmethod
    def _verify_file_permissions(cls, file_path: Path) -> None:
        """Verify file has secure permissions and warn if not."""
        try:
            current_perms = os.stat(file_path).st_mode & 0o777

            if current_perms != cls.REQUIRED_FILE_PERMISSIONS:
                logger.warning(
                    f"Config file {file_path} has insecure permissions {oct(current_perms)}. "
                    f"Recommended: {oct(cls.REQUIRED_FILE_PERMISSIONS)}"
                )
                cls._set_secure_permissions(file_path)
        except OSError as e:
            logger.debug(f"Could not verify file permissions: {e}")


def _preview(secret: Optional[str]) -> Optional[str]:
    if not secret:
        return None
    if len(secret) <= 8:
        return "****"
    return f"{secret[:4]}...{secret[-4:]}"


def describe_settings(values: Dict[str, Any]) -> Dict[str, Any]:
    """Summarise settings (a profile entry or a settings dump) without secrets."""
    if values.get("cloud_url"):
        backend, target = "cloud", values["cloud_url"]
    elif values.get("management_host") and values.get("origin"):
        backend, target = "saas", values["management_host"]
    elif values.get("management_host"):
        port = values.get("management_port") or "443"
        backend, target = "on-prem", f"{values['management_host']}:{port}"
    else:
        backend, target = "unconfigured", None

    if values.get("credential_store") == ConfigLoader.KEYRING_STORE:
        auth = "keyring"
    elif values.get("api_key"):
        auth = "api-key"
    elif values.get("username"):
        auth = "username/password"
    else:
        auth = "none"

    return {
        "backend": backend,
        "target": target,
        "auth": auth,
        "api_key_preview": _preview(values.get("api_key")),
        "username": values.get("username"),
        "verbose": bool(values.get("verbose", False)),
    }
