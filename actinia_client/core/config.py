# -*- coding: utf-8 -*-
"""
Configuration Module - Connection settings for the actinia client.

Provides a ClientConfig dataclass with the instance URL, credentials,
HTTP timeout and CLI polling interval. Values are resolved with this
priority (highest last):

1. Built-in defaults
2. JSON config file (``ACTINIA_CLIENT_CONFIG`` environment variable,
   else ``~/.actinia/client_config.json``)
3. ``ACTINIA_URL``, ``ACTINIA_USER``, ``ACTINIA_PASSWORD`` and
   ``ACTINIA_TIMEOUT`` environment variables

Author
------
geoint.org

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import json
import logging
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

_CONFIG_ENV_VAR = "ACTINIA_CLIENT_CONFIG"
_CONFIG_DIR = Path.home() / ".actinia"
_CONFIG_FILE = _CONFIG_DIR / "client_config.json"

DEFAULT_URL = "https://actinia.mundialis.de/"


@dataclass
class ClientConfig:
    """Connection configuration with defaults.

    Attributes
    ----------
    url : str
        Base URL of the actinia instance.
    username : str
        User for HTTP basic authentication.
    password : str
        Password for HTTP basic authentication. Never written by save().
    timeout : float
        HTTP timeout in seconds.
    poll_interval : float
        Seconds between status polls when the CLI waits for a job.
    user_agent : str
        User-Agent header sent with every request.
    """

    url: str = DEFAULT_URL
    username: str = ""
    password: str = ""
    timeout: float = 30.0
    poll_interval: float = 5.0
    user_agent: str = "actinia-client"

    def save(self, path: Optional[Path] = None) -> None:
        """Save config to JSON file, leaving out the password."""
        path = path or resolve_config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        data = asdict(self)
        data.pop('password', None)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)


def resolve_config_path() -> Path:
    """Resolve the config file path.

    Returns
    -------
    Path
        ``ACTINIA_CLIENT_CONFIG`` if set, else
        ``~/.actinia/client_config.json``.
    """
    env_path = os.environ.get(_CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return _CONFIG_FILE


def _apply_env(config: ClientConfig) -> None:
    url = os.environ.get("ACTINIA_URL")
    if url:
        config.url = url
    user = os.environ.get("ACTINIA_USER")
    if user:
        config.username = user
    password = os.environ.get("ACTINIA_PASSWORD")
    if password:
        config.password = password
    timeout = os.environ.get("ACTINIA_TIMEOUT")
    if timeout:
        try:
            config.timeout = float(timeout)
        except ValueError:
            logger.warning("Ignoring invalid ACTINIA_TIMEOUT %r", timeout)


def load_config(path: Optional[Path] = None) -> ClientConfig:
    """Load configuration from file and environment.

    Parameters
    ----------
    path : Optional[Path]
        Config file path. Defaults to ``resolve_config_path()``.

    Returns
    -------
    ClientConfig
        Loaded or default configuration with environment overrides.
    """
    path = path or resolve_config_path()
    config = ClientConfig()
    if path.exists():
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            config = ClientConfig(**{
                k: v for k, v in data.items()
                if k in ClientConfig.__dataclass_fields__
            })
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Failed to load config from %s: %s", path, e)
            config = ClientConfig()

    _apply_env(config)
    return config
