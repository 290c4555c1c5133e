"""
Registry credentials.

Resolves the containers auth file and reads per-registry credentials from it.
The file uses the `{"auths": {"<host>": {"auth": "<base64 user:pass>"}}}` layout.
"""

import base64
import binascii
import json
import os
from typing import Optional, Tuple

from src.utils.environment import get_env
from src.utils.logging import get_logger

logger = get_logger(__name__)

DOCKER_HUB_AUTH_KEYS = (
    "docker.io",
    "index.docker.io",
    "https://index.docker.io/v1/",
)


def get_auth_file(auth_file: Optional[str] = None) -> Optional[str]:
    """
    Resolve the path of the authentication file.

    An explicit path wins, then REGISTRY_AUTH_FILE, then
    ${XDG_RUNTIME_DIR}/containers/auth.json.

    Args:
        auth_file: Path given on the command line (optional)

    Returns:
        Path of the auth file, or None when nothing is configured
    """
    if auth_file:
        return auth_file
    if env_file := get_env("REGISTRY_AUTH_FILE"):
        return env_file
    if runtime_dir := get_env("XDG_RUNTIME_DIR"):
        return os.path.join(runtime_dir, "containers", "auth.json")
    return None


def _auth_keys(host: str) -> Tuple[str, ...]:
    if host in DOCKER_HUB_AUTH_KEYS:
        return DOCKER_HUB_AUTH_KEYS
    return (host, f"https://{host}")


def load_credentials(auth_file: Optional[str], host: str) -> Optional[Tuple[str, str]]:
    """
    Read the username and password stored for a registry host.

    Args:
        auth_file: Path of the auth file (optional)
        host: Registry host name

    Returns:
        (username, password) tuple, or None when no usable entry exists
    """
    if not auth_file or not os.path.exists(auth_file):
        return None

    try:
        with open(auth_file, "r") as file:
            data = json.load(file)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Ignoring unreadable auth file {auth_file}: {e}")
        return None

    auths = data.get("auths", {}) if isinstance(data, dict) else {}
    if not isinstance(auths, dict):
        logger.warning(f"Ignoring malformed auth file {auth_file}: \"auths\" is not a mapping")
        return None
    for key in _auth_keys(host):
        entry = auths.get(key)
        if not isinstance(entry, dict) or not entry.get("auth"):
            continue
        try:
            decoded = base64.b64decode(entry["auth"]).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            logger.warning(f"Ignoring malformed credentials for {host}: {e}")
            return None
        username, sep, password = decoded.partition(":")
        if not sep:
            logger.warning(f"Ignoring malformed credentials for {host}")
            return None
        return username, password

    return None
