"""Configuration for the SMEV transform.

Environment-based configuration with typed getters and defaults. Values are
read once into an immutable :class:`TransformSettings` that callers pass to
the transform.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

DEFAULT_READ_CHUNK_SIZE = 64 * 1024  # Bytes fed to the parser per read
DEFAULT_HUGE_TREE = False  # Keep libxml2 document size limits
DEFAULT_LOG_LEVEL = "WARNING"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


# =============================================================================
# Configuration Getters
# =============================================================================


def get_int(env: Mapping[str, str], key: str, default: int) -> int:
    """Get a positive integer from the environment.

    Args:
        env: Environment mapping
        key: The environment variable name
        default: Default value if not set or malformed

    Returns:
        The configured value, or ``default``
    """
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %d", key, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring %s=%r: must be positive, using %d", key, raw, default)
        return default
    return value


def get_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    logger.warning("Ignoring %s=%r: not a boolean, using %s", key, raw, default)
    return default


def get_log_level(env: Mapping[str, str], key: str = "SMEV_LOG_LEVEL", default: str = DEFAULT_LOG_LEVEL) -> str:
    raw = (env.get(key) or "").strip().upper()
    if not raw:
        return default
    if raw not in logging.getLevelNamesMapping():
        logger.warning("Ignoring %s=%r: unknown log level, using %s", key, raw, default)
        return default
    return raw


@dataclass(frozen=True)
class TransformSettings:
    read_chunk_size: int = DEFAULT_READ_CHUNK_SIZE
    huge_tree: bool = DEFAULT_HUGE_TREE
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "TransformSettings":
        """Build settings from ``env``, or from ``os.environ`` after loading ``.env``."""
        if env is None:
            load_dotenv()
            env = os.environ
        return cls(
            read_chunk_size=get_int(env, "SMEV_READ_CHUNK_SIZE", DEFAULT_READ_CHUNK_SIZE),
            huge_tree=get_bool(env, "SMEV_HUGE_TREE", DEFAULT_HUGE_TREE),
            log_level=get_log_level(env),
        )
