"""
Logging for the storefront cart.

Every cart module logs under the ``storefront`` namespace:

    from storefront.logging import get_logger
    logger = get_logger(__name__)

The namespace level comes from STOREFRONT_LOG_LEVEL, falling back to
LOG_LEVEL. A stdout handler is attached once on import, unless the host
application has already configured the root logger.
"""

import logging
import os
import sys
from functools import cache

LOGGER_NAMESPACE = "storefront"


def _level_from_env() -> int:
    """Resolve the cart log level; unknown names fall back to INFO."""
    for variable in ("STOREFRONT_LOG_LEVEL", "LOG_LEVEL"):
        level_name = os.environ.get(variable)
        if not level_name:
            continue
        level = logging.getLevelName(level_name.strip().upper())
        return level if isinstance(level, int) else logging.INFO
    return logging.INFO


def _configure_namespace() -> logging.Logger:
    namespace = logging.getLogger(LOGGER_NAMESPACE)
    namespace.setLevel(_level_from_env())

    if namespace.handlers or logging.getLogger().handlers:
        return namespace

    handler = logging.StreamHandler(sys.stdout)
    # Production log collectors add their own timestamps
    if os.environ.get("ENVIRONMENT") == "production":
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    namespace.addHandler(handler)

    # The Upstash client logs every REST call through httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    return namespace


_configure_namespace()


@cache
def get_logger(name: str) -> logging.Logger:
    """Get a logger inside the storefront namespace (names outside it are nested under it)."""
    if name != LOGGER_NAMESPACE and not name.startswith(f"{LOGGER_NAMESPACE}."):
        name = f"{LOGGER_NAMESPACE}.{name}"
    return logging.getLogger(name)


def sanitize_id_for_logging(id_value: str | None, max_length: int = 32) -> str:
    """
    Make a client-supplied item id safe to log.

    Control characters are escaped so an id cannot forge log lines, and long
    ids are truncated. Empty ids log as "N/A".
    """
    if not id_value:
        return "N/A"
    safe_value = (
        str(id_value)
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."
