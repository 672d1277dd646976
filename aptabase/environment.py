"""
Environment Detection

Helpers that derive the system properties of an event from the running
process: preferred locale, whether this is a development environment, and
the SDK version string. Nothing here is cached; callers recompute per event.
"""

import logging
import os
import socket
from typing import Callable, Mapping, Optional

from .models import SystemProps
from .version import __version__

logger = logging.getLogger(__name__)

DEVELOPMENT_MODE = "development"
EXECUTION_MODE_VAR = "APTABASE_ENV"
SDK_VERSION_VAR = "APTABASE_SDK_VERSION"

# Checked in order when LANGUAGE gives no preference list
PRIMARY_LOCALE_VARS = ("LC_ALL", "LC_MESSAGES", "LANG")

HostnameResolver = Callable[[], str]


def _normalize_locale(value: str) -> Optional[str]:
    """Turn a POSIX locale name into a language tag (``en_US.UTF-8`` -> ``en-US``)."""
    tag = value.split(".", 1)[0].split("@", 1)[0].strip()
    if not tag or tag in ("C", "POSIX"):
        return None
    return tag.replace("_", "-")


def get_locale(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Get the preferred locale of the process.

    The first entry of ``LANGUAGE`` wins; otherwise the first of ``LC_ALL``,
    ``LC_MESSAGES`` and ``LANG`` that is set.

    Args:
        environ: Environment mapping (defaults to ``os.environ``)

    Returns:
        Locale tag such as ``en-US``, or None if the environment reports none
    """
    env = os.environ if environ is None else environ

    preferred = [entry for entry in env.get("LANGUAGE", "").split(":") if entry.strip()]
    if preferred:
        locale = _normalize_locale(preferred[0])
        if locale:
            return locale

    for name in PRIMARY_LOCALE_VARS:
        value = env.get(name)
        if value:
            return _normalize_locale(value)

    return None


def get_is_debug(
    environ: Optional[Mapping[str, str]] = None,
    hostname_resolver: Optional[HostnameResolver] = socket.gethostname,
) -> bool:
    """Check whether events come from a development environment.

    Args:
        environ: Environment mapping (defaults to ``os.environ``)
        hostname_resolver: Callable returning the host name, or None when
            host names cannot be reported

    Returns:
        True in development mode or when running on ``localhost``
    """
    env = os.environ if environ is None else environ
    if env.get(EXECUTION_MODE_VAR) == DEVELOPMENT_MODE:
        return True

    if hostname_resolver is None:
        return False

    try:
        hostname = hostname_resolver()
    except OSError as exc:
        logger.debug(f"Could not resolve hostname: {exc}")
        return False

    return hostname == "localhost"


def get_sdk_version(environ: Optional[Mapping[str, str]] = None) -> str:
    """Get the SDK identifier reported with each event."""
    env = os.environ if environ is None else environ
    return env.get(SDK_VERSION_VAR) or f"aptabase-python@{__version__}"


def collect_system_props(
    app_version: str = "",
    environ: Optional[Mapping[str, str]] = None,
    hostname_resolver: Optional[HostnameResolver] = socket.gethostname,
) -> SystemProps:
    """Collect the system properties for one event."""
    return SystemProps(
        is_debug=get_is_debug(environ, hostname_resolver),
        locale=get_locale(environ),
        app_version=app_version,
        sdk_version=get_sdk_version(environ),
    )
