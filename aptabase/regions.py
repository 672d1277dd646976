"""
Regions for the Aptabase Collection Endpoints

Defines the known region codes, the fixed endpoint table, and the parsing of
application keys into a resolved collection endpoint.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

EVENT_PATH = "/api/v0/event"


class Region(Enum):
    """Region codes that may appear in the middle segment of an app key."""

    US = "US"
    EU = "EU"
    DEV = "DEV"
    SELF_HOSTED = "SH"

    @classmethod
    def is_valid(cls, code: str) -> bool:
        """Check if a region code string is known."""
        try:
            cls(code)
            return True
        except ValueError:
            return False

    @property
    def base_url(self) -> Optional[str]:
        """Fixed base URL for this region, None for self-hosted."""
        return _BASE_URLS.get(self)


_BASE_URLS = {
    Region.US: "https://us.aptabase.com",
    Region.EU: "https://eu.aptabase.com",
    Region.DEV: "http://localhost:3000",
}


@dataclass(frozen=True)
class Endpoint:
    """A resolved collection endpoint."""

    region: Region
    base_url: str

    @property
    def event_url(self) -> str:
        """URL that events are POSTed to."""
        return f"{self.base_url}{EVENT_PATH}"


@dataclass
class KeyResolution:
    """Result of resolving an app key to an endpoint."""

    endpoint: Optional[Endpoint] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.endpoint is not None


def parse_region(app_key: str) -> Optional[Region]:
    """Extract the region from an app key.

    Args:
        app_key: Key of the form ``<prefix>-<region>-<suffix>``

    Returns:
        The Region, or None if the key is malformed or the region unknown
    """
    if not isinstance(app_key, str):
        return None

    parts = app_key.split("-")
    if len(parts) != 3 or not Region.is_valid(parts[1]):
        return None

    return Region(parts[1])


def resolve_endpoint(app_key: str, host: Optional[str] = None) -> KeyResolution:
    """Resolve an app key (and optional self-hosted host) to an endpoint.

    Args:
        app_key: Application key
        host: Base URL of a self-hosted server, required for ``SH`` keys

    Returns:
        KeyResolution with either an endpoint or a failure message
    """
    region = parse_region(app_key)
    if region is None:
        return KeyResolution(
            message=f'The Aptabase App Key "{app_key}" is invalid. Tracking will be disabled.',
        )

    if region is Region.SELF_HOSTED:
        if not isinstance(host, str) or not host.strip():
            return KeyResolution(
                message="Host parameter must be defined when using Self-Hosted App Key. "
                        "Tracking will be disabled.",
            )
        return KeyResolution(endpoint=Endpoint(region, host.strip().rstrip("/")))

    return KeyResolution(endpoint=Endpoint(region, region.base_url))
