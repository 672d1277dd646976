"""
Data Models for Event Tracking

Defines the tracker configuration, the event envelope sent over the wire,
and the result of a tracking attempt.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .regions import Endpoint

# Sessions are not derived by this client; every envelope carries this value.
SESSION_ID_PLACEHOLDER = "CHANGE-THIS"

PropValue = Union[str, int, float, bool]


@dataclass(frozen=True)
class TrackerOptions:
    """Optional settings passed alongside the app key."""

    host: Optional[str] = None
    app_version: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TrackerOptions":
        """Create TrackerOptions from a mapping (snake or camel case keys)."""
        return cls(
            host=data.get("host"),
            app_version=data.get("app_version", data.get("appVersion")),
        )


@dataclass(frozen=True)
class ClientConfig:
    """Configuration of an enabled tracker, replaced wholesale on reconfigure."""

    app_key: str
    endpoint: Endpoint
    options: TrackerOptions = TrackerOptions()

    @property
    def event_url(self) -> str:
        return self.endpoint.event_url

    @property
    def app_version(self) -> str:
        return self.options.app_version or ""


class SystemProps(BaseModel):
    """Environment-derived properties attached to every event."""

    model_config = ConfigDict(populate_by_name=True)

    is_debug: bool = Field(alias="isDebug", description="Whether the app runs in a development environment")
    locale: Optional[str] = Field(default=None, description="Preferred locale, if reported")
    app_version: str = Field(default="", alias="appVersion", description="Version of the host application")
    sdk_version: str = Field(alias="sdkVersion", description="Name and version of this SDK")


class EventEnvelope(BaseModel):
    """JSON payload sent for a single tracked event."""

    model_config = ConfigDict(populate_by_name=True)

    timestamp: str = Field(description="ISO-8601 instant of the call (UTC)")
    session_id: str = Field(default=SESSION_ID_PLACEHOLDER, alias="sessionId")
    event_name: str = Field(alias="eventName")
    system_props: SystemProps = Field(alias="systemProps")
    props: Optional[Dict[str, Any]] = Field(default=None, description="Caller-supplied properties")

    @classmethod
    def create(
        cls,
        event_name: str,
        system_props: SystemProps,
        props: Optional[Mapping[str, PropValue]] = None,
        now: Optional[datetime] = None,
    ) -> "EventEnvelope":
        """Build an envelope stamped with the current time."""
        return cls(
            timestamp=format_timestamp(now or datetime.now(timezone.utc)),
            event_name=event_name,
            system_props=system_props,
            props=dict(props) if props is not None else None,
        )

    def to_json(self) -> str:
        """Serialize to the JSON request body."""
        exclude = {"props"} if self.props is None else None
        return self.model_dump_json(by_alias=True, exclude=exclude)


def format_timestamp(dt: datetime) -> str:
    """Format a datetime as UTC ISO-8601 with milliseconds and a ``Z`` suffix."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class TrackStatus(Enum):
    """Outcome of a tracking attempt."""

    SENT = "sent"
    CONFIGURATION_ERROR = "configuration_error"  # tracker disabled
    ENVIRONMENT_ERROR = "environment_error"      # no usable HTTP client
    DELIVERY_ERROR = "delivery_error"            # rejected response or transport failure


@dataclass
class TrackResult:
    """Result of a single tracking attempt."""

    status: TrackStatus
    event_name: str
    status_code: Optional[int] = None
    message: Optional[str] = None

    @property
    def sent(self) -> bool:
        return self.status is TrackStatus.SENT

