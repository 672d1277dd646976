"""
Event Tracker

Main class for sending analytics events to an Aptabase collection endpoint.
Tracking is best-effort: every failure is logged as a warning and swallowed,
so callers never have to guard their own control flow against it.
"""

import logging
import socket
from typing import Any, Mapping, Optional, Union

import httpx

from .environment import HostnameResolver, collect_system_props
from .models import (
    ClientConfig,
    EventEnvelope,
    PropValue,
    TrackerOptions,
    TrackResult,
    TrackStatus,
)
from .regions import resolve_endpoint

logger = logging.getLogger(__name__)

OptionsArg = Union[TrackerOptions, Mapping[str, Any], None]


class EventTracker:
    """Client for one Aptabase app key."""

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        environ: Optional[Mapping[str, str]] = None,
        hostname_resolver: Optional[HostnameResolver] = socket.gethostname,
    ):
        """Initialize a disabled tracker.

        Args:
            http_client: Caller-owned client to send with. When omitted a
                short-lived client is opened for every event.
            transport: Transport for tracker-owned clients (ignored when
                ``http_client`` is given)
            environ: Environment mapping used for locale, debug mode and SDK
                version detection (defaults to ``os.environ``)
            hostname_resolver: Callable reporting the host name, or None
        """
        self._http_client = http_client
        self._transport = transport
        self._environ = environ
        self._hostname_resolver = hostname_resolver
        self._config: Optional[ClientConfig] = None

    @property
    def config(self) -> Optional[ClientConfig]:
        """Current configuration, None while disabled."""
        return self._config

    @property
    def is_enabled(self) -> bool:
        return self._config is not None

    def configure(self, app_key: str, options: OptionsArg = None) -> None:
        """Validate the app key and point the tracker at its endpoint.

        Replaces any previous configuration. On an invalid key, or a
        self-hosted key without a host, a warning is logged and the tracker
        is left disabled.

        Args:
            app_key: Key of the form ``<prefix>-<region>-<suffix>``
            options: TrackerOptions (or a mapping) with ``host`` and ``app_version``
        """
        if options is None:
            options = TrackerOptions()
        elif not isinstance(options, TrackerOptions):
            options = TrackerOptions.from_dict(options)

        resolution = resolve_endpoint(app_key, options.host)
        if not resolution.ok:
            self._config = None
            logger.warning(resolution.message)
            return

        self._config = ClientConfig(app_key=app_key, endpoint=resolution.endpoint, options=options)
        logger.debug(f"Aptabase tracking enabled for {resolution.endpoint.event_url}")

    async def track_event(self, event_name: str, props: Optional[Mapping[str, PropValue]] = None) -> None:
        """Send one event. Never raises; failures are only logged.

        Args:
            event_name: Name of the event
            props: Optional mapping of string keys to str/int/float/bool values
        """
        await self.deliver(event_name, props)

    async def deliver(self, event_name: str, props: Optional[Mapping[str, PropValue]] = None) -> TrackResult:
        """Send one event and report what happened. Never raises."""
        config = self._config
        if config is None:
            return TrackResult(TrackStatus.CONFIGURATION_ERROR, event_name, message="tracking disabled")

        if self._http_client is not None and self._http_client.is_closed:
            message = (
                'Aptabase: this call to "track_event" requires an open HTTP client. '
                "Did you close it or import from the wrong package?"
            )
            logger.warning(message)
            return TrackResult(TrackStatus.ENVIRONMENT_ERROR, event_name, message=message)

        try:
            envelope = EventEnvelope.create(
                event_name,
                collect_system_props(config.app_version, self._environ, self._hostname_resolver),
                props,
            )
            if self._http_client is not None:
                response = await self._post(self._http_client, config, envelope)
            else:
                async with httpx.AsyncClient(transport=self._transport) as client:
                    response = await self._post(client, config, envelope)
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning(f'Failed to send event "{event_name}": {exc}')
            return TrackResult(TrackStatus.DELIVERY_ERROR, event_name, message=str(exc))

        if response.status_code >= 300:
            logger.warning(f'Failed to send event "{event_name}": {response.status_code} {response.text}')
            return TrackResult(
                TrackStatus.DELIVERY_ERROR,
                event_name,
                status_code=response.status_code,
                message=response.text,
            )

        return TrackResult(TrackStatus.SENT, event_name, status_code=response.status_code)

    @staticmethod
    async def _post(client: httpx.AsyncClient, config: ClientConfig, envelope: EventEnvelope) -> httpx.Response:
        """POST the envelope without any client cookies, auth or redirects.

        Cookies set by the collector are removed from the client's jar again.
        """
        request = httpx.Request(
            "POST",
            config.event_url,
            headers={
                "Content-Type": "application/json",
                "App-Key": config.app_key,
            },
            content=envelope.to_json(),
        )
        response = await client.send(request, auth=None, follow_redirects=False)

        for cookie in response.cookies.jar:
            try:
                client.cookies.jar.clear(cookie.domain, cookie.path, cookie.name)
            except KeyError:
                pass
        return response


# Process-wide tracker for callers that do not manage their own instance
default_tracker = EventTracker()


def init(app_key: str, options: OptionsArg = None) -> None:
    """Configure the process-wide tracker."""
    default_tracker.configure(app_key, options)


async def track_event(event_name: str, props: Optional[Mapping[str, PropValue]] = None) -> None:
    """Send an event through the process-wide tracker."""
    await default_tracker.track_event(event_name, props)
