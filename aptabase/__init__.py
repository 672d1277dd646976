"""
Aptabase Event Tracking

A best-effort client that sends analytics events to Aptabase collection
endpoints. Tracking never raises; failures are logged as warnings.
"""

from .event_tracker import EventTracker, default_tracker, init, track_event
from .models import EventEnvelope, SystemProps, TrackerOptions, TrackResult, TrackStatus
from .regions import Endpoint, Region
from .version import __version__

__all__ = [
    'EventTracker',
    'default_tracker',
    'init',
    'track_event',
    'EventEnvelope',
    'SystemProps',
    'TrackerOptions',
    'TrackResult',
    'TrackStatus',
    'Endpoint',
    'Region',
    '__version__',
]
