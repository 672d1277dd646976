"""
Factory for creating a configured event tracker.
"""
from typing import Any, Optional

from .config_manager import ConfigManager, config_manager
from .event_tracker import EventTracker
from .models import TrackerOptions


def create_event_tracker(
    manager: Optional[ConfigManager] = None,
    app_key: Optional[str] = None,
    host: Optional[str] = None,
    app_version: Optional[str] = None,
    **tracker_kwargs: Any,
) -> EventTracker:
    """Create an event tracker from the configured app key and options.

    Args:
        manager: Configuration source (defaults to the global config manager)
        app_key: Overrides the configured app key
        host: Overrides the configured self-hosted host
        app_version: Overrides the configured app version
        **tracker_kwargs: Passed through to EventTracker

    Returns:
        The tracker, configured when an app key is set and disabled otherwise
    """
    tracker_config = (manager or config_manager).get_tracker_config()
    tracker = EventTracker(**tracker_kwargs)

    app_key = app_key or tracker_config.app_key
    if app_key:
        tracker.configure(
            app_key,
            TrackerOptions(
                host=host or tracker_config.host,
                app_version=app_version or tracker_config.app_version,
            ),
        )

    return tracker
