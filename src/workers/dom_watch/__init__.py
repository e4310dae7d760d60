"""DOM watch: change detection for a single CSS selector on a page."""

from workers.dom_watch.browser import BrowserSession, NavigationError
from workers.dom_watch.models import ScrapeResult, WatchSettings, WatchSpec
from workers.dom_watch.observer import WatchObserver, build_observer
from workers.dom_watch.settings import SettingsService

__all__ = [
    "BrowserSession",
    "NavigationError",
    "ScrapeResult",
    "SettingsService",
    "WatchObserver",
    "WatchSettings",
    "WatchSpec",
    "build_observer",
]
