"""Search panel: controller, host contract and events."""

from searchbar.panel.controller import SearchController
from searchbar.panel.editor import BufferEditor
from searchbar.panel.events import EventHub, KeyIntent, MatchReport
from searchbar.panel.host import HostEditor

__all__ = ["BufferEditor", "EventHub", "HostEditor", "KeyIntent", "MatchReport", "SearchController"]
