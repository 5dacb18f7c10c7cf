"""
Map Surface

The capabilities the zone editor needs from a map renderer: point markers,
line/fill overlays, a click handler and the cursor style. InMemoryMapSurface
records them so a browser client can draw the same layers from JSON.
"""

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class MapSurface(ABC):
    """Rendering capabilities used by the zone editor controller"""

    @abstractmethod
    def add_marker(self, marker_id, point, label=None, color=None):
        """Place a point marker (optionally labelled)."""

    @abstractmethod
    def remove_marker(self, marker_id):
        """Remove a marker; unknown ids are ignored."""

    @abstractmethod
    def add_overlay(self, overlay_id, kind, geometry, paint=None, properties=None):
        """Add a 'line' or 'fill' overlay with a GeoJSON geometry."""

    @abstractmethod
    def remove_overlay(self, overlay_id):
        """Remove an overlay; unknown ids are ignored."""

    @abstractmethod
    def has_overlay(self, overlay_id):
        """True if the overlay is currently shown."""

    @abstractmethod
    def on_click(self, handler):
        """Register handler(lat, lng) for map clicks."""

    @abstractmethod
    def off_click(self, handler):
        """Unregister a click handler."""

    @abstractmethod
    def set_cursor(self, style):
        """Set the cursor style ('crosshair', 'default', ...)."""

    def close(self):
        """Release the renderer. Called once the controller detaches."""


class InMemoryMapSurface(MapSurface):
    """Map surface that keeps its layers in dictionaries"""

    def __init__(self):
        self.markers = {}
        self.overlays = {}
        self.cursor = 'default'
        self.closed = False
        self._click_handlers = []

    def add_marker(self, marker_id, point, label=None, color=None):
        self.markers[marker_id] = {
            'id': marker_id,
            'lat': point.lat,
            'lng': point.lng,
            'label': label,
            'color': color,
        }

    def remove_marker(self, marker_id):
        self.markers.pop(marker_id, None)

    def add_overlay(self, overlay_id, kind, geometry, paint=None, properties=None):
        if kind not in ('line', 'fill'):
            raise ValueError(f'Unsupported overlay kind: {kind}')
        self.overlays[overlay_id] = {
            'id': overlay_id,
            'kind': kind,
            'geometry': geometry,
            'paint': dict(paint or {}),
            'properties': dict(properties or {}),
        }

    def remove_overlay(self, overlay_id):
        self.overlays.pop(overlay_id, None)

    def has_overlay(self, overlay_id):
        return overlay_id in self.overlays

    def on_click(self, handler):
        if handler not in self._click_handlers:
            self._click_handlers.append(handler)

    def off_click(self, handler):
        if handler in self._click_handlers:
            self._click_handlers.remove(handler)

    @property
    def click_handler_count(self):
        return len(self._click_handlers)

    def click(self, lat, lng):
        """Dispatch a map click to every registered handler."""
        if self.closed:
            raise RuntimeError('Map surface is closed')
        handled = False
        for handler in list(self._click_handlers):
            handled = bool(handler(lat, lng)) or handled
        return handled

    def set_cursor(self, style):
        self.cursor = style

    def close(self):
        self.markers.clear()
        self.overlays.clear()
        self._click_handlers = []
        self.closed = True
        logger.debug('In-memory map surface closed')

    def to_dict(self):
        return {
            'cursor': self.cursor,
            'markers': list(self.markers.values()),
            'overlays': list(self.overlays.values()),
        }
