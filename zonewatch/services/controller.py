"""
Zone Editor Controller

Connects the drawing session, the zone store and a map surface.

The controller owns the map surface it is attached to: `attach` registers
the click handler, loads and renders the zones and starts polling;
`detach` undoes all of it. `mount` wraps both in a context manager.

Persistence calls are guarded by a non-blocking lock so a second
create/delete issued while one is in flight is refused, not queued.
"""

import logging
import threading
from contextlib import contextmanager

from zonewatch.exceptions import EditorStateError, ZoneError, ZoneValidationError
from zonewatch.models.zone import SEVERITIES
from zonewatch.services.drawing import DrawingSession, MODE_POLYGON, REVIEWING
from zonewatch.services.geojson import EXPORT_FILENAME, zones_to_feature_collection
from zonewatch.services.geometry import (
    polygon_center, polygon_ring, to_lnglat,
    get_severity_color, get_severity_border_color,
    get_severity_badge_variant, get_log_action_color,
)
from zonewatch.services.refresh import RefreshPoller

logger = logging.getLogger(__name__)

DRAWING_COLOR = '#3b82f6'
PREVIEW_LINE = 'drawing-preview-line'
PREVIEW_FILL = 'drawing-preview-fill'
BUSY_MESSAGE = 'Another zone operation is in progress'


def zone_layer_id(zone_id):
    return f'high-risk-zone-{zone_id}'


class ZoneEditorController:
    """Orchestrates drawing mode transitions, persistence and map overlays."""

    export_filename = EXPORT_FILENAME

    def __init__(self, store, refresh_interval=0):
        self.store = store
        self.drawing = DrawingSession()
        self.surface = None
        self.selected_zone_id = None
        self._lock = threading.RLock()
        self._busy = threading.Lock()
        self._drawing_markers = []
        self._zone_layers = []
        self._poller = RefreshPoller(refresh_interval, self.refresh)

    # ------------------------------------------------------------------
    # Map session lifetime
    # ------------------------------------------------------------------

    @property
    def attached(self):
        return self.surface is not None

    @property
    def busy(self):
        return self._busy.locked()

    def attach(self, surface):
        """Take ownership of a map surface, load zones and render them.

        Returns the load result; a failed load still leaves the surface
        attached so the operator can retry.
        """
        if self.surface is not None:
            self.detach()
        with self._lock:
            self.surface = surface
            surface.on_click(self.handle_click)
            surface.set_cursor('default')
            logger.info('Map surface attached')

        loaded = self._load_and_render()
        self._poller.start()
        return loaded

    def detach(self):
        """Release the surface: handlers, overlays, markers and polling."""
        self._poller.stop()
        with self._lock:
            surface = self.surface
            if surface is None:
                return
            surface.off_click(self.handle_click)
            self._clear_drawing_graphics()
            self._remove_zone_layers()
            surface.set_cursor('default')
            surface.close()
            self.drawing.reset()
            self.selected_zone_id = None
            self.surface = None
            logger.info('Map surface detached')

    @contextmanager
    def mount(self, surface):
        self.attach(surface)
        try:
            yield self
        finally:
            self.detach()

    def _require_surface(self):
        if self.surface is None:
            raise EditorStateError('No map session is open')

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def start_drawing(self):
        with self._lock:
            self._require_surface()
            self.drawing.start()
            self._clear_drawing_graphics()
            self.surface.set_cursor('crosshair')
            logger.info('Starting polygon drawing mode')
            return self.drawing.to_dict()

    def handle_click(self, lat, lng):
        """Map click handler. Ignored unless a polygon is being drawn."""
        with self._lock:
            if self.surface is None or self.drawing.mode != MODE_POLYGON:
                logger.debug('Not in polygon drawing mode, ignoring click')
                return False
            point = self.drawing.add_point((lat, lng))
            index = self.drawing.point_count
            marker_id = f'drawing-point-{index}'
            self.surface.add_marker(marker_id, point, label=f'Point {index}', color=DRAWING_COLOR)
            self._drawing_markers.append(marker_id)
            self._update_preview()
            return True

    def click(self, lat, lng):
        """Deliver a click through the attached surface, if any."""
        with self._lock:
            if self.surface is None:
                return False
            return self.surface.click(lat, lng)

    def finish(self):
        """drawing -> reviewing; raises ZoneValidationError under three points."""
        with self._lock:
            self._require_surface()
            points = self.drawing.finish()
            self.surface.set_cursor('default')
            logger.info('Finishing polygon with %d points', len(points))
            return self.drawing.to_dict()

    def cancel(self):
        with self._lock:
            self.drawing.cancel()
            if self.surface is not None:
                self._clear_drawing_graphics()
                self.surface.set_cursor('default')
            return self.drawing.to_dict()

    def _update_preview(self):
        self.surface.remove_overlay(PREVIEW_LINE)
        self.surface.remove_overlay(PREVIEW_FILL)

        points = self.drawing.points
        if len(points) < 2:
            return
        self.surface.add_overlay(
            PREVIEW_LINE, 'line',
            {'type': 'LineString', 'coordinates': to_lnglat(points)},
            paint={'line-color': DRAWING_COLOR, 'line-width': 3, 'line-dasharray': [5, 5]},
        )
        if len(points) >= 3:
            self.surface.add_overlay(
                PREVIEW_FILL, 'fill',
                {'type': 'Polygon', 'coordinates': [polygon_ring(points)]},
                paint={'fill-color': DRAWING_COLOR, 'fill-opacity': 0.2},
            )

    def _clear_drawing_graphics(self):
        for marker_id in self._drawing_markers:
            self.surface.remove_marker(marker_id)
        self._drawing_markers = []
        self.surface.remove_overlay(PREVIEW_LINE)
        self.surface.remove_overlay(PREVIEW_FILL)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    @contextmanager
    def _in_flight(self):
        if not self._busy.acquire(blocking=False):
            raise EditorStateError(BUSY_MESSAGE)
        try:
            yield
        finally:
            self._busy.release()

    def commit(self, name, description, severity):
        """Create a zone from the reviewed polygon.

        On failure the session stays in review with its points so the
        operator can retry without redrawing.
        """
        with self._in_flight():
            with self._lock:
                self._require_surface()
                if self.drawing.state != REVIEWING:
                    raise EditorStateError('Finish the polygon before saving the zone')
                if not (name or '').strip():
                    raise ZoneValidationError('Zone name is required')
                if severity not in SEVERITIES:
                    raise ZoneValidationError(f'Unknown severity: {severity}')
                points = self.drawing.points

            if not self.store.create(name, description, points, severity):
                return self._store_failure()

            zone = self.store.active_zones[-1]
            with self._lock:
                self.drawing.reset()
                if self.surface is not None:
                    self._clear_drawing_graphics()
                    self.surface.set_cursor('default')
                    self.render_zones()
            logger.info('Zone %s created', zone.id)
            return {'success': True, 'message': f'Zone "{zone.name}" created', 'zone': zone.to_dict()}

    def deactivate(self, zone_id):
        with self._in_flight():
            if not self.store.deactivate(zone_id):
                return self._store_failure()
            with self._lock:
                if self.selected_zone_id == zone_id:
                    self.selected_zone_id = None
                if self.surface is not None:
                    self.render_zones()
            return {'success': True, 'message': 'High-risk zone deactivated'}

    def update_zone(self, zone_id, name=None, description=None, severity=None):
        if name is not None and not name.strip():
            raise ZoneValidationError('Zone name is required')
        if severity is not None and severity not in SEVERITIES:
            raise ZoneValidationError(f'Unknown severity: {severity}')
        with self._in_flight():
            if not self.store.update(zone_id, name=name, description=description, severity=severity):
                return self._store_failure()
            with self._lock:
                if self.surface is not None:
                    self.render_zones()
            return {'success': True, 'message': 'Zone updated',
                    'zone': self.store.get_zone(zone_id).to_dict()}

    def _store_failure(self):
        if self.store.rejected:
            raise ZoneValidationError(self.store.error)
        return {'success': False, 'message': self.store.error}

    def reload(self):
        """Operator-triggered retry of the initial load."""
        with self._in_flight():
            return self._load_and_render()

    def refresh(self):
        """Polling tick; skipped while another operation is in flight."""
        if not self._busy.acquire(blocking=False):
            logger.debug('Skipping refresh, operation in progress')
            return False
        try:
            return self._load_and_render()
        finally:
            self._busy.release()

    def _load_and_render(self):
        loaded = self.store.load()
        with self._lock:
            if self.selected_zone_id and not self._selectable(self.selected_zone_id):
                self.selected_zone_id = None
            if self.surface is not None:
                self.render_zones()
        return loaded

    # ------------------------------------------------------------------
    # Zone overlays and selection
    # ------------------------------------------------------------------

    def render_zones(self):
        """Remove every zone overlay, then add one per active zone."""
        with self._lock:
            self._require_surface()
            self._remove_zone_layers()
            for zone in self.store.active_zones:
                self._add_zone_layers(zone)
            logger.debug('Rendered %d active zones', len(self._zone_layers))

    def _add_zone_layers(self, zone):
        layer_id = zone_layer_id(zone.id)
        geometry = {'type': 'Polygon', 'coordinates': [polygon_ring(zone.coordinates)]}
        properties = {'id': zone.id, 'name': zone.name, 'severity': zone.severity}
        border_color = get_severity_border_color(zone.severity)

        self.surface.add_overlay(
            layer_id, 'fill', geometry,
            paint={'fill-color': get_severity_color(zone.severity), 'fill-opacity': 0.4},
            properties=properties,
        )
        self.surface.add_overlay(
            f'{layer_id}-border', 'line', geometry,
            paint={'line-color': border_color, 'line-width': 3, 'line-dasharray': [2, 2]},
            properties=properties,
        )
        self.surface.add_marker(f'{layer_id}-label', polygon_center(zone.coordinates),
                                label=zone.name, color=border_color)
        self._zone_layers.append(zone.id)

    def _remove_zone_layers(self):
        for zone_id in self._zone_layers:
            layer_id = zone_layer_id(zone_id)
            self.surface.remove_overlay(layer_id)
            self.surface.remove_overlay(f'{layer_id}-border')
            self.surface.remove_marker(f'{layer_id}-label')
        self._zone_layers = []

    def _selectable(self, zone_id):
        zone = self.store.get_zone(zone_id)
        return zone is not None and zone.is_active

    def select_zone(self, zone_id):
        with self._lock:
            if not self._selectable(zone_id):
                raise ZoneError('Zone not found', status_code=404)
            self.selected_zone_id = zone_id
            return self.store.get_zone(zone_id)

    def clear_selection(self):
        with self._lock:
            self.selected_zone_id = None

    @property
    def selected_zone(self):
        if self.selected_zone_id is None:
            return None
        return self.store.get_zone(self.selected_zone_id)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def export_geojson(self):
        """FeatureCollection of the active zones"""
        with self._lock:
            return zones_to_feature_collection(self.store.zones)

    def state(self):
        with self._lock:
            selected = self.selected_zone
            surface = self.surface.to_dict() if hasattr(self.surface, 'to_dict') else None
            return {
                'attached': self.attached,
                'busy': self.busy,
                'loading': self.store.loading,
                'error': self.store.error,
                'drawing': self.drawing.to_dict(),
                'zones': [_zone_view(z) for z in self.store.active_zones],
                'recentLogs': [_log_view(entry) for entry in self.store.recent_logs()],
                'stats': self.store.stats(),
                'selectedZone': selected.to_dict() if selected else None,
                'map': surface,
            }


def _zone_view(zone):
    view = zone.to_dict()
    view.update({
        'fillColor': get_severity_color(zone.severity),
        'borderColor': get_severity_border_color(zone.severity),
        'badge': get_severity_badge_variant(zone.severity),
    })
    return view


def _log_view(entry):
    view = entry.to_dict()
    view['color'] = get_log_action_color(entry.action)
    return view
