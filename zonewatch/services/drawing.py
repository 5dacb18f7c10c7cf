"""
Drawing Session

Tracks the polygon an operator is currently placing on the map.

States:
    idle      - nothing is being drawn
    drawing   - map clicks append points
    reviewing - at least three points, waiting for name/severity before commit

The session is ephemeral and never persisted. Cancel returns to idle from
any state; finishing requires MIN_ZONE_POINTS points.
"""

import logging

from zonewatch.exceptions import EditorStateError, ZoneValidationError
from zonewatch.models.zone import GeoPoint, MIN_ZONE_POINTS

logger = logging.getLogger(__name__)

IDLE = 'idle'
DRAWING = 'drawing'
REVIEWING = 'reviewing'

MODE_NONE = 'none'
MODE_POLYGON = 'polygon'

TOO_FEW_POINTS_MESSAGE = f'Please mark at least {MIN_ZONE_POINTS} points to create a polygon'


class DrawingSession:
    """In-progress polygon: ordered points plus the current state"""

    def __init__(self):
        self.state = IDLE
        self._points = []

    @property
    def mode(self):
        return MODE_POLYGON if self.state == DRAWING else MODE_NONE

    @property
    def points(self):
        return list(self._points)

    @property
    def point_count(self):
        return len(self._points)

    @property
    def can_finish(self):
        return self.state == DRAWING and len(self._points) >= MIN_ZONE_POINTS

    def start(self):
        """idle -> drawing. Any stale points are dropped."""
        if self.state == REVIEWING:
            raise EditorStateError('Finish or cancel the current zone before drawing a new one')
        self._points = []
        self.state = DRAWING
        logger.debug('Drawing session started')

    def add_point(self, point):
        """Append one vertex. Duplicates are kept as placed."""
        if self.state != DRAWING:
            raise EditorStateError('Points can only be added while drawing')
        point = GeoPoint.from_value(point)
        self._points.append(point)
        logger.debug('Added point %d: %s', len(self._points), point)
        return point

    def finish(self):
        """drawing -> reviewing, rejected with fewer than three points."""
        if self.state != DRAWING:
            raise EditorStateError('There is no polygon being drawn')
        if len(self._points) < MIN_ZONE_POINTS:
            raise ZoneValidationError(TOO_FEW_POINTS_MESSAGE)
        self.state = REVIEWING
        logger.debug('Drawing finished with %d points', len(self._points))
        return self.points

    def cancel(self):
        """Discard everything and return to idle."""
        if self.state != IDLE:
            logger.debug('Drawing session cancelled in state %s', self.state)
        self.reset()

    def reset(self):
        self._points = []
        self.state = IDLE

    def to_dict(self):
        return {
            'state': self.state,
            'mode': self.mode,
            'points': [p.to_dict() for p in self._points],
            'pointCount': len(self._points),
            'canFinish': self.can_finish,
        }
