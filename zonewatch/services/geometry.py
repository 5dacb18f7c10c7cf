"""
Polygon Geometry Services

Label placement, ring closure and severity color helpers.
"""

from zonewatch.models.zone import GeoPoint


SEVERITY_COLORS = {
    'low': ('#eab308', '#ca8a04'),
    'medium': ('#f97316', '#ea580c'),
    'high': ('#ef4444', '#dc2626'),
    'critical': ('#dc2626', '#b91c1c'),
}
DEFAULT_SEVERITY_COLORS = ('#6b7280', '#4b5563')

SEVERITY_BADGES = {
    'low': 'secondary',
    'medium': 'secondary',
    'high': 'destructive',
    'critical': 'destructive',
}


def polygon_center(points):
    """Arithmetic mean of the vertices.

    This is not the area-weighted centroid. It only positions the zone
    label, and zones are small enough for the difference not to matter.
    """
    points = [GeoPoint.from_value(p) for p in points]
    if not points:
        raise ValueError('Cannot compute the center of an empty polygon')
    lat = sum(p.lat for p in points) / len(points)
    lng = sum(p.lng for p in points) / len(points)
    return GeoPoint(lat=lat, lng=lng)


def to_lnglat(points):
    """Convert points to GeoJSON [lng, lat] positions."""
    return [[p.lng, p.lat] for p in (GeoPoint.from_value(v) for v in points)]


def close_ring(positions):
    """Return a new position list with the first position repeated at the end."""
    positions = list(positions)
    if not positions:
        return positions
    return positions + [list(positions[0])]


def polygon_ring(points):
    """Closed [lng, lat] linear ring for a stored (open) vertex list."""
    return close_ring(to_lnglat(points))


def get_severity_color(severity):
    """Fill color for a severity level"""
    return SEVERITY_COLORS.get(severity, DEFAULT_SEVERITY_COLORS)[0]


def get_severity_border_color(severity):
    """Border (darker) color for a severity level"""
    return SEVERITY_COLORS.get(severity, DEFAULT_SEVERITY_COLORS)[1]


def get_severity_badge_variant(severity):
    return SEVERITY_BADGES.get(severity, 'outline')


def get_log_action_color(action):
    if action == 'created':
        return 'green'
    if action == 'deleted':
        return 'red'
    return 'blue'
