"""
GeoJSON Export Service

Builds the downloadable FeatureCollection of active high-risk zones.
"""

from zonewatch.services.geometry import polygon_ring


EXPORT_FILENAME = 'high-risk-zones.json'


def zone_feature(zone):
    """GeoJSON Polygon feature for a single zone"""
    return {
        'type': 'Feature',
        'geometry': {
            'type': 'Polygon',
            'coordinates': [polygon_ring(zone.coordinates)],
        },
        'properties': {
            'id': zone.id,
            'name': zone.name,
            'description': zone.description,
            'severity': zone.severity,
            'createdAt': zone.created_at,
            'createdBy': zone.created_by,
        },
    }


def zones_to_feature_collection(zones):
    """FeatureCollection of the active zones; inactive zones are skipped."""
    return {
        'type': 'FeatureCollection',
        'features': [zone_feature(z) for z in zones if z.is_active],
    }
