"""
Zone Store API Routes
"""

import logging

from flask import jsonify, request
from zonewatch.api import api_bp
from zonewatch.extensions import zone_file_store
from zonewatch.models.zone import MIN_ZONE_POINTS

logger = logging.getLogger(__name__)


def _has_polygon(zone):
    coordinates = zone.get('coordinates') if isinstance(zone, dict) else None
    return isinstance(coordinates, list) and len(coordinates) >= MIN_ZONE_POINTS


@api_bp.route('/zones', methods=['GET'])
def get_zones():
    """Return the stored snapshot (empty if nothing was saved yet)."""
    try:
        return jsonify(zone_file_store.read())
    except (OSError, ValueError) as e:
        logger.error('Error reading zones file: %s', e)
        return jsonify({'error': 'Failed to load zones data'}), 500


@api_bp.route('/zones', methods=['POST'])
def save_zones():
    """Replace the stored snapshot with the request body."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not isinstance(data.get('zones'), list):
        return jsonify({'error': 'Invalid zones data structure'}), 400
    if not isinstance(data.get('logs'), list):
        return jsonify({'error': 'Invalid logs data structure'}), 400
    for zone in data['zones']:
        if not _has_polygon(zone):
            return jsonify({'error': f'Zones need at least {MIN_ZONE_POINTS} coordinates'}), 400

    snapshot = {'zones': data['zones'], 'logs': data['logs']}
    try:
        zone_file_store.write(snapshot)
    except (OSError, TypeError, ValueError) as e:
        logger.error('Error saving zones file: %s', e)
        return jsonify({'error': 'Failed to save zones data'}), 500

    zones_count = len(snapshot['zones'])
    logs_count = len(snapshot['logs'])
    return jsonify({
        'success': True,
        'message': f'Saved {zones_count} zones and {logs_count} logs',
        'zonesCount': zones_count,
        'logsCount': logs_count,
    })


@api_bp.route('/zones', methods=['DELETE'])
def clear_zones():
    """Reset the stored snapshot to empty collections."""
    try:
        zone_file_store.clear()
    except OSError as e:
        logger.error('Error clearing zones file: %s', e)
        return jsonify({'error': 'Failed to clear zones data'}), 500
    return jsonify({'success': True, 'message': 'All zones data cleared'})
