"""
Zone Editor Routes

Each route maps one operator action onto the editor controller owned by
the application (`app.extensions['zone_editor']`).
"""

import json

from flask import Response, current_app, jsonify, request
from zonewatch.editor import editor_bp
from zonewatch.exceptions import ZoneError, ZoneValidationError
from zonewatch.services.map_surface import InMemoryMapSurface


def get_editor():
    return current_app.extensions['zone_editor']


def _result_response(result):
    """200 on success, 502 when the round trip to the zone store failed."""
    return jsonify(result), (200 if result['success'] else 502)


@editor_bp.errorhandler(ZoneError)
def handle_zone_error(error):
    return jsonify(error.to_dict()), error.status_code


@editor_bp.route('/session', methods=['POST'])
def open_session():
    """Mount a fresh map surface, replacing any previous one."""
    editor = get_editor()
    loaded = editor.attach(InMemoryMapSurface())
    state = editor.state()
    if not loaded:
        state['retry'] = True
        return jsonify(state), 502
    return jsonify(state)


@editor_bp.route('/session', methods=['DELETE'])
def close_session():
    get_editor().detach()
    return jsonify({'success': True, 'message': 'Map session closed'})


@editor_bp.route('/state')
def state():
    return jsonify(get_editor().state())


@editor_bp.route('/reload', methods=['POST'])
def reload_zones():
    """Retry loading zones after a failed load."""
    editor = get_editor()
    loaded = editor.reload()
    state = editor.state()
    if not loaded:
        state['retry'] = True
        return jsonify(state), 502
    return jsonify(state)


@editor_bp.route('/draw', methods=['POST'])
def start_drawing():
    return jsonify(get_editor().start_drawing())


@editor_bp.route('/click', methods=['POST'])
def map_click():
    """Forward a map click to the surface's registered handlers."""
    data = request.get_json(silent=True) or {}
    try:
        lat = float(data['lat'])
        lng = float(data['lng'])
    except (KeyError, TypeError, ValueError):
        raise ZoneValidationError('Both lat and lng are required numbers')

    editor = get_editor()
    accepted = editor.click(lat, lng)
    return jsonify({'accepted': accepted, 'drawing': editor.drawing.to_dict()})


@editor_bp.route('/finish', methods=['POST'])
def finish_polygon():
    return jsonify(get_editor().finish())


@editor_bp.route('/cancel', methods=['POST'])
def cancel_drawing():
    return jsonify(get_editor().cancel())


@editor_bp.route('/zones', methods=['POST'])
def create_zone():
    """Commit the reviewed polygon with the submitted metadata."""
    data = request.get_json(silent=True) or {}
    result = get_editor().commit(
        data.get('name', ''),
        data.get('description', ''),
        data.get('severity', 'medium'),
    )
    return _result_response(result)


def _require_zone(editor, zone_id):
    if editor.store.get_zone(zone_id) is None:
        raise ZoneError('Zone not found', status_code=404)


@editor_bp.route('/zones/<zone_id>', methods=['PATCH'])
def update_zone(zone_id):
    data = request.get_json(silent=True) or {}
    editor = get_editor()
    _require_zone(editor, zone_id)
    result = editor.update_zone(
        zone_id,
        name=data.get('name'),
        description=data.get('description'),
        severity=data.get('severity'),
    )
    return _result_response(result)


@editor_bp.route('/zones/<zone_id>', methods=['DELETE'])
def delete_zone(zone_id):
    """Deactivate a zone (kept for audit, hidden from the map)."""
    editor = get_editor()
    _require_zone(editor, zone_id)
    return _result_response(editor.deactivate(zone_id))


@editor_bp.route('/zones/<zone_id>/select', methods=['POST'])
def select_zone(zone_id):
    zone = get_editor().select_zone(zone_id)
    return jsonify(zone.to_dict())


@editor_bp.route('/selection', methods=['DELETE'])
def clear_selection():
    get_editor().clear_selection()
    return jsonify({'success': True})


@editor_bp.route('/logs')
def recent_logs():
    limit = request.args.get('limit', type=int)
    logs = get_editor().store.recent_logs(limit)
    return jsonify([entry.to_dict() for entry in logs])


@editor_bp.route('/export')
def export_geojson():
    """Download the active zones as a GeoJSON FeatureCollection."""
    editor = get_editor()
    body = json.dumps(editor.export_geojson(), indent=2)
    return Response(
        body,
        mimetype='application/geo+json',
        headers={'Content-Disposition': f'attachment; filename={editor.export_filename}'},
    )
