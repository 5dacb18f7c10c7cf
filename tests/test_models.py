from zonewatch.models import GeoPoint, Zone, ZoneLog, ZoneSnapshot, next_identifier, utc_timestamp


def test_zone_reads_wire_format():
    zone = Zone.from_dict({
        'id': 'HRZ001',
        'name': 'Market',
        'description': 'pickpocket risk',
        'coordinates': [{'lat': 13.07, 'lng': 80.26}],
        'severity': 'high',
        'createdAt': '2025-01-01T00:00:00.000Z',
        'createdBy': 'Police Department',
        'isActive': False,
    })
    assert zone.coordinates == [GeoPoint(13.07, 80.26)]
    assert zone.is_active is False
    assert zone.to_dict()['createdBy'] == 'Police Department'
    assert zone.to_dict()['coordinates'] == [{'lat': 13.07, 'lng': 80.26}]


def test_deactivated_keeps_everything_else():
    zone = Zone('HRZ001', 'Market', '', [(1, 2), (3, 4), (5, 6)], 'low', 't', 'o')
    inactive = zone.deactivated()
    assert inactive.is_active is False
    assert zone.is_active is True
    assert inactive.to_dict() == {**zone.to_dict(), 'isActive': False}


def test_log_uses_zone_name_snapshot():
    entry = ZoneLog.from_dict({'id': 'LOG001', 'action': 'created', 'zoneName': 'Market',
                               'timestamp': 't', 'officer': 'o', 'details': 'd'})
    assert entry.zone_name == 'Market'
    assert entry.to_dict()['zoneName'] == 'Market'


def test_snapshot_tolerates_missing_collections():
    snapshot = ZoneSnapshot.from_dict({})
    assert snapshot.zones == [] and snapshot.logs == []
    assert snapshot.to_dict() == {'zones': [], 'logs': []}


def test_next_identifier_is_sequential_and_padded():
    assert next_identifier('HRZ', []) == 'HRZ001'
    assert next_identifier('HRZ', ['HRZ001', 'HRZ002']) == 'HRZ003'


def test_next_identifier_skips_taken_numbers():
    assert next_identifier('LOG', ['LOG002']) == 'LOG003'
    assert next_identifier('LOG', ['LOG002', 'LOG003']) == 'LOG004'
    assert next_identifier('LOG', ['LOG001', 'LOG003']) == 'LOG004'


def test_utc_timestamp_format():
    stamp = utc_timestamp()
    assert stamp.endswith('Z')
    assert 'T' in stamp
