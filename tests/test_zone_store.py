from zonewatch.services.zone_store import ZoneStore

from conftest import StubResponse, StubSession


API_URL = 'http://zonewatch.test/api'


def _created(store, remote, market_points):
    assert store.load()
    assert store.create('Market', 'pickpocket risk', market_points, 'high')


def test_load_without_data_file_is_empty_success(store):
    assert store.load() is True
    assert store.zones == [] and store.logs == []
    assert store.error is None


def test_load_404_is_empty_success():
    store = ZoneStore(API_URL, session=StubSession(get=StubResponse(404)))
    assert store.load() is True
    assert store.zones == []
    assert store.error is None


def test_load_server_error_reports_failure():
    store = ZoneStore(API_URL, session=StubSession(get=StubResponse(500, {'error': 'boom'})))
    assert store.load() is False
    assert store.error == 'HTTP error! status: 500'
    assert store.zones == [] and store.logs == []
    assert store.loading is False


def test_load_network_error_reports_failure(connection_error):
    store = ZoneStore(API_URL, session=connection_error)
    assert store.load() is False
    assert 'Connection refused' in store.error


def test_create_scenario(store, remote, market_points):
    _created(store, remote, market_points)

    assert store.active_zone_count == 1
    zone = store.zones[0]
    assert zone.id == 'HRZ001'
    assert zone.is_active is True
    assert zone.created_by == 'Police Department'
    assert len(zone.coordinates) == 3

    assert len(store.logs) == 1
    entry = store.logs[0]
    assert entry.id == 'LOG001'
    assert entry.action == 'created'
    assert entry.zone_name == 'Market'
    assert entry.details == 'New high severity zone created: pickpocket risk'


def test_create_is_persisted_remotely(store, remote, market_points):
    _created(store, remote, market_points)

    fresh = ZoneStore(API_URL, session=remote)
    assert fresh.load()
    assert [z.name for z in fresh.zones] == ['Market']
    assert [entry.action for entry in fresh.logs] == ['created']


def test_newest_log_first(store, remote, market_points):
    _created(store, remote, market_points)
    assert store.create('Beach', 'rip currents', market_points, 'low')

    assert store.active_zone_count == 2
    assert store.zones[1].id == 'HRZ002'
    assert store.logs[0].zone_name == 'Beach'
    assert store.logs[0].id == 'LOG002'
    assert store.recent_logs(1)[0].zone_name == 'Beach'


def test_create_rejects_invalid_input_without_remote_call(market_points):
    session = StubSession(post=StubResponse(200, {'success': True}))
    store = ZoneStore(API_URL, session=session)

    assert store.create('   ', 'desc', market_points, 'high') is False
    assert store.error == 'Zone name is required'
    assert store.create('Market', 'desc', market_points[:2], 'high') is False
    assert 'at least 3 points' in store.error
    assert store.create('Market', 'desc', market_points, 'extreme') is False
    assert store.rejected is True

    assert session.calls == []
    assert store.zones == [] and store.logs == []


def test_failed_save_keeps_previous_state(market_points):
    session = StubSession(get=StubResponse(404), post=StubResponse(500, {'error': 'Failed to save zones data'}))
    store = ZoneStore(API_URL, session=session)
    assert store.load()

    assert store.create('Market', 'desc', market_points, 'high') is False
    assert store.error == 'Failed to save zones data'
    assert store.zones == [] and store.logs == []


def test_failed_save_on_network_error(connection_error, market_points):
    store = ZoneStore(API_URL, session=StubSession(get=StubResponse(404)))
    assert store.load()
    store.session = connection_error
    assert store.create('Market', 'desc', market_points, 'high') is False
    assert store.zones == []


def test_deactivate_keeps_zone_for_audit(store, remote, market_points):
    _created(store, remote, market_points)
    before = store.zones[0]

    assert store.deactivate('HRZ001') is True

    after = store.zones[0]
    assert after.is_active is False
    assert store.active_zone_count == 0
    assert store.total_zones == 1
    assert (after.id, after.name, after.severity, after.coordinates) == \
        (before.id, before.name, before.severity, before.coordinates)
    assert store.logs[0].action == 'deleted'
    assert store.logs[0].zone_name == 'Market'
    assert store.logs[0].details == 'High-risk zone deactivated'


def test_deactivate_unknown_zone_changes_nothing(store, remote, market_points):
    _created(store, remote, market_points)
    zones, logs = store.zones, store.logs
    calls = len(remote.calls)

    assert store.deactivate('HRZ999') is False
    assert store.error == 'Zone not found'
    assert store.zones == zones and store.logs == logs
    assert len(remote.calls) == calls


def test_deactivate_twice_is_refused(store, remote, market_points):
    _created(store, remote, market_points)
    assert store.deactivate('HRZ001')
    assert store.deactivate('HRZ001') is False
    assert store.total_logs == 2


def test_update_logs_modified(store, remote, market_points):
    _created(store, remote, market_points)

    assert store.update('HRZ001', name='Main Market', severity='critical') is True

    zone = store.get_zone('HRZ001')
    assert zone.name == 'Main Market'
    assert zone.severity == 'critical'
    assert len(zone.coordinates) == 3
    assert store.logs[0].action == 'modified'
    assert store.logs[0].zone_name == 'Main Market'
    assert store.logs[0].details == 'Zone updated: name, severity'
    # older entries keep the old name
    assert store.logs[1].zone_name == 'Market'


def test_update_without_changes_is_refused(store, remote, market_points):
    _created(store, remote, market_points)
    assert store.update('HRZ001', name='Market') is False
    assert store.error == 'No changes to save'
    assert store.update('HRZ001', name=' ') is False


def test_ids_follow_collection_size_after_deactivation(store, remote, market_points):
    _created(store, remote, market_points)
    assert store.deactivate('HRZ001')
    assert store.create('Beach', '', market_points, 'medium')
    assert store.zones[-1].id == 'HRZ002'
    assert store.logs[0].id == 'LOG003'


def test_stats_and_clear_error(store, remote, market_points):
    _created(store, remote, market_points)
    store.deactivate('HRZ404')
    assert store.error
    store.clear_error()
    assert store.error is None
    assert store.stats() == {'totalZones': 1, 'activeZoneCount': 1, 'totalLogs': 1}


def test_writes_refused_before_first_load(market_points):
    session = StubSession(post=StubResponse(200, {'success': True}))
    store = ZoneStore(API_URL, session=session)

    assert store.create('Market', 'desc', market_points, 'high') is False
    assert store.error == 'Zones are not loaded; retry loading first'
    assert store.rejected is False
    assert session.calls == []


def test_failed_load_blocks_writes_until_reloaded(store, remote, connection_error, market_points):
    _created(store, remote, market_points)
    assert store.create('Beach', 'rip currents', market_points, 'low')

    store.session = connection_error
    assert store.load() is False
    assert store.loaded is False

    store.session = remote
    calls = len(remote.calls)
    assert store.create('Temple', '', market_points, 'medium') is False
    assert store.error == 'Zones are not loaded; retry loading first'
    assert store.deactivate('HRZ001') is False
    assert len(remote.calls) == calls

    fresh = ZoneStore(API_URL, session=remote)
    assert fresh.load()
    assert [z.id for z in fresh.zones] == ['HRZ001', 'HRZ002']

    assert store.load()
    assert store.create('Temple', '', market_points, 'medium')
    assert store.zones[-1].id == 'HRZ003'


def test_description_kept_as_entered(store, remote, market_points):
    assert store.load()
    assert store.create('Market', '  crowded lanes ', market_points, 'high')
    assert store.zones[0].description == '  crowded lanes '

    assert store.update('HRZ001', description='crowded lanes')
    assert store.get_zone('HRZ001').description == 'crowded lanes'


def test_update_rejections_are_marked(store, remote, market_points):
    _created(store, remote, market_points)
    assert store.update('HRZ001', severity='extreme') is False
    assert store.rejected is True
    assert store.deactivate('HRZ404') is False
    assert store.rejected is False
