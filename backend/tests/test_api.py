def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'message' in res.get_json()


def test_room_state_unknown(client):
    res = client.get('/rooms/0000')
    assert res.status_code == 404
    assert res.get_json() == {'error': "Room doesn't exist"}


def test_room_state_snapshot(client, coordinator):
    room = coordinator.create_room('host-sid', 'Host')
    coordinator.join_room(room.code, 'p1', 'Alice', 'owl')
    res = client.get(f'/rooms/{room.code}')
    assert res.status_code == 200
    state = res.get_json()
    assert state['code'] == room.code
    assert state['phase'] == 'lobby'
    assert state['host'] == {'id': 'host-sid', 'name': 'Host'}
    assert [p['name'] for p in state['players']] == ['Alice']
    assert [s['name'] for s in state['sectors']] == [
        'Railways Electrification',
        'Expressways (DMEDL)',
        'Solar Parks (Rewa)',
    ]
