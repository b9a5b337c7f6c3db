from extensions import socketio
from realtime import broadcaster
from tests.conftest import auth


def _events(sock, name):
    return [e['args'][0] for e in sock.get_received() if e['name'] == name]


def test_connect_requires_valid_token(app):
    assert not socketio.test_client(app).is_connected()
    assert not socketio.test_client(app, auth={'token': 'bad'}).is_connected()


def test_message_pushed_to_receiver_only(app, client, make_user):
    a, a_token = make_user('Alice')
    b, b_token = make_user('Bob')
    a_sock = socketio.test_client(app, flask_test_client=client, auth={'token': a_token})
    b_sock = socketio.test_client(app, flask_test_client=client, auth={'token': b_token})
    assert broadcaster.is_connected(b.id)
    a_sock.get_received()
    b_sock.get_received()

    client.post('/api/messages', json={'receiver_id': b.id, 'text': 'ping'},
                headers=auth(a_token))

    [pushed] = _events(b_sock, 'new_message')
    assert pushed['text'] == 'ping'
    assert pushed['sender_id'] == a.id
    assert _events(a_sock, 'new_message') == []


def test_notification_pushed(app, client, make_user):
    a, a_token = make_user('Alice')
    b, b_token = make_user('Bob')
    b_sock = socketio.test_client(app, flask_test_client=client, auth={'token': b_token})
    b_sock.get_received()

    client.post('/api/friends/request', json={'friend_id': b.id}, headers=auth(a_token))

    [pushed] = _events(b_sock, 'new_notification')
    assert pushed['type'] == 'friend_request'
    assert pushed['from_user_id'] == a.id


def test_offline_push_is_dropped(app, make_user):
    a, _ = make_user('Alice')
    assert not broadcaster.publish(a.id, 'new_message', {'text': 'lost'})


def test_disconnect_unsubscribes(app, make_user):
    a, a_token = make_user('Alice')
    sock = socketio.test_client(app, auth={'token': a_token})
    assert broadcaster.is_connected(a.id)
    sock.disconnect()
    assert not broadcaster.is_connected(a.id)


def test_join_only_own_room(app, make_user):
    a, a_token = make_user('Alice')
    b, _ = make_user('Bob')
    sock = socketio.test_client(app, auth={'token': a_token})
    sock.get_received()

    sock.emit('join', a.id)
    assert _events(sock, 'joined') == [{'user_id': a.id}]
    sock.emit('join', {'user_id': b.id})
    assert _events(sock, 'error') == [{'error': 'Cannot subscribe to another user'}]
