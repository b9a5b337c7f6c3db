import pytest

import chat
from errors import NotFound, ValidationError
from tests.conftest import auth


def _unread_from(user, peer):
    [summary] = [s for s in chat.list_conversations(user.id) if s['user'].id == peer.id]
    return summary['unread_count']


def test_thread_marks_read_on_fetch(app, make_user):
    a, _ = make_user('Alice')
    b, _ = make_user('Bob')
    sent = [chat.send_message(a.id, b.id, f'a{i}') for i in range(3)]
    sent += [chat.send_message(b.id, a.id, f'b{i}') for i in range(2)]
    assert _unread_from(b, a) == 3

    first = chat.list_thread(b.id, a.id)
    assert [m.id for m in first] == [m.id for m in sent]
    assert all(m.read for m in first if m.receiver_id == b.id)
    assert _unread_from(b, a) == 0

    second = chat.list_thread(b.id, a.id)
    assert [m.id for m in second] == [m.id for m in sent]
    assert all(m.read for m in second if m.receiver_id == b.id)
    # Bob reading does not mark Alice's incoming messages
    assert not any(m.read for m in second if m.receiver_id == a.id)
    assert _unread_from(a, b) == 2


def test_conversation_summaries(app, make_user):
    a, _ = make_user('Alice')
    b, _ = make_user('Bob')
    c, _ = make_user('Carol')
    chat.send_message(b.id, a.id, 'hi from bob')
    chat.send_message(c.id, a.id, 'hi from carol')
    latest = chat.send_message(a.id, b.id, 'hi back')

    summaries = chat.list_conversations(a.id)
    assert [s['user'].id for s in summaries] == [b.id, c.id]
    assert summaries[0]['last_message'].id == latest.id
    assert [s['unread_count'] for s in summaries] == [1, 1]


def test_send_validation(app, make_user):
    a, _ = make_user('Alice')
    with pytest.raises(ValidationError):
        chat.send_message(a.id, 'someone', '   ')
    with pytest.raises(NotFound):
        chat.send_message(a.id, 'missing', 'hello')


def test_message_endpoints(client, make_user):
    a, a_token = make_user('Alice')
    b, b_token = make_user('Bob')
    resp = client.post('/api/messages', json={'receiver_id': b.id, 'text': 'hey'},
                       headers=auth(a_token))
    assert resp.status_code == 200
    assert resp.get_json()['read'] is False

    convs = client.get('/api/messages/conversations', headers=auth(b_token)).get_json()
    assert convs[0]['user']['id'] == a.id
    assert convs[0]['unread_count'] == 1

    thread = client.get(f'/api/messages/{a.id}', headers=auth(b_token)).get_json()
    assert [m['text'] for m in thread] == ['hey']
    assert thread[0]['read'] is True
    convs = client.get('/api/messages/conversations', headers=auth(b_token)).get_json()
    assert convs[0]['unread_count'] == 0
