import logging

from errors import NotFound, ValidationError
from extensions import store
from models import Message, new_id
from realtime import broadcaster

logger = logging.getLogger(__name__)


def send_message(sender_id, receiver_id, text):
    text = (text or '').strip()
    if not receiver_id or not text:
        raise ValidationError('receiver_id and text are required')
    if store.find('users', lambda u: u.id == receiver_id) is None:
        raise NotFound('User not found')
    message = Message(id=new_id(), sender_id=sender_id, receiver_id=receiver_id, text=text)
    with store.transaction('messages') as tx:
        tx.messages.append(message)
    logger.info('message %s: %s -> %s', message.id, sender_id, receiver_id)
    broadcaster.publish(receiver_id, 'new_message', message.to_dict())
    return message


def list_thread(user_id, peer_id):
    """Messages between the pair, oldest first.

    Reading the thread marks every message addressed to user_id as read.
    """
    with store.transaction('messages') as tx:
        thread = [m for m in tx.messages if m.between(user_id, peer_id)]
        for m in thread:
            if m.receiver_id == user_id:
                m.read = True
    return sorted(thread, key=lambda m: m.created_at)


def list_conversations(user_id):
    """One summary per peer: the peer, their latest message and how many are unread."""
    users = {u.id: u for u in store.all('users')}
    summaries = {}
    for m in store.all('messages'):
        if user_id not in (m.sender_id, m.receiver_id):
            continue
        peer_id = m.receiver_id if m.sender_id == user_id else m.sender_id
        entry = summaries.setdefault(peer_id, {'user': users.get(peer_id), 'last_message': m,
                                               'unread_count': 0})
        if m.created_at >= entry['last_message'].created_at:
            entry['last_message'] = m
        if m.receiver_id == user_id and not m.read:
            entry['unread_count'] += 1
    return sorted(summaries.values(), key=lambda s: s['last_message'].created_at, reverse=True)
