import logging

import notify
from accounts import pick_user
from errors import EdgeExists, NotFound, ValidationError
from extensions import store
from models import ACCEPTED, FRIEND_ACCEPT, FRIEND_REQUEST, PENDING, REJECTED, FriendEdge, new_id

logger = logging.getLogger(__name__)

ACTIONS = {'accept': ACCEPTED, 'reject': REJECTED}


def friend_ids(edges, user_id):
    """Ids joined to user_id by an accepted edge."""
    return {e.other(user_id) for e in edges if e.status == ACCEPTED and e.touches(user_id)}


def are_friends(a, b):
    return any(e.status == ACCEPTED and e.joins(a, b) for e in store.all('friends'))


def list_friends(user_id):
    ids = friend_ids(store.all('friends'), user_id)
    return [u for u in store.all('users') if u.id in ids]


def pending_requests(user_id):
    """Pending edges addressed to user_id, paired with the requester."""
    users = {u.id: u for u in store.all('users')}
    return [(e, users.get(e.user_id)) for e in store.all('friends')
            if e.friend_id == user_id and e.status == PENDING]


def request_friend(requester_id, recipient_id):
    # Any existing edge blocks a new one, including a rejected one.
    if not recipient_id:
        raise ValidationError('friend_id is required')
    if requester_id == recipient_id:
        raise ValidationError('You cannot friend yourself')
    with store.transaction('friends', 'notifications', 'users') as tx:
        requester = pick_user(tx.users, requester_id)
        pick_user(tx.users, recipient_id)
        if any(e.joins(requester_id, recipient_id) for e in tx.friends):
            raise EdgeExists()
        edge = FriendEdge(id=new_id(), user_id=requester_id, friend_id=recipient_id)
        tx.friends.append(edge)
        created = notify.fan_out(tx.notifications, [recipient_id], FRIEND_REQUEST,
                                 requester, 'sent you a friend request')
    logger.info('friend request %s: %s -> %s', edge.id, requester_id, recipient_id)
    notify.publish(created)
    return edge


def respond_friend(edge_id, responder_id, action):
    if action not in ACTIONS:
        raise ValidationError('action must be "accept" or "reject"')
    created = []
    with store.transaction('friends', 'notifications', 'users') as tx:
        edge = next((e for e in tx.friends if e.id == edge_id), None)
        if edge is None or edge.friend_id != responder_id:
            raise NotFound('Request not found')
        previous, edge.status = edge.status, ACTIONS[action]
        if edge.status == ACCEPTED:
            users = {u.id: u for u in tx.users}
            requester, responder = users.get(edge.user_id), users.get(responder_id)
            if requester and responder:
                requester.add_friend(responder.id)
                responder.add_friend(requester.id)
            if previous != ACCEPTED and responder:
                created = notify.fan_out(tx.notifications, [edge.user_id], FRIEND_ACCEPT,
                                         responder, 'accepted your friend request')
    logger.info('friend request %s %s by %s', edge_id, edge.status, responder_id)
    notify.publish(created)
    return edge
