import logging

from flask import request
from flask_socketio import emit, join_room

import tokens
from errors import Forbidden
from extensions import socketio, store
from realtime import broadcaster, user_room

logger = logging.getLogger(__name__)


def _token(auth):
    if isinstance(auth, dict) and auth.get('token'):
        return auth['token']
    return request.args.get('token')


@socketio.on('connect')
def on_connect(auth=None):
    token = _token(auth)
    if not token:
        return False
    try:
        claims = tokens.verify_token(token)
    except Forbidden:
        return False
    if store.find('users', lambda u: u.id == claims['id']) is None:
        return False
    join_room(user_room(claims['id']))
    broadcaster.subscribe(claims['id'], request.sid)
    logger.debug('socket %s connected as %s', request.sid, claims['id'])


@socketio.on('join')
def on_join(data):
    user_id = data.get('user_id') if isinstance(data, dict) else data
    if user_id != broadcaster.user_for(request.sid):
        emit('error', {'error': 'Cannot subscribe to another user'})
        return
    join_room(user_room(user_id))
    emit('joined', {'user_id': user_id})


@socketio.on('disconnect')
def on_disconnect(*args):
    broadcaster.unsubscribe(request.sid)
