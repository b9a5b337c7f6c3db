"""Live push to connected sockets, keyed by user id.

Delivery is best-effort: an event for a user with no live socket is dropped,
never queued. Clients catch up through the regular HTTP queries.
"""
import logging
import threading

from extensions import socketio

logger = logging.getLogger(__name__)


def user_room(user_id):
    return f'user_{user_id}'


class Broadcaster:
    def __init__(self):
        self._sids = {}
        self._lock = threading.Lock()

    def subscribe(self, user_id, sid):
        with self._lock:
            self._sids.setdefault(user_id, set()).add(sid)

    def unsubscribe(self, sid):
        with self._lock:
            for user_id in [u for u, sids in self._sids.items() if sid in sids]:
                self._sids[user_id].discard(sid)
                if not self._sids[user_id]:
                    del self._sids[user_id]

    def user_for(self, sid):
        with self._lock:
            return next((u for u, sids in self._sids.items() if sid in sids), None)

    def is_connected(self, user_id):
        with self._lock:
            return bool(self._sids.get(user_id))

    def clear(self):
        with self._lock:
            self._sids.clear()

    def publish(self, user_id, event, payload):
        """Emit to user_id's room if they are connected. Returns whether it was sent."""
        if not self.is_connected(user_id):
            logger.debug('dropped %s for offline user %s', event, user_id)
            return False
        socketio.emit(event, payload, to=user_room(user_id))
        return True


broadcaster = Broadcaster()
