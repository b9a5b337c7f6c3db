"""Snapshot persistence: every collection lives in one JSON file that is
read once at startup and rewritten whole whenever a transaction changes it.
"""
import copy
import json
import logging
import os
import tempfile
import threading
from contextlib import ExitStack, contextmanager
from types import SimpleNamespace

from models import User, Post, FriendEdge, Message, Notification

logger = logging.getLogger(__name__)


class Collection:
    def __init__(self, name, model):
        self.name = name
        self.model = model
        self.path = None
        self.records = []
        self.lock = threading.RLock()

    def load(self, data_dir):
        self.path = os.path.join(data_dir, f'{self.name}.json')
        with self.lock:
            try:
                with open(self.path, encoding='utf-8') as fh:
                    raw = json.load(fh)
            except FileNotFoundError:
                raw = []
            self.records = [self.model.from_dict(item) for item in raw]
        logger.debug('loaded %d %s', len(self.records), self.name)

    def save(self, records):
        """Write records to a temp file beside the snapshot, then rename over it."""
        payload = [r.to_dict() for r in records]
        directory = os.path.dirname(self.path)
        fd, tmp_path = tempfile.mkstemp(prefix=f'.{self.name}.', suffix='.tmp', dir=directory)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as fh:
                json.dump(payload, fh, indent=2)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, self.path)
        except BaseException:
            logger.exception('failed to write %s snapshot', self.name)
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def snapshot(self):
        with self.lock:
            return copy.deepcopy(self.records)


class Store:
    """Owns the collections and serializes read-modify-write on each one.

    Usage mirrors an ORM session::

        with store.transaction('posts', 'notifications') as tx:
            tx.posts.insert(0, post)

    Locks are taken in sorted name order. Leaving the block normally
    persists every collection whose records changed; an exception leaves
    both the files and the in-memory state untouched.
    """

    def __init__(self, app=None):
        self.collections = {
            'users': Collection('users', User),
            'posts': Collection('posts', Post),
            'friends': Collection('friends', FriendEdge),
            'messages': Collection('messages', Message),
            'notifications': Collection('notifications', Notification),
        }
        self.data_dir = None
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self.data_dir = app.config['DATA_DIR']
        os.makedirs(self.data_dir, exist_ok=True)
        for collection in self.collections.values():
            collection.load(self.data_dir)
        app.extensions['store'] = self

    def _get(self, name):
        try:
            return self.collections[name]
        except KeyError:
            raise KeyError(f'unknown collection {name!r}') from None

    def all(self, name):
        """A private copy of every record in the collection."""
        return self._get(name).snapshot()

    def find(self, name, predicate):
        for record in self.all(name):
            if predicate(record):
                return record
        return None

    @contextmanager
    def transaction(self, *names):
        collections = [self._get(n) for n in sorted(set(names))]
        with ExitStack() as stack:
            for collection in collections:
                stack.enter_context(collection.lock)
            working = {c.name: copy.deepcopy(c.records) for c in collections}
            tx = SimpleNamespace(**working)
            yield tx
            for collection in collections:
                records = getattr(tx, collection.name)
                if records != collection.records:
                    collection.save(records)
                    collection.records = records
