import uuid
from dataclasses import MISSING, dataclass, field, fields, asdict
from datetime import datetime, timezone
from typing import List, Optional

from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

from errors import ValidationError

POST = 'post'
LIKE = 'like'
COMMENT = 'comment'
FRIEND_REQUEST = 'friend_request'
FRIEND_ACCEPT = 'friend_accept'
NOTIFICATION_TYPES = (POST, LIKE, COMMENT, FRIEND_REQUEST, FRIEND_ACCEPT)

PENDING = 'pending'
ACCEPTED = 'accepted'
REJECTED = 'rejected'
EDGE_STATUSES = (PENDING, ACCEPTED, REJECTED)


def new_id():
    return str(uuid.uuid4())


def utcnow():
    return datetime.now(timezone.utc)


class Record:
    """Shared JSON conversion for the snapshot entities.

    Datetime fields are written as ISO-8601 strings and parsed back on load.
    Required fields (those without a default) must be present in the input.
    """

    _timestamps = ('created_at',)

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise ValidationError(f'{cls.__name__} record must be an object')
        kwargs = {}
        for f in fields(cls):
            if f.name in data:
                kwargs[f.name] = data[f.name]
            elif f.default is MISSING and f.default_factory is MISSING:
                raise ValidationError(f'{cls.__name__} is missing "{f.name}"')
        for name in cls._timestamps:
            if isinstance(kwargs.get(name), str):
                try:
                    kwargs[name] = datetime.fromisoformat(kwargs[name])
                except ValueError:
                    raise ValidationError(f'{cls.__name__}.{name} is not a timestamp')
        record = cls(**kwargs)
        record.validate()
        return record

    def validate(self):
        pass

    def to_dict(self):
        data = asdict(self)
        for name in self._timestamps:
            if isinstance(data.get(name), datetime):
                data[name] = data[name].isoformat()
        return data


@dataclass
class User(Record, UserMixin):
    id: str
    name: str
    email: str
    password_hash: str
    avatar: str = ''
    bio: str = ''
    birthday: Optional[str] = None
    joined: datetime = field(default_factory=utcnow)
    friends: List[str] = field(default_factory=list)

    _timestamps = ('joined',)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def add_friend(self, user_id):
        if user_id not in self.friends:
            self.friends.append(user_id)

    def public(self):
        return {'id': self.id, 'name': self.name, 'avatar': self.avatar, 'bio': self.bio}

    def private(self):
        data = self.public()
        data['email'] = self.email
        data['birthday'] = self.birthday
        data['joined'] = self.joined.isoformat()
        return data


@dataclass
class Comment(Record):
    id: str
    user_id: str
    user_name: str
    user_avatar: str
    text: str
    created_at: datetime = field(default_factory=utcnow)


@dataclass
class Post(Record):
    id: str
    user_id: str
    user_name: str
    user_avatar: str
    content: str = ''
    media: List[str] = field(default_factory=list)
    likes: List[str] = field(default_factory=list)
    comments: List[Comment] = field(default_factory=list)
    shares: int = 0
    created_at: datetime = field(default_factory=utcnow)

    @classmethod
    def from_dict(cls, data):
        if isinstance(data, dict) and data.get('comments'):
            data = dict(data, comments=[c if isinstance(c, Comment) else Comment.from_dict(c)
                                        for c in data['comments']])
        return super().from_dict(data)

    def to_dict(self):
        data = super().to_dict()
        data['comments'] = [c.to_dict() for c in self.comments]
        return data

    def validate(self):
        if len(set(self.likes)) != len(self.likes):
            raise ValidationError('Post likes must be unique')

    def toggle_like(self, user_id):
        """Add or remove user_id; returns True when the like was added."""
        if user_id in self.likes:
            self.likes.remove(user_id)
            return False
        self.likes.append(user_id)
        return True


@dataclass
class FriendEdge(Record):
    id: str
    user_id: str
    friend_id: str
    status: str = PENDING
    created_at: datetime = field(default_factory=utcnow)

    def validate(self):
        if self.status not in EDGE_STATUSES:
            raise ValidationError(f'Unknown friend status "{self.status}"')

    def touches(self, user_id):
        return user_id in (self.user_id, self.friend_id)

    def joins(self, a, b):
        return {self.user_id, self.friend_id} == {a, b}

    def other(self, user_id):
        return self.friend_id if self.user_id == user_id else self.user_id


@dataclass
class Message(Record):
    id: str
    sender_id: str
    receiver_id: str
    text: str
    read: bool = False
    created_at: datetime = field(default_factory=utcnow)

    def between(self, a, b):
        return (self.sender_id, self.receiver_id) in ((a, b), (b, a))


@dataclass
class Notification(Record):
    id: str
    user_id: str
    type: str
    from_user_id: str
    from_user_name: str
    message: str
    post_id: Optional[str] = None
    read: bool = False
    created_at: datetime = field(default_factory=utcnow)

    def validate(self):
        if self.type not in NOTIFICATION_TYPES:
            raise ValidationError(f'Unknown notification type "{self.type}"')
