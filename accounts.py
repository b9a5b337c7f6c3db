import logging

from flask import current_app

import tokens
from errors import DuplicateEmail, InvalidCredential, NotFound, ValidationError
from extensions import store
from models import User, new_id

logger = logging.getLogger(__name__)


def normalize_email(email):
    return (email or '').strip().lower()


def register(name, email, password, avatar=None, birthday=None):
    name = (name or '').strip()
    email = normalize_email(email)
    if not name or not email or not password:
        raise ValidationError('Name, email and password are required')
    with store.transaction('users') as tx:
        if any(u.email == email for u in tx.users):
            raise DuplicateEmail()
        user = User(id=new_id(), name=name, email=email, password_hash='',
                    avatar=avatar or current_app.config['DEFAULT_AVATAR'].format(email=email),
                    birthday=birthday or None)
        user.set_password(password)
        tx.users.append(user)
    logger.info('registered user %s', user.id)
    return user, tokens.issue_token(user)


def login(email, password):
    email = normalize_email(email)
    user = store.find('users', lambda u: u.email == email)
    if user is None:
        raise NotFound('User not found')
    if not user.check_password(password or ''):
        raise InvalidCredential()
    return user, tokens.issue_token(user)


def get_user(user_id):
    user = store.find('users', lambda u: u.id == user_id)
    if user is None:
        raise NotFound('User not found')
    return user


def pick_user(users, user_id):
    """The record for user_id in an open users list, or NotFound."""
    user = next((u for u in users if u.id == user_id), None)
    if user is None:
        raise NotFound('User not found')
    return user


def update_profile(user_id, name=None, bio=None, avatar=None):
    """Edit display fields. Posts and comments keep the snapshot taken when they were written."""
    with store.transaction('users') as tx:
        user = pick_user(tx.users, user_id)
        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError('Name cannot be empty')
            user.name = name
        if bio is not None:
            user.bio = bio.strip()
        if avatar:
            user.avatar = avatar
    return user


def search_users(user_id, q):
    q = (q or '').strip().lower()
    if not q:
        return []
    return [u for u in store.all('users')
            if u.id != user_id and (q in u.name.lower() or q in u.email.lower())]
