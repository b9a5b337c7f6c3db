import logging

from flask import current_app

import notify
from accounts import pick_user
from errors import NotFound, ValidationError
from extensions import store
from graph import friend_ids
from models import COMMENT, LIKE, POST, Comment, Post, new_id

logger = logging.getLogger(__name__)


def clean_text(text):
    """Strip trailing whitespace per line and drop blank lines."""
    if not text:
        return ''
    return '\n'.join(line.rstrip() for line in text.strip().split('\n') if line.strip())


def _find(posts, post_id):
    post = next((p for p in posts if p.id == post_id), None)
    if post is None:
        raise NotFound('Post not found')
    return post


def get_post(post_id):
    return _find(store.all('posts'), post_id)


def create_post(author_id, text, media=()):
    content = clean_text(text)
    media = [m for m in media if m]
    if not content and not media:
        raise ValidationError('Post is empty')
    with store.transaction('friends', 'notifications', 'posts', 'users') as tx:
        author = pick_user(tx.users, author_id)
        post = Post(id=new_id(), user_id=author.id, user_name=author.name,
                    user_avatar=author.avatar, content=content, media=media)
        tx.posts.insert(0, post)
        created = notify.fan_out(tx.notifications, friend_ids(tx.friends, author.id), POST,
                                 author, f'{author.name} created a new post', post_id=post.id)
    logger.info('post %s by %s, %d notified', post.id, author_id, len(created))
    notify.publish(created)
    return post


def get_feed(user_id, page=None, per_page=None):
    """Posts by user_id and their friends, newest first.

    page is 1-based; when it is None the whole feed is returned.
    """
    visible = friend_ids(store.all('friends'), user_id) | {user_id}
    feed = [p for p in store.all('posts') if p.user_id in visible]
    if page is None:
        return feed
    if page < 1 or (per_page is not None and per_page < 1):
        raise ValidationError('page and per_page must be positive')
    per_page = per_page or current_app.config['FEED_PAGE_SIZE']
    start = (page - 1) * per_page
    return feed[start:start + per_page]


def toggle_like(post_id, user_id):
    created = []
    with store.transaction('notifications', 'posts', 'users') as tx:
        post = _find(tx.posts, post_id)
        actor = pick_user(tx.users, user_id)
        if post.toggle_like(user_id) and post.user_id != user_id:
            created = notify.fan_out(tx.notifications, [post.user_id], LIKE, actor,
                                     'liked your post', post_id=post.id)
        likes = list(post.likes)
    notify.publish(created)
    return likes


def add_comment(post_id, user_id, text):
    text = clean_text(text)
    if not text:
        raise ValidationError('Comment is empty')
    with store.transaction('notifications', 'posts', 'users') as tx:
        post = _find(tx.posts, post_id)
        author = pick_user(tx.users, user_id)
        comment = Comment(id=new_id(), user_id=author.id, user_name=author.name,
                          user_avatar=author.avatar, text=text)
        post.comments.append(comment)
        created = notify.fan_out(tx.notifications, [post.user_id], COMMENT, author,
                                 'commented on your post', post_id=post.id)
    notify.publish(created)
    return comment


def share_post(post_id, user_id):
    with store.transaction('posts') as tx:
        post = _find(tx.posts, post_id)
        post.shares += 1
    logger.info('post %s shared by %s', post_id, user_id)
    return post.shares
