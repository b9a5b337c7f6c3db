from extensions import store
from models import Notification, new_id
from realtime import broadcaster


def fan_out(notifications, recipients, kind, actor, message, post_id=None):
    """Append one notification per recipient to an open notifications list.

    The actor never notifies themselves. Returns the new records so the
    caller can publish them once the transaction commits.
    """
    created = []
    for recipient_id in dict.fromkeys(recipients):
        if recipient_id == actor.id:
            continue
        n = Notification(id=new_id(), user_id=recipient_id, type=kind,
                         from_user_id=actor.id, from_user_name=actor.name,
                         message=message, post_id=post_id)
        notifications.append(n)
        created.append(n)
    return created


def publish(created):
    for n in created:
        broadcaster.publish(n.user_id, 'new_notification', n.to_dict())


def list_notifications(user_id):
    mine = [n for n in store.all('notifications') if n.user_id == user_id]
    # reversed first so equal timestamps come out newest-inserted first
    return sorted(reversed(mine), key=lambda n: n.created_at, reverse=True)


def unread_count(user_id):
    return sum(1 for n in store.all('notifications') if n.user_id == user_id and not n.read)


def mark_read(notification_id, user_id):
    """Flag one of the user's notifications read. Unknown or foreign ids are ignored."""
    with store.transaction('notifications') as tx:
        for n in tx.notifications:
            if n.id == notification_id and n.user_id == user_id:
                n.read = True
                return True
    return False
