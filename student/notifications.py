import logging

from .models import Notification

logger = logging.getLogger(__name__)


def notify_user(user, type, title, message, action_url=None):
    return Notification.objects.create(
        user=user,
        type=type,
        title=title,
        message=message,
        read=False,
        action_url=action_url,
    )


def notify_batch_students(batch, type, title, message, action_url=None):
    """Send the same notification to every student enrolled in a batch."""
    from courses.models import BatchEnrollment

    user_ids = BatchEnrollment.objects.filter(batch=batch).values_list('student__user_id', flat=True)
    notifications = [
        Notification(
            user_id=user_id,
            type=type,
            title=title,
            message=message,
            read=False,
            action_url=action_url,
        )
        for user_id in user_ids
    ]
    if notifications:
        Notification.objects.bulk_create(notifications)
        logger.info(f"Sent '{title}' to {len(notifications)} students of batch {batch.id}")
    return len(notifications)
