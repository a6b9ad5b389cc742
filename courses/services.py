import logging

from django.db import transaction
from rest_framework.exceptions import ValidationError

from student.models import Student
from student.notifications import notify_user
from .models import Batch, BatchEnrollment

logger = logging.getLogger(__name__)


@transaction.atomic
def enroll_in_batch(user, batch):
    """
    Enroll a signed-in user in a batch:
    student profile if missing, then the enrollment, then a welcome notification.
    """
    batch = Batch.objects.select_for_update().get(pk=batch.pk)
    student, created = Student.objects.get_or_create(user=user)
    if created:
        logger.info(f"Created student profile for {user.email}")

    if BatchEnrollment.objects.filter(student=student, batch=batch).exists():
        raise ValidationError({"batch": "You are already enrolled in this batch."})

    if batch.is_full:
        raise ValidationError({"batch": "This batch is full."})

    enrollment = BatchEnrollment.objects.create(student=student, batch=batch)

    notify_user(
        user,
        type='announcement',
        title='Enrollment Successful',
        message=f"You have successfully enrolled in {batch.name}. Welcome aboard!",
        action_url=f"/student/classroom/{batch.id}",
    )

    logger.info(f"{user.email} enrolled in batch {batch.id} ({batch.name})")
    return enrollment
