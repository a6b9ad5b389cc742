import logging

from django.conf import settings
from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from student.models import Student
from student.notifications import notify_batch_students
from . import livekit
from .models import ClassSession, Attendance

logger = logging.getLogger(__name__)


def classroom_url(session):
    return f"/student/classroom/{session.batch_id}"


def recalculate_batch_attendance(batch_id):
    """Recompute the rate of every student enrolled in a batch."""
    students = Student.objects.filter(enrollments__batch_id=batch_id)
    for student in students:
        student.recalculate_attendance_rate()
    logger.info(f"Recalculated attendance rates for {len(students)} students of batch {batch_id}")


@transaction.atomic
def schedule_session(serializer):
    """Save a new session, name its room and tell the batch about it."""
    session = serializer.save(status='scheduled')
    session.live_room_name = session.room_name
    session.save(update_fields=['live_room_name'])

    start = timezone.localtime(session.start_time).strftime('%d %b %Y, %I:%M %p')
    notify_batch_students(
        session.batch,
        type='class_reminder',
        title='New Class Scheduled',
        message=f'A new class "{session.topic}" has been scheduled for {start}.',
        action_url=classroom_url(session),
    )
    logger.info(f"Scheduled session {session.id} ({session.topic}) for batch {session.batch_id}")
    return session


@transaction.atomic
def start_live_session(session):
    """
    Put a session live: normalize its room name, open the video room sized
    for the batch, and notify enrolled students. A provider failure rolls back.
    """
    if session.status not in ('scheduled', 'live'):
        raise ValidationError({"session_id": f"A {session.status} session cannot go live."})

    session.live_room_name = session.room_name
    session.status = 'live'
    session.save(update_fields=['live_room_name', 'status', 'updated_at'])

    logger.info(f"Starting LiveKit room {session.live_room_name} (session {session.id})")
    room = livekit.create_room(
        session.live_room_name,
        max_participants=session.batch.capacity + settings.LIVEKIT_EXTRA_PARTICIPANTS,
    )

    notify_batch_students(
        session.batch,
        type='class_reminder',
        title='Class is Now Live!',
        message=f'Join "{session.topic}" now! The session has started.',
        action_url=classroom_url(session),
    )
    return room


@transaction.atomic
def end_live_session(session):
    """Close the video room and complete the session."""
    livekit.delete_room(session.live_room_name or session.room_name)
    session.status = 'completed'
    session.save(update_fields=['status', 'updated_at'])

    # A newly completed session changes every enrolled student's rate
    recalculate_batch_attendance(session.batch_id)

    logger.info(f"Ended session {session.id} ({session.topic})")
    return session


@transaction.atomic
def update_session(serializer):
    """Save admin edits; entering or leaving `completed` refreshes the batch's rates."""
    was_completed = serializer.instance.status == 'completed'
    session = serializer.save()
    if was_completed != (session.status == 'completed'):
        recalculate_batch_attendance(session.batch_id)
    return session


@transaction.atomic
def mark_attendance(session, records):
    """
    Upsert one attendance row per (session, student) and recompute the
    rate of every student touched. `records` is a list of
    {'student': Student, 'status': str}.
    """
    marked = []
    for record in records:
        status = record['status']
        attendance, _ = Attendance.objects.update_or_create(
            session=session,
            student=record['student'],
            defaults={
                'status': status,
                'joined_at': timezone.now() if status == 'present' else None,
            },
        )
        marked.append(attendance)

    students = {record['student'].pk: record['student'] for record in records}
    for student in students.values():
        rate = student.recalculate_attendance_rate()
        logger.info(f"Attendance rate for {student.email} is now {rate:.2f}%")

    return marked
