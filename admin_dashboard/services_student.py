# services_student.py

from django.utils import timezone

from classroom.models import ClassSession, Attendance
from courses.models import BatchEnrollment
from payments.models import Payment
from student.models import Student


###############################################################################
# STUDENT CORE PROFILE
###############################################################################
def get_student_profile(student: Student) -> dict:
    user = student.user
    return {
        "id": student.id,
        "user_id": user.id,
        "name": user.display_name,
        "email": user.email,
        "phone": student.phone,
        "avatar": user.avatar or "",
        "enrolled_at": student.enrolled_at,
    }


###############################################################################
# FEES + ATTENDANCE STATS
###############################################################################
def get_student_stats(student: Student) -> dict:
    return {
        "attendance_rate": round(student.attendance_rate, 2),
        "payment_status": student.payment_status,
        "total_paid": float(student.total_paid),
        "total_due": float(student.total_due),
        "credit_balance": float(student.credit_balance),
    }


###############################################################################
# ENROLLED BATCHES
###############################################################################
def get_enrolled_batches(student: Student) -> list:
    enrollments = (
        BatchEnrollment.objects
        .filter(student=student)
        .select_related("batch")
        .order_by("batch__start_date")
    )
    return [
        {
            "id": e.batch.id,
            "name": e.batch.name,
            "level": e.batch.level,
            "schedule_days": e.batch.schedule_days,
            "schedule_time": e.batch.schedule_time,
            "instructor_name": e.batch.instructor_name,
            "enrolled_at": e.enrolled_at,
        }
        for e in enrollments
    ]


###############################################################################
# UPCOMING CLASSES (ACROSS ALL BATCHES)
###############################################################################
def get_upcoming_classes(student: Student, limit: int = 5) -> list:
    batch_ids = student.enrollments.values_list("batch_id", flat=True)
    sessions = (
        ClassSession.objects
        .filter(batch_id__in=batch_ids, start_time__gte=timezone.now())
        .exclude(status__in=["completed", "cancelled"])
        .select_related("batch")
        .order_by("start_time")[:limit]
    )
    return [
        {
            "id": s.id,
            "topic": s.topic,
            "batch_id": s.batch_id,
            "batch_name": s.batch.name,
            "start_time": s.start_time,
            "end_time": s.end_time,
            "status": s.status,
            "live_room_name": s.live_room_name,
        }
        for s in sessions
    ]


###############################################################################
# PAYMENTS + ATTENDANCE HISTORY
###############################################################################
def get_recent_payments(student: Student, limit: int = 10) -> list:
    payments = Payment.objects.filter(student=student).order_by("-date")[:limit]
    return [
        {
            "id": p.id,
            "amount": float(p.amount),
            "date": p.date,
            "method": p.method,
            "status": p.status,
            "description": p.description,
        }
        for p in payments
    ]


def get_recent_attendances(student: Student, limit: int = 10) -> list:
    records = (
        Attendance.objects
        .filter(student=student, session__status="completed")
        .select_related("session", "session__batch")
        .order_by("-session__start_time")[:limit]
    )
    return [
        {
            "id": a.id,
            "session_id": a.session_id,
            "topic": a.session.topic,
            "batch_name": a.session.batch.name,
            "date": a.session.start_time,
            "status": a.status,
            "duration": a.duration,
        }
        for a in records
    ]


###############################################################################
# ENTRYPOINT (MAIN DASHBOARD)
###############################################################################
def get_student_dashboard(student: Student) -> dict:
    return {
        "profile": get_student_profile(student),
        "stats": get_student_stats(student),
        "enrolled_batches": get_enrolled_batches(student),
        "upcoming_classes": get_upcoming_classes(student),
        "recent_payments": get_recent_payments(student),
        "recent_attendances": get_recent_attendances(student),
    }
