from decimal import Decimal

from django.db.models import Sum
from django.utils import timezone

from classroom.models import ClassSession
from courses.models import Batch
from payments.models import Payment
from student.models import Student


def _sum(queryset, field):
    return queryset.aggregate(total=Sum(field))['total'] or Decimal('0.00')


def get_dashboard_data():
    """
    Admin dashboard summary:
    - Core counts (students, active batches, today's classes)
    - Revenue for the current month
    - Collected / pending / overdue fee totals
    - Next scheduled classes and newest students
    """
    now = timezone.localtime()
    today = now.date()
    month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)

    # --- Counts ---
    total_students = Student.objects.count()
    active_batches = Batch.objects.filter(end_date__date__gte=today).count()
    todays_classes = ClassSession.objects.filter(start_time__date=today).count()

    # --- Revenue ---
    monthly_revenue = _sum(
        Payment.objects.filter(status='completed', date__gte=month_start),
        'amount'
    )

    payment_summary = {
        "collected": float(monthly_revenue),
        "pending": float(_sum(Student.objects.filter(payment_status='pending'), 'total_due')),
        "overdue": float(_sum(Student.objects.filter(payment_status='overdue'), 'total_due')),
    }

    # --- Lists ---
    upcoming = (
        ClassSession.objects
        .filter(status='scheduled', start_time__gte=timezone.now())
        .select_related('batch')
        .order_by('start_time')[:5]
    )
    upcoming_classes = [
        {
            "id": s.id,
            "topic": s.topic,
            "batch_name": s.batch.name,
            "start_time": s.start_time,
            "end_time": s.end_time,
            "instructor_name": s.instructor_name,
        }
        for s in upcoming
    ]

    recent = Student.objects.select_related('user').order_by('-enrolled_at')[:5]
    recent_students = [
        {
            "id": s.id,
            "name": s.name,
            "email": s.email,
            "enrolled_at": s.enrolled_at,
            "payment_status": s.payment_status,
        }
        for s in recent
    ]

    return {
        "total_students": total_students,
        "active_batches": active_batches,
        "todays_classes": todays_classes,
        "monthly_revenue": float(monthly_revenue),
        "payment_summary": payment_summary,
        "upcoming_classes": upcoming_classes,
        "recent_students": recent_students,
    }
