from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import F


class Student(models.Model):
    """Student profile attached to a user account"""
    PAYMENT_STATUS_CHOICES = [
        ('paid', 'Paid'),
        ('pending', 'Pending'),
        ('overdue', 'Overdue'),
    ]

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='student_profile')
    phone = models.CharField(max_length=20, blank=True, null=True)
    enrolled_at = models.DateTimeField(auto_now_add=True)

    # Fees
    payment_status = models.CharField(max_length=20, choices=PAYMENT_STATUS_CHOICES, default='pending')
    total_paid = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    total_due = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    credit_balance = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))

    # Percentage, always recomputed from attendance records
    attendance_rate = models.FloatField(default=0.0)

    class Meta:
        db_table = 'students'
        ordering = ['-enrolled_at']

    def __str__(self):
        return f"{self.user.email} (student)"

    @property
    def name(self):
        return self.user.display_name

    @property
    def email(self):
        return self.user.email

    def recalculate_attendance_rate(self):
        """
        Recompute attendance rate as
        present sessions / completed sessions across enrolled batches * 100.
        No completed sessions gives 0.
        """
        from classroom.models import ClassSession, Attendance

        batch_ids = list(self.enrollments.values_list('batch_id', flat=True))

        total_sessions = ClassSession.objects.filter(
            batch_id__in=batch_ids,
            status='completed'
        ).count()

        attended_sessions = Attendance.objects.filter(
            student=self,
            status='present',
            session__status='completed',
            session__batch_id__in=batch_ids
        ).count()

        self.attendance_rate = (attended_sessions / total_sessions) * 100 if total_sessions > 0 else 0.0
        self.save(update_fields=['attendance_rate'])
        return self.attendance_rate

    def apply_payment(self, amount):
        """Move `amount` from due to paid; a cleared balance marks the student paid."""
        Student.objects.filter(pk=self.pk).update(
            total_paid=F('total_paid') + amount,
            total_due=F('total_due') - amount,
        )
        self.refresh_from_db(fields=['total_paid', 'total_due', 'payment_status'])

        if self.total_due <= 0:
            self.payment_status = 'paid'
            # Overpayment is not carried into credit_balance
            self.total_due = Decimal('0.00')
            self.save(update_fields=['payment_status', 'total_due'])
        return self


class Notification(models.Model):
    TYPE_CHOICES = [
        ('class_reminder', 'Class Reminder'),
        ('payment_due', 'Payment Due'),
        ('announcement', 'Announcement'),
        ('attendance', 'Attendance'),
    ]

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='notifications')
    type = models.CharField(max_length=30, choices=TYPE_CHOICES)
    title = models.CharField(max_length=255)
    message = models.TextField()
    read = models.BooleanField(default=False)
    action_url = models.CharField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'notifications'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'read'], name='notifications_user_read_idx'),
        ]

    def __str__(self):
        return f"{self.user.email} - {self.title}"
