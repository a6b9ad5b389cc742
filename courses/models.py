from decimal import Decimal

from django.db import models
from django.utils import timezone


class Batch(models.Model):
    """A course run: the unit students enroll in and classes are scheduled for"""
    LEVEL_CHOICES = [
        ('beginner', 'Beginner'),
        ('intermediate', 'Intermediate'),
        ('advanced', 'Advanced'),
    ]

    name = models.CharField(max_length=255)
    level = models.CharField(max_length=20, choices=LEVEL_CHOICES)
    schedule_days = models.JSONField(default=list, help_text='Weekday names, e.g. ["Monday", "Wednesday"]')
    schedule_time = models.CharField(max_length=50, help_text='e.g. "10:00 AM"')
    capacity = models.PositiveIntegerField()
    instructor_name = models.CharField(max_length=255)
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    description = models.TextField(blank=True, null=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    cover_image = models.URLField(max_length=500, blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'batches'
        ordering = ['-start_date']
        verbose_name_plural = 'Batches'

    def __str__(self):
        return f"{self.name} ({self.level})"

    @property
    def enrolled_count(self):
        return self.enrollments.count()

    @property
    def seats_left(self):
        return max(self.capacity - self.enrolled_count, 0)

    @property
    def is_full(self):
        return self.enrolled_count >= self.capacity

    def upcoming_sessions(self, limit=3):
        return self.sessions.filter(start_time__gte=timezone.now()).order_by('start_time')[:limit]


class BatchEnrollment(models.Model):
    student = models.ForeignKey('student.Student', on_delete=models.CASCADE, related_name='enrollments')
    batch = models.ForeignKey(Batch, on_delete=models.CASCADE, related_name='enrollments')
    enrolled_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'batch_enrollments'
        unique_together = ['student', 'batch']
        ordering = ['-enrolled_at']

    def __str__(self):
        return f"{self.student.user.email} - {self.batch.name}"
