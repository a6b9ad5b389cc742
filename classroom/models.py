from django.db import models


class ClassSession(models.Model):
    """A single scheduled class of a batch, optionally held live in a video room"""
    STATUS_CHOICES = [
        ('scheduled', 'Scheduled'),
        ('live', 'Live'),
        ('completed', 'Completed'),
        ('cancelled', 'Cancelled'),
    ]

    batch = models.ForeignKey('courses.Batch', on_delete=models.CASCADE, related_name='sessions')
    topic = models.CharField(max_length=255)
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    # Set to session_<id> right after creation
    live_room_name = models.CharField(max_length=255, unique=True, null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='scheduled')
    instructor_name = models.CharField(max_length=255)
    recording_url = models.URLField(max_length=500, blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'class_sessions'
        ordering = ['-start_time']
        indexes = [
            models.Index(fields=['batch', 'status'], name='sessions_batch_status_idx'),
            models.Index(fields=['start_time'], name='sessions_start_time_idx'),
        ]

    def __str__(self):
        return f"{self.topic} - {self.batch.name}"

    @property
    def room_name(self):
        return f"session_{self.pk}"


class Attendance(models.Model):
    STATUS_CHOICES = [
        ('present', 'Present'),
        ('absent', 'Absent'),
        ('late', 'Late'),
    ]

    session = models.ForeignKey(ClassSession, on_delete=models.CASCADE, related_name='attendances')
    student = models.ForeignKey('student.Student', on_delete=models.CASCADE, related_name='attendances')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES)
    joined_at = models.DateTimeField(null=True, blank=True)
    left_at = models.DateTimeField(null=True, blank=True)
    duration = models.PositiveIntegerField(null=True, blank=True, help_text='Minutes attended')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'attendances'
        unique_together = ['session', 'student']
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.student.user.email} - {self.session.topic} ({self.status})"
