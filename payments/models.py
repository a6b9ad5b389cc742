from django.db import models
from django.utils import timezone


class Payment(models.Model):
    METHOD_CHOICES = [
        ('cash', 'Cash'),
        ('card', 'Card'),
        ('upi', 'UPI'),
        ('bank_transfer', 'Bank Transfer'),
    ]
    STATUS_CHOICES = [
        ('completed', 'Completed'),
        ('pending', 'Pending'),
        ('failed', 'Failed'),
    ]

    student = models.ForeignKey('student.Student', on_delete=models.CASCADE, related_name='payments')
    batch = models.ForeignKey('courses.Batch', on_delete=models.SET_NULL, null=True, blank=True, related_name='payments')
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    date = models.DateTimeField(default=timezone.now)
    method = models.CharField(max_length=20, choices=METHOD_CHOICES)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='completed')
    description = models.CharField(max_length=500)

    class Meta:
        db_table = 'payments'
        ordering = ['-date']

    def __str__(self):
        return f"{self.student.user.email} - {self.amount} ({self.status})"
