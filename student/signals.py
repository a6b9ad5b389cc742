# student/signals.py
"""
Django signals for keeping student profiles in step with user accounts
"""

from django.db.models.signals import post_save
from django.dispatch import receiver
from django.contrib.auth import get_user_model

from .models import Student

User = get_user_model()


@receiver(post_save, sender=User)
def create_student_profile(sender, instance, created, **kwargs):
    """
    Automatically create a Student profile when a student account is created
    """
    if created and instance.role == 'student' and not instance.is_superuser:
        Student.objects.get_or_create(user=instance)
