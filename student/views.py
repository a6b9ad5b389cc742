import logging

from django.db import transaction
from django.db.models import Q, Prefetch
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema

from api.permissions import IsAdminRole, is_admin_user
from api.utils import StandardResponseMixin
from classroom.models import ClassSession
from courses.models import Batch, BatchEnrollment
from .filters import StudentFilter
from .models import Student, Notification
from .serializers import (
    AdminStudentSerializer, AdminStudentCreateSerializer, AdminStudentUpdateSerializer,
    StudentProfileUpdateSerializer, NotificationSerializer
)

logger = logging.getLogger(__name__)

RECENT_COMPLETED_DAYS = 7


@extend_schema(tags=['Admin - Students'])
class AdminStudentViewSet(viewsets.ModelViewSet, StandardResponseMixin):
    """Admin CRUD for students"""
    permission_classes = [IsAdminRole]
    filterset_class = StudentFilter

    def get_queryset(self):
        return (
            Student.objects
            .select_related('user')
            .prefetch_related(
                Prefetch('enrollments', queryset=BatchEnrollment.objects.select_related('batch'))
            )
            .order_by('-enrolled_at')
        )

    def get_serializer_class(self):
        if self.action == 'create':
            return AdminStudentCreateSerializer
        if self.action in ['update', 'partial_update']:
            return AdminStudentUpdateSerializer
        return AdminStudentSerializer

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        serializer = self.get_serializer(queryset, many=True)
        return self.success_response(
            data=serializer.data,
            message="Students retrieved successfully."
        )

    def retrieve(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_object())
        return self.success_response(
            data=serializer.data,
            message="Student retrieved successfully."
        )

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        student = serializer.save()
        logger.info(f"Admin {request.user.email} created student {student.user.email}")
        return self.success_response(
            data=AdminStudentSerializer(student).data,
            message="Student created successfully.",
            status_code=status.HTTP_201_CREATED
        )

    def update(self, request, *args, **kwargs):
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        student = serializer.save()
        return self.success_response(
            data=AdminStudentSerializer(student).data,
            message="Student updated successfully."
        )

    @transaction.atomic
    def destroy(self, request, *args, **kwargs):
        student = self.get_object()
        user = student.user
        # Enrollments, attendance and payments cascade from the student
        student.delete()
        user.delete()
        logger.info(f"Admin {request.user.email} deleted student {user.email}")
        return self.success_response(message="Student deleted successfully.")


class StudentProfileView(APIView, StandardResponseMixin):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=['Student'], request=StudentProfileUpdateSerializer)
    @transaction.atomic
    def put(self, request):
        serializer = StudentProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        user = request.user
        if 'name' in data:
            user.name = data['name']
            user.save(update_fields=['name', 'updated_at'])

        student, _ = Student.objects.get_or_create(user=user)
        if 'phone' in data:
            student.phone = data['phone'] or None
            student.save(update_fields=['phone'])

        return self.success_response(
            data={'name': user.display_name, 'email': user.email, 'phone': student.phone},
            message="Profile updated successfully."
        )


def ensure_batch_access(user, batch):
    """Students only see classes of batches they are enrolled in."""
    if is_admin_user(user):
        return
    if not BatchEnrollment.objects.filter(batch=batch, student__user=user).exists():
        raise PermissionDenied("You are not enrolled in this batch.")


class BatchSessionsView(APIView, StandardResponseMixin):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=['Student'])
    def get(self, request, batch_id):
        batch = get_object_or_404(Batch, pk=batch_id)
        ensure_batch_access(request.user, batch)

        recent_cutoff = timezone.now() - timezone.timedelta(days=RECENT_COMPLETED_DAYS)
        sessions = ClassSession.objects.filter(
            Q(status='scheduled') |
            Q(status='live') |
            Q(status='completed', end_time__gte=recent_cutoff),
            batch=batch,
        ).order_by('start_time')

        return self.success_response(
            data={
                'batch': {'id': batch.id, 'name': batch.name, 'level': batch.level},
                'sessions': [
                    {
                        'id': session.id,
                        'topic': session.topic,
                        'start_time': session.start_time,
                        'end_time': session.end_time,
                        'status': session.status,
                        'instructor_name': session.instructor_name,
                        'live_room_name': session.live_room_name,
                    }
                    for session in sessions
                ],
            },
            message="Sessions retrieved successfully."
        )


class SessionDetailView(APIView, StandardResponseMixin):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=['Student'])
    def get(self, request, session_id):
        session = get_object_or_404(ClassSession.objects.select_related('batch'), pk=session_id)
        ensure_batch_access(request.user, session.batch)

        return self.success_response(
            data={
                'id': session.id,
                'topic': session.topic,
                'batch_id': session.batch_id,
                'batch_name': session.batch.name,
                'batch_level': session.batch.level,
                'start_time': session.start_time,
                'end_time': session.end_time,
                'status': session.status,
                'instructor_name': session.instructor_name,
                'live_room_name': session.live_room_name,
            },
            message="Session retrieved successfully."
        )


@extend_schema(tags=['Student - Notifications'])
class NotificationViewSet(viewsets.ReadOnlyModelViewSet, StandardResponseMixin):
    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = []

    def get_queryset(self):
        return Notification.objects.filter(user=self.request.user).order_by('-created_at')

    def list(self, request, *args, **kwargs):
        queryset = self.get_queryset()
        return self.success_response(
            data={
                'unread_count': queryset.filter(read=False).count(),
                'notifications': self.get_serializer(queryset, many=True).data,
            },
            message="Notifications retrieved successfully."
        )

    def retrieve(self, request, *args, **kwargs):
        return self.success_response(
            data=self.get_serializer(self.get_object()).data,
            message="Notification retrieved successfully."
        )

    @extend_schema(request=None)
    @action(detail=True, methods=['post'])
    def read(self, request, pk=None):
        notification = self.get_object()
        if not notification.read:
            notification.read = True
            notification.save(update_fields=['read'])
        return self.success_response(
            data=self.get_serializer(notification).data,
            message="Notification marked as read."
        )

    @extend_schema(request=None)
    @action(detail=False, methods=['post'], url_path='read-all')
    def read_all(self, request):
        updated = self.get_queryset().filter(read=False).update(read=True)
        return self.success_response(
            data={'updated': updated},
            message="All notifications marked as read."
        )
