import logging

from django.db.models import Prefetch
from django.shortcuts import get_object_or_404
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiParameter

from api.permissions import IsAdminRole, is_admin_user
from api.utils import StandardResponseMixin
from . import livekit
from .calendar import create_calendar_event
from .filters import ClassSessionFilter
from .models import ClassSession, Attendance
from .serializers import (
    ClassSessionSerializer, ClassSessionCreateSerializer, ClassSessionUpdateSerializer,
    SessionActionSerializer, MarkAttendanceSerializer, AttendanceRecordSerializer,
    CalendarEventSerializer
)
from .services import (
    schedule_session, update_session, start_live_session, end_live_session, mark_attendance
)

logger = logging.getLogger(__name__)


def _session_for_action(request):
    serializer = SessionActionSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    return get_object_or_404(
        ClassSession.objects.select_related('batch'),
        pk=serializer.validated_data['session_id']
    )


def _room_payload(room):
    return {
        'name': room.name,
        'sid': room.sid,
        'max_participants': room.max_participants,
    }


@extend_schema(tags=['Admin - Classes'])
class AdminClassSessionViewSet(viewsets.ModelViewSet, StandardResponseMixin):
    """Schedule, edit and run class sessions"""
    permission_classes = [IsAdminRole]
    filterset_class = ClassSessionFilter
    http_method_names = ['get', 'post', 'put', 'patch', 'head', 'options']

    def get_queryset(self):
        return (
            ClassSession.objects
            .select_related('batch')
            .prefetch_related(
                Prefetch('attendances', queryset=Attendance.objects.select_related('student__user'))
            )
            .order_by('-start_time')
        )

    def get_serializer_class(self):
        if self.action == 'create':
            return ClassSessionCreateSerializer
        if self.action in ['update', 'partial_update']:
            return ClassSessionUpdateSerializer
        if self.action in ['start_live', 'end_live']:
            return SessionActionSerializer
        return ClassSessionSerializer

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        serializer = ClassSessionSerializer(queryset, many=True)
        return self.success_response(
            data=serializer.data,
            message="Class sessions retrieved successfully."
        )

    def retrieve(self, request, *args, **kwargs):
        return self.success_response(
            data=ClassSessionSerializer(self.get_object()).data,
            message="Class session retrieved successfully."
        )

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        session = schedule_session(serializer)
        return self.success_response(
            data=ClassSessionSerializer(session).data,
            message="Class session scheduled successfully.",
            status_code=status.HTTP_201_CREATED
        )

    def update(self, request, *args, **kwargs):
        # PUT and PATCH both update only the fields sent
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        session = update_session(serializer)
        return self.success_response(
            data=ClassSessionSerializer(self.get_queryset().get(pk=session.pk)).data,
            message="Class session updated successfully."
        )

    @action(detail=False, methods=['post'], url_path='start-live')
    def start_live(self, request):
        session = _session_for_action(request)
        room = start_live_session(session)
        return self.success_response(
            data={'session_id': session.id, 'room': _room_payload(room)},
            message="Live session started."
        )

    @action(detail=False, methods=['post'], url_path='end-live')
    def end_live(self, request):
        session = _session_for_action(request)
        end_live_session(session)
        return self.success_response(
            data={'session_id': session.id, 'status': session.status},
            message="Live session ended."
        )


class AttendanceView(APIView, StandardResponseMixin):
    permission_classes = [IsAdminRole]

    @extend_schema(
        tags=['Admin - Attendance'],
        parameters=[OpenApiParameter(name='session_id', type=int, required=True)],
        responses={200: AttendanceRecordSerializer(many=True)}
    )
    def get(self, request):
        session_id = request.query_params.get('session_id')
        if not session_id or not session_id.isdigit():
            return self.error_response(message="Session ID is required.")

        records = (
            Attendance.objects
            .filter(session_id=int(session_id))
            .select_related('student__user')
            .order_by('student__user__name')
        )
        return self.success_response(
            data=AttendanceRecordSerializer(records, many=True).data,
            message="Attendance retrieved successfully."
        )

    @extend_schema(tags=['Admin - Attendance'], request=MarkAttendanceSerializer)
    def post(self, request):
        serializer = MarkAttendanceSerializer(data=request.data, context={})
        serializer.is_valid(raise_exception=True)

        session = serializer.context['session']
        marked = mark_attendance(session, serializer.validated_data['attendances'])
        logger.info(f"Admin {request.user.email} marked {len(marked)} attendance records for session {session.id}")

        return self.success_response(
            data={'session_id': session.id, 'marked_count': len(marked)},
            message="Attendance marked successfully."
        )


class LiveKitRoomView(APIView, StandardResponseMixin):
    permission_classes = [IsAdminRole]

    @extend_schema(tags=['LiveKit'], request=SessionActionSerializer)
    def post(self, request):
        session = _session_for_action(request)
        room = start_live_session(session)
        return self.success_response(
            data={'room': _room_payload(room)},
            message="Room created successfully."
        )

    @extend_schema(tags=['LiveKit'], parameters=[OpenApiParameter(name='room_name', type=str, required=True)])
    def delete(self, request):
        room_name = request.query_params.get('room_name', '').strip()
        if not room_name:
            return self.error_response(message="Room name is required.")

        session = get_object_or_404(ClassSession, live_room_name=room_name)
        end_live_session(session)
        return self.success_response(message="Room deleted successfully.")


class LiveKitTokenView(APIView, StandardResponseMixin):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=['LiveKit'], parameters=[OpenApiParameter(name='room', type=str, required=True)])
    def get(self, request):
        room_name = request.query_params.get('room', '').strip()
        user = request.user
        is_admin = is_admin_user(user)
        logger.info(f"Token request - Room: {room_name}, User: {user.email}, IsAdmin: {is_admin}")

        if not room_name:
            return self.error_response(message="Missing room name.")

        try:
            token = livekit.mint_token(room_name, identity=user.email, name=user.display_name, is_admin=is_admin)
        except livekit.LiveKitNotConfigured as exc:
            logger.error(f"Cannot mint LiveKit token: {exc}")
            return self.error_response(
                message="Server misconfigured.",
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        return self.success_response(
            data={'token': token, 'server_url': livekit.server_url()},
            message="Token generated successfully."
        )


class CalendarEventView(APIView, StandardResponseMixin):
    permission_classes = [IsAdminRole]

    @extend_schema(tags=['Calendar'], request=CalendarEventSerializer)
    def post(self, request):
        serializer = CalendarEventSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        event = create_calendar_event(
            title=data['title'],
            description=data['description'],
            start_time=data['start_time'],
            end_time=data['end_time'],
            attendees=data['attendees'],
        )
        return self.success_response(
            data=event,
            message="Event created (mocked)." if event["mocked"] else "Event created successfully."
        )
