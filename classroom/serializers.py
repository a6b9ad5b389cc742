from rest_framework import serializers

from api.serializers import LowercaseChoiceField
from courses.models import Batch
from student.models import Student
from .models import ClassSession, Attendance


class AttendeeSerializer(serializers.ModelSerializer):
    student_id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(source='student.name', read_only=True)

    class Meta:
        model = Attendance
        fields = ['student_id', 'name', 'status', 'joined_at', 'duration']
        read_only_fields = fields


class ClassSessionSerializer(serializers.ModelSerializer):
    """Admin listing of a session with its attendees"""
    batch_name = serializers.CharField(source='batch.name', read_only=True)
    batch_level = serializers.CharField(source='batch.level', read_only=True)
    attendees = AttendeeSerializer(source='attendances', many=True, read_only=True)
    attendance_count = serializers.SerializerMethodField()

    class Meta:
        model = ClassSession
        fields = [
            'id', 'batch', 'batch_name', 'batch_level', 'topic', 'start_time', 'end_time',
            'status', 'instructor_name', 'live_room_name', 'recording_url', 'notes',
            'attendees', 'attendance_count', 'created_at', 'updated_at'
        ]
        read_only_fields = fields

    def get_attendance_count(self, obj):
        return sum(1 for a in obj.attendances.all() if a.status == 'present')


class ClassSessionCreateSerializer(serializers.ModelSerializer):
    batch = serializers.PrimaryKeyRelatedField(queryset=Batch.objects.all())
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    class Meta:
        model = ClassSession
        fields = ['batch', 'topic', 'start_time', 'end_time', 'instructor_name', 'notes']

    def validate(self, attrs):
        if attrs['end_time'] <= attrs['start_time']:
            raise serializers.ValidationError({"end_time": "End time must be after the start time."})
        return attrs


class ClassSessionUpdateSerializer(serializers.ModelSerializer):
    status = LowercaseChoiceField(choices=ClassSession.STATUS_CHOICES, required=False)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    recording_url = serializers.URLField(required=False, allow_blank=True, allow_null=True)

    class Meta:
        model = ClassSession
        fields = ['topic', 'start_time', 'end_time', 'instructor_name', 'status', 'notes', 'recording_url']

    def validate(self, attrs):
        start = attrs.get('start_time', self.instance.start_time)
        end = attrs.get('end_time', self.instance.end_time)
        if end <= start:
            raise serializers.ValidationError({"end_time": "End time must be after the start time."})
        return attrs


class SessionActionSerializer(serializers.Serializer):
    session_id = serializers.IntegerField()


class AttendanceEntrySerializer(serializers.Serializer):
    student_id = serializers.IntegerField()
    status = LowercaseChoiceField(choices=Attendance.STATUS_CHOICES)


class MarkAttendanceSerializer(serializers.Serializer):
    session_id = serializers.IntegerField()
    attendances = AttendanceEntrySerializer(many=True, allow_empty=False)

    def validate_session_id(self, value):
        try:
            self.context['session'] = ClassSession.objects.get(pk=value)
        except ClassSession.DoesNotExist:
            raise serializers.ValidationError("Class session not found.")
        return value

    def validate_attendances(self, value):
        student_ids = {entry['student_id'] for entry in value}
        students = Student.objects.select_related('user').in_bulk(student_ids)
        missing = sorted(student_ids - set(students))
        if missing:
            raise serializers.ValidationError(f"Unknown student ids: {missing}")
        return [
            {'student': students[entry['student_id']], 'status': entry['status']}
            for entry in value
        ]


class AttendanceRecordSerializer(serializers.ModelSerializer):
    student_id = serializers.IntegerField(read_only=True)
    student_name = serializers.CharField(source='student.name', read_only=True)
    student_email = serializers.CharField(source='student.email', read_only=True)

    class Meta:
        model = Attendance
        fields = ['id', 'student_id', 'student_name', 'student_email', 'status', 'joined_at', 'left_at', 'duration']
        read_only_fields = fields


class CalendarEventSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField()
    attendees = serializers.ListField(child=serializers.EmailField(), required=False, default=list)

    def validate(self, attrs):
        if attrs['end_time'] <= attrs['start_time']:
            raise serializers.ValidationError({"end_time": "End time must be after the start time."})
        return attrs
