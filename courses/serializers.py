from rest_framework import serializers

from api.serializers import LowercaseChoiceField
from .models import Batch, BatchEnrollment


def enrolled_count_of(batch):
    # Querysets annotate `num_enrolled`; single objects fall back to a count query
    count = getattr(batch, 'num_enrolled', None)
    return batch.enrolled_count if count is None else count


class BatchCatalogSerializer(serializers.ModelSerializer):
    """Public catalog listing of a batch"""
    enrolled_count = serializers.SerializerMethodField()
    seats_left = serializers.SerializerMethodField()

    class Meta:
        model = Batch
        fields = [
            'id', 'name', 'level', 'schedule_days', 'schedule_time', 'capacity',
            'enrolled_count', 'seats_left', 'instructor_name', 'start_date',
            'end_date', 'description', 'price', 'cover_image'
        ]

    def get_enrolled_count(self, obj):
        return enrolled_count_of(obj)

    def get_seats_left(self, obj):
        return max(obj.capacity - enrolled_count_of(obj), 0)


class BatchDetailSerializer(BatchCatalogSerializer):
    is_enrolled = serializers.SerializerMethodField()

    class Meta(BatchCatalogSerializer.Meta):
        fields = BatchCatalogSerializer.Meta.fields + ['is_enrolled']

    def get_is_enrolled(self, obj):
        request = self.context.get('request')
        if not request or not request.user.is_authenticated:
            return False
        return BatchEnrollment.objects.filter(batch=obj, student__user=request.user).exists()


class BatchUpcomingSessionSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    topic = serializers.CharField()
    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField()
    status = serializers.CharField()
    instructor_name = serializers.CharField()
    live_room_name = serializers.CharField(allow_null=True)


class AdminBatchSerializer(serializers.ModelSerializer):
    """Admin CRUD for batches, with enrolled students and upcoming sessions"""
    level = LowercaseChoiceField(choices=Batch.LEVEL_CHOICES)
    schedule_days = serializers.ListField(child=serializers.CharField(), allow_empty=False)
    capacity = serializers.IntegerField(min_value=1)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, min_value=0)
    enrolled_count = serializers.SerializerMethodField()
    students = serializers.SerializerMethodField()
    upcoming_sessions = serializers.SerializerMethodField()

    class Meta:
        model = Batch
        fields = [
            'id', 'name', 'level', 'schedule_days', 'schedule_time', 'capacity',
            'enrolled_count', 'instructor_name', 'start_date', 'end_date',
            'description', 'price', 'cover_image', 'students', 'upcoming_sessions',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate(self, attrs):
        start = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        end = attrs.get('end_date', getattr(self.instance, 'end_date', None))
        if start and end and end < start:
            raise serializers.ValidationError({"end_date": "End date must be after the start date."})
        return attrs

    def get_enrolled_count(self, obj):
        return enrolled_count_of(obj)

    def get_students(self, obj):
        return [
            {
                'id': enrollment.student.id,
                'name': enrollment.student.name,
                'email': enrollment.student.email,
            }
            for enrollment in obj.enrollments.all()
        ]

    def get_upcoming_sessions(self, obj):
        return BatchUpcomingSessionSerializer(obj.upcoming_sessions(limit=3), many=True).data


class BatchEnrollmentSerializer(serializers.ModelSerializer):
    batch_name = serializers.CharField(source='batch.name', read_only=True)

    class Meta:
        model = BatchEnrollment
        fields = ['id', 'student', 'batch', 'batch_name', 'enrolled_at']
        read_only_fields = fields
