from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db import transaction
from rest_framework import serializers

from api.serializers import LowercaseChoiceField
from .models import Student, Notification

User = get_user_model()


class EnrolledBatchSerializer(serializers.Serializer):
    id = serializers.IntegerField(source='batch.id')
    name = serializers.CharField(source='batch.name')
    level = serializers.CharField(source='batch.level')


class AdminStudentSerializer(serializers.ModelSerializer):
    """Read shape used by the admin students pages"""
    user_id = serializers.IntegerField(source='user.id', read_only=True)
    name = serializers.SerializerMethodField()
    email = serializers.EmailField(source='user.email', read_only=True)
    phone = serializers.SerializerMethodField()
    avatar = serializers.SerializerMethodField()
    batches = EnrolledBatchSerializer(source='enrollments', many=True, read_only=True)

    class Meta:
        model = Student
        fields = [
            'id', 'user_id', 'name', 'email', 'phone', 'avatar', 'enrolled_at',
            'payment_status', 'total_paid', 'total_due', 'credit_balance',
            'attendance_rate', 'batches'
        ]
        read_only_fields = fields

    def get_name(self, obj):
        return obj.user.name or "N/A"

    def get_phone(self, obj):
        return obj.phone or "N/A"

    def get_avatar(self, obj):
        return obj.user.avatar or ""


class AdminStudentCreateSerializer(serializers.Serializer):
    email = serializers.EmailField()
    name = serializers.CharField(max_length=255)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    total_due = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, min_value=0)

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("A user with this email already exists.")
        return value

    @transaction.atomic
    def create(self, validated_data):
        # The account has no password until the student signs in through the auth flow
        user = User.objects.create_user(
            username=validated_data['email'],
            email=validated_data['email'],
            password=None,
            name=validated_data['name'],
            role='student',
        )
        total_due = validated_data.get('total_due') or Decimal('0.00')

        student, _ = Student.objects.get_or_create(user=user)
        student.phone = validated_data.get('phone') or None
        student.total_due = total_due
        student.payment_status = 'pending' if total_due > 0 else 'paid'
        student.save()
        return student


class AdminStudentUpdateSerializer(serializers.ModelSerializer):
    name = serializers.CharField(max_length=255, required=False)
    payment_status = LowercaseChoiceField(choices=Student.PAYMENT_STATUS_CHOICES, required=False)
    total_due = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, min_value=0)

    class Meta:
        model = Student
        fields = ['name', 'phone', 'total_due', 'payment_status']

    @transaction.atomic
    def update(self, instance, validated_data):
        name = validated_data.pop('name', None)
        if name:
            instance.user.name = name
            instance.user.save(update_fields=['name', 'updated_at'])
        return super().update(instance, validated_data)


class StudentProfileUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = ['id', 'type', 'title', 'message', 'read', 'action_url', 'created_at']
        read_only_fields = fields
