from decimal import Decimal

from django.db import transaction
from rest_framework import serializers

from api.serializers import LowercaseChoiceField
from courses.models import Batch
from student.models import Student
from .models import Payment


class PaymentSerializer(serializers.ModelSerializer):
    student_name = serializers.CharField(source='student.name', read_only=True)
    student_email = serializers.CharField(source='student.email', read_only=True)
    batch_name = serializers.CharField(source='batch.name', read_only=True, default=None)
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, coerce_to_string=False)

    class Meta:
        model = Payment
        fields = [
            'id', 'student', 'student_name', 'student_email', 'batch', 'batch_name',
            'amount', 'date', 'method', 'status', 'description'
        ]
        read_only_fields = fields


class PaymentCreateSerializer(serializers.ModelSerializer):
    """Record a completed payment and apply it to the student's balance"""
    student = serializers.PrimaryKeyRelatedField(queryset=Student.objects.select_related('user'))
    batch = serializers.PrimaryKeyRelatedField(queryset=Batch.objects.all(), required=False, allow_null=True)
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.01"))
    method = LowercaseChoiceField(choices=Payment.METHOD_CHOICES)

    class Meta:
        model = Payment
        fields = ['student', 'batch', 'amount', 'method', 'description', 'date']
        extra_kwargs = {'date': {'required': False}}

    @transaction.atomic
    def create(self, validated_data):
        payment = Payment.objects.create(status='completed', **validated_data)
        payment.student.apply_payment(payment.amount)
        return payment
