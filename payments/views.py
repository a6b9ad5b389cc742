import logging

from rest_framework import viewsets, mixins, status
from drf_spectacular.utils import extend_schema

from api.permissions import IsAdminRole
from api.utils import StandardResponseMixin
from .filters import PaymentFilter
from .models import Payment
from .serializers import PaymentSerializer, PaymentCreateSerializer

logger = logging.getLogger(__name__)


@extend_schema(tags=['Admin - Payments'])
class AdminPaymentViewSet(mixins.ListModelMixin, mixins.CreateModelMixin,
                          viewsets.GenericViewSet, StandardResponseMixin):
    permission_classes = [IsAdminRole]
    filterset_class = PaymentFilter

    def get_queryset(self):
        return Payment.objects.select_related('student__user', 'batch').order_by('-date')

    def get_serializer_class(self):
        if self.action == 'create':
            return PaymentCreateSerializer
        return PaymentSerializer

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        return self.success_response(
            data=PaymentSerializer(queryset, many=True).data,
            message="Payments retrieved successfully."
        )

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payment = serializer.save()
        logger.info(
            f"Admin {request.user.email} recorded payment {payment.id} of {payment.amount} "
            f"for {payment.student.email} (status now {payment.student.payment_status})"
        )
        return self.success_response(
            data=PaymentSerializer(payment).data,
            message="Payment recorded successfully.",
            status_code=status.HTTP_201_CREATED
        )
