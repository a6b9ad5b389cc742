from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated, AllowAny
from django.db.models import Count, Prefetch
from drf_spectacular.utils import extend_schema, OpenApiParameter

from api.permissions import IsAdminRole
from api.utils import StandardResponseMixin, CustomPagination, normalize_choice
from .models import Batch, BatchEnrollment
from .serializers import (
    BatchCatalogSerializer, BatchDetailSerializer,
    AdminBatchSerializer, BatchEnrollmentSerializer
)
from .services import enroll_in_batch


@extend_schema(tags=['Courses'])
class CourseCatalogViewSet(viewsets.ReadOnlyModelViewSet, StandardResponseMixin):
    """Public course catalog; signed-in users can enroll"""
    permission_classes = [AllowAny]
    pagination_class = CustomPagination
    filter_backends = []

    def get_queryset(self):
        queryset = Batch.objects.annotate(num_enrolled=Count('enrollments'))

        query = self.request.query_params.get('q', '').strip()
        if query:
            queryset = queryset.filter(name__icontains=query)

        level = normalize_choice(self.request.query_params.get('level'))
        if level:
            queryset = queryset.filter(level=level)

        return queryset.order_by('start_date')

    def get_serializer_class(self):
        if self.action == 'list':
            return BatchCatalogSerializer
        return BatchDetailSerializer

    @extend_schema(parameters=[
        OpenApiParameter(name='q', type=str, description='Search in batch name'),
        OpenApiParameter(name='level', type=str, enum=['beginner', 'intermediate', 'advanced']),
    ])
    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        if page is not None:
            serializer = self.get_serializer(page, many=True)
            return self.get_paginated_response(serializer.data)
        serializer = self.get_serializer(queryset, many=True)
        return self.success_response(
            data=serializer.data,
            message="Courses retrieved successfully."
        )

    def retrieve(self, request, *args, **kwargs):
        instance = self.get_object()
        serializer = self.get_serializer(instance)
        return self.success_response(
            data=serializer.data,
            message="Course retrieved successfully."
        )

    @extend_schema(request=None, responses={201: BatchEnrollmentSerializer})
    @action(detail=True, methods=['post'], permission_classes=[IsAuthenticated])
    def enroll(self, request, pk=None):
        batch = self.get_object()
        enrollment = enroll_in_batch(request.user, batch)
        data = BatchEnrollmentSerializer(enrollment).data
        data['redirect_url'] = '/student'
        return self.success_response(
            data=data,
            message=f"Enrolled in {batch.name} successfully.",
            status_code=status.HTTP_201_CREATED
        )


@extend_schema(tags=['Admin - Batches'])
class AdminBatchViewSet(viewsets.ModelViewSet, StandardResponseMixin):
    """Admin CRUD for batches"""
    serializer_class = AdminBatchSerializer
    permission_classes = [IsAdminRole]
    filter_backends = []

    def get_queryset(self):
        return (
            Batch.objects
            .annotate(num_enrolled=Count('enrollments'))
            .prefetch_related(
                Prefetch(
                    'enrollments',
                    queryset=BatchEnrollment.objects.select_related('student__user')
                )
            )
            .order_by('-start_date')
        )

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return self.success_response(
            data=serializer.data,
            message="Batches retrieved successfully."
        )

    def retrieve(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_object())
        return self.success_response(
            data=serializer.data,
            message="Batch retrieved successfully."
        )

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.perform_create(serializer)
        return self.success_response(
            data=serializer.data,
            message="Batch created successfully.",
            status_code=status.HTTP_201_CREATED
        )

    def update(self, request, *args, **kwargs):
        # PUT and PATCH both update only the fields sent
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)
        return self.success_response(
            data=serializer.data,
            message="Batch updated successfully."
        )

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        self.perform_destroy(instance)
        return self.success_response(
            message="Batch deleted successfully."
        )
