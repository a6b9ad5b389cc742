from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated
from rest_framework import status
from drf_spectacular.utils import extend_schema

from api.permissions import IsAdminRole
from api.utils import StandardResponseMixin
from student.models import Student
from .services import get_dashboard_data
from .services_student import get_student_dashboard


class AdminDashboardView(APIView, StandardResponseMixin):
    permission_classes = [IsAdminRole]

    @extend_schema(tags=['Admin - Dashboard'])
    def get(self, request):
        data = get_dashboard_data()
        return self.success_response(
            data=data,
            message="Dashboard data retrieved successfully."
        )


class StudentDashboardView(APIView, StandardResponseMixin):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=['Student'])
    def get(self, request):
        try:
            student = Student.objects.select_related('user').get(user=request.user)
        except Student.DoesNotExist:
            return self.error_response(
                message="Student profile not found.",
                status_code=status.HTTP_404_NOT_FOUND
            )

        data = get_student_dashboard(student)
        return self.success_response(
            data=data,
            message="Student dashboard fetched successfully."
        )
