from rest_framework.permissions import AllowAny
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiResponse

from .utils import StandardResponseMixin


class APIRootView(APIView, StandardResponseMixin):
    permission_classes = [AllowAny]

    @extend_schema(
        summary="API Root",
        description="Get information about available API endpoints",
        responses={
            200: OpenApiResponse(description='API endpoint information')
        }
    )
    def get(self, request):
        return self.success_response(
            data={
                'version': '1.0.0',
                'endpoints': {
                    'authentication': '/api/auth/',
                    'user': '/api/user/',
                    'courses': '/api/courses/',
                    'student': '/api/student/',
                    'admin': {
                        'dashboard': '/api/admin/dashboard/',
                        'batches': '/api/admin/batches/',
                        'students': '/api/admin/students/',
                        'classes': '/api/admin/classes/',
                        'attendance': '/api/admin/attendance/',
                        'payments': '/api/admin/payments/',
                    },
                    'livekit': '/api/livekit/',
                    'calendar': '/api/calendar/',
                    'docs': {
                        'swagger': '/api/docs/',
                        'redoc': '/api/redoc/',
                    },
                }
            },
            message="Welcome to EngConnect API"
        )

api_root = APIRootView.as_view()
