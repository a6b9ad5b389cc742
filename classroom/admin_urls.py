from django.urls import path, include
from rest_framework.routers import SimpleRouter

from .views import AdminClassSessionViewSet, AttendanceView

router = SimpleRouter()
router.register(r'classes', AdminClassSessionViewSet, basename='admin-classes')

urlpatterns = [
    path('attendance/', AttendanceView.as_view(), name='admin-attendance'),
    path('', include(router.urls)),
]
