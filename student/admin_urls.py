from django.urls import path, include
from rest_framework.routers import SimpleRouter

from .views import AdminStudentViewSet

router = SimpleRouter()
router.register(r'students', AdminStudentViewSet, basename='admin-student')

urlpatterns = [
    path('', include(router.urls)),
]
