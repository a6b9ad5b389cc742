from django.urls import path, include
from rest_framework.routers import SimpleRouter

from admin_dashboard.views import StudentDashboardView
from .views import (
    StudentProfileView, BatchSessionsView, SessionDetailView, NotificationViewSet
)

router = SimpleRouter()
router.register(r'notifications', NotificationViewSet, basename='student-notification')

urlpatterns = [
    path('dashboard/', StudentDashboardView.as_view(), name='student-dashboard'),
    path('profile/', StudentProfileView.as_view(), name='student-profile'),
    path('batches/<int:batch_id>/sessions/', BatchSessionsView.as_view(), name='student-batch-sessions'),
    path('sessions/<int:session_id>/', SessionDetailView.as_view(), name='student-session-detail'),

    path('', include(router.urls)),
]
