from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

from authentication.views import CurrentUserView
from classroom.views import CalendarEventView


urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("api.urls")),
    path("api/auth/", include("authentication.urls")),  # Login, register, tokens
    path("api/user/", CurrentUserView.as_view(), name="current-user"),
    path("api/courses/", include("courses.urls")),  # Public catalog + enrollment
    path("api/student/", include("student.urls")),  # Student self-service
    path("api/admin/dashboard/", include("admin_dashboard.urls")),  # Admin statistics
    path("api/admin/", include("courses.admin_urls")),  # Batches
    path("api/admin/", include("student.admin_urls")),  # Students
    path("api/admin/", include("classroom.admin_urls")),  # Classes + attendance
    path("api/admin/", include("payments.urls")),  # Payments
    path("api/livekit/", include("classroom.livekit_urls")),  # Video rooms
    path("api/calendar/", CalendarEventView.as_view(), name="calendar-event"),
]


# Serve static files in development
# Note: In production, use a proper web server (nginx/apache) to serve these files
if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
