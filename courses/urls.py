from django.urls import path, include
from rest_framework.routers import SimpleRouter

from .views import CourseCatalogViewSet

router = SimpleRouter()
router.register(r'', CourseCatalogViewSet, basename='course')

urlpatterns = [
    path('', include(router.urls)),
]
