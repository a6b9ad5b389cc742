from django.urls import path, include
from rest_framework.routers import SimpleRouter

from .views import AdminBatchViewSet

router = SimpleRouter()
router.register(r'batches', AdminBatchViewSet, basename='admin-batch')

urlpatterns = [
    path('', include(router.urls)),
]
