from django.urls import path, include
from rest_framework.routers import SimpleRouter

from .views import AdminPaymentViewSet

router = SimpleRouter()
router.register(r'payments', AdminPaymentViewSet, basename='admin-payments')

urlpatterns = [
    path('', include(router.urls)),
]
