from django.urls import path

from .views import LiveKitRoomView, LiveKitTokenView

urlpatterns = [
    path('room/', LiveKitRoomView.as_view(), name='livekit-room'),
    path('token/', LiveKitTokenView.as_view(), name='livekit-token'),
]
