import logging

from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.views import TokenObtainPairView
from django.contrib.auth import get_user_model
from drf_spectacular.utils import extend_schema, OpenApiResponse

from .serializers import (
    UserRegistrationSerializer, UserSerializer,
    LoginSerializer, LoginResponseSerializer, LogoutSerializer
)
from api.utils import StandardResponseMixin

User = get_user_model()
logger = logging.getLogger(__name__)


def issue_tokens(user):
    refresh = RefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


class CustomTokenObtainPairView(TokenObtainPairView, StandardResponseMixin):
    @extend_schema(
        tags=['Authentication'],
        request=LoginSerializer,
        responses={
            200: LoginResponseSerializer,
            400: OpenApiResponse(description='Invalid credentials')
        },
        summary="User Login",
        description="Login with email and password to get JWT tokens and the user's role"
    )
    def post(self, request, *args, **kwargs):
        serializer = LoginSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data['user']

        response_data = issue_tokens(user)
        response_data['user'] = UserSerializer(user).data

        logger.info(f"User logged in: {user.email} (role={user.role})")
        return self.success_response(
            data=response_data,
            message="Login successful."
        )


class UserRegistrationView(generics.CreateAPIView, StandardResponseMixin):
    queryset = User.objects.all()
    serializer_class = UserRegistrationSerializer
    permission_classes = [AllowAny]

    @extend_schema(tags=['Authentication'])
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        data = issue_tokens(user)
        data['user'] = UserSerializer(user).data
        return self.success_response(
            data=data,
            message="Registration successful.",
            status_code=status.HTTP_201_CREATED
        )


class CurrentUserView(generics.RetrieveAPIView, StandardResponseMixin):
    """Current signed-in user"""
    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=['Authentication'])
    def get(self, request, *args, **kwargs):
        return self.retrieve(request, *args, **kwargs)

    def get_object(self):
        return self.request.user

    def retrieve(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_object())
        return self.success_response(
            data=serializer.data,
            message="User retrieved successfully."
        )


class UserLogoutView(APIView, StandardResponseMixin):
    """Logout endpoint; blacklists the refresh token"""
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=['Authentication'],
        request=LogoutSerializer,
        responses={
            200: OpenApiResponse(description='Logout successful'),
            400: OpenApiResponse(description='Invalid refresh token')
        },
        summary="User Logout",
        description="Blacklist the given refresh token"
    )
    def post(self, request):
        serializer = LogoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            RefreshToken(serializer.validated_data['refresh']).blacklist()
        except TokenError as e:
            return self.error_response(
                message=f"Invalid refresh token: {e}",
                status_code=status.HTTP_400_BAD_REQUEST
            )
        return self.success_response(message="Logout successful.")
