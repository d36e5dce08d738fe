"""
Authentication Views
"""

from drf_spectacular.utils import extend_schema
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView

from apps.core.response import success_response
from apps.onboarding.services import OnboardingService

from .serializers import FirstTimeLoginSerializer, LoginSerializer, UserSerializer
from .services import AuthService
from .throttles import FirstTimeLoginRateThrottle, LoginRateThrottle


# =====================================================
# LOGIN
# =====================================================

class LoginView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]
    throttle_classes = [LoginRateThrottle]

    @extend_schema(request=LoginSerializer)
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user, token = AuthService.login(
            email=serializer.validated_data['email'],
            password=serializer.validated_data['password'],
            request=request,
        )
        return success_response(
            {
                'token': token,
                'user': UserSerializer(user).data,
                'is_first_login': user.is_first_login,
            },
            message='Login successful',
        )


class FirstTimeLoginView(APIView):
    """Swap the temporary password for a permanent one and open onboarding."""

    authentication_classes = []
    permission_classes = [AllowAny]
    throttle_classes = [FirstTimeLoginRateThrottle]

    @extend_schema(request=FirstTimeLoginSerializer)
    def post(self, request):
        serializer = FirstTimeLoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user, token = OnboardingService.complete_first_login(
            email=serializer.validated_data['email'],
            temp_password=serializer.validated_data['temp_password'],
            new_password=serializer.validated_data['new_password'],
            request=request,
        )
        return success_response(
            {'token': token, 'user': UserSerializer(user).data},
            message='Password changed successfully',
        )


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses=UserSerializer)
    def get(self, request):
        return success_response(UserSerializer(request.user).data)
