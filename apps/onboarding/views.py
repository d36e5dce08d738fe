"""Onboarding Views - ADMIN/HR endpoints"""

from django.conf import settings
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema
from rest_framework import generics
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from apps.authentication.permissions import IsAdminOrHR
from apps.core.response import created_response, success_response

from .filters import InvitationFilter
from .serializers import (
    EmployeeOnboardingSerializer,
    InvitationSerializer,
    InviteEmployeeSerializer,
    PendingApprovalSerializer,
    ReviewOnboardingSerializer,
    UserSummarySerializer,
)
from .services import InvitationService, OnboardingService


class InviteEmployeeView(APIView):
    permission_classes = [IsAuthenticated, IsAdminOrHR]

    @extend_schema(request=InviteEmployeeSerializer)
    def post(self, request):
        serializer = InviteEmployeeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        invitation, temp_password = InvitationService.invite(
            email=serializer.validated_data['email'],
            name=serializer.validated_data['name'],
            invited_by=request.user,
            request=request,
        )

        data = {
            'invitation': InvitationSerializer(invitation).data,
            'user': UserSummarySerializer(invitation.user).data,
        }
        if settings.INVITATION_RETURN_TEMP_PASSWORD:
            data['temp_password'] = temp_password
        return created_response(data, message='Employee invitation sent successfully')


class InvitationListView(generics.ListAPIView):
    permission_classes = [IsAuthenticated, IsAdminOrHR]
    serializer_class = InvitationSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = InvitationFilter

    def get_queryset(self):
        return InvitationService.list_invitations()


class PendingApprovalsView(generics.ListAPIView):
    permission_classes = [IsAuthenticated, IsAdminOrHR]
    serializer_class = PendingApprovalSerializer

    def get_queryset(self):
        return OnboardingService.pending_approvals()


class ReviewOnboardingView(APIView):
    """Approve or reject a submitted onboarding."""

    permission_classes = [IsAuthenticated, IsAdminOrHR]

    @extend_schema(request=ReviewOnboardingSerializer, responses=EmployeeOnboardingSerializer)
    def put(self, request, pk):
        serializer = ReviewOnboardingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        approved = serializer.validated_data['approved']
        onboarding = OnboardingService.review(
            onboarding_id=pk,
            approved=approved,
            reviewer=request.user,
            notes=serializer.validated_data.get('notes'),
            rejection_reason=serializer.validated_data.get('rejection_reason'),
            request=request,
        )
        message = 'Employee approved successfully' if approved else 'Employee rejected successfully'
        return success_response(EmployeeOnboardingSerializer(onboarding).data, message=message)
