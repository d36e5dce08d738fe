"""Onboarding (ADMIN/HR) URL Configuration"""

from django.urls import path

from .views import InvitationListView, InviteEmployeeView, PendingApprovalsView, ReviewOnboardingView

urlpatterns = [
    path('invite-employee/', InviteEmployeeView.as_view(), name='admin-invite-employee'),
    path('invitations/', InvitationListView.as_view(), name='admin-invitations'),
    path('pending-approvals/', PendingApprovalsView.as_view(), name='admin-pending-approvals'),
    path('approve-employee/<uuid:pk>/', ReviewOnboardingView.as_view(), name='admin-approve-employee'),
]
