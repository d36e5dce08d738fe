"""Onboarding Serializers"""

from rest_framework import serializers

from apps.employees.serializers import DocumentSerializer, EmployeeProfileSerializer

from .models import EmployeeOnboarding, Invitation


class InviteEmployeeSerializer(serializers.Serializer):
    email = serializers.EmailField()
    name = serializers.CharField(min_length=2, max_length=150)


class ReviewOnboardingSerializer(serializers.Serializer):
    approved = serializers.BooleanField()
    notes = serializers.CharField(required=False, allow_blank=True)
    rejection_reason = serializers.CharField(required=False, allow_blank=True)


class UserSummarySerializer(serializers.Serializer):
    id = serializers.UUIDField()
    email = serializers.EmailField()
    name = serializers.CharField()
    role = serializers.CharField()
    is_active = serializers.BooleanField()
    is_first_login = serializers.BooleanField()


class InvitationSerializer(serializers.ModelSerializer):
    """Invitation as shown to ADMIN/HR; the password hash is never exposed."""

    status_display = serializers.CharField(source='get_status_display', read_only=True)
    is_expired = serializers.BooleanField(read_only=True)
    invited_by = UserSummarySerializer(read_only=True)
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = Invitation
        fields = [
            'id', 'email', 'status', 'status_display', 'is_expired',
            'sent_at', 'expires_at', 'completed_at',
            'invited_by', 'user', 'created_at',
        ]
        read_only_fields = fields


class EmployeeOnboardingSerializer(serializers.ModelSerializer):
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = EmployeeOnboarding
        fields = [
            'id', 'status', 'status_display',
            'submitted_at', 'approved_at', 'rejected_at',
            'reviewed_by', 'notes', 'rejection_reason',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class PendingApprovalSerializer(EmployeeOnboardingSerializer):
    """A submitted onboarding with everything a reviewer needs."""

    user = UserSummarySerializer(read_only=True)
    profile = serializers.SerializerMethodField()
    documents = serializers.SerializerMethodField()

    class Meta(EmployeeOnboardingSerializer.Meta):
        fields = EmployeeOnboardingSerializer.Meta.fields + ['user', 'profile', 'documents']
        read_only_fields = fields

    def get_profile(self, obj):
        profile = getattr(obj.user, 'profile', None)
        return EmployeeProfileSerializer(profile).data if profile else None

    def get_documents(self, obj):
        return DocumentSerializer(obj.user.documents.all(), many=True, context=self.context).data
