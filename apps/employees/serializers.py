"""Employee Serializers"""

from django.urls import reverse
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema_field
from rest_framework import serializers

from .models import Document, EmployeeProfile


# ============================================================================
# PROFILE INPUT
# ============================================================================

class AddressSerializer(serializers.Serializer):
    street = serializers.CharField(max_length=255)
    city = serializers.CharField(max_length=100)
    state = serializers.CharField(max_length=100)
    zip_code = serializers.CharField(max_length=20)
    country = serializers.CharField(max_length=100)


class EmergencyContactSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150)
    relationship = serializers.CharField(max_length=50)
    phone = serializers.CharField(min_length=10, max_length=20)
    email = serializers.EmailField(required=False, allow_blank=True)


class BankDetailsSerializer(serializers.Serializer):
    bank_name = serializers.CharField(max_length=150)
    account_number = serializers.CharField(max_length=34)
    ifsc_code = serializers.CharField(max_length=20)


class ProfileUpdateSerializer(serializers.Serializer):
    """Payload for complete-profile; employment fields are not accepted."""

    first_name = serializers.CharField(max_length=100)
    middle_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    last_name = serializers.CharField(max_length=100)
    date_of_birth = serializers.DateField()
    gender = serializers.ChoiceField(choices=EmployeeProfile.GENDER_CHOICES)
    marital_status = serializers.ChoiceField(choices=EmployeeProfile.MARITAL_STATUS_CHOICES)
    nationality = serializers.CharField(max_length=100)
    phone = serializers.CharField(min_length=10, max_length=20)
    alternate_phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    personal_email = serializers.EmailField(required=False, allow_blank=True)

    current_address = AddressSerializer()
    permanent_address = AddressSerializer()
    emergency_contact = EmergencyContactSerializer()
    bank_details = BankDetailsSerializer()


# ============================================================================
# PROFILE OUTPUT
# ============================================================================

class EmployeeProfileSerializer(serializers.ModelSerializer):
    """Profile as returned to clients; the account number is masked."""

    full_name = serializers.CharField(read_only=True)
    bank_details = serializers.SerializerMethodField()

    class Meta:
        model = EmployeeProfile
        fields = [
            'id', 'employee_id', 'full_name',
            'first_name', 'middle_name', 'last_name',
            'date_of_birth', 'gender', 'marital_status', 'nationality',
            'phone', 'alternate_phone', 'personal_email',
            'current_address', 'permanent_address', 'emergency_contact', 'bank_details',
            'department', 'position', 'join_date', 'contract_type', 'work_location',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields

    @extend_schema_field(OpenApiTypes.OBJECT)
    def get_bank_details(self, obj):
        details = obj.bank_details or {}
        if not details:
            return {}
        return {
            'bank_name': details.get('bank_name', ''),
            'account_number': f"****{details.get('account_number_last4', '')}",
            'ifsc_code': details.get('ifsc_code', ''),
        }


# ============================================================================
# DOCUMENTS
# ============================================================================

class DocumentSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source='document_type', read_only=True)
    uploaded_at = serializers.DateTimeField(read_only=True)
    download_url = serializers.SerializerMethodField()

    class Meta:
        model = Document
        fields = ['id', 'type', 'file_name', 'file_size', 'mime_type', 'uploaded_at', 'download_url']
        read_only_fields = fields

    @extend_schema_field(OpenApiTypes.URI)
    def get_download_url(self, obj):
        path = reverse('employee-document-download', kwargs={'pk': obj.pk})
        request = self.context.get('request')
        return request.build_absolute_uri(path) if request else path


class DocumentUploadSerializer(serializers.Serializer):
    """Multipart form: ``document`` (file) and ``type``."""

    document = serializers.FileField()
    type = serializers.CharField(max_length=20)
