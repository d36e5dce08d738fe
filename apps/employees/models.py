"""
Employee Models - Profile and document intake
"""

import os
import secrets

from django.conf import settings
from django.db import models
from django.utils import timezone

from apps.core.models import UUIDModel


def generate_employee_id():
    """``EMP`` + timestamp + random suffix, e.g. ``EMP241018093512417``."""
    return f"EMP{timezone.now().strftime('%y%m%d%H%M%S')}{secrets.randbelow(1000):03d}"


def document_upload_to(instance, filename):
    """Stored under a collision-free name; the original name lives on the row."""
    _, ext = os.path.splitext(filename)
    stamp = timezone.now().strftime('%Y%m%d%H%M%S')
    return f"documents/{stamp}-{secrets.token_hex(8)}{ext.lower()}"


class EmployeeProfile(UUIDModel):
    """
    Personal and employment details for a user.
    Employment fields are maintained by HR, never by the employee.
    """

    GENDER_CHOICES = [
        ('MALE', 'Male'),
        ('FEMALE', 'Female'),
        ('OTHER', 'Other'),
        ('PREFER_NOT_TO_SAY', 'Prefer not to say'),
    ]

    MARITAL_STATUS_CHOICES = [
        ('SINGLE', 'Single'),
        ('MARRIED', 'Married'),
        ('DIVORCED', 'Divorced'),
        ('WIDOWED', 'Widowed'),
        ('OTHER', 'Other'),
    ]

    CONTRACT_TYPE_CHOICES = [
        ('FULL_TIME', 'Full Time'),
        ('PART_TIME', 'Part Time'),
        ('CONTRACT', 'Contract'),
        ('INTERN', 'Intern'),
    ]

    WORK_LOCATION_CHOICES = [
        ('ONSITE', 'Onsite'),
        ('REMOTE', 'Remote'),
        ('HYBRID', 'Hybrid'),
    ]

    # Fields the employee edits through complete-profile
    EDITABLE_FIELDS = (
        'first_name', 'middle_name', 'last_name',
        'date_of_birth', 'gender', 'marital_status', 'nationality',
        'phone', 'alternate_phone', 'personal_email',
        'current_address', 'permanent_address',
        'emergency_contact', 'bank_details',
    )

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='profile'
    )
    employee_id = models.CharField(max_length=50, unique=True, default=generate_employee_id)

    # Personal Information
    first_name = models.CharField(max_length=100, blank=True)
    middle_name = models.CharField(max_length=100, blank=True)
    last_name = models.CharField(max_length=100, blank=True)
    date_of_birth = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=20, choices=GENDER_CHOICES, blank=True)
    marital_status = models.CharField(max_length=20, choices=MARITAL_STATUS_CHOICES, blank=True)
    nationality = models.CharField(max_length=100, blank=True)

    # Contact
    phone = models.CharField(max_length=20, blank=True)
    alternate_phone = models.CharField(max_length=20, blank=True)
    personal_email = models.EmailField(blank=True)

    # Structured blobs
    current_address = models.JSONField(default=dict, blank=True)
    permanent_address = models.JSONField(default=dict, blank=True)
    emergency_contact = models.JSONField(default=dict, blank=True)
    bank_details = models.JSONField(default=dict, blank=True)  # account number stored encrypted

    # Employment (HR-managed)
    department = models.CharField(max_length=100, blank=True)
    position = models.CharField(max_length=100, blank=True)
    join_date = models.DateField(null=True, blank=True)
    contract_type = models.CharField(max_length=20, choices=CONTRACT_TYPE_CHOICES, blank=True)
    work_location = models.CharField(max_length=20, choices=WORK_LOCATION_CHOICES, blank=True)

    class Meta:
        ordering = ['employee_id']

    def __str__(self):
        return f"{self.employee_id} - {self.full_name or self.user.email}"

    @property
    def full_name(self):
        parts = [self.first_name, self.middle_name, self.last_name]
        return ' '.join(p for p in parts if p)

    @property
    def is_complete(self):
        return bool(self.first_name.strip() and self.last_name.strip())


class Document(UUIDModel):
    """An uploaded file plus the metadata captured at upload time."""

    TYPE_ID_DOCUMENT = 'ID_DOCUMENT'
    TYPE_RESUME = 'RESUME'
    TYPE_CERTIFICATE = 'CERTIFICATE'
    TYPE_CONTRACT = 'CONTRACT'
    TYPE_BANK_STATEMENT = 'BANK_STATEMENT'
    TYPE_OTHER = 'OTHER'

    TYPE_CHOICES = [
        (TYPE_ID_DOCUMENT, 'ID Document'),
        (TYPE_RESUME, 'Resume'),
        (TYPE_CERTIFICATE, 'Certificate'),
        (TYPE_CONTRACT, 'Contract'),
        (TYPE_BANK_STATEMENT, 'Bank Statement'),
        (TYPE_OTHER, 'Other'),
    ]

    # Must be on file before onboarding can be submitted
    REQUIRED_TYPES = (TYPE_ID_DOCUMENT, TYPE_RESUME)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='documents'
    )
    document_type = models.CharField(max_length=20, choices=TYPE_CHOICES, db_index=True)
    file = models.FileField(upload_to=document_upload_to, max_length=255)
    file_name = models.CharField(max_length=255)
    file_size = models.PositiveIntegerField(default=0)
    mime_type = models.CharField(max_length=100)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'document_type'], name='employees_d_user_id_5b7c1e_idx'),
        ]

    def __str__(self):
        return f"{self.get_document_type_display()}: {self.file_name}"

    @property
    def uploaded_at(self):
        return self.created_at

    @classmethod
    def valid_types(cls):
        return {value for value, _ in cls.TYPE_CHOICES}
