"""
Onboarding Models - Invitations and the onboarding review lifecycle
"""

from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone

from apps.core.models import UUIDModel


class Invitation(UUIDModel):
    """
    A time-limited invitation carrying a hashed temporary password.
    At most one PENDING invitation may exist per email.
    """
    STATUS_PENDING = 'PENDING'
    STATUS_COMPLETED = 'COMPLETED'
    STATUS_EXPIRED = 'EXPIRED'

    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_EXPIRED, 'Expired'),
    ]

    email = models.EmailField(db_index=True)
    temp_password = models.CharField(max_length=128, help_text="Hashed temporary password")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)

    sent_at = models.DateTimeField(default=timezone.now)
    expires_at = models.DateTimeField()
    completed_at = models.DateTimeField(null=True, blank=True)

    invited_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='sent_invitations'
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='invitations'
    )

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['email'],
                condition=Q(status='PENDING'),
                name='unique_pending_invitation_per_email',
            ),
        ]

    def __str__(self):
        return f"Invitation: {self.email} ({self.status})"

    @property
    def is_expired(self):
        if self.status == self.STATUS_EXPIRED:
            return True
        return self.status == self.STATUS_PENDING and self.expires_at < timezone.now()


class EmployeeOnboarding(UUIDModel):
    """
    Onboarding instance for a specific employee.
    Created on first-time login and driven through review by ADMIN/HR.

        PENDING -> SUBMITTED -> APPROVED | REJECTED
        REJECTED -> SUBMITTED (resubmission)
    """
    STATUS_PENDING = 'PENDING'
    STATUS_SUBMITTED = 'SUBMITTED'
    STATUS_APPROVED = 'APPROVED'
    STATUS_REJECTED = 'REJECTED'

    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_SUBMITTED, 'Submitted'),
        (STATUS_APPROVED, 'Approved'),
        (STATUS_REJECTED, 'Rejected'),
    ]

    # Statuses from which the employee may (re)submit
    SUBMITTABLE_STATUSES = (STATUS_PENDING, STATUS_SUBMITTED, STATUS_REJECTED)

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='onboarding'
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)

    submitted_at = models.DateTimeField(null=True, blank=True)
    approved_at = models.DateTimeField(null=True, blank=True)
    rejected_at = models.DateTimeField(null=True, blank=True)

    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reviewed_onboardings'
    )
    notes = models.TextField(blank=True)
    rejection_reason = models.TextField(blank=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"Onboarding: {self.user.email} ({self.status})"

    @property
    def is_locked(self):
        return self.status == self.STATUS_APPROVED
