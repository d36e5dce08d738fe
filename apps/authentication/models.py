"""
Authentication Models - Custom User Model with role-based access
"""

import uuid

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin, BaseUserManager
from django.db import models
from django.utils import timezone


class Role(models.TextChoices):
    ADMIN = 'ADMIN', 'Admin'
    HR = 'HR', 'HR'
    EMPLOYEE = 'EMPLOYEE', 'Employee'

    @classmethod
    def parse(cls, value):
        """Case-insensitive lookup; returns ``None`` for unknown roles."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or '').strip().upper())
        except ValueError:
            return None


# Roles allowed to invite and review employees
REVIEWER_ROLES = frozenset({Role.ADMIN, Role.HR})


def normalize_email(email):
    return (email or '').strip().lower()


class UserManager(BaseUserManager):
    """Custom user manager"""

    def get_by_natural_key(self, username):
        return self.get(**{self.model.USERNAME_FIELD: normalize_email(username)})

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')
        user = self.model(email=normalize_email(email), **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('role', Role.ADMIN)
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_first_login', False)

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """
    Login identity. Invited employees start as placeholders with
    ``is_first_login=True`` and a hashed temporary password.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, db_index=True)
    name = models.CharField(max_length=150, blank=True)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.EMPLOYEE, db_index=True)

    # Status flags
    is_active = models.BooleanField(default=True)
    is_first_login = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    date_joined = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    class Meta:
        ordering = ['email']

    def __str__(self):
        return self.email

    def save(self, *args, **kwargs):
        self.email = normalize_email(self.email)
        super().save(*args, **kwargs)

    @property
    def role_enum(self):
        return Role.parse(self.role)

    @property
    def is_reviewer(self):
        return self.role_enum in REVIEWER_ROLES
