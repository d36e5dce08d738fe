"""Onboarding app filters."""
import django_filters

from .models import Invitation


class InvitationFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Invitation.STATUS_CHOICES)
    email = django_filters.CharFilter(lookup_expr='icontains')
    sent_after = django_filters.DateTimeFilter(field_name='sent_at', lookup_expr='gte')
    sent_before = django_filters.DateTimeFilter(field_name='sent_at', lookup_expr='lte')

    class Meta:
        model = Invitation
        fields = ['status', 'email']
