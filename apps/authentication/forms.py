from django import forms
from django.contrib.auth.forms import UserCreationForm, UserChangeForm

from .models import User


class CustomUserCreationForm(UserCreationForm):
    """
    User creation form keyed on email instead of username.
    """
    email = forms.EmailField(required=True)

    class Meta:
        model = User
        fields = ('email', 'name', 'role', 'is_staff')
        field_classes = {'email': forms.EmailField}


class CustomUserChangeForm(UserChangeForm):

    class Meta:
        model = User
        fields = '__all__'
        field_classes = {'email': forms.EmailField}
