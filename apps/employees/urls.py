"""Employee self-service URL Configuration"""

from django.urls import path

from .views import (
    CompleteProfileView,
    DocumentDownloadView,
    DocumentListView,
    ProfileView,
    SubmitOnboardingView,
    UploadDocumentView,
)

urlpatterns = [
    path('complete-profile/', CompleteProfileView.as_view(), name='employee-complete-profile'),
    path('upload-document/', UploadDocumentView.as_view(), name='employee-upload-document'),
    path('submit-onboarding/', SubmitOnboardingView.as_view(), name='employee-submit-onboarding'),
    path('profile/', ProfileView.as_view(), name='employee-profile'),
    path('documents/', DocumentListView.as_view(), name='employee-documents'),
    path('documents/<uuid:pk>/download/', DocumentDownloadView.as_view(), name='employee-document-download'),
]
