"""Employee Views - self-service onboarding endpoints"""

import logging

from django.http import FileResponse
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema
from rest_framework import generics
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from apps.authentication.permissions import IsOwnerOrReviewer
from apps.authentication.serializers import UserSerializer
from apps.core.response import created_response, success_response
from apps.onboarding.serializers import EmployeeOnboardingSerializer
from apps.onboarding.services import OnboardingService

from .models import Document
from .serializers import (
    DocumentSerializer,
    DocumentUploadSerializer,
    EmployeeProfileSerializer,
    ProfileUpdateSerializer,
)
from .services import DocumentService, ProfileService

logger = logging.getLogger(__name__)


class CompleteProfileView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(request=ProfileUpdateSerializer, responses=EmployeeProfileSerializer)
    def put(self, request):
        serializer = ProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        profile = ProfileService.update_profile(
            user=request.user,
            data=serializer.validated_data,
            request=request,
        )
        return success_response(EmployeeProfileSerializer(profile).data, message='Profile updated successfully')


class UploadDocumentView(APIView):
    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(request=DocumentUploadSerializer, responses=DocumentSerializer)
    def post(self, request):
        serializer = DocumentUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        document = DocumentService.upload(
            user=request.user,
            document_type=serializer.validated_data['type'],
            uploaded_file=serializer.validated_data['document'],
            request=request,
        )
        return created_response(
            DocumentSerializer(document, context={'request': request}).data,
            message='Document uploaded successfully',
        )


class SubmitOnboardingView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(request=None, responses=EmployeeOnboardingSerializer)
    def post(self, request):
        onboarding = OnboardingService.submit(user=request.user, request=request)
        return success_response(
            EmployeeOnboardingSerializer(onboarding).data,
            message='Onboarding submitted for review',
        )


class ProfileView(APIView):
    """The caller's account, profile, documents and onboarding status."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        user = request.user
        profile = ProfileService.get_profile(user)
        onboarding = OnboardingService.get_for_user(user)
        documents = DocumentService.list_documents(user)

        return success_response({
            'user': UserSerializer(user).data,
            'profile': EmployeeProfileSerializer(profile).data if profile else None,
            'documents': DocumentSerializer(documents, many=True, context={'request': request}).data,
            'onboarding': EmployeeOnboardingSerializer(onboarding).data if onboarding else None,
        })


class DocumentListView(generics.ListAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = DocumentSerializer

    def get_queryset(self):
        return DocumentService.list_documents(self.request.user)


class DocumentDownloadView(APIView):
    permission_classes = [IsAuthenticated, IsOwnerOrReviewer]

    def get(self, request, pk):
        document = get_object_or_404(Document, pk=pk)
        self.check_object_permissions(request, document)

        logger.info("document_downloaded document_id=%s by=%s", document.id, request.user.id)
        return FileResponse(
            document.file.open('rb'),
            as_attachment=True,
            filename=document.file_name,
            content_type=document.mime_type or 'application/octet-stream',
        )
