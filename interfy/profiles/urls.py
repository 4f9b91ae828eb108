from django.urls import path

from .views import ExportDataAPIView, OnboardingAPIView, ProfileAPIView, ProfileImageUploadView

urlpatterns = [
    path('profile/', ProfileAPIView.as_view(), name='profile'),
    path('profile/avatar/', ProfileImageUploadView.as_view(field='avatar'), name='profile-avatar'),
    path('profile/cover/', ProfileImageUploadView.as_view(field='cover_photo'), name='profile-cover'),
    path('profile/onboarding/', OnboardingAPIView.as_view(), name='profile-onboarding'),
    path('profile/export/', ExportDataAPIView.as_view(), name='profile-export'),
]
