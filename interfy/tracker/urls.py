from django.urls import path

from .views import DashboardAPIView, InterviewDetailView, InterviewListAPIView

urlpatterns = [
    path('interviews/', InterviewListAPIView.as_view(), name='interview_list'),
    path('interviews/<str:interview_id>/', InterviewDetailView.as_view(), name='interview_detail'),
    path('dashboard/', DashboardAPIView.as_view(), name='dashboard'),
]
