import uuid

from django.conf import settings
from django.db import models


class Interview(models.Model):
    PRIORITY_CHOICES = [
        ('High', 'High'),
        ('Medium', 'Medium'),
        ('Low', 'Low'),
    ]

    STATUS_PENDING = 'Pending'
    STATUS_PASSED = 'Passed'
    STATUS_FAILED = 'Failed'
    STATUS_NO_FEEDBACK = 'No Feedback'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_PASSED, 'Passed'),
        (STATUS_FAILED, 'Failed'),
        (STATUS_NO_FEEDBACK, 'No Feedback'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='interviews')
    company_name = models.CharField(max_length=255)
    job_position = models.CharField(max_length=255)
    interviewer_name = models.CharField(max_length=255)
    interview_date = models.DateField()
    priority_level = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default='Medium')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=['user', 'interview_date'], name='tracker_user_date_idx'),
        ]

    def __str__(self):
        return f"Interview with {self.company_name} for {self.job_position} ({self.status})"
