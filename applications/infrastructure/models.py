"""
Application and ApplicationStep models.
"""
import uuid

from django.db import models


class Application(models.Model):
    """
    A license application moving through the review lifecycle.
    """

    STATUS_CHOICES = [
        ("requested", "Requested"),
        ("in_progress", "In Progress"),
        ("under_review", "Under Review"),
        ("approved", "Approved"),
        ("needs_revision", "Needs Revision"),
        ("rejected", "Rejected"),
        ("closed", "Closed"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner_id = models.UUIDField(db_index=True)
    application_name = models.CharField(max_length=255)
    state = models.CharField(max_length=100)
    license_type = models.CharField(max_length=255, null=True, blank=True)
    assigned_expert_id = models.UUIDField(null=True, blank=True, db_index=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="requested")
    progress_percentage = models.PositiveSmallIntegerField(default=0)
    revision_reason = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "applications"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"]),
            models.Index(fields=["state", "license_type"]),
        ]

    def __str__(self):
        return f"{self.application_name} ({self.status})"


class ApplicationStep(models.Model):
    """
    A snapshot of a template step inside one application.
    Regular and expert steps are numbered independently.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    application = models.ForeignKey(
        Application, on_delete=models.CASCADE, related_name="steps"
    )
    step_name = models.CharField(max_length=255)
    step_order = models.PositiveIntegerField()
    description = models.TextField(null=True, blank=True)
    instructions = models.TextField(null=True, blank=True)
    phase = models.CharField(max_length=100, null=True, blank=True)
    is_expert_step = models.BooleanField(default=False)
    is_completed = models.BooleanField(default=False)
    completed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "application_steps"
        ordering = ["application", "is_expert_step", "step_order"]
        indexes = [
            models.Index(fields=["application", "is_expert_step", "step_order"]),
        ]

    def __str__(self):
        return f"{self.step_order}. {self.step_name}"
