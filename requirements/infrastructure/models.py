"""
LicenseRequirement, LicenseRequirementStep, LicenseRequirementDocument and
LicenseRequirementTemplate models.
"""
import uuid

from django.db import models


class LicenseRequirement(models.Model):
    """
    The template of steps, documents and files for one (state, license type).
    Created lazily on first resolution.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    state = models.CharField(max_length=100)
    license_type = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "license_requirements"
        ordering = ["state", "license_type"]
        constraints = [
            models.UniqueConstraint(
                fields=["state", "license_type"],
                name="unique_requirement_state_license_type",
            ),
        ]

    def __str__(self):
        return f"{self.state} - {self.license_type}"


class LicenseRequirementStep(models.Model):
    """
    A step of a requirement template.

    Regular and expert steps share the table and are numbered independently.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    requirement = models.ForeignKey(
        LicenseRequirement, on_delete=models.CASCADE, related_name="steps"
    )
    step_name = models.CharField(max_length=255)
    step_order = models.PositiveIntegerField()
    description = models.TextField(null=True, blank=True)
    instructions = models.TextField(null=True, blank=True)
    is_required = models.BooleanField(default=True)
    estimated_days = models.PositiveIntegerField(null=True, blank=True)
    is_expert_step = models.BooleanField(default=False)
    phase = models.CharField(max_length=100, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "license_requirement_steps"
        ordering = ["requirement", "is_expert_step", "step_order"]
        indexes = [
            models.Index(fields=["requirement", "is_expert_step", "step_order"]),
        ]

    def __str__(self):
        return f"{self.step_order}. {self.step_name}"


class LicenseRequirementDocument(models.Model):
    """A document an applicant must supply."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    requirement = models.ForeignKey(
        LicenseRequirement, on_delete=models.CASCADE, related_name="documents"
    )
    document_name = models.CharField(max_length=255)
    document_type = models.CharField(max_length=100, null=True, blank=True)
    description = models.TextField(null=True, blank=True)
    is_required = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "license_requirement_documents"
        ordering = ["document_name"]
        indexes = [
            models.Index(fields=["requirement", "document_name"]),
        ]

    def __str__(self):
        return self.document_name


class LicenseRequirementTemplate(models.Model):
    """A downloadable file template; the file itself lives in external storage."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    requirement = models.ForeignKey(
        LicenseRequirement, on_delete=models.CASCADE, related_name="templates"
    )
    template_name = models.CharField(max_length=255)
    description = models.TextField(null=True, blank=True)
    file_url = models.URLField(max_length=1000)
    file_name = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "license_requirement_templates"
        ordering = ["template_name"]

    def __str__(self):
        return self.template_name
