"""
Expose requirement models to Django's model discovery.
"""
from requirements.infrastructure.models import (  # noqa: F401
    LicenseRequirement,
    LicenseRequirementDocument,
    LicenseRequirementStep,
    LicenseRequirementTemplate,
)
