"""
Expose application models to Django's model discovery.
"""
from applications.infrastructure.models import Application, ApplicationStep  # noqa: F401
