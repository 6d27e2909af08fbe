"""
RequirementDocument and RequirementTemplateFile domain entities.

Neither is ordered; documents are listed by name, template files by name.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional


@dataclass(frozen=True)
class RequirementDocument:
    """A document an applicant must supply for a requirement."""

    id: uuid.UUID
    requirement_id: uuid.UUID
    name: str
    document_type: Optional[str]
    description: Optional[str]
    is_required: bool
    created_at: datetime

    def __post_init__(self):
        """Validate requirement document entity."""
        if not self.requirement_id:
            raise ValueError("Requirement ID is required")
        if not self.name or not self.name.strip():
            raise ValueError("Document name is required")

    @classmethod
    def create(
        cls,
        requirement_id: uuid.UUID,
        name: str,
        description: Optional[str] = None,
        is_required: bool = True,
        document_type: Optional[str] = None,
    ) -> "RequirementDocument":
        return cls(
            id=uuid.uuid4(),
            requirement_id=requirement_id,
            name=name.strip(),
            document_type=document_type,
            description=description or None,
            is_required=is_required,
            created_at=datetime.now(timezone.utc),
        )

    def copy_to(self, requirement_id: uuid.UUID) -> "RequirementDocument":
        """Copy this document into another requirement under a fresh id."""
        return replace(
            self,
            id=uuid.uuid4(),
            requirement_id=requirement_id,
            created_at=datetime.now(timezone.utc),
        )

    def with_details(
        self, name: str, description: Optional[str], is_required: bool
    ) -> "RequirementDocument":
        return replace(
            self,
            name=name.strip(),
            description=description or None,
            is_required=is_required,
        )


@dataclass(frozen=True)
class RequirementTemplateFile:
    """
    A downloadable file template attached to a requirement.

    Only the file reference is stored; uploading is handled elsewhere.
    """

    id: uuid.UUID
    requirement_id: uuid.UUID
    name: str
    description: Optional[str]
    file_url: str
    file_name: str
    created_at: datetime

    def __post_init__(self):
        """Validate template file entity."""
        if not self.requirement_id:
            raise ValueError("Requirement ID is required")
        if not self.name or not self.name.strip():
            raise ValueError("Template name is required")
        if not self.file_url:
            raise ValueError("Template file URL is required")
        if not self.file_name:
            raise ValueError("Template file name is required")

    @classmethod
    def create(
        cls,
        requirement_id: uuid.UUID,
        name: str,
        file_url: str,
        file_name: str,
        description: Optional[str] = None,
    ) -> "RequirementTemplateFile":
        return cls(
            id=uuid.uuid4(),
            requirement_id=requirement_id,
            name=name.strip(),
            description=description or None,
            file_url=file_url,
            file_name=file_name,
            created_at=datetime.now(timezone.utc),
        )

    def with_details(self, name: str, description: Optional[str]) -> "RequirementTemplateFile":
        return replace(self, name=name.strip(), description=description or None)
