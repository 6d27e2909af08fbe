"""
Requirement DTOs returned by requirement actions.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from requirements.domain.requirement import Requirement
from requirements.domain.requirement_document import (
    RequirementDocument,
    RequirementTemplateFile,
)
from requirements.domain.requirement_step import RequirementStep


@dataclass
class RequirementDTO:
    """DTO for requirement information."""

    id: uuid.UUID
    state: str
    license_type: str
    created_at: datetime

    @classmethod
    def from_domain(cls, requirement: Requirement) -> "RequirementDTO":
        return cls(
            id=requirement.id,
            state=requirement.state,
            license_type=requirement.license_type_name,
            created_at=requirement.created_at,
        )


@dataclass
class RequirementStepDTO:
    """DTO for a regular or expert template step."""

    id: uuid.UUID
    license_requirement_id: uuid.UUID
    step_name: str
    step_order: int
    description: Optional[str]
    instructions: Optional[str]
    is_required: bool
    estimated_days: Optional[int]
    is_expert_step: bool
    phase: Optional[str]

    @classmethod
    def from_domain(cls, step: RequirementStep) -> "RequirementStepDTO":
        return cls(
            id=step.id,
            license_requirement_id=step.requirement_id,
            step_name=step.name,
            step_order=step.order,
            description=step.description,
            instructions=step.instructions,
            is_required=step.is_required,
            estimated_days=step.estimated_days,
            is_expert_step=step.is_expert_step,
            phase=step.phase,
        )


@dataclass
class RequirementDocumentDTO:
    """DTO for a required document."""

    id: uuid.UUID
    license_requirement_id: uuid.UUID
    document_name: str
    document_type: Optional[str]
    description: Optional[str]
    is_required: bool

    @classmethod
    def from_domain(cls, document: RequirementDocument) -> "RequirementDocumentDTO":
        return cls(
            id=document.id,
            license_requirement_id=document.requirement_id,
            document_name=document.name,
            document_type=document.document_type,
            description=document.description,
            is_required=document.is_required,
        )


@dataclass
class TemplateFileDTO:
    """DTO for a template file reference."""

    id: uuid.UUID
    license_requirement_id: uuid.UUID
    template_name: str
    description: Optional[str]
    file_url: str
    file_name: str
    created_at: datetime

    @classmethod
    def from_domain(cls, template: RequirementTemplateFile) -> "TemplateFileDTO":
        return cls(
            id=template.id,
            license_requirement_id=template.requirement_id,
            template_name=template.name,
            description=template.description,
            file_url=template.file_url,
            file_name=template.file_name,
            created_at=template.created_at,
        )


@dataclass
class RequirementCountsDTO:
    """DTO for the step and document counts of a requirement."""

    steps: int
    documents: int


@dataclass
class StepWithRequirementInfoDTO:
    """Regular template step listed with its requirement, for cross-requirement copying."""

    id: uuid.UUID
    step_name: str
    step_order: int
    description: Optional[str]
    estimated_days: Optional[int]
    is_required: bool
    license_requirement_id: uuid.UUID
    state: str
    license_type: str


@dataclass
class DocumentWithRequirementInfoDTO:
    """Document listed with its requirement, for cross-requirement copying."""

    id: uuid.UUID
    document_name: str
    document_type: Optional[str]
    description: Optional[str]
    is_required: bool
    license_requirement_id: uuid.UUID
    state: str
    license_type: str


@dataclass
class ExpertStepWithRequirementInfoDTO:
    """
    Expert step found on an application, listed with the requirement
    its application maps to.
    """

    id: uuid.UUID
    step_name: str
    step_order: int
    description: Optional[str]
    phase: Optional[str]
    license_requirement_id: Optional[uuid.UUID]
    state: str
    license_type: str
