"""
Requirement actions.

Public operations for authoring and reading requirement templates. Each
takes the DataAccess to work against and returns an OperationResult or
VoidResult; none of them raises.
"""

from typing import List, Optional, Sequence

from core.boundary import (
    Identifier,
    parse_id,
    parse_ids,
    returns_result,
    returns_void_result,
)
from core.infrastructure.container import DataAccess
from core.infrastructure.view_invalidation import LICENSE_REQUIREMENTS_VIEW
from requirements.application.commands.document_commands import (
    CreateDocumentCommand,
    CreateTemplateFileCommand,
    DeleteDocumentCommand,
    DeleteTemplateFileCommand,
    UpdateDocumentCommand,
    UpdateTemplateFileCommand,
)
from requirements.application.commands.step_commands import (
    CreateExpertStepCommand,
    CreateStepCommand,
    DeleteStepCommand,
    ReorderStepsCommand,
    UpdateExpertStepCommand,
    UpdateStepCommand,
)
from requirements.application.dto.requirement_dto import (
    DocumentWithRequirementInfoDTO,
    ExpertStepWithRequirementInfoDTO,
    RequirementCountsDTO,
    RequirementDocumentDTO,
    RequirementDTO,
    RequirementStepDTO,
    StepWithRequirementInfoDTO,
    TemplateFileDTO,
)
from requirements.application.handlers.browse_handlers import (
    GetAllDocumentsWithRequirementInfoHandler,
    GetAllExpertStepsWithRequirementInfoHandler,
    GetAllStepsWithRequirementInfoHandler,
)
from requirements.application.handlers.document_handlers import (
    CreateDocumentHandler,
    CreateTemplateFileHandler,
    DeleteDocumentHandler,
    DeleteTemplateFileHandler,
    UpdateDocumentHandler,
    UpdateTemplateFileHandler,
)
from requirements.application.handlers.step_handlers import (
    CreateExpertStepHandler,
    CreateStepHandler,
    DeleteStepHandler,
    ReorderStepsHandler,
    UpdateExpertStepHandler,
    UpdateStepHandler,
)
from requirements.application.queries.browse_queries import BrowseRequirementsQuery
from requirements.domain.services import RequirementResolver


def _optional_id(value: Optional[Identifier]):
    return parse_id(value, "requirement ID") if value else None


# Requirements


@returns_result
async def get_license_requirement_id(data: DataAccess, state: str, license_type_name: str):
    """Resolve the requirement id for a (state, license type), creating it if absent."""
    return await RequirementResolver(data.requirements).resolve(state, license_type_name)


@returns_result
async def get_all_license_requirements(data: DataAccess) -> List[RequirementDTO]:
    requirements = await data.requirements.list_all()
    return [RequirementDTO.from_domain(requirement) for requirement in requirements]


# Steps


@returns_result
async def create_step(
    data: DataAccess,
    requirement_id: Identifier,
    step_name: str,
    description: Optional[str] = None,
    instructions: Optional[str] = None,
    estimated_days: Optional[int] = None,
    is_required: bool = True,
) -> RequirementStepDTO:
    """Append a regular step to a requirement."""
    handler = CreateStepHandler(data.requirements, data.requirement_steps)
    step = await handler.handle(
        CreateStepCommand(
            requirement_id=parse_id(requirement_id, "requirement ID"),
            step_name=step_name,
            description=description,
            instructions=instructions,
            estimated_days=estimated_days,
            is_required=is_required,
        )
    )
    await data.views.mark_stale(LICENSE_REQUIREMENTS_VIEW)
    return RequirementStepDTO.from_domain(step)


@returns_result
async def create_expert_step(
    data: DataAccess,
    requirement_id: Identifier,
    phase: Optional[str],
    step_title: str,
    description: Optional[str] = None,
    instructions: Optional[str] = None,
) -> RequirementStepDTO:
    """Append a step to a requirement's expert template; blank phases get the default."""
    handler = CreateExpertStepHandler(data.requirements, data.requirement_steps)
    step = await handler.handle(
        CreateExpertStepCommand(
            requirement_id=parse_id(requirement_id, "requirement ID"),
            step_title=step_title,
            phase=phase,
            description=description,
            instructions=instructions,
        )
    )
    await data.views.mark_stale(LICENSE_REQUIREMENTS_VIEW)
    return RequirementStepDTO.from_domain(step)


@returns_result
async def update_step(
    data: DataAccess,
    step_id: Identifier,
    step_name: str,
    description: Optional[str] = None,
    instructions: Optional[str] = None,
    estimated_days: Optional[int] = None,
    is_required: bool = True,
) -> RequirementStepDTO:
    handler = UpdateStepHandler(data.requirements, data.requirement_steps)
    step = await handler.handle(
        UpdateStepCommand(
            step_id=parse_id(step_id, "step ID"),
            step_name=step_name,
            description=description,
            instructions=instructions,
            estimated_days=estimated_days,
            is_required=is_required,
        )
    )
    await data.views.mark_stale(LICENSE_REQUIREMENTS_VIEW)
    return RequirementStepDTO.from_domain(step)


@returns_result
async def update_expert_step(
    data: DataAccess,
    step_id: Identifier,
    phase: Optional[str],
    step_title: str,
    description: Optional[str] = None,
    instructions: Optional[str] = None,
) -> RequirementStepDTO:
    handler = UpdateExpertStepHandler(data.requirements, data.requirement_steps)
    step = await handler.handle(
        UpdateExpertStepCommand(
            step_id=parse_id(step_id, "step ID"),
            step_title=step_title,
            phase=phase,
            description=description,
            instructions=instructions,
        )
    )
    await data.views.mark_stale(LICENSE_REQUIREMENTS_VIEW)
    return RequirementStepDTO.from_domain(step)


@returns_void_result
async def delete_step(data: DataAccess, step_id: Identifier) -> None:
    """Delete a regular step. Copies already in applications are kept."""
    handler = DeleteStepHandler(data.requirements, data.requirement_steps)
    await handler.handle(DeleteStepCommand(step_id=parse_id(step_id, "step ID")))
    await data.views.mark_stale(LICENSE_REQUIREMENTS_VIEW)


@returns_void_result
async def delete_expert_step(data: DataAccess, step_id: Identifier) -> None:
    handler = DeleteStepHandler(data.requirements, data.requirement_steps)
    await handler.handle(
        DeleteStepCommand(step_id=parse_id(step_id, "step ID"), is_expert_step=True)
    )
    await data.views.mark_stale(LICENSE_REQUIREMENTS_VIEW)


@returns_void_result
async def reorder_steps(
    data: DataAccess, requirement_id: Identifier, ordered_step_ids: Sequence[Identifier]
) -> None:
    """
    Renumber a requirement's regular steps to match ``ordered_step_ids``.

    Either every step gets its new order or none does.
    """
    handler = ReorderStepsHandler(data.requirements, data.requirement_steps)
    await handler.handle(
        ReorderStepsCommand(
            requirement_id=parse_id(requirement_id, "requirement ID"),
            ordered_step_ids=parse_ids(ordered_step_ids, "step ID"),
        )
    )
    await data.views.mark_stale(LICENSE_REQUIREMENTS_VIEW)


# Documents


@returns_result
async def create_document(
    data: DataAccess,
    requirement_id: Identifier,
    document_name: str,
    description: Optional[str] = None,
    is_required: bool = True,
) -> RequirementDocumentDTO:
    handler = CreateDocumentHandler(data.requirements, data.requirement_documents)
    document = await handler.handle(
        CreateDocumentCommand(
            requirement_id=parse_id(requirement_id, "requirement ID"),
            document_name=document_name,
            description=description,
            is_required=is_required,
        )
    )
    await data.views.mark_stale(LICENSE_REQUIREMENTS_VIEW)
    return RequirementDocumentDTO.from_domain(document)


@returns_result
async def update_document(
    data: DataAccess,
    document_id: Identifier,
    document_name: str,
    description: Optional[str] = None,
    is_required: bool = True,
) -> RequirementDocumentDTO:
    handler = UpdateDocumentHandler(data.requirement_documents)
    document = await handler.handle(
        UpdateDocumentCommand(
            document_id=parse_id(document_id, "document ID"),
            document_name=document_name,
            description=description,
            is_required=is_required,
        )
    )
    await data.views.mark_stale(LICENSE_REQUIREMENTS_VIEW)
    return RequirementDocumentDTO.from_domain(document)


@returns_void_result
async def delete_document(data: DataAccess, document_id: Identifier) -> None:
    handler = DeleteDocumentHandler(data.requirement_documents)
    await handler.handle(DeleteDocumentCommand(document_id=parse_id(document_id, "document ID")))
    await data.views.mark_stale(LICENSE_REQUIREMENTS_VIEW)


# Template files


@returns_result
async def create_template_file(
    data: DataAccess,
    requirement_id: Identifier,
    template_name: str,
    file_url: str,
    file_name: str,
    description: Optional[str] = None,
) -> TemplateFileDTO:
    """Attach an uploaded file template to a requirement."""
    handler = CreateTemplateFileHandler(data.requirements, data.requirement_templates)
    template = await handler.handle(
        CreateTemplateFileCommand(
            requirement_id=parse_id(requirement_id, "requirement ID"),
            template_name=template_name,
            file_url=file_url,
            file_name=file_name,
            description=description,
        )
    )
    await data.views.mark_stale(LICENSE_REQUIREMENTS_VIEW)
    return TemplateFileDTO.from_domain(template)


@returns_result
async def update_template_file(
    data: DataAccess,
    template_id: Identifier,
    template_name: str,
    description: Optional[str] = None,
) -> TemplateFileDTO:
    handler = UpdateTemplateFileHandler(data.requirement_templates)
    template = await handler.handle(
        UpdateTemplateFileCommand(
            template_id=parse_id(template_id, "template ID"),
            template_name=template_name,
            description=description,
        )
    )
    await data.views.mark_stale(LICENSE_REQUIREMENTS_VIEW)
    return TemplateFileDTO.from_domain(template)


@returns_void_result
async def delete_template_file(data: DataAccess, template_id: Identifier) -> None:
    handler = DeleteTemplateFileHandler(data.requirement_templates)
    await handler.handle(
        DeleteTemplateFileCommand(template_id=parse_id(template_id, "template ID"))
    )
    await data.views.mark_stale(LICENSE_REQUIREMENTS_VIEW)


# Reads


@returns_result
async def get_steps_from_requirement(
    data: DataAccess, requirement_id: Identifier
) -> List[RequirementStepDTO]:
    """Both partitions of a requirement: regular steps first, each by order."""
    steps = await data.requirement_steps.find_by_requirement(
        parse_id(requirement_id, "requirement ID")
    )
    return [RequirementStepDTO.from_domain(step) for step in steps]


@returns_result
async def get_regular_steps_from_requirement(
    data: DataAccess, requirement_id: Identifier
) -> List[RequirementStepDTO]:
    steps = await data.requirement_steps.find_by_requirement(
        parse_id(requirement_id, "requirement ID"), is_expert_step=False
    )
    return [RequirementStepDTO.from_domain(step) for step in steps]


@returns_result
async def get_expert_steps_from_requirement(
    data: DataAccess, requirement_id: Identifier
) -> List[RequirementStepDTO]:
    steps = await data.requirement_steps.find_by_requirement(
        parse_id(requirement_id, "requirement ID"), is_expert_step=True
    )
    return [RequirementStepDTO.from_domain(step) for step in steps]


@returns_result
async def get_documents_from_requirement(
    data: DataAccess, requirement_id: Identifier
) -> List[RequirementDocumentDTO]:
    documents = await data.requirement_documents.find_by_requirement(
        parse_id(requirement_id, "requirement ID")
    )
    return [RequirementDocumentDTO.from_domain(document) for document in documents]


@returns_result
async def get_templates_from_requirement(
    data: DataAccess, requirement_id: Identifier
) -> List[TemplateFileDTO]:
    templates = await data.requirement_templates.find_by_requirement(
        parse_id(requirement_id, "requirement ID")
    )
    return [TemplateFileDTO.from_domain(template) for template in templates]


@returns_result
async def get_requirement_counts(
    data: DataAccess, requirement_id: Identifier
) -> RequirementCountsDTO:
    requirement_id = parse_id(requirement_id, "requirement ID")
    return RequirementCountsDTO(
        steps=await data.requirement_steps.count_by_requirement(requirement_id),
        documents=await data.requirement_documents.count_by_requirement(requirement_id),
    )


# Browse


@returns_result
async def get_all_steps_with_requirement_info(
    data: DataAccess, current_requirement_id: Optional[Identifier] = None
) -> List[StepWithRequirementInfoDTO]:
    handler = GetAllStepsWithRequirementInfoHandler(data.requirements, data.requirement_steps)
    return await handler.handle(
        BrowseRequirementsQuery(current_requirement_id=_optional_id(current_requirement_id))
    )


@returns_result
async def get_all_documents_with_requirement_info(
    data: DataAccess, current_requirement_id: Optional[Identifier] = None
) -> List[DocumentWithRequirementInfoDTO]:
    handler = GetAllDocumentsWithRequirementInfoHandler(
        data.requirements, data.requirement_documents
    )
    return await handler.handle(
        BrowseRequirementsQuery(current_requirement_id=_optional_id(current_requirement_id))
    )


@returns_result
async def get_all_expert_steps_with_requirement_info(
    data: DataAccess, current_requirement_id: Optional[Identifier] = None
) -> List[ExpertStepWithRequirementInfoDTO]:
    """Expert steps found on applications, labelled with their requirement."""
    handler = GetAllExpertStepsWithRequirementInfoHandler(
        data.requirements, data.applications, data.application_steps
    )
    return await handler.handle(
        BrowseRequirementsQuery(current_requirement_id=_optional_id(current_requirement_id))
    )
