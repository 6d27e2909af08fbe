"""
Browse handlers.

List steps and documents of other requirements, and expert steps found
on applications, each labelled with the (state, license type) they
belong to. Browsing never creates requirements.
"""
import logging
from typing import Dict, List

from applications.ports.application_repository import ApplicationRepository
from applications.ports.application_step_repository import ApplicationStepRepository
from requirements.application.dto.requirement_dto import (
    DocumentWithRequirementInfoDTO,
    ExpertStepWithRequirementInfoDTO,
    StepWithRequirementInfoDTO,
)
from requirements.application.queries.browse_queries import BrowseRequirementsQuery
from requirements.domain.requirement import Requirement
from requirements.domain.services import RequirementResolver
from requirements.ports.requirement_document_repository import RequirementDocumentRepository
from requirements.ports.requirement_repository import RequirementRepository
from requirements.ports.requirement_step_repository import RequirementStepRepository

logger = logging.getLogger(__name__)


async def _requirements_by_id(
    repository: RequirementRepository, requirement_ids
) -> Dict:
    requirements = await repository.find_by_ids(list(set(requirement_ids)))
    return {requirement.id: requirement for requirement in requirements}


class GetAllStepsWithRequirementInfoHandler:
    """Handler listing regular template steps of every other requirement."""

    def __init__(
        self,
        requirement_repository: RequirementRepository,
        step_repository: RequirementStepRepository,
    ):
        """Initialize handler with repositories."""
        self.requirement_repository = requirement_repository
        self.step_repository = step_repository

    async def handle(self, query: BrowseRequirementsQuery) -> List[StepWithRequirementInfoDTO]:
        steps = await self.step_repository.list_all(
            is_expert_step=False, exclude_requirement_id=query.current_requirement_id
        )
        requirements = await _requirements_by_id(
            self.requirement_repository, [step.requirement_id for step in steps]
        )
        return [
            StepWithRequirementInfoDTO(
                id=step.id,
                step_name=step.name,
                step_order=step.order,
                description=step.description,
                estimated_days=step.estimated_days,
                is_required=step.is_required,
                license_requirement_id=step.requirement_id,
                state=requirements[step.requirement_id].state,
                license_type=requirements[step.requirement_id].license_type_name,
            )
            for step in steps
            if step.requirement_id in requirements
        ]


class GetAllDocumentsWithRequirementInfoHandler:
    """Handler listing documents of every other requirement."""

    def __init__(
        self,
        requirement_repository: RequirementRepository,
        document_repository: RequirementDocumentRepository,
    ):
        """Initialize handler with repositories."""
        self.requirement_repository = requirement_repository
        self.document_repository = document_repository

    async def handle(
        self, query: BrowseRequirementsQuery
    ) -> List[DocumentWithRequirementInfoDTO]:
        documents = await self.document_repository.list_all(
            exclude_requirement_id=query.current_requirement_id
        )
        requirements = await _requirements_by_id(
            self.requirement_repository, [document.requirement_id for document in documents]
        )
        result = []
        for document in documents:
            requirement: Requirement = requirements.get(document.requirement_id)
            if requirement is None:
                continue
            result.append(
                DocumentWithRequirementInfoDTO(
                    id=document.id,
                    document_name=document.name,
                    document_type=document.document_type,
                    description=document.description,
                    is_required=document.is_required,
                    license_requirement_id=document.requirement_id,
                    state=requirement.state,
                    license_type=requirement.license_type_name,
                )
            )
        return result


class GetAllExpertStepsWithRequirementInfoHandler:
    """
    Handler listing expert steps found on applications.

    Each step is labelled with the requirement its application's
    (state, license type) maps to. Lookups are memoized for the duration
    of one call. Rows are deduplicated by (name, description, phase,
    state, license type), keeping the first occurrence. Applications
    without a license type are skipped, as are steps mapping to the
    current requirement.
    """

    def __init__(
        self,
        requirement_repository: RequirementRepository,
        application_repository: ApplicationRepository,
        application_step_repository: ApplicationStepRepository,
    ):
        """Initialize handler with repositories."""
        self.resolver = RequirementResolver(requirement_repository)
        self.application_repository = application_repository
        self.application_step_repository = application_step_repository

    async def handle(
        self, query: BrowseRequirementsQuery
    ) -> List[ExpertStepWithRequirementInfoDTO]:
        """
        Handle browse query.

        Args:
            query: BrowseRequirementsQuery

        Returns:
            Deduplicated expert steps, ordered by step order
        """
        steps = await self.application_step_repository.list_expert_steps()
        if not steps:
            return []

        applications = await self.application_repository.find_by_ids(
            list({step.application_id for step in steps})
        )
        applications_by_id = {application.id: application for application in applications}

        batch = self.resolver.batch()
        seen = set()
        result = []
        for step in steps:
            application = applications_by_id.get(step.application_id)
            if application is None or not application.license_type_name:
                continue

            key = (
                step.signature,
                application.state,
                application.license_type_name,
            )
            if key in seen:
                continue
            seen.add(key)

            requirement_id = await batch.lookup(application.state, application.license_type_name)
            if query.current_requirement_id and requirement_id == query.current_requirement_id:
                continue

            result.append(
                ExpertStepWithRequirementInfoDTO(
                    id=step.id,
                    step_name=step.name,
                    step_order=step.order,
                    description=step.description,
                    phase=step.phase,
                    license_requirement_id=requirement_id,
                    state=application.state,
                    license_type=application.license_type_name,
                )
            )

        logger.debug("Browsed %d expert steps across applications", len(result))
        return result
