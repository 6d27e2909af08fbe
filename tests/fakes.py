"""
In-memory repository fakes.

Each fake implements its port over a plain dict so unit tests can run the
handlers and public actions without a database.
"""

import uuid
from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

from applications.domain.application import Application
from applications.domain.application_step import ApplicationStep
from applications.ports.application_repository import ApplicationRepository
from applications.ports.application_step_repository import ApplicationStepRepository
from core.domain.exceptions import ConstraintError, StepNotFoundError, ValidationError
from core.infrastructure.cache import CachePort
from core.infrastructure.container import DataAccess
from core.infrastructure.events import InMemoryEventBus
from core.infrastructure.view_invalidation import ViewInvalidator
from requirements.domain.requirement import Requirement
from requirements.domain.requirement_document import (
    RequirementDocument,
    RequirementTemplateFile,
)
from requirements.domain.requirement_step import RequirementStep
from requirements.ports.requirement_document_repository import (
    RequirementDocumentRepository,
    RequirementTemplateFileRepository,
)
from requirements.ports.requirement_repository import RequirementRepository
from requirements.ports.requirement_step_repository import RequirementStepRepository


def _step_sort_key(step):
    return (step.is_expert_step, step.order)


class InMemoryRequirementRepository(RequirementRepository):
    def __init__(self):
        self.rows: Dict[uuid.UUID, Requirement] = {}
        self.save_calls = 0

    async def save(self, requirement: Requirement) -> Requirement:
        self.save_calls += 1
        for existing in self.rows.values():
            if existing.id != requirement.id and existing.key == requirement.key:
                raise ConstraintError(
                    'duplicate key value violates unique constraint "unique_requirement_state_license_type"'
                )
        self.rows[requirement.id] = requirement
        return requirement

    async def find_by_id(self, requirement_id: uuid.UUID) -> Optional[Requirement]:
        return self.rows.get(requirement_id)

    async def find_by_ids(self, requirement_ids: Sequence[uuid.UUID]) -> List[Requirement]:
        return [self.rows[i] for i in requirement_ids if i in self.rows]

    async def find_by_state_and_license_type(
        self, state: str, license_type_name: str
    ) -> Optional[Requirement]:
        for requirement in self.rows.values():
            if requirement.state == state and requirement.license_type_name == license_type_name:
                return requirement
        return None

    async def list_all(self) -> List[Requirement]:
        return sorted(self.rows.values(), key=lambda r: (r.state, r.license_type_name))

    async def count(self) -> int:
        return len(self.rows)


class InMemoryRequirementStepRepository(RequirementStepRepository):
    def __init__(self):
        self.rows: Dict[uuid.UUID, RequirementStep] = {}

    def _filter(self, is_expert_step=None, requirement_id=None) -> List[RequirementStep]:
        return [
            step
            for step in self.rows.values()
            if (is_expert_step is None or step.is_expert_step == is_expert_step)
            and (requirement_id is None or step.requirement_id == requirement_id)
        ]

    async def save(self, step: RequirementStep) -> RequirementStep:
        self.rows[step.id] = step
        return step

    async def save_many(self, steps: Sequence[RequirementStep]) -> List[RequirementStep]:
        for step in steps:
            self.rows[step.id] = step
        return list(steps)

    async def find_by_id(self, step_id: uuid.UUID) -> Optional[RequirementStep]:
        return self.rows.get(step_id)

    async def find_by_ids(
        self,
        step_ids: Sequence[uuid.UUID],
        is_expert_step: Optional[bool] = None,
        requirement_id: Optional[uuid.UUID] = None,
    ) -> List[RequirementStep]:
        wanted = set(step_ids)
        steps = [s for s in self._filter(is_expert_step, requirement_id) if s.id in wanted]
        return sorted(steps, key=lambda s: s.order)

    async def find_by_requirement(
        self, requirement_id: uuid.UUID, is_expert_step: Optional[bool] = None
    ) -> List[RequirementStep]:
        return sorted(self._filter(is_expert_step, requirement_id), key=_step_sort_key)

    async def list_all(
        self,
        is_expert_step: Optional[bool] = None,
        exclude_requirement_id: Optional[uuid.UUID] = None,
    ) -> List[RequirementStep]:
        steps = [
            s for s in self._filter(is_expert_step) if s.requirement_id != exclude_requirement_id
        ]
        return sorted(steps, key=lambda s: (str(s.requirement_id), s.order))

    async def max_order(self, requirement_id: uuid.UUID, is_expert_step: bool) -> Optional[int]:
        orders = [s.order for s in self._filter(is_expert_step, requirement_id)]
        return max(orders) if orders else None

    async def apply_order(
        self,
        requirement_id: uuid.UUID,
        assignments: Sequence[Tuple[uuid.UUID, int]],
        is_expert_step: bool = False,
    ) -> None:
        partition = {s.id: s for s in self._filter(is_expert_step, requirement_id)}
        for step_id, _ in assignments:
            if step_id not in partition:
                raise StepNotFoundError(
                    f"Step {step_id} does not belong to requirement {requirement_id}"
                )
        if {step_id for step_id, _ in assignments} != set(partition):
            raise ValidationError("Step order must list every step of the requirement")
        for step_id, order in assignments:
            self.rows[step_id] = replace(partition[step_id], order=order)

    async def delete(self, step_id: uuid.UUID, is_expert_step: Optional[bool] = None) -> bool:
        step = self.rows.get(step_id)
        if step is None or (is_expert_step is not None and step.is_expert_step != is_expert_step):
            return False
        del self.rows[step_id]
        return True

    async def count_by_requirement(self, requirement_id: uuid.UUID) -> int:
        return len(self._filter(requirement_id=requirement_id))


class InMemoryRequirementDocumentRepository(RequirementDocumentRepository):
    def __init__(self):
        self.rows: Dict[uuid.UUID, RequirementDocument] = {}

    async def save(self, document: RequirementDocument) -> RequirementDocument:
        self.rows[document.id] = document
        return document

    async def save_many(
        self, documents: Sequence[RequirementDocument]
    ) -> List[RequirementDocument]:
        for document in documents:
            self.rows[document.id] = document
        return list(documents)

    async def find_by_id(self, document_id: uuid.UUID) -> Optional[RequirementDocument]:
        return self.rows.get(document_id)

    async def find_by_ids(self, document_ids: Sequence[uuid.UUID]) -> List[RequirementDocument]:
        return [self.rows[i] for i in document_ids if i in self.rows]

    async def find_by_requirement(self, requirement_id: uuid.UUID) -> List[RequirementDocument]:
        documents = [d for d in self.rows.values() if d.requirement_id == requirement_id]
        return sorted(documents, key=lambda d: d.name)

    async def list_all(
        self, exclude_requirement_id: Optional[uuid.UUID] = None
    ) -> List[RequirementDocument]:
        documents = [d for d in self.rows.values() if d.requirement_id != exclude_requirement_id]
        return sorted(documents, key=lambda d: (str(d.requirement_id), d.name))

    async def delete(self, document_id: uuid.UUID) -> bool:
        return self.rows.pop(document_id, None) is not None

    async def count_by_requirement(self, requirement_id: uuid.UUID) -> int:
        return len([d for d in self.rows.values() if d.requirement_id == requirement_id])


class InMemoryRequirementTemplateFileRepository(RequirementTemplateFileRepository):
    def __init__(self):
        self.rows: Dict[uuid.UUID, RequirementTemplateFile] = {}

    async def save(self, template: RequirementTemplateFile) -> RequirementTemplateFile:
        self.rows[template.id] = template
        return template

    async def find_by_id(self, template_id: uuid.UUID) -> Optional[RequirementTemplateFile]:
        return self.rows.get(template_id)

    async def find_by_requirement(
        self, requirement_id: uuid.UUID
    ) -> List[RequirementTemplateFile]:
        templates = [t for t in self.rows.values() if t.requirement_id == requirement_id]
        return sorted(templates, key=lambda t: t.name)

    async def delete(self, template_id: uuid.UUID) -> bool:
        return self.rows.pop(template_id, None) is not None


class InMemoryApplicationRepository(ApplicationRepository):
    def __init__(self):
        self.rows: Dict[uuid.UUID, Application] = {}

    async def save(self, application: Application) -> Application:
        self.rows[application.id] = application
        return application

    async def find_by_id(self, application_id: uuid.UUID) -> Optional[Application]:
        return self.rows.get(application_id)

    async def find_by_ids(self, application_ids: Sequence[uuid.UUID]) -> List[Application]:
        return [self.rows[i] for i in application_ids if i in self.rows]


class InMemoryApplicationStepRepository(ApplicationStepRepository):
    def __init__(self):
        self.rows: Dict[uuid.UUID, ApplicationStep] = {}

    def _filter(self, is_expert_step=None, application_id=None) -> List[ApplicationStep]:
        return [
            step
            for step in self.rows.values()
            if (is_expert_step is None or step.is_expert_step == is_expert_step)
            and (application_id is None or step.application_id == application_id)
        ]

    async def save(self, step: ApplicationStep) -> ApplicationStep:
        self.rows[step.id] = step
        return step

    async def save_many(self, steps: Sequence[ApplicationStep]) -> List[ApplicationStep]:
        for step in steps:
            self.rows[step.id] = step
        return list(steps)

    async def find_by_id(self, step_id: uuid.UUID) -> Optional[ApplicationStep]:
        return self.rows.get(step_id)

    async def find_by_ids(
        self, step_ids: Sequence[uuid.UUID], is_expert_step: Optional[bool] = None
    ) -> List[ApplicationStep]:
        wanted = set(step_ids)
        steps = [s for s in self._filter(is_expert_step) if s.id in wanted]
        return sorted(steps, key=lambda s: s.order)

    async def find_by_application(
        self, application_id: uuid.UUID, is_expert_step: Optional[bool] = None
    ) -> List[ApplicationStep]:
        return sorted(self._filter(is_expert_step, application_id), key=_step_sort_key)

    async def list_expert_steps(self) -> List[ApplicationStep]:
        return sorted(self._filter(True), key=lambda s: (s.order, str(s.application_id)))

    async def has_steps(self, application_id: uuid.UUID, is_expert_step: bool) -> bool:
        return bool(self._filter(is_expert_step, application_id))

    async def max_order(self, application_id: uuid.UUID, is_expert_step: bool) -> Optional[int]:
        orders = [s.order for s in self._filter(is_expert_step, application_id)]
        return max(orders) if orders else None

    async def delete(self, step_id: uuid.UUID, is_expert_step: Optional[bool] = None) -> bool:
        step = self.rows.get(step_id)
        if step is None or (is_expert_step is not None and step.is_expert_step != is_expert_step):
            return False
        del self.rows[step_id]
        return True


class RecordingViewInvalidator(ViewInvalidator):
    """Remembers every view marked stale, in call order."""

    def __init__(self):
        self.stale: List[str] = []

    async def mark_stale(self, view: str) -> None:
        self.stale.append(view)


class InMemoryCache(CachePort):
    def __init__(self):
        self.values: Dict[str, Any] = {}
        self.timeouts: Dict[str, Optional[int]] = {}

    async def get(self, key: str) -> Optional[Any]:
        return self.values.get(key)

    async def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        self.values[key] = value
        self.timeouts[key] = timeout

    async def delete(self, key: str) -> None:
        self.values.pop(key, None)


def in_memory_data_access(event_bus: Optional[InMemoryEventBus] = None) -> DataAccess:
    """Build a DataAccess whose every collaborator lives in memory."""
    return DataAccess(
        requirements=InMemoryRequirementRepository(),
        requirement_steps=InMemoryRequirementStepRepository(),
        requirement_documents=InMemoryRequirementDocumentRepository(),
        requirement_templates=InMemoryRequirementTemplateFileRepository(),
        applications=InMemoryApplicationRepository(),
        application_steps=InMemoryApplicationStepRepository(),
        views=RecordingViewInvalidator(),
        event_bus=event_bus or InMemoryEventBus(),
    )
