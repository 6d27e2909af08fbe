"""
Requirement document and template file repository ports (interfaces).
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
import uuid

from requirements.domain.requirement_document import (
    RequirementDocument,
    RequirementTemplateFile,
)


class RequirementDocumentRepository(ABC):
    """Abstract repository for RequirementDocument entities."""

    @abstractmethod
    async def save(self, document: RequirementDocument) -> RequirementDocument:
        pass

    @abstractmethod
    async def save_many(
        self, documents: Sequence[RequirementDocument]
    ) -> List[RequirementDocument]:
        """Insert several new documents as one statement."""
        pass

    @abstractmethod
    async def find_by_id(self, document_id: uuid.UUID) -> Optional[RequirementDocument]:
        pass

    @abstractmethod
    async def find_by_ids(self, document_ids: Sequence[uuid.UUID]) -> List[RequirementDocument]:
        pass

    @abstractmethod
    async def find_by_requirement(self, requirement_id: uuid.UUID) -> List[RequirementDocument]:
        """Documents of one requirement ordered by name."""
        pass

    @abstractmethod
    async def list_all(
        self, exclude_requirement_id: Optional[uuid.UUID] = None
    ) -> List[RequirementDocument]:
        """Documents across requirements ordered by requirement, then name."""
        pass

    @abstractmethod
    async def delete(self, document_id: uuid.UUID) -> bool:
        pass

    @abstractmethod
    async def count_by_requirement(self, requirement_id: uuid.UUID) -> int:
        pass


class RequirementTemplateFileRepository(ABC):
    """Abstract repository for RequirementTemplateFile entities."""

    @abstractmethod
    async def save(self, template: RequirementTemplateFile) -> RequirementTemplateFile:
        pass

    @abstractmethod
    async def find_by_id(self, template_id: uuid.UUID) -> Optional[RequirementTemplateFile]:
        pass

    @abstractmethod
    async def find_by_requirement(
        self, requirement_id: uuid.UUID
    ) -> List[RequirementTemplateFile]:
        """Template files of one requirement ordered by name."""
        pass

    @abstractmethod
    async def delete(self, template_id: uuid.UUID) -> bool:
        pass
