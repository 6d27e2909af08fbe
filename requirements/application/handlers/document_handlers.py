"""
Requirement document and template file handlers.
"""
import logging

from core.domain.exceptions import (
    DocumentNotFoundError,
    RequirementNotFoundError,
    TemplateFileNotFoundError,
)
from requirements.application.commands.document_commands import (
    CreateDocumentCommand,
    CreateTemplateFileCommand,
    DeleteDocumentCommand,
    DeleteTemplateFileCommand,
    UpdateDocumentCommand,
    UpdateTemplateFileCommand,
)
from requirements.domain.requirement_document import (
    RequirementDocument,
    RequirementTemplateFile,
)
from requirements.ports.requirement_document_repository import (
    RequirementDocumentRepository,
    RequirementTemplateFileRepository,
)
from requirements.ports.requirement_repository import RequirementRepository

logger = logging.getLogger(__name__)


async def _require_requirement(repository: RequirementRepository, requirement_id) -> None:
    if not await repository.find_by_id(requirement_id):
        raise RequirementNotFoundError(f"License requirement {requirement_id} not found")


class CreateDocumentHandler:
    """Handler for CreateDocumentCommand."""

    def __init__(
        self,
        requirement_repository: RequirementRepository,
        document_repository: RequirementDocumentRepository,
    ):
        """Initialize handler with repositories."""
        self.requirement_repository = requirement_repository
        self.document_repository = document_repository

    async def handle(self, command: CreateDocumentCommand) -> RequirementDocument:
        await _require_requirement(self.requirement_repository, command.requirement_id)
        document = RequirementDocument.create(
            requirement_id=command.requirement_id,
            name=command.document_name,
            description=command.description,
            is_required=command.is_required,
        )
        saved = await self.document_repository.save(document)
        logger.info("Created document %s for requirement %s", saved.id, saved.requirement_id)
        return saved


class UpdateDocumentHandler:
    """Handler for UpdateDocumentCommand."""

    def __init__(self, document_repository: RequirementDocumentRepository):
        """Initialize handler with repository."""
        self.document_repository = document_repository

    async def handle(self, command: UpdateDocumentCommand) -> RequirementDocument:
        document = await self.document_repository.find_by_id(command.document_id)
        if not document:
            raise DocumentNotFoundError(f"Document {command.document_id} not found")
        updated = document.with_details(
            name=command.document_name,
            description=command.description,
            is_required=command.is_required,
        )
        return await self.document_repository.save(updated)


class DeleteDocumentHandler:
    """Handler for DeleteDocumentCommand."""

    def __init__(self, document_repository: RequirementDocumentRepository):
        """Initialize handler with repository."""
        self.document_repository = document_repository

    async def handle(self, command: DeleteDocumentCommand) -> None:
        if not await self.document_repository.delete(command.document_id):
            raise DocumentNotFoundError(f"Document {command.document_id} not found")
        logger.info("Deleted document %s", command.document_id)


class CreateTemplateFileHandler:
    """Handler for CreateTemplateFileCommand."""

    def __init__(
        self,
        requirement_repository: RequirementRepository,
        template_repository: RequirementTemplateFileRepository,
    ):
        """Initialize handler with repositories."""
        self.requirement_repository = requirement_repository
        self.template_repository = template_repository

    async def handle(self, command: CreateTemplateFileCommand) -> RequirementTemplateFile:
        """
        Attach a template file reference to a requirement.

        Args:
            command: CreateTemplateFileCommand

        Returns:
            Created template file

        Raises:
            RequirementNotFoundError: If the requirement does not exist
            ValueError: If the name or file reference is missing
        """
        await _require_requirement(self.requirement_repository, command.requirement_id)
        template = RequirementTemplateFile.create(
            requirement_id=command.requirement_id,
            name=command.template_name,
            file_url=command.file_url,
            file_name=command.file_name,
            description=command.description,
        )
        saved = await self.template_repository.save(template)
        logger.info("Created template file %s for requirement %s", saved.id, saved.requirement_id)
        return saved


class UpdateTemplateFileHandler:
    """Handler for UpdateTemplateFileCommand."""

    def __init__(self, template_repository: RequirementTemplateFileRepository):
        """Initialize handler with repository."""
        self.template_repository = template_repository

    async def handle(self, command: UpdateTemplateFileCommand) -> RequirementTemplateFile:
        template = await self.template_repository.find_by_id(command.template_id)
        if not template:
            raise TemplateFileNotFoundError(f"Template file {command.template_id} not found")
        updated = template.with_details(name=command.template_name, description=command.description)
        return await self.template_repository.save(updated)


class DeleteTemplateFileHandler:
    """Handler for DeleteTemplateFileCommand."""

    def __init__(self, template_repository: RequirementTemplateFileRepository):
        """Initialize handler with repository."""
        self.template_repository = template_repository

    async def handle(self, command: DeleteTemplateFileCommand) -> None:
        if not await self.template_repository.delete(command.template_id):
            raise TemplateFileNotFoundError(f"Template file {command.template_id} not found")
        logger.info("Deleted template file %s", command.template_id)
