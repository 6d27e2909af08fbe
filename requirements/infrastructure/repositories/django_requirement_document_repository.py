"""
Django implementations of the requirement document and template file ports.
"""
import uuid
from typing import List, Optional, Sequence

from asgiref.sync import sync_to_async
from django.db import IntegrityError

from core.domain.exceptions import ConstraintError
from requirements.domain.requirement_document import (
    RequirementDocument,
    RequirementTemplateFile,
)
from requirements.infrastructure.models import (
    LicenseRequirementDocument as DocumentModel,
    LicenseRequirementTemplate as TemplateModel,
)
from requirements.ports.requirement_document_repository import (
    RequirementDocumentRepository,
    RequirementTemplateFileRepository,
)


class DjangoRequirementDocumentRepository(RequirementDocumentRepository):
    """Django ORM implementation of RequirementDocumentRepository."""

    def _to_domain(self, model: DocumentModel) -> RequirementDocument:
        return RequirementDocument(
            id=model.id,
            requirement_id=model.requirement_id,
            name=model.document_name,
            document_type=model.document_type,
            description=model.description,
            is_required=model.is_required,
            created_at=model.created_at,
        )

    def _new_model(self, document: RequirementDocument) -> DocumentModel:
        return DocumentModel(
            id=document.id,
            requirement_id=document.requirement_id,
            document_name=document.name,
            document_type=document.document_type,
            description=document.description,
            is_required=document.is_required,
        )

    @sync_to_async
    def save(self, document: RequirementDocument) -> RequirementDocument:
        model = DocumentModel.objects.filter(id=document.id).first()
        if model is None:
            model = self._new_model(document)
        else:
            model.document_name = document.name
            model.document_type = document.document_type
            model.description = document.description
            model.is_required = document.is_required
        try:
            model.save()
        except IntegrityError as e:
            raise ConstraintError(str(e))
        return self._to_domain(model)

    @sync_to_async
    def save_many(
        self, documents: Sequence[RequirementDocument]
    ) -> List[RequirementDocument]:
        if not documents:
            return []
        try:
            models = DocumentModel.objects.bulk_create(
                [self._new_model(document) for document in documents]
            )
        except IntegrityError as e:
            raise ConstraintError(str(e))
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def find_by_id(self, document_id: uuid.UUID) -> Optional[RequirementDocument]:
        try:
            return self._to_domain(DocumentModel.objects.get(id=document_id))
        except DocumentModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_ids(self, document_ids: Sequence[uuid.UUID]) -> List[RequirementDocument]:
        models = DocumentModel.objects.filter(id__in=list(document_ids)).order_by(
            "document_name"
        )
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def find_by_requirement(self, requirement_id: uuid.UUID) -> List[RequirementDocument]:
        models = DocumentModel.objects.filter(requirement_id=requirement_id).order_by(
            "document_name"
        )
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def list_all(
        self, exclude_requirement_id: Optional[uuid.UUID] = None
    ) -> List[RequirementDocument]:
        queryset = DocumentModel.objects.all()
        if exclude_requirement_id is not None:
            queryset = queryset.exclude(requirement_id=exclude_requirement_id)
        models = queryset.order_by("requirement_id", "document_name")
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def delete(self, document_id: uuid.UUID) -> bool:
        deleted, _ = DocumentModel.objects.filter(id=document_id).delete()
        return deleted > 0

    @sync_to_async
    def count_by_requirement(self, requirement_id: uuid.UUID) -> int:
        return DocumentModel.objects.filter(requirement_id=requirement_id).count()


class DjangoRequirementTemplateFileRepository(RequirementTemplateFileRepository):
    """Django ORM implementation of RequirementTemplateFileRepository."""

    def _to_domain(self, model: TemplateModel) -> RequirementTemplateFile:
        return RequirementTemplateFile(
            id=model.id,
            requirement_id=model.requirement_id,
            name=model.template_name,
            description=model.description,
            file_url=model.file_url,
            file_name=model.file_name,
            created_at=model.created_at,
        )

    @sync_to_async
    def save(self, template: RequirementTemplateFile) -> RequirementTemplateFile:
        model = TemplateModel.objects.filter(id=template.id).first()
        if model is None:
            model = TemplateModel(id=template.id, requirement_id=template.requirement_id)
        model.template_name = template.name
        model.description = template.description
        model.file_url = template.file_url
        model.file_name = template.file_name
        try:
            model.save()
        except IntegrityError as e:
            raise ConstraintError(str(e))
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, template_id: uuid.UUID) -> Optional[RequirementTemplateFile]:
        try:
            return self._to_domain(TemplateModel.objects.get(id=template_id))
        except TemplateModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_requirement(
        self, requirement_id: uuid.UUID
    ) -> List[RequirementTemplateFile]:
        models = TemplateModel.objects.filter(requirement_id=requirement_id).order_by(
            "template_name"
        )
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def delete(self, template_id: uuid.UUID) -> bool:
        deleted, _ = TemplateModel.objects.filter(id=template_id).delete()
        return deleted > 0
