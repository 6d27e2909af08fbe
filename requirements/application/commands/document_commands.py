"""
Requirement document and template file commands.
"""

import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class CreateDocumentCommand:
    """Add a required document to a requirement."""

    requirement_id: uuid.UUID
    document_name: str
    description: Optional[str] = None
    is_required: bool = True


@dataclass
class UpdateDocumentCommand:
    document_id: uuid.UUID
    document_name: str
    description: Optional[str] = None
    is_required: bool = True


@dataclass
class DeleteDocumentCommand:
    document_id: uuid.UUID


@dataclass
class CreateTemplateFileCommand:
    """
    Attach an already uploaded file template to a requirement.

    Uploading happens elsewhere; only the reference is stored.
    """

    requirement_id: uuid.UUID
    template_name: str
    file_url: str
    file_name: str
    description: Optional[str] = None


@dataclass
class UpdateTemplateFileCommand:
    template_id: uuid.UUID
    template_name: str
    description: Optional[str] = None


@dataclass
class DeleteTemplateFileCommand:
    template_id: uuid.UUID
