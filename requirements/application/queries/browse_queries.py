"""
Browse queries.

Queries that list template rows across requirements so they can be
picked for copying into the requirement being edited.
"""
import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class BrowseRequirementsQuery:
    """List rows of every requirement except the current one."""

    current_requirement_id: Optional[uuid.UUID] = None
