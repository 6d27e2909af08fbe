"""
Integration tests for repository implementations.
"""

import uuid

import pytest

from applications.domain.application import Application
from applications.domain.application_step import ApplicationStep
from core.domain.exceptions import ConstraintError, StepNotFoundError, ValidationError
from core.domain.value_objects import ApplicationStatus
from requirements.domain.requirement import Requirement
from requirements.domain.requirement_document import (
    RequirementDocument,
    RequirementTemplateFile,
)
from requirements.domain.requirement_step import RequirementStep


@pytest.mark.django_db(transaction=True)
@pytest.mark.integration
class TestRequirementRepository:
    """Integration tests for RequirementRepository."""

    @pytest.mark.asyncio
    async def test_save_and_find(self, requirement_repository):
        """Test saving and finding a requirement."""
        requirement = Requirement.create(state="Texas", license_type_name="Home Health Agency")

        saved = await requirement_repository.save(requirement)
        found = await requirement_repository.find_by_state_and_license_type(
            "Texas", "Home Health Agency"
        )

        assert found is not None
        assert found.id == saved.id
        assert (await requirement_repository.find_by_id(saved.id)).state == "Texas"

    @pytest.mark.asyncio
    async def test_find_not_found(self, requirement_repository):
        """Test finding a non-existent requirement."""
        assert await requirement_repository.find_by_id(uuid.uuid4()) is None
        assert await requirement_repository.find_by_state_and_license_type("Ohio", "x") is None

    @pytest.mark.asyncio
    async def test_duplicate_pair_rejected(self, requirement_repository):
        """Test the (state, license type) pair is unique."""
        await requirement_repository.save(Requirement.create("Texas", "Hospice"))

        with pytest.raises(ConstraintError):
            await requirement_repository.save(Requirement.create("Texas", "Hospice"))
        assert await requirement_repository.count() == 1

    @pytest.mark.asyncio
    async def test_list_all_sorted(self, requirement_repository):
        """Test requirements list by state, then license type."""
        await requirement_repository.save(Requirement.create("Texas", "Hospice"))
        await requirement_repository.save(Requirement.create("Florida", "Hospice"))
        await requirement_repository.save(Requirement.create("Texas", "Assisted Living"))

        listed = await requirement_repository.list_all()

        assert [(r.state, r.license_type_name) for r in listed] == [
            ("Florida", "Hospice"),
            ("Texas", "Assisted Living"),
            ("Texas", "Hospice"),
        ]


@pytest.mark.django_db(transaction=True)
@pytest.mark.integration
class TestRequirementStepRepository:
    """Integration tests for RequirementStepRepository."""

    @pytest.mark.asyncio
    async def test_partitions(self, requirement_repository, requirement_step_repository):
        """Test regular and expert orders are tracked separately."""
        requirement = await requirement_repository.save(Requirement.create("Texas", "Hospice"))
        await requirement_step_repository.save_many(
            [
                RequirementStep.create(requirement.id, "One", 1),
                RequirementStep.create(requirement.id, "Two", 2),
                RequirementStep.create_expert(requirement.id, "Intake call", 1),
            ]
        )

        assert await requirement_step_repository.max_order(requirement.id, False) == 2
        assert await requirement_step_repository.max_order(requirement.id, True) == 1
        steps = await requirement_step_repository.find_by_requirement(requirement.id)
        assert [s.name for s in steps] == ["One", "Two", "Intake call"]
        assert await requirement_step_repository.count_by_requirement(requirement.id) == 3

    @pytest.mark.asyncio
    async def test_max_order_empty(self, requirement_repository, requirement_step_repository):
        """Test an empty partition has no maximum."""
        requirement = await requirement_repository.save(Requirement.create("Texas", "Hospice"))

        assert await requirement_step_repository.max_order(requirement.id, True) is None

    @pytest.mark.asyncio
    async def test_apply_order_all_or_nothing(
        self, requirement_repository, requirement_step_repository
    ):
        """Test a foreign id rolls back every assignment."""
        requirement = await requirement_repository.save(Requirement.create("Texas", "Hospice"))
        one, two = await requirement_step_repository.save_many(
            [
                RequirementStep.create(requirement.id, "One", 1),
                RequirementStep.create(requirement.id, "Two", 2),
            ]
        )

        with pytest.raises(StepNotFoundError):
            await requirement_step_repository.apply_order(
                requirement.id, [(two.id, 1), (uuid.uuid4(), 2), (one.id, 3)]
            )
        steps = await requirement_step_repository.find_by_requirement(requirement.id, False)
        assert [(s.id, s.order) for s in steps] == [(one.id, 1), (two.id, 2)]

        with pytest.raises(ValidationError):
            await requirement_step_repository.apply_order(requirement.id, [(two.id, 1)])
        steps = await requirement_step_repository.find_by_requirement(requirement.id, False)
        assert [(s.id, s.order) for s in steps] == [(one.id, 1), (two.id, 2)]

        await requirement_step_repository.apply_order(requirement.id, [(two.id, 1), (one.id, 2)])
        steps = await requirement_step_repository.find_by_requirement(requirement.id, False)
        assert [(s.id, s.order) for s in steps] == [(two.id, 1), (one.id, 2)]

    @pytest.mark.asyncio
    async def test_find_by_ids_filters(self, requirement_repository, requirement_step_repository):
        """Test partition and requirement filters on id lookups."""
        requirement = await requirement_repository.save(Requirement.create("Texas", "Hospice"))
        regular, expert = await requirement_step_repository.save_many(
            [
                RequirementStep.create(requirement.id, "One", 1),
                RequirementStep.create_expert(requirement.id, "Intake call", 1),
            ]
        )

        found = await requirement_step_repository.find_by_ids(
            [regular.id, expert.id], is_expert_step=True, requirement_id=requirement.id
        )
        assert [s.id for s in found] == [expert.id]
        assert await requirement_step_repository.find_by_ids(
            [expert.id], requirement_id=uuid.uuid4()
        ) == []

    @pytest.mark.asyncio
    async def test_update_and_delete(self, requirement_repository, requirement_step_repository):
        """Test an edit persists and delete respects the partition."""
        requirement = await requirement_repository.save(Requirement.create("Texas", "Hospice"))
        step = await requirement_step_repository.save(
            RequirementStep.create_expert(requirement.id, "Intake call", 1)
        )

        await requirement_step_repository.save(
            step.with_details(name="Kickoff call", description="x", phase="Survey Guidance")
        )
        found = await requirement_step_repository.find_by_id(step.id)
        assert found.name == "Kickoff call"
        assert found.phase == "Survey Guidance"

        assert await requirement_step_repository.delete(step.id, is_expert_step=False) is False
        assert await requirement_step_repository.delete(step.id, is_expert_step=True) is True


@pytest.mark.django_db(transaction=True)
@pytest.mark.integration
class TestRequirementDocumentRepositories:
    """Integration tests for document and template file repositories."""

    @pytest.mark.asyncio
    async def test_documents(self, requirement_repository, requirement_document_repository):
        """Test saving, listing and excluding documents."""
        texas = await requirement_repository.save(Requirement.create("Texas", "Hospice"))
        ohio = await requirement_repository.save(Requirement.create("Ohio", "Hospice"))
        await requirement_document_repository.save_many(
            [
                RequirementDocument.create(texas.id, "Floor plan"),
                RequirementDocument.create(texas.id, "Business license"),
                RequirementDocument.create(ohio.id, "Fire inspection"),
            ]
        )

        own = await requirement_document_repository.find_by_requirement(texas.id)
        assert [d.name for d in own] == ["Business license", "Floor plan"]
        others = await requirement_document_repository.list_all(exclude_requirement_id=texas.id)
        assert [d.name for d in others] == ["Fire inspection"]
        assert await requirement_document_repository.count_by_requirement(texas.id) == 2

    @pytest.mark.asyncio
    async def test_template_files(self, requirement_repository, requirement_template_repository):
        """Test saving and deleting a template file."""
        requirement = await requirement_repository.save(Requirement.create("Texas", "Hospice"))
        template = await requirement_template_repository.save(
            RequirementTemplateFile.create(
                requirement.id, "Policy manual", "https://files.example.com/p.docx", "p.docx"
            )
        )

        listed = await requirement_template_repository.find_by_requirement(requirement.id)
        assert [t.file_name for t in listed] == ["p.docx"]
        assert await requirement_template_repository.delete(template.id) is True
        assert await requirement_template_repository.find_by_id(template.id) is None


@pytest.mark.django_db(transaction=True)
@pytest.mark.integration
class TestApplicationRepositories:
    """Integration tests for application repositories."""

    @pytest.mark.asyncio
    async def test_save_and_update_application(self, application_repository):
        """Test lifecycle changes persist."""
        application = await application_repository.save(
            Application.create(uuid.uuid4(), "Sunrise", "Texas", "Hospice")
        )
        expert_id = uuid.uuid4()

        await application_repository.save(application.assign_expert(expert_id).approve())
        found = await application_repository.find_by_id(application.id)

        assert found.status == ApplicationStatus.IN_PROGRESS
        assert found.assigned_expert_id == expert_id
        assert found.license_type_name == "Hospice"

    @pytest.mark.asyncio
    async def test_steps(self, application_repository, application_step_repository):
        """Test partition queries over application steps."""
        application = await application_repository.save(
            Application.create(uuid.uuid4(), "Sunrise", "Texas", "Hospice")
        )
        assert await application_step_repository.has_steps(application.id, True) is False

        expert, regular = await application_step_repository.save_many(
            [
                ApplicationStep.create(application.id, "Intake call", 1),
                ApplicationStep.create(application.id, "Records", 1, is_expert_step=False),
            ]
        )

        assert await application_step_repository.has_steps(application.id, True) is True
        assert await application_step_repository.max_order(application.id, True) == 1
        steps = await application_step_repository.find_by_application(application.id)
        assert [s.id for s in steps] == [regular.id, expert.id]
        assert [s.id for s in await application_step_repository.list_expert_steps()] == [
            expert.id
        ]

        await application_step_repository.save(expert.mark_completed(True))
        found = await application_step_repository.find_by_id(expert.id)
        assert found.is_completed is True
        assert found.completed_at is not None
