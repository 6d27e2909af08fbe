"""
Unit tests for the cross-requirement browse actions.
"""
import uuid

import pytest

from applications.domain.application import Application
from applications.domain.application_step import ApplicationStep
from requirements import actions


def _store_application(data, state, license_type_name):
    application = Application.create(
        owner_id=uuid.uuid4(),
        application_name=f"{state} clinic",
        state=state,
        license_type_name=license_type_name,
    )
    data.applications.rows[application.id] = application
    return application


def _store_expert_step(data, application, name, order, description=None, phase=None):
    step = ApplicationStep.create(
        application_id=application.id,
        name=name,
        order=order,
        description=description,
        phase=phase,
    )
    data.application_steps.rows[step.id] = step
    return step


@pytest.mark.asyncio
class TestBrowseTemplates:
    """Tests for browsing steps and documents of other requirements."""

    async def test_steps_exclude_current_requirement(
        self, data, requirement, other_requirement, add_step
    ):
        """Test the current requirement's steps are left out."""
        add_step(requirement.id, "Mine", 1)
        theirs = add_step(other_requirement.id, "Theirs", 1)
        add_step(other_requirement.id, "Their expert step", 1, is_expert_step=True)

        result = await actions.get_all_steps_with_requirement_info(data, requirement.id)

        assert [(s.id, s.state, s.license_type) for s in result.data] == [
            (theirs.id, "Florida", "Assisted Living")
        ]

    async def test_steps_without_current_requirement(
        self, data, requirement, other_requirement, add_step
    ):
        """Test every requirement is listed when none is current."""
        add_step(requirement.id, "Mine", 1)
        add_step(other_requirement.id, "Theirs", 1)

        result = await actions.get_all_steps_with_requirement_info(data)

        assert sorted(s.step_name for s in result.data) == ["Mine", "Theirs"]

    async def test_documents_labelled(self, data, requirement, other_requirement):
        """Test documents carry their requirement's state and license type."""
        await actions.create_document(data, other_requirement.id, "Fire inspection")
        await actions.create_document(data, requirement.id, "Floor plan")

        result = await actions.get_all_documents_with_requirement_info(data, requirement.id)

        assert [(d.document_name, d.state) for d in result.data] == [
            ("Fire inspection", "Florida")
        ]


@pytest.mark.asyncio
class TestBrowseExpertSteps:
    """Tests for browsing expert steps found on applications."""

    async def test_deduplicated_per_requirement(self, data, requirement):
        """Test identical steps on applications of one pair are listed once."""
        first = _store_application(data, "Texas", "Home Health Agency")
        second = _store_application(data, "Texas", "Home Health Agency")
        _store_expert_step(data, first, "Intake call", 1, "Kickoff", "Client Intake")
        _store_expert_step(data, second, "Intake call", 1, "Kickoff", "Client Intake")

        result = await actions.get_all_expert_steps_with_requirement_info(data)

        assert len(result.data) == 1
        assert result.data[0].license_requirement_id == requirement.id

    async def test_same_step_under_different_pairs_kept(self, data):
        """Test dedup includes the state and license type."""
        texas = _store_application(data, "Texas", "Hospice")
        florida = _store_application(data, "Florida", "Hospice")
        _store_expert_step(data, texas, "Intake call", 1)
        _store_expert_step(data, florida, "Intake call", 1)

        result = await actions.get_all_expert_steps_with_requirement_info(data)

        assert sorted(s.state for s in result.data) == ["Florida", "Texas"]

    async def test_never_creates_requirements(self, data):
        """Test browsing leaves unknown pairs unresolved."""
        application = _store_application(data, "Ohio", "Hospice")
        _store_expert_step(data, application, "Intake call", 1)

        result = await actions.get_all_expert_steps_with_requirement_info(data)

        assert result.data[0].license_requirement_id is None
        assert data.requirements.save_calls == 0

    async def test_skips_applications_without_license_type(self, data):
        """Test applications with no license type are left out."""
        application = _store_application(data, "Texas", None)
        _store_expert_step(data, application, "Intake call", 1)

        result = await actions.get_all_expert_steps_with_requirement_info(data)

        assert result.data == []

    async def test_excludes_current_requirement(self, data, requirement, other_requirement):
        """Test steps mapping to the current requirement are left out."""
        texas = _store_application(data, "Texas", "Home Health Agency")
        florida = _store_application(data, "Florida", "Assisted Living")
        _store_expert_step(data, texas, "Intake call", 1)
        kept = _store_expert_step(data, florida, "Intake call", 1)

        result = await actions.get_all_expert_steps_with_requirement_info(data, requirement.id)

        assert [s.id for s in result.data] == [kept.id]
