"""
Unit tests for Application domain entity.
"""

import uuid

import pytest

from applications.domain.application import Application
from applications.domain.application_step import ApplicationStep
from core.domain.exceptions import (
    ExpertNotAssignedError,
    InvalidApplicationStatusError,
    RevisionReasonRequiredError,
)
from core.domain.value_objects import ApplicationStatus
from requirements.domain.requirement_step import RequirementStep


def _application(**overrides):
    application = Application.create(
        owner_id=uuid.uuid4(),
        application_name="Sunrise Home Health",
        state="Texas",
        license_type_name="Home Health Agency",
    )
    return Application(**{**application.__dict__, **overrides})


class TestApplicationEntity:
    """Tests for Application domain entity."""

    def test_create_application(self):
        """Test a new application starts requested with no progress."""
        application = _application()

        assert application.status == ApplicationStatus.REQUESTED
        assert application.progress_percentage == 0
        assert application.assigned_expert_id is None

    def test_blank_license_type_stored_as_none(self):
        """Test an empty license type name is normalized."""
        application = Application.create(
            owner_id=uuid.uuid4(), application_name="x", state="Texas", license_type_name="  "
        )
        assert application.license_type_name is None

    def test_invalid_name_empty(self):
        """Test invalid empty application name."""
        with pytest.raises(ValueError, match="Application name is required"):
            Application.create(owner_id=uuid.uuid4(), application_name="", state="Texas")

    def test_approve_requires_expert(self):
        """Test approval without an expert is refused."""
        application = _application()

        with pytest.raises(ExpertNotAssignedError):
            application.approve()
        assert application.status == ApplicationStatus.REQUESTED

    def test_approve(self):
        """Test approval moves a requested application in progress."""
        application = _application().assign_expert(uuid.uuid4())

        approved = application.approve()

        assert approved.status == ApplicationStatus.IN_PROGRESS
        assert application.status == ApplicationStatus.REQUESTED

    def test_approve_wrong_status(self):
        """Test approval is only valid from requested."""
        application = _application(
            status=ApplicationStatus.IN_PROGRESS, assigned_expert_id=uuid.uuid4()
        )
        with pytest.raises(InvalidApplicationStatusError):
            application.approve()

    def test_assign_expert_keeps_status(self):
        """Test reassignment leaves the status unchanged."""
        application = _application(status=ApplicationStatus.UNDER_REVIEW)

        assigned = application.assign_expert(uuid.uuid4())

        assert assigned.status == ApplicationStatus.UNDER_REVIEW

    def test_reject(self):
        """Test rejection from requested."""
        assert _application().reject().status == ApplicationStatus.REJECTED

    def test_review_cycle(self):
        """Test revision then resubmission then approval."""
        application = _application(status=ApplicationStatus.IN_PROGRESS)

        under_review = application.submit_for_review()
        revised = under_review.request_revision("  Missing floor plan  ")
        assert revised.status == ApplicationStatus.NEEDS_REVISION
        assert revised.revision_reason == "Missing floor plan"

        approved = revised.submit_for_review().approve_review()
        assert approved.status == ApplicationStatus.APPROVED
        assert approved.revision_reason is None

    def test_request_revision_requires_reason(self):
        """Test a blank revision reason is refused."""
        application = _application(status=ApplicationStatus.UNDER_REVIEW)

        with pytest.raises(RevisionReasonRequiredError):
            application.request_revision("   ")

    def test_submit_for_review_wrong_status(self):
        """Test a requested application cannot be submitted for review."""
        with pytest.raises(InvalidApplicationStatusError, match="status 'requested'"):
            _application().submit_for_review()

    def test_close_requires_full_progress(self):
        """Test closing below 100% is refused."""
        with pytest.raises(InvalidApplicationStatusError, match="100%"):
            _application(progress_percentage=99).close()

    def test_close_is_idempotent(self):
        """Test closing a closed application returns it unchanged."""
        closed = _application(progress_percentage=100).close()

        assert closed.status == ApplicationStatus.CLOSED
        assert closed.close() is closed

    def test_with_progress(self):
        """Test progress is the rounded completed share."""
        application = _application()

        assert application.with_progress(1, 3).progress_percentage == 33
        assert application.with_progress(2, 3).progress_percentage == 67
        assert application.with_progress(0, 0).progress_percentage == 0


class TestApplicationStepEntity:
    """Tests for ApplicationStep domain entity."""

    def test_snapshot_of_template_step(self):
        """Test a snapshot copies the template's content, uncompleted."""
        template = RequirementStep.create_expert(
            requirement_id=uuid.uuid4(),
            name="Mock survey",
            order=7,
            phase="Survey Guidance",
            instructions="Bring the binder",
        )
        application_id = uuid.uuid4()

        step = ApplicationStep.snapshot_of(template, application_id, 1)

        assert step.application_id == application_id
        assert step.order == 1
        assert step.phase == "Survey Guidance"
        assert step.instructions == "Bring the binder"
        assert step.is_expert_step is True
        assert step.is_completed is False

    def test_mark_completed(self):
        """Test completion stamps and clears completed_at."""
        step = ApplicationStep.create(application_id=uuid.uuid4(), name="x", order=1)

        done = step.mark_completed(True)
        assert done.is_completed and done.completed_at is not None

        undone = done.mark_completed(False)
        assert not undone.is_completed and undone.completed_at is None

    def test_copy_to_other_application(self):
        """Test a copy lands in the target application, uncompleted."""
        source = ApplicationStep.create(
            application_id=uuid.uuid4(),
            name="Survey walkthrough",
            order=3,
            phase="Survey Guidance",
        ).mark_completed(True)
        target_id = uuid.uuid4()

        copy = source.copy_to(target_id, 8)

        assert copy.id != source.id
        assert copy.application_id == target_id
        assert copy.order == 8
        assert copy.phase == "Survey Guidance"
        assert copy.is_completed is False
        assert copy.completed_at is None
