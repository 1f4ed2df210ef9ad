"""
Tests for the Intake Form Controller

Tests cover:
- Step navigation (advance, retreat, bounds)
- Validation blocking advance
- Submission success, failure and final form check
- The in-progress guard against repeated submits
- Back-then-forward navigation keeping FormState
"""

import asyncio

import pytest

from core.intake import (
    ErrorKind,
    FormState,
    FormStep,
    IntakeFormController,
    ProgressStatus,
    SubmissionFailure,
    SubmissionSuccess,
    ValidationService,
)


# =============================================================================
# Fakes and Fixtures
# =============================================================================


class RecordingClient:
    """Submission client double that returns a fixed result."""

    def __init__(self, result=None):
        self.result = result or SubmissionSuccess(
            data={"id": "sub-001"}, message="Thanks, we received your project"
        )
        self.calls = []

    async def submit(self, form_state):
        self.calls.append(dict(form_state))
        return self.result


class BlockingClient:
    """Submission client double that waits until released."""

    def __init__(self):
        self.calls = 0
        self.release = None

    async def submit(self, form_state):
        self.calls += 1
        await self.release.wait()
        return SubmissionSuccess(data=None, message="Received")


STEP_VALUES = {
    FormStep.CONTACT: {
        "full_name": "Jordan Lee",
        "email_address": "jordan@example.com",
        "phone_number": "555-123-4567",
        "company_name": "",
    },
    FormStep.PROJECT_TYPE: {
        "buyer_category": "developer",
        "financing_plan": "self_funding",
    },
    FormStep.LAND_LOCATION: {
        "land_status": "need_land",
        "needs_help_finding_land": True,
        "preferred_area_description": "North of the river, near schools",
    },
    FormStep.PROJECT_DETAILS: {
        "build_budget": "500k_plus",
        "construction_timeline": "3_to_6_months",
        "project_description": "Two duplex units on a corner block.",
    },
}


@pytest.fixture
def client():
    return RecordingClient()


@pytest.fixture
def controller(client):
    return IntakeFormController(validator=ValidationService(), client=client)


def walk_to_review(controller):
    """Advance through steps 1-4 with valid values."""
    async def _inner():
        for step in (
            FormStep.CONTACT,
            FormStep.PROJECT_TYPE,
            FormStep.LAND_LOCATION,
            FormStep.PROJECT_DETAILS,
        ):
            assert await controller.advance(STEP_VALUES[step])

    asyncio.run(_inner())
    assert controller.current_step == FormStep.REVIEW_SUBMIT


# =============================================================================
# Navigation
# =============================================================================


class TestNavigation:
    """Tests for moving between steps."""

    def test_starts_on_first_step(self, controller):
        assert controller.current_step == FormStep.CONTACT
        assert controller.form_state == FormState()
        assert controller.progress[0] == ProgressStatus.ACTIVE

    def test_advance_with_valid_values(self, controller):
        moved = asyncio.run(controller.advance(STEP_VALUES[FormStep.CONTACT]))

        assert moved is True
        assert controller.current_step == FormStep.PROJECT_TYPE
        assert controller.form_state["full_name"] == "Jordan Lee"
        assert controller.errors == []

    def test_advance_blocked_by_step_errors(self, controller):
        moved = asyncio.run(controller.advance({"full_name": "Jordan Lee"}))

        assert moved is False
        assert controller.current_step == FormStep.CONTACT
        assert controller.error_kind == ErrorKind.STEP
        assert controller.errors == [
            "Email Address is required",
            "Phone Number is required",
        ]

    def test_retreat_needs_no_validation(self, controller):
        asyncio.run(controller.advance(STEP_VALUES[FormStep.CONTACT]))

        assert controller.retreat() is True
        assert controller.current_step == FormStep.CONTACT

    def test_retreat_from_first_step_is_noop(self, controller):
        assert controller.retreat() is False
        assert controller.current_step == FormStep.CONTACT

    def test_retreat_clears_step_errors(self, controller):
        asyncio.run(controller.advance(STEP_VALUES[FormStep.CONTACT]))
        asyncio.run(controller.advance({}))
        assert controller.errors

        controller.retreat()
        assert controller.errors == []
        assert controller.error_kind is None

    def test_progress_tracks_pointer(self, controller):
        walk_to_review(controller)
        assert controller.progress == [
            ProgressStatus.COMPLETED,
            ProgressStatus.COMPLETED,
            ProgressStatus.COMPLETED,
            ProgressStatus.COMPLETED,
            ProgressStatus.ACTIVE,
        ]

    def test_back_then_forward_keeps_form_state(self, controller):
        walk_to_review(controller)
        before = controller.form_state.to_dict()

        controller.retreat()
        controller.retreat()
        assert controller.current_step == FormStep.LAND_LOCATION

        asyncio.run(controller.advance(STEP_VALUES[FormStep.LAND_LOCATION]))
        asyncio.run(controller.advance(STEP_VALUES[FormStep.PROJECT_DETAILS]))

        assert controller.current_step == FormStep.REVIEW_SUBMIT
        assert controller.form_state.to_dict() == before

    def test_button_labels(self, controller):
        assert controller.buttons.next_label == "Next"
        assert controller.buttons.back_visible is False

        walk_to_review(controller)
        assert controller.buttons.next_label == "Submit Application"
        assert controller.buttons.back_visible is True


# =============================================================================
# Field Collection
# =============================================================================


class TestFieldCollection:
    """Tests for collecting posted values."""

    def test_unknown_names_ignored(self, controller):
        controller.collect({"full_name": "Sam", "submit": "Next"})
        assert dict(controller.form_state) == {"full_name": "Sam"}

    def test_checkbox_values_become_booleans(self, controller):
        controller.collect({"needs_help_finding_land": "on"})
        assert controller.form_state["needs_help_finding_land"] is True

        controller.collect({"needs_help_finding_land": False})
        assert controller.form_state["needs_help_finding_land"] is False

    def test_update_field_returns_visibility(self, controller):
        controller.show_step(FormStep.LAND_LOCATION)

        visibility = controller.update_field("land_status", "need_land")
        assert visibility["needs_help_finding_land"] is True
        assert visibility["preferred_area_description"] is False

        visibility = controller.update_field("needs_help_finding_land", "true")
        assert visibility["preferred_area_description"] is True

    def test_update_unknown_field_raises(self, controller):
        with pytest.raises(ValueError):
            controller.update_field("password", "hunter2")

    def test_update_field_from_another_step_raises(self, controller):
        walk_to_review(controller)
        controller.retreat()
        assert controller.current_step == FormStep.PROJECT_DETAILS

        with pytest.raises(ValueError):
            controller.update_field("land_status", "own_land")
        assert controller.form_state["land_status"] == "need_land"

    def test_form_state_rejects_unknown_keys(self):
        state = FormState()
        with pytest.raises(ValueError):
            state["credit_card"] = "4111"

    def test_form_state_does_not_shrink(self):
        state = FormState({"full_name": "Sam"})
        with pytest.raises(TypeError):
            del state["full_name"]

    def test_reset_clears_everything(self, controller):
        walk_to_review(controller)
        controller.reset()

        assert controller.current_step == FormStep.CONTACT
        assert len(controller.form_state) == 0
        assert controller.submitted is False


# =============================================================================
# Submission
# =============================================================================


class TestSubmission:
    """Tests for submitting from the review step."""

    def test_advance_from_review_submits(self, controller, client):
        walk_to_review(controller)

        submitted = asyncio.run(controller.advance())

        assert submitted is True
        assert controller.submitted is True
        assert controller.success_message == "Thanks, we received your project"
        assert client.calls == [controller.form_state.to_dict()]
        assert client.calls[0]["needs_help_finding_land"] is True

    def test_submitted_state_is_terminal(self, controller, client):
        walk_to_review(controller)
        asyncio.run(controller.advance())

        assert controller.retreat() is False
        assert asyncio.run(controller.advance()) is False
        assert asyncio.run(controller.submit()) is None
        assert len(client.calls) == 1

    def test_failed_submission_keeps_state(self):
        client = RecordingClient(SubmissionFailure(error="Backend unavailable"))
        controller = IntakeFormController(client=client)
        walk_to_review(controller)
        before = controller.form_state.to_dict()

        submitted = asyncio.run(controller.advance())

        assert submitted is False
        assert controller.submitted is False
        assert controller.current_step == FormStep.REVIEW_SUBMIT
        assert controller.error_kind == ErrorKind.SUBMISSION
        assert controller.errors == ["Backend unavailable"]
        assert controller.form_state.to_dict() == before
        assert controller.is_submitting is False

    def test_failed_submission_can_be_retried(self):
        client = RecordingClient(SubmissionFailure(error="Network error occurred"))
        controller = IntakeFormController(client=client)
        walk_to_review(controller)
        asyncio.run(controller.advance())

        client.result = SubmissionSuccess(data={}, message="Received")
        assert asyncio.run(controller.advance()) is True
        assert len(client.calls) == 2
        assert controller.errors == []

    def test_final_form_check_blocks_submission(self, controller, client):
        """Submitting directly with missing fields never reaches the client."""
        controller.collect(STEP_VALUES[FormStep.CONTACT])

        result = asyncio.run(controller.submit())

        assert result is None
        assert client.calls == []
        assert controller.error_kind == ErrorKind.FORM
        assert "Buyer Category is required" in controller.errors
        assert controller.is_submitting is False

    def test_submit_while_in_progress_is_noop(self):
        client = BlockingClient()
        controller = IntakeFormController(client=client)
        walk_to_review(controller)

        async def _inner():
            client.release = asyncio.Event()
            first = asyncio.create_task(controller.advance())
            await asyncio.sleep(0)

            assert controller.is_submitting is True
            assert controller.buttons.next_label == "Submitting..."
            assert controller.buttons.disabled is True
            assert await controller.advance() is False
            assert await controller.submit() is None
            assert controller.retreat() is False

            client.release.set()
            return await first

        assert asyncio.run(_inner()) is True
        assert client.calls == 1
        assert controller.is_submitting is False

    def test_reset_while_in_progress_is_noop(self):
        client = BlockingClient()
        controller = IntakeFormController(client=client)
        walk_to_review(controller)

        async def _inner():
            client.release = asyncio.Event()
            first = asyncio.create_task(controller.advance())
            await asyncio.sleep(0)

            assert controller.reset() is False
            assert controller.is_submitting is True
            assert controller.current_step == FormStep.REVIEW_SUBMIT
            assert await controller.advance() is False

            client.release.set()
            return await first

        assert asyncio.run(_inner()) is True
        assert client.calls == 1
        assert controller.submitted is True
        assert controller.form_state["full_name"] == "Jordan Lee"

    def test_reset_after_success_starts_new_form(self, controller, client):
        walk_to_review(controller)
        asyncio.run(controller.advance())

        assert controller.reset() is True
        assert controller.submitted is False
        assert controller.success_message is None
        walk_to_review(controller)
        assert asyncio.run(controller.advance()) is True
        assert len(client.calls) == 2
