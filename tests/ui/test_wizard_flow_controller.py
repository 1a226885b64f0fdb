# -*- coding: utf-8 -*-
"""
Tests for WizardFlowController over the onboarding step arena.

Tests cover:
- Forward control enabled iff the current step is valid
- Next / Back / EditJump transitions
- Completion on the last step (re-enterable)
- Busy state during submission
"""

import pytest
from unittest.mock import MagicMock

from models.subject import SubjectMode
from ui.wizards.framework import WizardFlowController
from ui.wizards.subject_onboarding import OnboardingContext, build_onboarding_steps


@pytest.fixture
def qapp(qapp):
    """Ensure QApplication is available."""
    return qapp


@pytest.fixture
def context():
    return OnboardingContext(SubjectMode.SELF)


@pytest.fixture
def on_complete():
    return MagicMock()


@pytest.fixture
def navigator(qapp, context, on_complete):
    return WizardFlowController(context, build_onboarding_steps(), on_complete=on_complete)


def _fill(context, valid_draft):
    context.draft = valid_draft


class TestForwardControl:

    def test_starts_on_first_step(self, navigator):
        assert navigator.current_index == 0
        assert navigator.get_step_count() == 4
        assert navigator.can_go_previous() is False

    @pytest.mark.parametrize("index", [0, 1, 2, 3])
    def test_enabled_iff_step_valid_on_empty_draft(self, navigator, index):
        navigator.current_index = index
        assert navigator.can_go_next() == navigator.is_step_valid(index)

    @pytest.mark.parametrize("index", [0, 1, 2, 3])
    def test_enabled_on_valid_draft(self, navigator, context, valid_draft, index):
        _fill(context, valid_draft)
        navigator.current_index = index
        assert navigator.can_go_next() is True

    def test_invalid_step_blocks_next(self, qtbot, navigator):
        with qtbot.waitSignal(navigator.validation_failed) as blocker:
            assert navigator.next_step() is False

        result = blocker.args[0]
        assert result.step_index == 0
        assert "First name is required" in result.errors
        assert navigator.current_index == 0

    def test_refresh_announces_state(self, qtbot, navigator, context):
        context.on_change(navigator.refresh)
        with qtbot.waitSignal(navigator.can_go_next_changed) as blocker:
            context.set_fields(first_name="Ada", last_name="Lovelace", gender="female")
        assert blocker.args == [True]


class TestTransitions:

    def test_walk_to_review(self, qtbot, navigator, context, valid_draft):
        _fill(context, valid_draft)
        with qtbot.waitSignal(navigator.step_changed) as blocker:
            navigator.next_step()
        assert blocker.args == [0, 1]

        navigator.next_step()
        navigator.next_step()
        assert navigator.current_index == 3
        assert context.completed_steps == {0, 1, 2}

    def test_back(self, navigator, context, valid_draft):
        _fill(context, valid_draft)
        navigator.next_step()
        assert navigator.previous_step() is True
        assert navigator.current_index == 0
        assert navigator.previous_step() is False

    def test_edit_jump_preserves_all_fields(self, navigator, context, valid_draft):
        _fill(context, valid_draft)
        navigator.edit_jump(3)
        before = context.draft.to_dict()

        for target in (0, 1, 2, 3):
            assert navigator.edit_jump(target) is True
            assert navigator.current_index == target
            assert context.draft.to_dict() == before

    def test_edit_jump_out_of_range(self, navigator):
        assert navigator.edit_jump(7) is False
        assert navigator.current_index == 0


class TestCompletion:

    def test_next_on_last_step_completes(self, qtbot, navigator, context, valid_draft, on_complete):
        _fill(context, valid_draft)
        navigator.edit_jump(3)

        with qtbot.waitSignal(navigator.complete_requested):
            assert navigator.next_step() is True

        on_complete.assert_called_once()
        assert navigator.current_index == 3

    def test_completion_can_be_retried(self, navigator, context, valid_draft, on_complete):
        _fill(context, valid_draft)
        navigator.edit_jump(3)
        navigator.next_step()
        navigator.next_step()
        assert on_complete.call_count == 2

    def test_busy_disables_next(self, navigator, context, valid_draft, on_complete):
        _fill(context, valid_draft)
        navigator.edit_jump(3)
        navigator.set_busy(True)

        assert navigator.can_go_next() is False
        assert navigator.next_step() is False
        on_complete.assert_not_called()

        navigator.set_busy(False)
        assert navigator.can_go_next() is True
