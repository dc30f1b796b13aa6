"""Unit tests for FetchStateMachine."""

import pytest
from statemachine.exceptions import TransitionNotAllowed

from frontend.state.fetch_state_machine import FetchStateMachine


class TestFetchStateMachineInitialization:
    """Test state machine initialization."""

    def test_initial_state_is_idle(self):
        """Machine should start in idle state."""
        machine = FetchStateMachine()
        assert machine.current_state == machine.idle

    def test_output_when_idle(self):
        """Idle has every flag off."""
        output = FetchStateMachine().output
        assert output.loading is False
        assert output.is_prefetching is False
        assert output.failed is False
        assert output.settled is False


class TestInitialLoad:
    """Test idle -> loading -> ready/error."""

    def test_load_success(self):
        """A successful first load settles in ready."""
        machine = FetchStateMachine()
        assert machine.apply_event("start_loading").loading is True
        output = machine.apply_event("load_succeeded")
        assert machine.current_state == machine.ready
        assert output.settled is True
        assert output.loading is False

    def test_load_failure(self):
        """A failed first load lands in error."""
        machine = FetchStateMachine()
        machine.apply_event("start_loading")
        output = machine.apply_event("load_failed")
        assert machine.current_state == machine.error
        assert output.failed is True

    def test_hydrate_skips_loading(self):
        """Hydrating from cache goes straight to ready."""
        machine = FetchStateMachine()
        assert machine.apply_event("hydrate").settled is True


class TestPrefetch:
    """Test ready -> prefetching -> ready/error."""

    def _ready(self) -> FetchStateMachine:
        machine = FetchStateMachine()
        machine.apply_event("hydrate")
        return machine

    def test_prefetch_success(self):
        """A next-page request returns to ready."""
        machine = self._ready()
        assert machine.apply_event("start_prefetch").is_prefetching is True
        assert machine.busy is True
        machine.apply_event("prefetch_succeeded")
        assert machine.current_state == machine.ready
        assert machine.busy is False

    def test_prefetch_failure(self):
        """A failed next-page request lands in error."""
        machine = self._ready()
        machine.apply_event("start_prefetch")
        machine.apply_event("prefetch_failed")
        assert machine.current_state == machine.error

    def test_prefetch_allowed_from_error(self):
        """After the cooldown an error state may retry the next page."""
        machine = self._ready()
        machine.apply_event("start_prefetch")
        machine.apply_event("prefetch_failed")
        machine.apply_event("start_prefetch")
        assert machine.current_state == machine.prefetching

    def test_prefetch_not_allowed_while_loading(self):
        """A first load blocks next-page requests."""
        machine = FetchStateMachine()
        machine.apply_event("start_loading")
        with pytest.raises(TransitionNotAllowed):
            machine.apply_event("start_prefetch")


class TestRefreshAndDeactivate:
    """Test refresh and deactivate from every state."""

    @pytest.mark.parametrize("setup", [[], ["hydrate"], ["hydrate", "start_prefetch"], ["start_loading", "load_failed"]])
    def test_start_loading_from_any_state(self, setup):
        """A refresh can start from any state."""
        machine = FetchStateMachine()
        for event in setup:
            machine.apply_event(event)
        assert machine.apply_event("start_loading").loading is True

    @pytest.mark.parametrize("setup", [[], ["start_loading"], ["hydrate"], ["hydrate", "start_prefetch"]])
    def test_deactivate_returns_to_idle(self, setup):
        """Deactivate always lands in idle."""
        machine = FetchStateMachine()
        for event in setup:
            machine.apply_event(event)
        machine.apply_event("deactivate")
        assert machine.current_state == machine.idle
