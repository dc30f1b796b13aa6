"""Fetch lifecycle state machine for one active category key.

Pure logic, no Textual or asyncio dependencies. The paginated data controller
drives it from its fetch tasks and reads ``output`` to publish the loading
and prefetching flags.
"""

import logging
from dataclasses import dataclass
from statemachine import StateMachine, State

logger = logging.getLogger("attio_tui")


@dataclass
class FetchOutput:
    """Output state from the fetch state machine."""

    loading: bool
    """Whether the first page (or a refresh) is in flight."""

    is_prefetching: bool
    """Whether a next-page request is in flight."""

    failed: bool
    """Whether the most recent request failed."""

    settled: bool
    """Whether data is present and no request is running."""


class FetchStateMachine(StateMachine):
    """State machine for the fetch lifecycle of the active category key.

    States:
    - idle: No key active, or the key was just deactivated.
    - loading: Initial fetch or refresh in flight.
    - ready: Data available, nothing in flight.
    - prefetching: A next-page request is in flight.
    - error: The last request failed. Automatic retries wait out a cooldown;
      an explicit refresh goes straight back to loading.

    Example:
        >>> machine = FetchStateMachine()
        >>> output = machine.apply_event("start_loading")
        >>> output = machine.apply_event("load_succeeded")
        >>> output.settled
        True
    """

    # States
    idle = State(initial=True)
    loading = State()
    ready = State()
    prefetching = State()
    error = State()

    # Events
    start_loading = (
        idle.to(loading)
        | loading.to(loading)
        | ready.to(loading)
        | prefetching.to(loading)
        | error.to(loading)
    )
    hydrate = (
        idle.to(ready)
        | loading.to(ready)
        | ready.to(ready)
        | prefetching.to(ready)
        | error.to(ready)
    )
    load_succeeded = loading.to(ready)
    load_failed = loading.to(error)

    start_prefetch = ready.to(prefetching) | error.to(prefetching)
    prefetch_succeeded = prefetching.to(ready)
    prefetch_failed = prefetching.to(error)

    deactivate = (
        idle.to(idle)
        | loading.to(idle)
        | ready.to(idle)
        | prefetching.to(idle)
        | error.to(idle)
    )

    @property
    def output(self) -> FetchOutput:
        """Compute output flags from the current state."""
        state_name = self.current_state.id
        return FetchOutput(
            loading=(state_name == "loading"),
            is_prefetching=(state_name == "prefetching"),
            failed=(state_name == "error"),
            settled=(state_name == "ready"),
        )

    @property
    def busy(self) -> bool:
        return self.current_state.id in ("loading", "prefetching")

    def apply_event(self, event: str) -> FetchOutput:
        """Send ``event`` and return the resulting output."""
        logger.debug("fetch machine: %s from %s", event, self.current_state.id)
        self.send(event)
        return self.output
