"""Fatal error types raised by the simulation core.

None of these are recoverable within a run. The engine logs the failure
and re-raises; callers must start a fresh simulation to get a result.
"""

from typing import Any, Optional


class SimulationError(RuntimeError):
    """Base class for all fatal simulation errors."""


class InvariantViolation(SimulationError):
    """A runtime self-check found the model in an inconsistent state."""

    def __init__(self, message: str, observed: Any, expected: Any):
        super().__init__(f"{message} (observed={observed}, expected={expected})")
        self.observed = observed
        self.expected = expected


class ShortestWaitViolation(InvariantViolation):
    """The station under the allocator cursor does not hold the shortest queue."""


class TickSumViolation(InvariantViolation):
    """A truck's ledger does not account for every tick of the run."""

    def __init__(
        self,
        message: str,
        observed: Any,
        expected: Any,
        truck_id: Optional[int] = None,
    ):
        super().__init__(message, observed, expected)
        self.truck_id = truck_id


class UnreachableStateError(SimulationError):
    """A truck holds a state outside the five defined variants."""


class LedgerOverflowError(SimulationError):
    """A ledger field would exceed its 16-bit ceiling."""
