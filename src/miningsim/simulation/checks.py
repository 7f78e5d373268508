"""Runtime self-checks enabled by debug mode.

Both checks raise on failure; a failed check ends the run.
"""

from miningsim.exceptions import ShortestWaitViolation, TickSumViolation
from miningsim.simulation.allocator import RoundRobinAllocator
from miningsim.simulation.truck import Truck


def check_shortest_wait(allocator: RoundRobinAllocator) -> None:
    """Verify the station under the cursor has the shortest queue.

    The round-robin heuristic is expected, not proven, to hold this; some
    seeds and topologies can break it.

    Raises:
        ShortestWaitViolation: If another station has a shorter queue
    """
    selected = allocator.current.queue_length
    shortest = allocator.min_queue_length()
    if selected != shortest:
        raise ShortestWaitViolation(
            f"The station with the shortest wait time was not selected "
            f"(station {allocator.cursor} has queue {selected}, shortest is {shortest})",
            observed=selected,
            expected=shortest,
        )


def check_tick_sum(truck: Truck, total_ticks: int) -> None:
    """Verify a truck's ledger accounts for every tick of the run.

    Raises:
        TickSumViolation: If the ledger total differs from total_ticks
    """
    accounted = truck.ledger.total
    if accounted != total_ticks:
        raise TickSumViolation(
            f"{truck.name} time does not match simulation time "
            f"(truck time {accounted}, simulation time {total_ticks})",
            observed=accounted,
            expected=total_ticks,
            truck_id=truck.truck_id,
        )
