"""Per-truck time accounting.

Each truck charges every tick it lives through to exactly one of four
activities. The counts are held as four bounded 16-bit counters; the
compact 64-bit form (waiting in bits 0-15, unloading 16-31, traveling
32-47, mining 48-63) is available through pack()/unpack() for anything
that needs the single-scalar layout.
"""

from dataclasses import dataclass

from miningsim.exceptions import LedgerOverflowError
from miningsim.models.config import UINT16_MAX
from miningsim.models.enums import Activity

WAITING_SHIFT = 0
UNLOADING_SHIFT = 16
TRAVELING_SHIFT = 32
MINING_SHIFT = 48

WAITING_INC = 1 << WAITING_SHIFT
UNLOADING_INC = 1 << UNLOADING_SHIFT
TRAVELING_INC = 1 << TRAVELING_SHIFT
MINING_INC = 1 << MINING_SHIFT

WAITING_MASK = 0x000000000000FFFF
UNLOADING_MASK = 0x00000000FFFF0000
TRAVELING_MASK = 0x0000FFFF00000000
MINING_MASK = 0xFFFF000000000000

_FIELDS = {
    Activity.WAITING: (WAITING_MASK, WAITING_SHIFT),
    Activity.UNLOADING: (UNLOADING_MASK, UNLOADING_SHIFT),
    Activity.TRAVELING: (TRAVELING_MASK, TRAVELING_SHIFT),
    Activity.MINING: (MINING_MASK, MINING_SHIFT),
}


def retrieve_time(packed: int, mask: int, shift: int) -> int:
    """Extract one field from a packed ledger value."""
    return (packed & mask) >> shift


@dataclass
class TimeLedger:
    """Ticks a truck has spent in each activity."""

    waiting: int = 0
    unloading: int = 0
    traveling: int = 0
    mining: int = 0

    def __post_init__(self):
        for activity in Activity:
            value = getattr(self, activity.value)
            if not 0 <= value <= UINT16_MAX:
                raise LedgerOverflowError(
                    f"Ledger field '{activity.value}' out of 16-bit range: {value}"
                )

    def record(self, activity: Activity) -> None:
        """Charge one tick to an activity."""
        current = getattr(self, activity.value)
        if current >= UINT16_MAX:
            raise LedgerOverflowError(
                f"Ledger field '{activity.value}' would exceed {UINT16_MAX} ticks"
            )
        setattr(self, activity.value, current + 1)

    def get(self, activity: Activity) -> int:
        return getattr(self, activity.value)

    @property
    def total(self) -> int:
        """Ticks accounted for across all activities."""
        return self.waiting + self.unloading + self.traveling + self.mining

    def percentages(self, total_ticks: int) -> dict[str, float]:
        """Share of the run spent in each activity, in percent."""
        return {
            activity.value: self.get(activity) / total_ticks * 100
            for activity in Activity
        }

    def pack(self) -> int:
        """Encode the ledger as a single unsigned 64-bit integer."""
        return (
            self.waiting * WAITING_INC
            + self.unloading * UNLOADING_INC
            + self.traveling * TRAVELING_INC
            + self.mining * MINING_INC
        )

    @classmethod
    def unpack(cls, packed: int) -> "TimeLedger":
        """Decode a packed 64-bit ledger value."""
        if not 0 <= packed <= 0xFFFFFFFFFFFFFFFF:
            raise ValueError(f"Packed ledger must be an unsigned 64-bit value, got {packed}")
        return cls(**{
            activity.value: retrieve_time(packed, mask, shift)
            for activity, (mask, shift) in _FIELDS.items()
        })
