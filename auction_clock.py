from dataclasses import dataclass
from enum import Enum

# Milliseconds, as reported by the chain
AUCTION_DURATION = 518400000
INIT_TIMESTAMP = 1664125224707
REVEAL_DURATION = 180000
BID_DURATION = 180000


class Phase(str, Enum):
    BID = "BID"
    REVEAL = "REVEAL"


@dataclass(frozen=True)
class AuctionSchedule:
    init_timestamp: int = INIT_TIMESTAMP
    bid_duration: int = BID_DURATION
    reveal_duration: int = REVEAL_DURATION
    auction_duration: int = AUCTION_DURATION

    def __post_init__(self):
        for field in ("bid_duration", "reveal_duration", "auction_duration"):
            value = getattr(self, field)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ValueError(f"{field} must be a positive integer, got {value!r}")
        if not isinstance(self.init_timestamp, int) or isinstance(self.init_timestamp, bool):
            raise ValueError(f"init_timestamp must be an integer, got {self.init_timestamp!r}")


@dataclass(frozen=True)
class AuctionState:
    auction_id: int
    phase: Phase
    bid_start: int
    reveal_start: int
    auction_end: int

    @property
    def started(self) -> bool:
        return self.auction_id >= 0


def locate(now: int, schedule: AuctionSchedule = AuctionSchedule()) -> AuctionState:
    """
    Which auction cycle `now` falls into, and whether it is bidding or revealing.
    A negative auction_id means the first auction has not started yet.
    """
    auction_id = (now - schedule.init_timestamp) // schedule.auction_duration
    period_start = auction_id * (schedule.bid_duration + schedule.reveal_duration) + schedule.init_timestamp
    elapsed = now - period_start
    # elapsed == bid_duration is still the bid phase
    phase = Phase.REVEAL if elapsed > schedule.bid_duration else Phase.BID

    reveal_start = period_start + schedule.bid_duration
    return AuctionState(
        auction_id=auction_id,
        phase=phase,
        bid_start=period_start,
        reveal_start=reveal_start,
        auction_end=reveal_start + schedule.reveal_duration,
    )
