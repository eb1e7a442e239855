import pytest

from auction_clock import AuctionSchedule, Phase, locate

SCHEDULE = AuctionSchedule(init_timestamp=0, bid_duration=180000, reveal_duration=180000, auction_duration=518400000)


def test_start_is_bid():
    state = locate(0, SCHEDULE)
    assert state.auction_id == 0
    assert state.phase == Phase.BID
    assert state.started


def test_bid_boundary_is_inclusive():
    assert locate(180000, SCHEDULE).phase == Phase.BID
    assert locate(180001, SCHEDULE).phase == Phase.REVEAL


def test_next_auction():
    assert locate(518400000, SCHEDULE).auction_id == 1


def test_period_boundaries():
    state = locate(1000, SCHEDULE)
    assert (state.bid_start, state.reveal_start, state.auction_end) == (0, 180000, 360000)

    # period start advances by bid + reveal per auction
    state = locate(518400000, SCHEDULE)
    assert state.bid_start == 360000


def test_before_first_auction():
    state = locate(-1, SCHEDULE)
    assert state.auction_id == -1
    assert not state.started


def test_same_input_same_output():
    assert locate(123456789, SCHEDULE) == locate(123456789, SCHEDULE)


def test_default_schedule():
    state = locate(AuctionSchedule().init_timestamp)
    assert state.auction_id == 0 and state.phase == Phase.BID


def test_schedule_validation():
    with pytest.raises(ValueError):
        AuctionSchedule(bid_duration=0)
    with pytest.raises(ValueError):
        AuctionSchedule(auction_duration=-1)
