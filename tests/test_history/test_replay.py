"""
Tests for event-log replay.
"""

import pytest
from headsup.core.actions import (
    Fold, Check, Call, Raise, AllIn,
    NextBettingRound, ShowdownSharePots, FoldSharePots, PotsShared,
)
from headsup.core.clock import TimedMatch
from headsup.core.rules import RoundType
from headsup.history.events import EventLog, EventKind, GameCreate, NewDeal, event_kind
from headsup.history.replay import Snapshot, apply_event, replay


@pytest.fixture
def played(clock):
    """Two hands: a flop shove that takes the pot, then a shove called short."""
    timed = TimedMatch(blind=10, stacks=[600, 1000], clock=clock)

    assert timed.deal()
    assert timed.try_player_action(0, Call(10))
    assert timed.try_dealer_action(NextBettingRound())
    assert timed.try_player_action(1, Raise(0, 980))
    assert timed.try_player_action(0, Fold())
    assert timed.try_dealer_action(FoldSharePots())
    assert timed.match.stacks == [580, 1020]

    assert timed.deal()
    assert timed.try_player_action(1, Raise(10, 1000))
    assert timed.try_player_action(0, AllIn())
    assert timed.try_dealer_action(ShowdownSharePots(winner=0))
    return timed


class TestReplay:
    """Tests for rebuilding snapshots from the log."""

    def test_replay_matches_live_snapshots(self, played):
        assert replay(played.log) == played.snapshots

    def test_replay_is_restartable(self, played):
        events = list(played.log)
        first = replay(events)
        assert replay(events) == first
        assert replay(events[:7]) == first[:7]

    def test_one_snapshot_per_event(self, played):
        snapshots = replay(played.log)
        assert len(snapshots) == len(played.log)
        assert [s.event for s in snapshots] == list(played.log)

    def test_chips_conserved(self, played):
        assert all(s.total_chips == 1600 for s in replay(played.log))

    def test_final_stacks(self, played):
        final = replay(played.log)[-1]
        assert final.stacks == tuple(played.match.stacks)
        assert not final.hand_running
        assert final.hand_no == 2

    def test_short_call_returns_excess(self, played):
        shared = played.log[-1]
        # Seat 0 matched 580, so it can win at most 1160 of the 1600 pot
        assert shared == PotsShared(shares=(1160, 0), returned=(0, 440))
        assert shared.total == replay(played.log)[-2].pot
        assert played.match.stacks == [1160, 440]

    def test_all_in_keeps_the_turn(self, played):
        snapshots = replay(played.log)
        all_in = next(i for i, s in enumerate(snapshots) if isinstance(s.event, AllIn))
        assert snapshots[all_in].acting_seat == snapshots[all_in - 1].acting_seat == 0


class TestApplyEvent:
    """Tests for single fold steps."""

    def test_game_create(self):
        snapshot = apply_event(None, GameCreate(blind=10, stacks=(1000, 1000)))
        assert snapshot == Snapshot(
            hand_no=0, blind=10, stacks=(1000, 1000),
            event=GameCreate(blind=10, stacks=(1000, 1000)),
        )

    def test_deal_posts_blinds(self):
        start = apply_event(None, GameCreate(blind=10, stacks=(1000, 1000)))
        dealt = apply_event(start, NewDeal(acting_seat=1))
        assert dealt.stacks == (980, 990)
        assert dealt.bets == (20, 10)
        assert dealt.button == 1
        assert dealt.acting_seat == 1
        assert dealt.round_type is RoundType.PREFLOP

    def test_running_pot_resets_at_round_boundary(self):
        events = [
            GameCreate(blind=10, stacks=(1000, 1000)),
            NewDeal(acting_seat=0),
            Call(10),
            NextBettingRound(),
        ]
        snapshots = replay(events)
        assert snapshots[2].running_pot == 40
        assert snapshots[2].pot == 0
        assert snapshots[3].running_pot == 0
        assert snapshots[3].pot == 40
        assert snapshots[3].acting_seat == 1
        assert snapshots[3].round_type is RoundType.FLOP

    def test_fold_keeps_turn(self):
        events = [GameCreate(blind=10, stacks=(1000, 1000)), NewDeal(acting_seat=0), Fold()]
        assert replay(events)[-1].acting_seat == 0

    def test_must_start_with_game_create(self):
        with pytest.raises(ValueError):
            replay([NewDeal(acting_seat=0)])

    def test_single_game_create(self):
        with pytest.raises(ValueError):
            replay([GameCreate(blind=10, stacks=(100, 100)), GameCreate(blind=10, stacks=(100, 100))])

    def test_bet_without_hand(self):
        with pytest.raises(ValueError):
            replay([GameCreate(blind=10, stacks=(100, 100)), Check()])


class TestEventLog:
    """Tests for the append-only log."""

    def test_event_kinds(self):
        assert event_kind(GameCreate(blind=1, stacks=(100, 100))) is EventKind.GAME_CREATE
        assert event_kind(NewDeal(acting_seat=0)) is EventKind.NEW_DEAL
        assert event_kind(Raise(0, 50)) is EventKind.BET_ACTION
        assert event_kind(FoldSharePots()) is EventKind.DEALER_ACTION
        assert event_kind(PotsShared(shares=(1, 0))) is EventKind.POTS_SHARED

    def test_rejects_non_events(self):
        log = EventLog()
        with pytest.raises(TypeError):
            log.append("fold")
        assert len(log) == 0

    def test_events_are_a_snapshot(self):
        log = EventLog()
        log.append(GameCreate(blind=10, stacks=(100, 100)))
        events = log.events
        log.append(NewDeal(acting_seat=0))
        assert len(events) == 1
        assert len(log) == 2

    def test_subscribe(self):
        seen = []
        log = EventLog()
        log.append(GameCreate(blind=10, stacks=(100, 100)))
        log.subscribe(seen.append)
        log.append(NewDeal(acting_seat=0))
        assert seen == [NewDeal(acting_seat=0)]
