"""
Tests for the JSON encoding of event logs.
"""

import json

import pytest
from pydantic import ValidationError

from headsup.agents import CallAgent, RandomShowdownOracle, play_hand
from headsup.core.actions import (
    Fold, Check, Call, Raise, AllIn,
    NextBettingRound, ShowdownSharePots, FoldSharePots, PotsShared,
)
from headsup.core.clock import TimedMatch
from headsup.history.events import EventKind, GameCreate, NewDeal
from headsup.history.replay import replay
from headsup.history.schemas import (
    EventRecord, HISTORY_VERSION, decode_event, dump_history, encode_event, load_history,
)


ALL_EVENTS = [
    GameCreate(blind=10, stacks=(1000, 600)),
    NewDeal(acting_seat=1),
    Fold(),
    Check(),
    Call(10),
    Raise(10, 570),
    AllIn(),
    NextBettingRound(),
    ShowdownSharePots(winner=0),
    ShowdownSharePots(tie=True),
    FoldSharePots(),
    PotsShared(shares=(0, 1240), returned=(360, 0)),
    PotsShared(shares=(50, 51), tie=True),
]


class TestEncoding:
    """Tests for single event records."""

    def test_every_event_type_survives(self):
        assert load_history(dump_history(ALL_EVENTS)) == ALL_EVENTS

    def test_record_fields(self):
        record = encode_event(Raise(10, 570))
        assert record.kind is EventKind.BET_ACTION
        assert record.type == "RAISE"
        assert record.match == 10
        assert record.raise_amount == 570
        assert record.blind is None

    def test_unused_fields_are_not_written(self):
        data = json.loads(dump_history([Call(10)]))
        assert data == {
            "version": HISTORY_VERSION,
            "events": [{"kind": "BET_ACTION", "type": "CALL", "match": 10}],
        }

    def test_played_log_survives(self, clock):
        timed = TimedMatch(blind=10, clock=clock)
        agents = [CallAgent(0), CallAgent(1)]
        play_hand(timed, agents, RandomShowdownOracle(seed=3))

        loaded = load_history(dump_history(timed.log))
        assert loaded == list(timed.log)
        assert replay(loaded) == timed.snapshots


class TestDecodingErrors:
    """Malformed input is rejected."""

    def test_unknown_kind(self):
        with pytest.raises(ValidationError):
            load_history('{"version": 1, "events": [{"kind": "SIT_OUT"}]}')

    def test_out_of_range_seat(self):
        with pytest.raises(ValidationError):
            EventRecord(kind=EventKind.NEW_DEAL, acting_seat=2)

    def test_missing_field(self):
        with pytest.raises(ValueError):
            decode_event(EventRecord(kind=EventKind.NEW_DEAL))

    def test_missing_raise_amount(self):
        with pytest.raises(ValueError):
            decode_event(EventRecord(kind=EventKind.BET_ACTION, type="RAISE", match=10))

    def test_unknown_action_type(self):
        with pytest.raises(ValueError):
            decode_event(EventRecord(kind=EventKind.BET_ACTION, type="LIMP"))
