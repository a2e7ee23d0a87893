"""
headsup History - event log, replay and JSON encoding
"""

from headsup.history.events import EventLog, EventKind, GameCreate, NewDeal, event_kind
from headsup.history.replay import Snapshot, apply_event, replay
from headsup.history.schemas import EventRecord, HistoryRecord, dump_history, load_history

__all__ = [
    "EventLog",
    "EventKind",
    "GameCreate",
    "NewDeal",
    "event_kind",
    "Snapshot",
    "apply_event",
    "replay",
    "EventRecord",
    "HistoryRecord",
    "dump_history",
    "load_history",
]
