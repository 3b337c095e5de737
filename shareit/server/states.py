from dataclasses import dataclass
from enum import Enum as PyEnum
from typing import Union

from .exceptions import InvalidState
from .models import BookingStatus


class BookingState(str, PyEnum):
    """The ``state`` filter accepted by the booking listing endpoints."""
    ALL = "ALL"
    CURRENT = "CURRENT"
    PAST = "PAST"
    FUTURE = "FUTURE"
    WAITING = "WAITING"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class KnownState:
    state: BookingState


@dataclass(frozen=True)
class UnknownState:
    raw: str


ParsedState = Union[KnownState, UnknownState]

_STATES_BY_NAME = {s.value: s for s in BookingState}


def parse_state(raw: str) -> ParsedState:
    """
    Parses a ``state`` query value, ignoring case.

    Returns ``UnknownState`` for anything that is not a filter name instead
    of raising, so callers decide how to report it.
    """
    state = _STATES_BY_NAME.get((raw or "").strip().upper())
    if state is None:
        return UnknownState(raw=raw)
    return KnownState(state=state)


class Trigger(str, PyEnum):
    APPROVE = "approve"
    REJECT = "reject"


# Approve and reject are only legal while the owner has not decided yet.
TRANSITIONS = {
    (BookingStatus.WAITING, Trigger.APPROVE): BookingStatus.APPROVED,
    (BookingStatus.WAITING, Trigger.REJECT): BookingStatus.REJECTED,
}


def trigger_for(approved: bool) -> Trigger:
    return Trigger.APPROVE if approved else Trigger.REJECT


def next_status(current: BookingStatus, trigger: Trigger) -> BookingStatus:
    try:
        return TRANSITIONS[(current, trigger)]
    except KeyError:
        raise InvalidState("booking already finalized") from None
