"""
Scoring policy - maps lifecycle events to point deltas.

Points are only ever added; a table with a negative delta is rejected.
"""

import enum
from typing import Mapping, Optional


class ScoringEvent(str, enum.Enum):
    POST_TIMESLOT = "POST_TIMESLOT"
    ACCEPT_MEETING = "ACCEPT_MEETING"
    COMPLETE_MEETING = "COMPLETE_MEETING"
    APPROVE_LOCATION = "APPROVE_LOCATION"
    SUBMIT_LOCATION = "SUBMIT_LOCATION"


POINT_VALUES: dict[ScoringEvent, int] = {
    ScoringEvent.POST_TIMESLOT: 10,  # host, per occurrence created
    ScoringEvent.ACCEPT_MEETING: 15,  # host and attendee
    ScoringEvent.COMPLETE_MEETING: 25,  # host and attendee
    ScoringEvent.APPROVE_LOCATION: 20,  # original submitter
    ScoringEvent.SUBMIT_LOCATION: 5,  # submitter
}


class ScoringPolicy:
    """Lookup table from scoring event to point delta"""

    def __init__(self, table: Optional[Mapping[ScoringEvent, int]] = None):
        merged = dict(POINT_VALUES)
        if table:
            merged.update({ScoringEvent(k): int(v) for k, v in table.items()})
        negative = [event.value for event, delta in merged.items() if delta < 0]
        if negative:
            raise ValueError(f"Point deltas must not be negative: {', '.join(negative)}")
        self.table = merged

    def points_for(self, event: ScoringEvent) -> int:
        return self.table[ScoringEvent(event)]


DEFAULT_POLICY = ScoringPolicy()
