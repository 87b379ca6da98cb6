"""Community coffee-meeting scheduler: timeslots, meetings and points."""

__version__ = "1.0.0"
