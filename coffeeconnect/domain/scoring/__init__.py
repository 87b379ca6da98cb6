"""Scoring domain - point deltas for lifecycle events"""

from .policy import DEFAULT_POLICY, POINT_VALUES, ScoringEvent, ScoringPolicy
from .service import ScoringService

__all__ = ["DEFAULT_POLICY", "POINT_VALUES", "ScoringEvent", "ScoringPolicy", "ScoringService"]
