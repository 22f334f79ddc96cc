"""Self-play evaluation of Big Two agents."""

from .tournament import SEAT_COUNTS, MatchResult, Tournament, play_match

__all__ = ["SEAT_COUNTS", "MatchResult", "Tournament", "play_match"]
