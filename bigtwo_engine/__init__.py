"""Big Two Match Engine

Rules, move search, computer opponents and the turn-based match state
machine for four-player Big Two.

Main components:
- bigtwo_engine.core: Cards, combination rules and the match controller
- bigtwo_engine.agents: Computer policies for AI-controlled seats
- bigtwo_engine.rooms: Room registry and serialized per-room command handling
- bigtwo_engine.evaluation: All-AI matches and tournaments
"""

__version__ = "0.3.0"

from .config import DEFAULT_CONFIG, EngineConfig, RoomConfig, RulesConfig
from .errors import (
    AIFailure,
    BigTwoError,
    EmptyTablePass,
    IllegalPlay,
    InvalidCombination,
    InvariantViolation,
    MatchNotInProgress,
    OpeningViolation,
    OutOfTurn,
    PlayRejectedError,
    RoomError,
    SeatingError,
    UnknownPlayer,
)
from .core import (
    OPENING_CARD,
    BigTwoMatch,
    Card,
    MatchPhase,
    Suit,
    can_play,
    classify,
    enumerate_legal_moves,
)
from .agents import BaseAgent, GreedyAgent, HeuristicAgent, RandomAgent, create_agent
from .rooms import RoomRegistry

__all__ = [
    # Configuration
    "DEFAULT_CONFIG",
    "EngineConfig",
    "RoomConfig",
    "RulesConfig",
    # Errors
    "AIFailure",
    "BigTwoError",
    "EmptyTablePass",
    "IllegalPlay",
    "InvalidCombination",
    "InvariantViolation",
    "MatchNotInProgress",
    "OpeningViolation",
    "OutOfTurn",
    "PlayRejectedError",
    "RoomError",
    "SeatingError",
    "UnknownPlayer",
    # Core
    "OPENING_CARD",
    "BigTwoMatch",
    "Card",
    "MatchPhase",
    "Suit",
    "can_play",
    "classify",
    "enumerate_legal_moves",
    # Agents
    "BaseAgent",
    "GreedyAgent",
    "HeuristicAgent",
    "RandomAgent",
    "create_agent",
    # Rooms
    "RoomRegistry",
]
