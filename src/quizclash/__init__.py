"""QuizClash - encounter engine for a campus quiz-and-combat game.

The player walks a campus map, meets teachers behind quiz gates and fights
them turn by turn when an answer is wrong. The final boss skips the quiz and
regenerates health in the background while the fight lasts.

ARCHITECTURE:
- The engine owns TRUTH (health, inventory, progression, every random roll)
- The presentation layer supplies INPUT through IntentSource and answer
  providers, and renders the returned results
- Randomness is always injected through DiceRoller, so a seed replays a game

Example:
    >>> from quizclash import GameSession
    >>>
    >>> session = GameSession.new("Felix", seed=42)
    >>> location = session.move("w")
    >>> session.open_lootbox("normal")

Modules:
    core: Configuration, logging, constants and the exception hierarchy.
    models: Pydantic V2 models for the player, opponents and quizzes.
    engine: Dice, regeneration, combat, quiz gate, loot, map and session.
"""

from __future__ import annotations

# Core
from quizclash.core.config import Settings, get_settings
from quizclash.core.exceptions import QuizClashError
from quizclash.core.logging import configure_logging, get_logger

# Models
from quizclash.models import (
    Opponent,
    PlayerCharacter,
    QuestionBank,
    QuizQuestion,
    Weapon,
    create_boss,
    create_player,
    create_teacher,
)

# Engine
from quizclash.engine import (
    CombatEngine,
    DiceRoller,
    EncounterOutcome,
    EncounterResult,
    GameSession,
    IntentSource,
    QuizGate,
    QuizOutcome,
    QuizResult,
    RegenerationProcess,
)


__version__ = "0.1.0"
__author__ = "QuizClash Team"
__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Core
    "QuizClashError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Opponent",
    "PlayerCharacter",
    "QuestionBank",
    "QuizQuestion",
    "Weapon",
    "create_boss",
    "create_player",
    "create_teacher",
    # Engine
    "CombatEngine",
    "DiceRoller",
    "EncounterOutcome",
    "EncounterResult",
    "GameSession",
    "IntentSource",
    "QuizGate",
    "QuizOutcome",
    "QuizResult",
    "RegenerationProcess",
]
