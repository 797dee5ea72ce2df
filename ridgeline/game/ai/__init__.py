"""AI system components.

This package contains the enemy phase logic and behavior definitions:
- ai_controller.py: Runs the enemy phase (moves first, then attacks)
- ai_behaviors.py: Targeting and stepping strategies
"""

from .ai_controller import EnemyAIController, EnemyActivation
from .ai_behaviors import (
    AIBehavior,
    AIDecision,
    AggressiveAI,
    InactiveAI,
    AIType,
    create_ai_behavior,
    parse_ai_type,
)

__all__ = [
    "EnemyAIController",
    "EnemyActivation",
    "AIBehavior",
    "AIDecision",
    "AggressiveAI",
    "InactiveAI",
    "AIType",
    "create_ai_behavior",
    "parse_ai_type",
]
