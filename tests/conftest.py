"""
Shared fixtures for the ridgeline test suite.

Boards are seeded and flattened so elevation never changes a test's numbers
unless the test sets it explicitly.
"""

import sys
import os
from typing import Optional

import numpy as np
import pytest

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from ridgeline.core.data import Team, UnitClass, Vector2
from ridgeline.core.engine import TurnState
from ridgeline.core.events import EventManager
from ridgeline.game.board import Board
from ridgeline.game.combat_resolver import CombatResolver
from ridgeline.game.entities.unit import Unit
from ridgeline.game.match_state import MatchConfig, MatchState
from ridgeline.game.turn_manager import TurnController


DEFAULT_STATS = {
    UnitClass.WARRIOR: (100, 4, 1),
    UnitClass.ARCHER: (80, 3, 1),
    UnitClass.MAGE: (60, 2, 2),
    UnitClass.GOBLIN: (50, 2, 1),
    UnitClass.ORC: (70, 2, 1),
    UnitClass.TROLL: (90, 2, 1),
    UnitClass.IMP: (40, 2, 1),
}


class TestDataBuilder:
    """Builds units with the standard roster stats."""

    _counter = 0

    @classmethod
    def unit(
        cls,
        unit_class: UnitClass,
        team: Optional[Team] = None,
        hp: Optional[int] = None,
        unit_id: Optional[str] = None,
        name: Optional[str] = None,
    ) -> Unit:
        hp_max, move_range, attack_range = DEFAULT_STATS[unit_class]
        if team is None:
            team = Team.PLAYER if unit_class in (UnitClass.WARRIOR, UnitClass.ARCHER, UnitClass.MAGE) else Team.ENEMY
        cls._counter += 1
        unit = Unit(
            unit_id=unit_id or f"{unit_class.name.lower()}-{cls._counter}",
            name=name or unit_class.name.capitalize(),
            unit_class=unit_class,
            team=team,
            hp_max=hp_max,
            move_range=move_range,
            attack_range=attack_range,
        )
        if hp is not None:
            unit.hp_current = hp
        return unit


@pytest.fixture
def event_manager():
    """Create an event manager for testing."""
    return EventManager(enable_debug_logging=False)


@pytest.fixture
def board():
    """Create a flat, empty 10x10 board."""
    board = Board(10, 10, rng=np.random.default_rng(1234))
    board.flatten()
    return board


@pytest.fixture
def small_board():
    """Create a flat, empty 5x5 board."""
    board = Board(5, 5, rng=np.random.default_rng(99))
    board.flatten()
    return board


@pytest.fixture
def make_unit():
    """Factory that builds a unit and, when given a position, places it on a board."""
    def _make(unit_class: UnitClass, board: Optional[Board] = None, position: Optional[Vector2] = None, **kwargs):
        unit = TestDataBuilder.unit(unit_class, **kwargs)
        if board is not None and position is not None:
            board.place_unit(unit, position)
        return unit
    return _make


@pytest.fixture
def resolver(board, event_manager):
    """Combat resolver over the flat board."""
    return CombatResolver(board, event_manager)


@pytest.fixture
def turn_setup(board, event_manager, resolver, make_unit):
    """Warrior at A1, Archer at B1 and Mage at C1 with a goblin at J10, ready for a player phase."""
    players = [
        make_unit(UnitClass.WARRIOR, board, Vector2(0, 0), unit_id="warrior"),
        make_unit(UnitClass.ARCHER, board, Vector2(1, 0), unit_id="archer"),
        make_unit(UnitClass.MAGE, board, Vector2(2, 0), unit_id="mage"),
    ]
    goblin = make_unit(UnitClass.GOBLIN, board, Vector2(9, 9), unit_id="goblin")
    controller = TurnController(board, players, resolver, event_manager, TurnState())
    controller.select_unit(0)
    event_manager.process_events()
    return controller, players, goblin


@pytest.fixture
def match():
    """A seeded match on a flattened board."""
    match = MatchState(MatchConfig(seed=42))
    match.board.flatten()
    return match


def drain_messages(event_manager: EventManager) -> list[str]:
    """Process queued events and return their narration."""
    messages: list[str] = []

    def collect(event):
        text = event.describe()
        if text:
            messages.append(text)

    event_manager.subscribe_all(collect)
    event_manager.process_events()
    event_manager.unsubscribe_all(collect)
    return messages


@pytest.fixture
def narration():
    """Helper returning the narration of everything queued on an event manager."""
    return drain_messages
