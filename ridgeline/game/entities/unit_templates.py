"""Roster templates for match setup.

Templates are loaded from a YAML file and converted to data structures that
specify the starting stats and tile of every unit on both sides. A restart
builds brand new Unit objects from the same templates, so a match always
begins from the fixed composition the file describes.
"""

import os
from dataclasses import dataclass
from typing import Optional

import yaml

from ...core.data import Team, UnitClass, Vector2
from .unit import Unit


@dataclass(frozen=True)
class UnitTemplate:
    """Starting configuration of a single unit."""

    unit_id: str
    name: str
    unit_class: UnitClass
    team: Team
    hp: int
    move_range: int
    attack_range: int
    position: Vector2
    ai: Optional[str] = None

    def create_unit(self) -> Unit:
        """Build a fresh unit from this template. Position is set by the board."""
        return Unit(
            unit_id=self.unit_id,
            name=self.name,
            unit_class=self.unit_class,
            team=self.team,
            hp_max=self.hp,
            move_range=self.move_range,
            attack_range=self.attack_range,
            ai_behavior=self.ai,
        )


@dataclass(frozen=True)
class RosterTemplate:
    """Both sides' starting templates in roster order."""

    players: tuple[UnitTemplate, ...]
    enemies: tuple[UnitTemplate, ...]


def default_roster_path() -> str:
    """Path of the roster file shipped with the package."""
    current_dir = os.path.dirname(os.path.abspath(__file__))
    package_root = os.path.dirname(os.path.dirname(current_dir))
    return os.path.join(package_root, "assets", "data", "units", "roster.yaml")


def _parse_template(entry: dict, team: Team) -> UnitTemplate:
    position = entry["position"]
    return UnitTemplate(
        unit_id=str(entry["id"]),
        name=str(entry["name"]),
        unit_class=UnitClass[entry["class"]],
        team=team,
        hp=int(entry["hp"]),
        move_range=int(entry["move_range"]),
        attack_range=int(entry["attack_range"]),
        position=Vector2(int(position["y"]), int(position["x"])),
        ai=entry.get("ai", "AGGRESSIVE") if team == Team.ENEMY else None,
    )


def load_roster(yaml_path: Optional[str] = None) -> RosterTemplate:
    """Load roster templates from YAML.

    Args:
        yaml_path: Roster file to read; defaults to the packaged roster

    Returns:
        RosterTemplate with player and enemy templates in file order

    Raises:
        FileNotFoundError: If the roster file does not exist
        KeyError: If an entry is missing a required field or names an unknown class
        ValueError: If the file has no units or duplicate unit ids
    """
    yaml_path = yaml_path or default_roster_path()

    try:
        with open(yaml_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Roster file not found: {yaml_path}")

    if not isinstance(data, dict):
        raise ValueError(f"Roster file {yaml_path} must contain a mapping")

    try:
        players = tuple(_parse_template(entry, Team.PLAYER) for entry in data["players"])
        enemies = tuple(_parse_template(entry, Team.ENEMY) for entry in data["enemies"])
    except KeyError as e:
        raise KeyError(f"Invalid roster structure in {yaml_path}: {e}")
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid roster value in {yaml_path}: {e}")

    if not players or not enemies:
        raise ValueError(f"Roster in {yaml_path} needs at least one unit per side")

    unit_ids = [template.unit_id for template in players + enemies]
    if len(unit_ids) != len(set(unit_ids)):
        raise ValueError(f"Duplicate unit ids in {yaml_path}")

    return RosterTemplate(players=players, enemies=enemies)
