"""Entity definitions.

This package contains the combatants and their starting configuration:
- unit.py: Unit state and derived queries
- unit_templates.py: Roster templates loaded from YAML
"""

from .unit import Unit
from .unit_templates import UnitTemplate, RosterTemplate, load_roster, default_roster_path

__all__ = [
    "Unit",
    "UnitTemplate",
    "RosterTemplate",
    "load_roster",
    "default_roster_path",
]
