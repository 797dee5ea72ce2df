"""
Match orchestration.

MatchState owns one match: the board, both rosters, the turn controller,
the enemy AI and the event bus. The presentation layer drives the game only
through its commands, each of which returns a CommandResult carrying the
ordered narration the command produced.
"""
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from ..core.data import MatchOutcome, Vector2, coord_label
from ..core.engine import BattlePhase, CommandRejected, CommandResult, RejectionKind, TurnState
from ..core.events import EventManager, EventType, GameEvent, LogMessage, MatchEnded, MatchStarted
from ..core.game_view import GameView, UnitView
from .ai import EnemyAIController
from .board import Board
from .combat_resolver import CombatResolver
from .entities.unit import Unit
from .entities.unit_templates import RosterTemplate, load_roster
from .managers.log_manager import LogLevel, LogManager
from .turn_manager import TurnController


@dataclass
class MatchConfig:
    """Settings for a match."""
    width: int = 10
    height: int = 10
    seed: Optional[int] = None
    roster_path: Optional[str] = None
    auto_enemy_phase: bool = False   # end_round runs the enemy phase immediately
    log_level: LogLevel = LogLevel.INFO
    max_log_messages: int = 1000


class MatchState:
    """Owner and sole mutator of a match's board and rosters.

    Examples:
        match = MatchState(MatchConfig(seed=7))
        match.move_cursor(1, 0).messages   # ["Tile A2: Ground Level"]
        match.end_turn()                    # player round, enemy phase, next round
    """

    def __init__(self, config: Optional[MatchConfig] = None, event_manager: Optional[EventManager] = None):
        self.config = config or MatchConfig()
        self.event_manager = event_manager or EventManager()
        self.log_manager = LogManager(
            self.event_manager,
            max_messages=self.config.max_log_messages,
            default_level=self.config.log_level,
        )
        self.roster: RosterTemplate = load_roster(self.config.roster_path)
        self.view = GameView(self)

        self._rng = np.random.default_rng(self.config.seed)
        self._collected: list[GameEvent] = []
        self.event_manager.subscribe_all(self._collect_event, subscriber_name="MatchState.narration")

        self.last_result: CommandResult = self.new_match()

    # ============== Event plumbing ==============

    def _collect_event(self, event: GameEvent) -> None:
        if event.event_type != EventType.LOG_MESSAGE:
            self._collected.append(event)

    def _drain(self) -> list[GameEvent]:
        """Process everything queued and return the narrated events, in order."""
        self._collected = []
        self.event_manager.process_events()
        events, self._collected = self._collected, []
        return events

    def _emit_log(self, message: str, category: str = "SYSTEM", level: str = "INFO") -> None:
        """Emit a log message event."""
        self.event_manager.publish(
            LogMessage(
                round_number=self.round_number,
                message=message,
                category=category,
                level=level,
                source="MatchState"
            ),
            source="MatchState"
        )

    # ============== Setup ==============

    def _build(self) -> None:
        self.board = Board(self.config.width, self.config.height, rng=self._rng)
        self.player_units: list[Unit] = [template.create_unit() for template in self.roster.players]
        self.enemy_units: list[Unit] = [template.create_unit() for template in self.roster.enemies]

        templates = self.roster.players + self.roster.enemies
        for unit, template in zip(self.player_units + self.enemy_units, templates):
            try:
                self.board.place_unit(unit, template.position)
            except CommandRejected:
                raise ValueError(
                    f"Starting tile {coord_label(template.position)} of {template.unit_id} is outside "
                    f"the {self.config.width}x{self.config.height} board"
                )

        self.turn_state = TurnState()
        self.combat_resolver = CombatResolver(self.board, self.event_manager)
        self.turn_controller = TurnController(
            self.board, self.player_units, self.combat_resolver, self.event_manager, self.turn_state
        )
        self.enemy_ai = EnemyAIController(
            self.board, self.player_units, self.enemy_units, self.combat_resolver, self.event_manager
        )
        self.outcome = MatchOutcome.IN_PROGRESS
        self.enemy_status_index = 0

    def new_match(self) -> CommandResult:
        """Start a fresh match: new board, full-health rosters at their starting tiles."""
        self.event_manager.clear_queue()
        self._build()
        self.event_manager.publish(MatchStarted(round_number=self.round_number), source="MatchState")
        self._emit_log(
            f"Match started on a {self.board.width}x{self.board.height} board "
            f"({len(self.player_units)} vs {len(self.enemy_units)})"
        )
        self.turn_controller.select_unit(0)
        self.last_result = CommandResult.ok(self._drain())
        return self.last_result

    def restart(self) -> CommandResult:
        return self.new_match()

    # ============== Command execution ==============

    def _run(self, action: Callable[[], object], phase: BattlePhase = BattlePhase.PLAYER_PHASE) -> CommandResult:
        """Execute a command with the match-over and phase guards applied."""
        try:
            if self.outcome != MatchOutcome.IN_PROGRESS:
                raise CommandRejected(RejectionKind.MATCH_OVER)
            if self.phase != phase:
                raise CommandRejected(RejectionKind.WRONG_PHASE)
            action()
        except CommandRejected as e:
            self._emit_log(f"Rejected ({e.kind.name}): {e.message}", level="DEBUG")
            self._drain()
            self.last_result = CommandResult.rejected(e)
            return self.last_result

        self.check_victory()
        if (self.config.auto_enemy_phase and self.outcome == MatchOutcome.IN_PROGRESS
                and phase == BattlePhase.PLAYER_PHASE and self.phase == BattlePhase.ENEMY_PHASE):
            self._run_enemy_phase()

        self.last_result = CommandResult.ok(self._drain())
        return self.last_result

    def select_unit(self, index: int) -> CommandResult:
        return self._run(lambda: self.turn_controller.select_unit(index))

    def move_cursor(self, dx: int, dy: int) -> CommandResult:
        return self._run(lambda: self.turn_controller.move_cursor(dx, dy))

    def cycle_unit(self) -> CommandResult:
        return self._run(self.turn_controller.cycle_unit)

    def attempt_move(self) -> CommandResult:
        return self._run(self.turn_controller.attempt_move)

    def attempt_attack(self) -> CommandResult:
        return self._run(self.turn_controller.attempt_attack)

    def wait(self) -> CommandResult:
        return self._run(self.turn_controller.wait)

    def end_round(self) -> CommandResult:
        return self._run(self.turn_controller.end_round)

    def enemy_phase_step(self) -> CommandResult:
        """Run the whole enemy phase, then start the next player phase unless the match ended."""
        return self._run(self._run_enemy_phase, phase=BattlePhase.ENEMY_PHASE)

    def end_turn(self) -> CommandResult:
        """End the player round and immediately play the enemy phase."""
        result = self.end_round()
        if result.success and self.phase == BattlePhase.ENEMY_PHASE and self.outcome == MatchOutcome.IN_PROGRESS:
            result = result.merge(self.enemy_phase_step())
            self.last_result = result
        return result

    def _run_enemy_phase(self) -> None:
        self.enemy_ai.run_phase(self.round_number)
        if self.check_victory() == MatchOutcome.IN_PROGRESS:
            self.turn_controller.begin_player_phase()

    def check_victory(self) -> MatchOutcome:
        """Update the outcome: victory when every enemy is down, else defeat when every player unit is."""
        if self.outcome != MatchOutcome.IN_PROGRESS:
            return self.outcome

        if all(not enemy.is_alive for enemy in self.enemy_units):
            self.outcome = MatchOutcome.VICTORY
        elif all(not unit.is_alive for unit in self.player_units):
            self.outcome = MatchOutcome.DEFEAT
        else:
            return self.outcome

        self.turn_state.clear_activation()
        self.event_manager.publish(
            MatchEnded(round_number=self.round_number, outcome=self.outcome),
            source="MatchState"
        )
        self._emit_log(f"Match ended in round {self.round_number}: {self.outcome.name}")
        return self.outcome

    # ============== Queries ==============

    @property
    def phase(self) -> BattlePhase:
        return self.turn_state.phase

    @property
    def round_number(self) -> int:
        return self.turn_state.round_number

    @property
    def cursor(self) -> Vector2:
        return self.turn_state.cursor.position

    @property
    def active_unit(self) -> Optional[Unit]:
        if self.outcome != MatchOutcome.IN_PROGRESS:
            return None
        return self.turn_controller.active_unit

    @property
    def is_over(self) -> bool:
        return self.outcome != MatchOutcome.IN_PROGRESS

    # ============== Narration queries ==============

    def status_report(self, position: Optional[Vector2] = None) -> str:
        """Describe the cursor tile (or position) and the occupant's options this turn."""
        return self.view.status_report(position)

    def cycle_enemy_status(self) -> str:
        """Announce the next living enemy's location and HP, wrapping around."""
        alive = [enemy for enemy in self.enemy_units if enemy.is_alive]
        if not alive:
            return "No enemies remain."
        if self.enemy_status_index >= len(alive):
            self.enemy_status_index = 0
        enemy = alive[self.enemy_status_index]
        self.enemy_status_index += 1
        return self.view.enemy_status(UnitView.from_unit(enemy))

    def unit_details(self, unit: Optional[Unit] = None) -> str:
        """Stat summary of a unit, defaulting to the active one."""
        unit = unit if unit is not None else self.active_unit
        if unit is None:
            return ""
        return self.view.unit_details(UnitView.from_unit(unit))
