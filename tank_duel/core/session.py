"""Turn controller that owns the mutable state of a duel."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from tank_duel.core.ai import FiringSolution, FiringSolver
from tank_duel.core.ballistics import Point, Projectile, trajectory_preview
from tank_duel.core.config import MatchConfig
from tank_duel.core.damage import DamageResolver
from tank_duel.core.events import (
    AimUpdated,
    ChargeReleased,
    ChargeStarted,
    Event,
    ExplosionOccurred,
    GameOver,
    MatchRestarted,
    ShotFired,
    TankMoved,
    TerrainCarved,
    TurnChanged,
)
from tank_duel.core.power_meter import ChargeResult, PowerMeter
from tank_duel.core.scheduler import TransitionScheduler
from tank_duel.core.tank import Tank, spawn_tank
from tank_duel.core.terrain import TerrainField, ring_points

logger = logging.getLogger(__name__)


class TurnState(str, Enum):
    IDLE = "idle"
    AIMING = "aiming"
    CHARGING = "charging"
    IN_FLIGHT = "in_flight"
    RESOLVING = "resolving"
    SWITCHING_TURN = "switching_turn"
    GAME_OVER = "game_over"


@dataclass
class MatchState:
    """Everything that changes during one match."""

    tanks: List[Tank]
    current_player: int = 0
    turn_state: TurnState = TurnState.IDLE
    projectile: Optional[Projectile] = None
    game_over: bool = False
    winner_id: Optional[int] = None
    aim_power: float = 0.0
    turn_number: int = 1
    shots_fired: List[int] = field(default_factory=lambda: [0, 0])


@dataclass(frozen=True)
class Impact:
    kind: str  # "tank", "terrain", "wall" or "miss"
    x: float
    y: float
    tank_id: Optional[int] = None


class GameSession:
    """Own the terrain and match state and advance them one tick at a time."""

    def __init__(
        self,
        config: Optional[MatchConfig] = None,
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        config = config or MatchConfig()
        config.validate()
        self.rng = rng or random.Random(config.seed)
        self.epoch = 0
        self.clock_ms = 0.0
        self.scheduler = TransitionScheduler()
        self._pending: List[Event] = []
        self.config = config
        self.terrain = self._build_terrain(config)
        self.state = self._setup(config)

    # ------------------------------------------------------------------
    # Match lifecycle
    def start_match(self, config: Optional[MatchConfig] = None) -> MatchState:
        """Validate ``config`` and begin a fresh match with it."""

        config = config or self.config
        config.validate()
        self.epoch += 1
        self.scheduler.clear()
        self._pending = []
        if self._geometry_changed(config):
            self.terrain = self._build_terrain(config)
        else:
            self.terrain.reset()
        self.config = config
        self.state = self._setup(config)
        return self.state

    def restart(self) -> MatchState:
        state = self.start_match(self.config)
        self._emit(MatchRestarted(epoch=self.epoch))
        logger.info("Match restarted (epoch %d)", self.epoch)
        return state

    def _setup(self, config: MatchConfig) -> MatchState:
        self.damage = DamageResolver(config)
        self.solver = FiringSolver(config, self.rng)
        self.meter = PowerMeter(
            config.charge_rate,
            config.perfect_zone_size,
            config.base_power,
            rng=self.rng,
        )
        tanks = [
            spawn_tank(idx, x, self._support_y(x, config.tank_half_width), config)
            for idx, x in enumerate(config.spawn_x)
        ]
        self.state = MatchState(tanks=tanks, aim_power=config.fallback_power)
        logger.info(
            "Match started: tanks at %s, AI players %s, epoch %d",
            [(round(t.x), round(t.y)) for t in tanks],
            list(config.ai_players) or "none",
            self.epoch,
        )
        self._begin_turn(announce=False)
        return self.state

    def _build_terrain(self, config: MatchConfig) -> TerrainField:
        return TerrainField(
            config.field_width,
            config.field_height,
            config.ground_y,
            cell=config.terrain_cell,
        )

    def _geometry_changed(self, config: MatchConfig) -> bool:
        old = self.config
        return (
            old.field_width,
            old.field_height,
            old.ground_y,
            old.terrain_cell,
        ) != (config.field_width, config.field_height, config.ground_y, config.terrain_cell)

    # ------------------------------------------------------------------
    # Properties
    @property
    def tanks(self) -> Sequence[Tank]:
        return self.state.tanks

    @property
    def current_player(self) -> int:
        return self.state.current_player

    @property
    def current_tank(self) -> Tank:
        return self.state.tanks[self.state.current_player]

    @property
    def turn_state(self) -> TurnState:
        return self.state.turn_state

    @property
    def projectile(self) -> Optional[Projectile]:
        return self.state.projectile

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    @property
    def winner_id(self) -> Optional[int]:
        return self.state.winner_id

    def is_ai_turn(self) -> bool:
        return self.config.is_ai(self.state.current_player)

    def _accepts_human_input(self, *states: TurnState) -> bool:
        if self.state.game_over or self.is_ai_turn():
            return False
        return self.state.turn_state in states

    # ------------------------------------------------------------------
    # Read-only queries
    def is_terrain_solid(self, x: float, y: float) -> bool:
        return self.terrain.is_solid(x, y)

    def query_tank_at(self, x: float, y: float) -> Optional[int]:
        for tank in self.state.tanks:
            if tank.contains(x, y):
                return tank.id
        return None

    def aim_preview(self) -> List[Point]:
        """Dotted trajectory for the active tank's current aim and drag power."""

        tank = self.current_tank
        x0, y0 = tank.muzzle(tank.aim_angle, self.config.muzzle_offset)
        return trajectory_preview(
            x0,
            y0,
            tank.aim_angle,
            self.state.aim_power,
            self.config.gravity,
            points=self.config.preview_points,
            step=self.config.preview_step,
            ground_y=self.terrain.ground_y,
        )

    # ------------------------------------------------------------------
    # Player input
    def set_aim_angle(self, pointer_x: float, pointer_y: float) -> Optional[float]:
        """Aim the active tank at the pointer; the angle is clamped skyward."""

        if not self._accepts_human_input(TurnState.AIMING, TurnState.CHARGING):
            return None
        tank = self.current_tank
        dx = pointer_x - tank.x
        dy = pointer_y - tank.y
        angle = clamp_aim(math.atan2(dy, dx))
        tank.aim_angle = angle
        tank.facing_right = math.cos(angle) >= 0
        self.state.aim_power = self.config.clamp_power(
            math.hypot(dx, dy) * self.config.aim_power_scale
        )
        self._emit(AimUpdated(angle=angle))
        return angle

    def start_charge(self) -> bool:
        if not self._accepts_human_input(TurnState.AIMING) or self.state.projectile is not None:
            logger.debug("start_charge ignored in state %s", self.state.turn_state.value)
            return False
        if not self.meter.start():
            self.meter.activate()
            self.meter.start()
        self.state.turn_state = TurnState.CHARGING
        self._emit(ChargeStarted(id=self.state.current_player, target=self.meter.target))
        return True

    def release_charge(self) -> bool:
        if not self._accepts_human_input(TurnState.CHARGING):
            logger.debug("release_charge ignored in state %s", self.state.turn_state.value)
            return False
        result = self.meter.release()
        if result is None:
            return False
        return self._fire_charged(result)

    def fire_direct(self, power: Optional[float] = None) -> bool:
        """Fire at the current aim, skipping the timing meter."""

        if not self._accepts_human_input(TurnState.AIMING):
            return False
        chosen = self.state.aim_power if power is None else power
        return self._fire(self.current_tank.aim_angle, self.config.clamp_power(chosen))

    def move_tank(self, direction: int) -> bool:
        if not self._accepts_human_input(TurnState.AIMING) or direction == 0:
            return False
        tank = self.current_tank
        config = self.config
        step = config.move_step if direction > 0 else -config.move_step
        new_x = max(config.tank_half_width, min(config.field_width - config.tank_half_width, tank.x + step))
        if new_x == tank.x:
            return False
        for other in self.state.tanks:
            if other is not tank and abs(new_x - other.x) < tank.half_width + other.half_width:
                logger.debug("Tank %d blocked by tank %d", tank.id, other.id)
                return False
        tank.x = new_x
        tank.y = self._support_y(new_x, tank.half_width) - config.pivot_height
        self._emit(TankMoved(id=tank.id, x=tank.x, y=tank.y))
        return True

    # ------------------------------------------------------------------
    # Simulation step
    def tick(self, delta_ms: float) -> List[Event]:
        """Advance charge, projectile, collisions and due transitions, in that order."""

        delta_ms = max(0.0, delta_ms)
        dt = delta_ms / 1000.0
        self.clock_ms += delta_ms

        if self.meter.is_charging:
            result = self.meter.update(dt)
            if result is not None:
                logger.debug("Meter full; auto-firing")
                self._fire_charged(result)

        if self.state.projectile is not None:
            self._advance_projectile(dt)

        for entry in self.scheduler.pop_due(self.clock_ms):
            if entry.epoch != self.epoch:
                logger.debug("Dropping stale transition %s from epoch %d", entry.name, entry.epoch)
                continue
            entry.action()

        events, self._pending = self._pending, []
        return events

    def _advance_projectile(self, dt: float) -> None:
        projectile = self.state.projectile
        assert projectile is not None
        gravity = self.config.gravity
        # Sub-step so a shell never moves further than its probe ring per step.
        reach = (projectile.speed + gravity * dt) * dt
        steps = max(1, int(math.ceil(reach / self.config.collision_radius)))
        sub_dt = dt / steps
        for _ in range(steps):
            projectile.advance(sub_dt, gravity)
            impact = self._detect_impact(projectile)
            if impact is not None:
                self._resolve_impact(projectile, impact)
                return

    def _detect_impact(self, projectile: Projectile) -> Optional[Impact]:
        config = self.config
        x, y = projectile.x, projectile.y
        left, right, top, bottom = config.out_of_bounds
        if x < left or x > right or y < top or y > bottom:
            return Impact("miss", x, y)

        radius = config.collision_radius
        ring = ring_points(x, y, radius)
        for tank in self.state.tanks:
            if tank.alive and any(tank.contains(px, py) for px, py in ring):
                return Impact("tank", x, y, tank_id=tank.id)

        if 0 <= y <= config.field_height and (x < 0 or x >= config.field_width):
            return Impact("wall", x, y)

        if self.terrain.probe(x, y, radius) is not None:
            return Impact("terrain", x, y)
        return None

    def _resolve_impact(self, projectile: Projectile, impact: Impact) -> None:
        state = self.state
        state.turn_state = TurnState.RESOLVING
        state.projectile = None

        if impact.kind == "miss":
            logger.info("Shot from tank %d left the field", projectile.shooter_id)
            self._schedule_switch()
            return

        is_direct = impact.tank_id is not None
        logger.info(
            "Impact (%s) at (%.1f, %.1f) from tank %d",
            impact.kind,
            impact.x,
            impact.y,
            projectile.shooter_id,
        )
        self._emit(ExplosionOccurred(x=impact.x, y=impact.y, is_direct=is_direct))
        radius = self.config.direct_carve_radius if is_direct else self.config.ground_carve_radius
        if self.terrain.carve(impact.x, impact.y, radius):
            self._emit(TerrainCarved(x=impact.x, y=impact.y, radius=radius))

        report = self.damage.resolve(
            state.tanks,
            impact.x,
            impact.y,
            shooter_id=projectile.shooter_id,
            direct_hit_id=impact.tank_id,
        )
        self._pending.extend(report.events)
        self._settle_tanks()

        loser = report.first_destroyed
        if loser is not None:
            self._end_match(loser)
        else:
            self._schedule_switch()

    def _settle_tanks(self) -> None:
        """Drop tanks whose ground was carved away."""

        for tank in self.state.tanks:
            if not tank.alive:
                continue
            resting = self._support_y(tank.x, tank.half_width) - self.config.pivot_height
            if resting > tank.y + 0.5:
                tank.y = resting
                self._emit(TankMoved(id=tank.id, x=tank.x, y=tank.y))

    def _support_y(self, x: float, half_width: float) -> float:
        """Highest terrain surface under a hull spanning ``x +/- half_width``."""

        cell = self.terrain.cell
        best: Optional[float] = None
        column = x - half_width
        while column <= x + half_width:
            surface = self.terrain.surface_y(column)
            if surface is not None and (best is None or surface < best):
                best = surface
            column += cell
        return float(self.terrain.height) if best is None else best

    # ------------------------------------------------------------------
    # Turn flow
    def _fire_charged(self, result: ChargeResult) -> bool:
        self.meter.cancel()
        self._emit(
            ChargeReleased(zone=result.zone.value, multiplier=result.multiplier, power=result.power)
        )
        logger.debug(
            "Charge released at %.2f (target %.2f): %s x%.3f",
            result.level,
            result.target,
            result.zone.value,
            result.multiplier,
        )
        return self._fire(self.current_tank.aim_angle, result.power)

    def _fire(self, angle: float, power: float) -> bool:
        state = self.state
        if state.projectile is not None or state.game_over:
            return False
        tank = self.current_tank
        x, y = tank.muzzle(angle, self.config.muzzle_offset)
        state.projectile = Projectile.launch(x, y, angle, power, tank.id)
        state.turn_state = TurnState.IN_FLIGHT
        state.shots_fired[tank.id] += 1
        self._emit(ShotFired(shooter_id=tank.id, x=x, y=y, angle=angle, power=power))
        logger.info(
            "Tank %d fires at %.1f deg with power %.1f",
            tank.id,
            -math.degrees(angle),
            power,
        )
        return True

    def _schedule_switch(self) -> None:
        self.state.turn_state = TurnState.SWITCHING_TURN
        self.scheduler.schedule(
            self.clock_ms,
            self.config.settle_delay_ms,
            self.epoch,
            "switch_turn",
            self._switch_turn,
        )

    def _switch_turn(self) -> None:
        state = self.state
        if state.game_over or state.turn_state is not TurnState.SWITCHING_TURN:
            return
        state.current_player = 1 - state.current_player
        state.turn_number += 1
        self._begin_turn()

    def _begin_turn(self, *, announce: bool = True) -> None:
        state = self.state
        state.turn_state = TurnState.IDLE
        if announce:
            self._emit(TurnChanged(active_id=state.current_player))
            logger.info("Turn %d: tank %d", state.turn_number, state.current_player)
        if not self.is_ai_turn():
            self.meter.activate()
            state.turn_state = TurnState.AIMING
            return

        tank = self.current_tank
        opponent = state.tanks[1 - tank.id]
        plan = self.solver.plan((tank.x, tank.y), opponent.body_center)
        tank.aim_angle = plan.angle
        tank.facing_right = math.cos(plan.angle) >= 0
        state.turn_state = TurnState.AIMING
        self._emit(AimUpdated(angle=plan.angle))
        self.scheduler.schedule(
            self.clock_ms,
            self.config.ai_think_delay_ms,
            self.epoch,
            "ai_fire",
            lambda: self._ai_fire(plan),
        )

    def _ai_fire(self, plan: FiringSolution) -> None:
        if self.state.turn_state is not TurnState.AIMING or not self.is_ai_turn():
            return
        self._fire(plan.angle, plan.power)

    def _end_match(self, loser: int) -> None:
        state = self.state
        winner = 1 - loser
        wreck = state.tanks[loser]
        self._emit(ExplosionOccurred(x=wreck.x, y=wreck.y, is_direct=True))
        state.game_over = True
        state.winner_id = winner
        state.turn_state = TurnState.GAME_OVER
        self.scheduler.clear()
        self._emit(GameOver(winner_id=winner))
        logger.info("Game over: tank %d wins after %d turns", winner, state.turn_number)

    def _emit(self, event: Event) -> None:
        self._pending.append(event)


def clamp_aim(angle: float) -> float:
    """Keep an aim angle in the upper half plane ``[-pi, 0]``."""

    if angle > 0:
        return 0.0 if angle <= math.pi / 2 else -math.pi
    return max(-math.pi, angle)


__all__ = ["GameSession", "Impact", "MatchState", "TurnState", "clamp_aim"]
