"""Pygame client that renders a :class:`GameSession` from its events."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pygame

from tank_duel.core.config import MatchConfig
from tank_duel.core.events import (
    Event,
    ExplosionOccurred,
    GameOver,
    MatchRestarted,
    TankDamaged,
    TankDestroyed,
    TankSmoking,
    TerrainCarved,
    TurnChanged,
)
from tank_duel.core.session import GameSession, TurnState
from tank_duel.pygame.renderer import (
    build_sky,
    build_terrain_surface,
    draw_explosion,
    draw_health_bar,
    draw_meter,
    draw_preview,
    draw_tank,
    repaint_terrain,
)

logger = logging.getLogger(__name__)

EXPLOSION_SECONDS = 0.4
FLASH_SECONDS = 0.3


@dataclass
class TankVisual:
    """Presentation-only state for one tank, keyed by tank id."""

    shown_health: float
    flash: float = 0.0
    smoking: bool = False
    destroyed: bool = False


@dataclass
class ExplosionVisual:
    x: float
    y: float
    is_direct: bool
    age: float = 0.0


@dataclass
class HudState:
    message: str = ""
    winner_id: Optional[int] = None
    explosions: List[ExplosionVisual] = field(default_factory=list)


class PygameDuel:
    """Graphical client built on top of the core simulation."""

    def __init__(
        self,
        config: Optional[MatchConfig] = None,
        *,
        seed: Optional[int] = None,
        debug: bool = False,
    ) -> None:
        pygame.init()
        pygame.font.init()
        config = config or MatchConfig(seed=seed)
        self.session = GameSession(config)
        self.debug = debug
        size = (config.field_width, config.field_height)
        self.screen = pygame.display.set_mode(size)
        pygame.display.set_caption("Tank Duel")
        self.font_small = pygame.font.SysFont("arial", 12, bold=True)
        self.font_regular = pygame.font.SysFont("arial", 20, bold=True)
        self.clock = pygame.time.Clock()
        self.running = True
        self._sky = build_sky(size)
        self.hud = HudState()
        self.visuals: Dict[int, TankVisual] = {}
        self._reset_presentation()

    # ------------------------------------------------------------------
    def _reset_presentation(self) -> None:
        self._terrain_surface = build_terrain_surface(self.session.terrain)
        self.visuals = {
            tank.id: TankVisual(shown_health=tank.health) for tank in self.session.tanks
        }
        self.hud = HudState(message=self._turn_message(self.session.current_player))

    def _turn_message(self, player: int) -> str:
        owner = "CPU" if self.session.config.is_ai(player) else "Player"
        return f"{owner} {player + 1}'s turn"

    # ------------------------------------------------------------------
    # Main loop
    def run(self) -> None:
        while self.running:
            dt_ms = self.clock.tick(60)
            for event in pygame.event.get():
                self.process_event(event)
            self.update(dt_ms)
            self.draw()
            pygame.display.flip()
        pygame.quit()

    def process_event(self, event: pygame.event.Event) -> None:
        session = self.session
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.MOUSEMOTION:
            session.set_aim_angle(*event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            session.set_aim_angle(*event.pos)
            session.start_charge()
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            session.release_charge()
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.running = False
            elif event.key == pygame.K_r:
                session.restart()
            elif event.key == pygame.K_SPACE:
                session.fire_direct()
            elif event.key in (pygame.K_LEFT, pygame.K_a):
                session.move_tank(-1)
            elif event.key in (pygame.K_RIGHT, pygame.K_d):
                session.move_tank(1)

    def update(self, dt_ms: float) -> None:
        dt = dt_ms / 1000.0
        for event in self.session.tick(dt_ms):
            self.apply_event(event)
        for visual in self.visuals.values():
            visual.flash = max(0.0, visual.flash - dt)
        for explosion in self.hud.explosions:
            explosion.age += dt
        self.hud.explosions = [e for e in self.hud.explosions if e.age < EXPLOSION_SECONDS]

    def apply_event(self, event: Event) -> None:
        """React to a simulation event; the only way presentation state changes."""

        if self.debug:
            logger.debug("event %s", event)
        if isinstance(event, MatchRestarted):
            self._reset_presentation()
        elif isinstance(event, ExplosionOccurred):
            self.hud.explosions.append(ExplosionVisual(event.x, event.y, event.is_direct))
        elif isinstance(event, TerrainCarved):
            r = event.radius
            repaint_terrain(
                self._terrain_surface,
                self.session.terrain,
                event.x - r,
                event.y - r - self.session.terrain.cell,
                event.x + r,
                event.y + r + self.session.terrain.cell,
            )
        elif isinstance(event, TankDamaged):
            visual = self.visuals[event.id]
            visual.shown_health = event.new_health
            visual.flash = FLASH_SECONDS
        elif isinstance(event, TankSmoking):
            self.visuals[event.id].smoking = True
        elif isinstance(event, TankDestroyed):
            self.visuals[event.id].destroyed = True
        elif isinstance(event, TurnChanged):
            self.hud.message = self._turn_message(event.active_id)
        elif isinstance(event, GameOver):
            self.hud.winner_id = event.winner_id
            self.hud.message = f"Player {event.winner_id + 1} wins! Press R to play again"

    # ------------------------------------------------------------------
    # Drawing
    def draw(self) -> None:
        session = self.session
        screen = self.screen
        screen.blit(self._sky, (0, 0))
        screen.blit(self._terrain_surface, (0, 0))
        for tank in session.tanks:
            visual = self.visuals[tank.id]
            draw_tank(
                screen,
                tank,
                tank.id,
                flash=visual.flash,
                active=tank.id == session.current_player and not session.game_over,
            )
            draw_health_bar(screen, self.font_small, tank, visual.shown_health)
            if visual.smoking and not visual.destroyed:
                pygame.draw.circle(screen, pygame.Color(68, 68, 68), (int(tank.x), int(tank.y - 25)), 10)
        if session.turn_state is TurnState.AIMING and not session.is_ai_turn():
            draw_preview(screen, session.aim_preview())
        if session.meter.is_charging:
            meter = session.meter
            draw_meter(
                screen,
                self.font_small,
                meter.level,
                meter.target,
                meter.perfect_zone_size,
                (screen.get_width() // 2, 75),
            )
        projectile = session.projectile
        if projectile is not None:
            pygame.draw.circle(screen, pygame.Color(51, 51, 51), (int(projectile.x), int(projectile.y)), 8)
        for explosion in self.hud.explosions:
            draw_explosion(
                screen,
                explosion.x,
                explosion.y,
                explosion.is_direct,
                explosion.age / EXPLOSION_SECONDS,
            )
        label = self.font_regular.render(self.hud.message, True, pygame.Color(255, 255, 255))
        screen.blit(label, label.get_rect(center=(screen.get_width() // 2, 30)))


def run_pygame(**kwargs: object) -> None:
    """Convenience helper for launching the pygame client."""

    app = PygameDuel(**kwargs)
    app.run()


__all__ = ["PygameDuel", "run_pygame"]
