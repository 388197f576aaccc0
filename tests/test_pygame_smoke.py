import pygame
import pytest

from tank_duel import MatchConfig
from tank_duel.core.events import ExplosionOccurred, TankDamaged, TerrainCarved
from tank_duel.pygame import PygameDuel


@pytest.fixture
def app(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    app = None
    try:
        app = PygameDuel(MatchConfig(ai_players=(), seed=5))
        yield app
    finally:
        if app:
            app.running = False
        pygame.quit()


@pytest.mark.smoke
def test_pygame_client_initialises(app: PygameDuel) -> None:
    """The graphical client boots in a headless environment."""

    assert app.screen.get_size() == (1280, 720)
    assert set(app.visuals) == {0, 1}
    assert app.hud.message == "Player 1's turn"
    app.draw()


@pytest.mark.smoke
def test_mouse_drag_charges_and_fires(app: PygameDuel) -> None:
    tank = app.session.current_tank
    target = (int(tank.x + 80), int(tank.y - 80))

    app.process_event(pygame.event.Event(pygame.MOUSEMOTION, pos=target, rel=(0, 0), buttons=(0, 0, 0)))
    app.process_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=target, button=1))
    app.update(16)
    app.draw()
    app.process_event(pygame.event.Event(pygame.MOUSEBUTTONUP, pos=target, button=1))

    assert app.session.projectile is not None
    app.update(16)
    app.draw()


@pytest.mark.smoke
def test_events_drive_presentation_state(app: PygameDuel) -> None:
    app.session.terrain.carve(640, 640, 30)
    app.apply_event(TerrainCarved(x=640, y=640, radius=30))
    app.apply_event(ExplosionOccurred(x=640, y=640, is_direct=False))
    app.apply_event(TankDamaged(id=1, new_health=80, amount=20, is_direct=True))

    assert app.visuals[1].shown_health == 80
    assert app.visuals[1].flash > 0
    assert len(app.hud.explosions) == 1
    app.draw()

    app.update(1000)
    assert app.hud.explosions == []
    assert app.visuals[1].flash == 0.0


@pytest.mark.smoke
def test_restart_key_resets_presentation(app: PygameDuel) -> None:
    app.visuals[0].shown_health = 10
    app.process_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_r, mod=0, unicode="r"))
    app.update(0)

    assert app.visuals[0].shown_health == 100
    assert app.session.epoch == 1

    app.process_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE, mod=0, unicode=""))
    assert not app.running
