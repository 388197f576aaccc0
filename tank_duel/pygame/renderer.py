"""Drawing helpers for the pygame client."""

from __future__ import annotations

import math
from typing import Iterable, Tuple

import pygame

from tank_duel.core.terrain import TerrainField

SKY_TOP = pygame.Color(74, 144, 217)
SKY_BOTTOM = pygame.Color(135, 206, 235)
GRASS = pygame.Color(93, 156, 47)
SOIL = pygame.Color(74, 124, 35)
TANK_COLORS = (
    (pygame.Color(74, 103, 65), pygame.Color(92, 125, 82)),
    (pygame.Color(139, 105, 20), pygame.Color(166, 124, 0)),
)


def _blend_color(color: pygame.Color, other: pygame.Color, ratio: float) -> pygame.Color:
    clamped = max(0.0, min(1.0, ratio))
    inv = 1.0 - clamped
    return pygame.Color(
        int(color.r * inv + other.r * clamped),
        int(color.g * inv + other.g * clamped),
        int(color.b * inv + other.b * clamped),
    )


def build_sky(size: Tuple[int, int]) -> pygame.Surface:
    width, height = size
    sky = pygame.Surface(size)
    for y in range(height):
        pygame.draw.line(sky, _blend_color(SKY_TOP, SKY_BOTTOM, y / max(1, height - 1)), (0, y), (width, y))
    return sky


def build_terrain_surface(terrain: TerrainField) -> pygame.Surface:
    surface = pygame.Surface((terrain.width, terrain.height), pygame.SRCALPHA)
    repaint_terrain(surface, terrain, 0, 0, terrain.width, terrain.height)
    return surface


def repaint_terrain(
    surface: pygame.Surface,
    terrain: TerrainField,
    left: float,
    top: float,
    right: float,
    bottom: float,
) -> None:
    """Redraw the cells inside a pixel rectangle from the occupancy grid."""

    cell = terrain.cell
    col_start = max(0, int(left // cell))
    col_end = min(terrain.cols - 1, int(right // cell))
    row_start = max(0, int(top // cell))
    row_end = min(terrain.rows - 1, int(bottom // cell))
    clear = pygame.Color(0, 0, 0, 0)
    for row in range(row_start, row_end + 1):
        for col in range(col_start, col_end + 1):
            rect = pygame.Rect(col * cell, row * cell, cell, cell)
            if not terrain.cell_is_solid(col, row):
                surface.fill(clear, rect)
            elif row > 0 and not terrain.cell_is_solid(col, row - 1):
                surface.fill(GRASS, rect)
            else:
                surface.fill(SOIL, rect)


def draw_tank(
    surface: pygame.Surface,
    tank,
    index: int,
    *,
    flash: float = 0.0,
    active: bool = False,
) -> None:
    body, highlight = TANK_COLORS[index % len(TANK_COLORS)]
    if tank.is_destroyed:
        body, highlight = pygame.Color(34, 34, 34), pygame.Color(51, 51, 51)
    elif flash > 0:
        body = _blend_color(body, pygame.Color(255, 0, 0), min(1.0, flash * 4))
    cx, cy = tank.body_center
    hull = pygame.Rect(0, 0, int(tank.half_width * 2), int(tank.half_height * 2))
    hull.center = (int(cx), int(cy))
    treads = pygame.Rect(hull.left - 5, hull.bottom - 8, hull.width + 10, 16)
    pygame.draw.rect(surface, pygame.Color(34, 34, 34), treads, border_radius=4)
    pygame.draw.rect(surface, body, hull, border_radius=5)
    pygame.draw.rect(surface, highlight, hull.inflate(-4, -hull.height // 2).move(0, -hull.height // 4), border_radius=3)
    pygame.draw.rect(surface, pygame.Color(0, 0, 0), hull, width=2, border_radius=5)

    pivot = (int(tank.x), int(tank.y))
    if not tank.is_destroyed:
        tip = (
            int(tank.x + math.cos(tank.aim_angle) * 45),
            int(tank.y + math.sin(tank.aim_angle) * 45),
        )
        pygame.draw.line(surface, pygame.Color(68, 68, 68), pivot, tip, 8)
    pygame.draw.circle(surface, body, pivot, 18)
    pygame.draw.circle(surface, pygame.Color(0, 0, 0), pivot, 18, width=2)
    if active:
        pygame.draw.circle(surface, pygame.Color(0, 255, 0), (pivot[0], pivot[1] - 60), 6)


def draw_health_bar(surface: pygame.Surface, font: pygame.font.Font, tank, shown_health: float) -> None:
    ratio = max(0.0, min(1.0, shown_health / tank.max_health))
    back = pygame.Rect(0, 0, 70, 12)
    back.center = (int(tank.x), int(tank.y - 35))
    pygame.draw.rect(surface, pygame.Color(51, 51, 51), back)
    pygame.draw.rect(surface, pygame.Color(0, 0, 0), back, width=2)
    if ratio <= 0.3:
        color = pygame.Color(255, 0, 0)
    elif ratio <= 0.6:
        color = pygame.Color(255, 170, 0)
    else:
        color = pygame.Color(0, 255, 0)
    fill = pygame.Rect(back.left + 3, back.top + 2, int(64 * ratio), 8)
    pygame.draw.rect(surface, color, fill)
    label = font.render(str(int(math.ceil(shown_health))), True, pygame.Color(255, 255, 255))
    surface.blit(label, label.get_rect(center=back.center))


def draw_preview(surface: pygame.Surface, points: Iterable[Tuple[float, float]]) -> None:
    points = list(points)
    total = max(1, len(points))
    for i, (x, y) in enumerate(points, start=1):
        ratio = i / total
        size = max(2, int(7 - ratio * 4))
        color = pygame.Color(255, int(255 * (1 - ratio * 0.7)), 0)
        pygame.draw.circle(surface, color, (int(x), int(y)), size)


def draw_explosion(surface: pygame.Surface, x: float, y: float, is_direct: bool, progress: float) -> None:
    size = 50 if is_direct else 30
    scale = 0.5 + progress * 2.0
    for i, color in enumerate(((255, 68, 0), (255, 170, 0), (255, 255, 0))):
        radius = int(max(1, (size - i * 10) * scale))
        pygame.draw.circle(surface, pygame.Color(*color), (int(x), int(y)), radius)


def draw_meter(
    surface: pygame.Surface,
    font: pygame.font.Font,
    level: float,
    target: float,
    zone: float,
    center: Tuple[int, int],
) -> None:
    back = pygame.Rect(0, 0, 200, 16)
    back.center = center
    pygame.draw.rect(surface, pygame.Color(51, 51, 51), back)
    zone_rect = pygame.Rect(
        back.left + int((target - zone / 2) * back.width),
        back.top,
        max(2, int(zone * back.width)),
        back.height,
    )
    pygame.draw.rect(surface, pygame.Color(80, 200, 80), zone_rect)
    fill = pygame.Rect(back.left, back.top + 2, int(level * back.width), back.height - 4)
    pygame.draw.rect(surface, pygame.Color(255, 102, 0), fill)
    pygame.draw.rect(surface, pygame.Color(0, 0, 0), back, width=2)
    label = font.render("POWER", True, pygame.Color(255, 255, 255))
    surface.blit(label, label.get_rect(center=back.center))


__all__ = [
    "build_sky",
    "build_terrain_surface",
    "draw_explosion",
    "draw_health_bar",
    "draw_meter",
    "draw_preview",
    "draw_tank",
    "repaint_terrain",
]
