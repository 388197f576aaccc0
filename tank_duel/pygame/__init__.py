"""Pygame presentation layer for the Tank Duel simulation."""

from tank_duel.pygame.app import PygameDuel, run_pygame

__all__ = ["PygameDuel", "run_pygame"]
