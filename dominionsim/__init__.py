"""Dominion card game engine with a seeded generator, a scripted game and a console."""

__version__ = "0.1.0"