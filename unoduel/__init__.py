"""Top-level package for the unoduel shedding card game engine."""

from . import actions, cards, controller, deck, opponent, rules, scheduler, state

__all__ = [
    "actions",
    "cards",
    "controller",
    "deck",
    "opponent",
    "rules",
    "scheduler",
    "state",
]
