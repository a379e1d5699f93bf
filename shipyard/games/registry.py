"""The set of supported games."""

from __future__ import annotations

from shipyard.games.base import Game
from shipyard.games.ghostship import Ghostship
from shipyard.games.soh import Soh
from shipyard.games.spaghettikart import SpaghettiKart
from shipyard.games.starship import Starship
from shipyard.games.twoship import TwoShip

_GAMES: tuple[Game, ...] = (
    Soh(),
    TwoShip(),
    Ghostship(),
    Starship(),
    SpaghettiKart(),
)


def registry() -> tuple[Game, ...]:
    """Every supported game, in registration order."""
    return _GAMES


def game_for_slug(slug: str) -> Game | None:
    """The registered game with the given slug, or None."""
    return next((g for g in _GAMES if g.slug == slug), None)