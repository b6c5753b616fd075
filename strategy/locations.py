"""Card locations and move descriptors."""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple

from klondike_core import Card

from .errors import InvalidLocationAccess


class LocationTag(IntEnum):
    WASTE_PILE = 0
    TABLEAU = 1
    FOUNDATION = 2


class Location:
    """Base class of the three location variants.

    Only the accessors carried by a variant are overridden; the others raise
    :class:`InvalidLocationAccess`.
    """

    tag: LocationTag

    @property
    def index(self) -> int:
        raise InvalidLocationAccess(f"{self} has no index")

    @property
    def sub_index(self) -> int:
        raise InvalidLocationAccess(f"{self} has no sub-index")

    def describe(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True)
class WastePile(Location):
    tag = LocationTag.WASTE_PILE

    def describe(self) -> str:
        return "waste_pile"


@dataclass(frozen=True)
class Tableau(Location):
    """Exposed card ``position`` of tableau column ``column``."""

    column: int
    position: int
    tag = LocationTag.TABLEAU

    @property
    def index(self) -> int:
        return self.column

    @property
    def sub_index(self) -> int:
        return self.position

    def describe(self) -> str:
        return f"Tableau deck {self.column} sub-index {self.position}"


@dataclass(frozen=True)
class Foundation(Location):
    suit: int
    tag = LocationTag.FOUNDATION

    @property
    def index(self) -> int:
        return self.suit

    def describe(self) -> str:
        return f"Foundation {self.suit}"


@dataclass(frozen=True)
class Move:
    src: Location
    dest: Location

    def __str__(self) -> str:
        return f"from {self.src} to {self.dest}"


class PathStep(NamedTuple):
    """One planned move together with the card it carries."""

    move: Move
    card: Card

    def __str__(self) -> str:
        return f"{self.move} {self.card}"
