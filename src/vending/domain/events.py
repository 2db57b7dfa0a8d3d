"""
Events du domaine.

Les events représentent des faits qui se sont produits sur une machine.
Ils sont immuables et forment un ensemble fermé : chaque event porte
un tag `kind` (EventKind) sur lequel les subscribers font leur dispatch,
plutôt que d'inspecter le type Python de l'objet reçu.

Pour ajouter un nouveau type d'event : une valeur dans EventKind
et une dataclass qui la déclare dans `kind`.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar


class EventKind(str, enum.Enum):
    """Tag d'un event, c'est aussi le nom du topic dans le message bus."""

    SALE = "sale"
    REFILL = "refill"
    LOW_STOCK_WARNING = "lowStockWarning"
    STOCK_LEVEL_OK = "stockLevelOk"


@dataclass(frozen=True)
class Event:
    """Classe de base pour tous les events : cible une machine."""

    machine_id: str

    kind: ClassVar[EventKind]


@dataclass(frozen=True)
class Sale(Event):
    """Des produits ont été vendus par une machine."""

    quantity: int

    kind: ClassVar[EventKind] = EventKind.SALE


@dataclass(frozen=True)
class Refill(Event):
    """Une machine a été réapprovisionnée."""

    quantity: int

    kind: ClassVar[EventKind] = EventKind.REFILL


@dataclass(frozen=True)
class LowStockWarning(Event):
    """Le stock d'une machine est passé sous le seuil d'alerte."""

    kind: ClassVar[EventKind] = EventKind.LOW_STOCK_WARNING


@dataclass(frozen=True)
class StockLevelOk(Event):
    """Le stock d'une machine est revenu au niveau du seuil ou au-dessus."""

    kind: ClassVar[EventKind] = EventKind.STOCK_LEVEL_OK
