"""
Pattern Repository.

Le repository est le point d'accès partagé au parc de machines.
Tous les subscribers reçoivent la même instance : leur vue de l'état
des machines est donc toujours cohérente, sans dépendre du partage
implicite d'une liste.

Il expose une interface de type collection (add, get, list) qui masque
la façon dont les machines sont stockées.
"""

from __future__ import annotations

import abc
from typing import Iterator

from vending.domain import model


class DuplicateMachine(Exception):
    """Levée quand on enregistre une machine dont l'id existe déjà."""
    pass


class AbstractRepository(abc.ABC):
    """
    Interface abstraite du repository.

    Les méthodes publiques (add, get) portent les règles communes,
    puis délèguent aux méthodes abstraites préfixées _ que les
    sous-classes implémentent.
    """

    def add(self, machine: model.Machine) -> None:
        """Ajoute une machine ; son id doit être unique dans le parc."""
        if self._get(machine.id) is not None:
            raise DuplicateMachine(f"Machine déjà enregistrée : {machine.id}")
        self._add(machine)

    def get(self, machine_id: str) -> model.Machine | None:
        """Retourne la machine d'id donné, ou None si elle est inconnue."""
        return self._get(machine_id)

    def list(self) -> list[model.Machine]:
        """Toutes les machines, dans l'ordre d'enregistrement."""
        return self._list()

    def __iter__(self) -> Iterator[model.Machine]:
        return iter(self._list())

    def __len__(self) -> int:
        return len(self._list())

    @abc.abstractmethod
    def _add(self, machine: model.Machine) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def _get(self, machine_id: str) -> model.Machine | None:
        raise NotImplementedError

    @abc.abstractmethod
    def _list(self) -> list[model.Machine]:
        raise NotImplementedError


class InMemoryRepository(AbstractRepository):
    """Implémentation en mémoire, le parc est fixé au démarrage."""

    def __init__(self, machines: list[model.Machine] | None = None):
        self._machines: list[model.Machine] = []
        for machine in machines or []:
            self.add(machine)

    def _add(self, machine: model.Machine) -> None:
        self._machines.append(machine)

    def _get(self, machine_id: str) -> model.Machine | None:
        return next((m for m in self._machines if m.id == machine_id), None)

    def _list(self) -> list[model.Machine]:
        return list(self._machines)
