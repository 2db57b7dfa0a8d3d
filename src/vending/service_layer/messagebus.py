"""
Message Bus.

Le message bus est le service publish/subscribe central : il associe
à chaque type d'event (son `kind`) la liste ordonnée des subscribers
qui s'y sont abonnés.

Fonctionnement :
1. Un event est publié sur le bus
2. Le bus prend une copie de la liste des subscribers de son kind
3. Chaque subscriber est appelé, dans l'ordre d'abonnement
4. Un subscriber peut publier à son tour : l'event dérivé est
   livré immédiatement (en profondeur d'abord), avant que le bus
   ne passe au subscriber suivant

Tout est synchrone, sans queue ni thread. Une erreur levée par un
subscriber remonte telle quelle à celui qui a publié, et les
subscribers suivants ne reçoivent pas l'event.
"""

from __future__ import annotations

import abc
import logging
from typing import Union

from vending.domain import events

logger = logging.getLogger(__name__)

Kind = Union[events.EventKind, str]


class AbstractSubscriber(abc.ABC):
    """Contrat de tout ce qui peut s'abonner au message bus."""

    @abc.abstractmethod
    def handle(self, event: events.Event) -> None:
        raise NotImplementedError


def _topic(kind: Kind) -> str:
    # Le registre est indexé par la valeur brute ("sale", "refill", ...).
    if isinstance(kind, events.EventKind):
        return kind.value
    return kind


class MessageBus:
    """
    Registre des abonnements et dispatch des events.

    Les abonnements ne sont pas dédupliqués : un subscriber abonné
    deux fois au même kind reçoit l'event deux fois.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[AbstractSubscriber]] = {}

    def subscribe(self, kind: Kind, handler: AbstractSubscriber) -> None:
        """Ajoute `handler` à la fin de la liste des abonnés de `kind`."""
        self._subscribers.setdefault(_topic(kind), []).append(handler)

    def unsubscribe(self, kind: Kind, handler: AbstractSubscriber) -> None:
        """
        Retire toutes les occurrences de `handler` pour `kind`.

        La comparaison se fait par identité. Sans effet si le kind
        n'a aucun abonné ou si `handler` n'y figure pas.
        """
        topic = _topic(kind)
        subscribers = self._subscribers.get(topic)
        if subscribers is None:
            return
        # On remplace la liste au lieu de la modifier : un publish en cours
        # continue sur la copie qu'il a prise.
        self._subscribers[topic] = [s for s in subscribers if s is not handler]

    def publish(self, event: events.Event) -> None:
        """Livre `event` à tous ses abonnés, dans l'ordre d'abonnement."""
        subscribers = list(self._subscribers.get(_topic(event.kind), ()))
        if not subscribers:
            logger.debug("Aucun abonné pour l'event %s", event)
            return
        for handler in subscribers:
            logger.debug("Traitement de l'event %s avec %s", event, handler)
            handler.handle(event)

    def subscribers(self, kind: Kind) -> tuple[AbstractSubscriber, ...]:
        """Copie des abonnés actuels de `kind`."""
        return tuple(self._subscribers.get(_topic(kind), ()))
