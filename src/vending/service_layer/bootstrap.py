"""
Bootstrap : assemblage de l'application (Composition Root).

Ce module construit le parc de machines, le message bus et abonne
les subscribers. C'est ici que l'injection de dépendances est réalisée :
on assemble les composants concrets (ou les fakes pour les tests).

C'est aussi ici qu'est choisi le propriétaire unique de la politique
de notification (voir NotificationPolicy).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable

from vending.adapters import notifications, repository
from vending.domain import events, model
from vending.service_layer import handlers, messagebus

DEFAULT_MACHINE_IDS = ("001", "002", "003")


class NotificationPolicy(str, enum.Enum):
    """
    Qui demande aux machines de vérifier leurs verrous.

    INLINE : les subscribers de vente et de réapprovisionnement,
    juste après avoir modifié le stock.
    DEDICATED : LowStockWarningSubscriber et StockLevelOkSubscriber,
    abonnés à "sale" et "refill" après les subscribers de stock.
    """

    INLINE = "inline"
    DEDICATED = "dedicated"


@dataclass
class Fleet:
    """Le bus et le parc de machines qu'il pilote."""

    bus: messagebus.MessageBus
    machines: repository.AbstractRepository


def bootstrap(
    machine_ids: Iterable[str] = DEFAULT_MACHINE_IDS,
    machines: repository.AbstractRepository | None = None,
    notifications_adapter: notifications.AbstractNotifications | None = None,
    notification_policy: NotificationPolicy | str = NotificationPolicy.INLINE,
) -> Fleet:
    """
    Construit et retourne un parc câblé sur un MessageBus.

    Si `machines` est fourni, `machine_ids` est ignoré. Une politique
    inconnue lève ValueError.
    """
    policy = NotificationPolicy(notification_policy)

    if machines is None:
        machines = repository.InMemoryRepository(
            [model.Machine(machine_id) for machine_id in machine_ids]
        )

    if notifications_adapter is None:
        notifications_adapter = notifications.LoggingNotifications()

    bus = messagebus.MessageBus()
    inline = policy is NotificationPolicy.INLINE

    # L'ordre d'abonnement compte : en DEDICATED, le subscriber de
    # notification doit voir le stock déjà mis à jour.
    bus.subscribe(events.EventKind.SALE, handlers.SaleSubscriber(machines, bus, check_threshold=inline))
    bus.subscribe(events.EventKind.REFILL, handlers.RefillSubscriber(machines, bus, check_threshold=inline))
    if not inline:
        bus.subscribe(events.EventKind.SALE, handlers.LowStockWarningSubscriber(machines, bus))
        bus.subscribe(events.EventKind.REFILL, handlers.StockLevelOkSubscriber(machines, bus))

    notifier = handlers.NotificationSubscriber(notifications_adapter)
    bus.subscribe(events.EventKind.LOW_STOCK_WARNING, notifier)
    bus.subscribe(events.EventKind.STOCK_LEVEL_OK, notifier)

    return Fleet(bus=bus, machines=machines)
