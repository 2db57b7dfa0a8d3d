"""
Subscribers du message bus.

Deux familles de subscribers :

- ceux qui modifient le stock (SaleSubscriber, RefillSubscriber) ;
- ceux qui décident d'émettre une notification dérivée
  (LowStockWarningSubscriber, StockLevelOkSubscriber), qui consomment
  eux aussi les events sale/refill et non les notifications dont ils
  portent le nom.

La décision d'émettre appartient à la Machine (ses verrous) ; la
question est seulement de savoir QUI lui demande de vérifier. Avec la
politique INLINE, ce sont les subscribers de stock, juste après la
mise à jour ; avec DEDICATED, ce sont les subscribers de notification.
Le bootstrap ne câble jamais les deux à la fois.

Enfin, NotificationSubscriber transmet les notifications dérivées
à l'adapter de notifications.
"""

from __future__ import annotations

import abc
import logging
from typing import TYPE_CHECKING

from vending.domain import events, model
from vending.service_layer.messagebus import AbstractSubscriber

if TYPE_CHECKING:
    from vending.adapters.notifications import AbstractNotifications
    from vending.adapters.repository import AbstractRepository
    from vending.service_layer.messagebus import MessageBus

logger = logging.getLogger(__name__)


class MachineSubscriber(AbstractSubscriber):
    """
    Base des subscribers qui agissent sur une machine.

    Tous reçoivent le même repository et le même bus : l'état des
    machines vu par un subscriber est celui vu par tous les autres.
    """

    kind: events.EventKind

    def __init__(self, machines: AbstractRepository, bus: MessageBus):
        self.machines = machines
        self.bus = bus

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"

    def handle(self, event: events.Event) -> None:
        if event.kind is not self.kind:
            logger.debug("%r ignore l'event %s", self, event)
            return
        machine = self.machines.get(event.machine_id)
        if machine is None:
            logger.debug("Machine inconnue %s, event %s ignoré", event.machine_id, event)
            return
        self._handle(event, machine)
        self._publish_new_events(machine)

    @abc.abstractmethod
    def _handle(self, event: events.Event, machine: model.Machine) -> None:
        raise NotImplementedError

    def _publish_new_events(self, machine: model.Machine) -> None:
        for derived in machine.collect_new_events():
            logger.info("Machine %s : %s", machine.id, derived.kind.value)
            self.bus.publish(derived)


class SaleSubscriber(MachineSubscriber):
    """Décrémente le stock ; vérifie le seuil si check_threshold (INLINE)."""

    kind = events.EventKind.SALE

    def __init__(self, machines: AbstractRepository, bus: MessageBus, check_threshold: bool = True):
        super().__init__(machines, bus)
        self.check_threshold = check_threshold

    def _handle(self, event: events.Sale, machine: model.Machine) -> None:
        machine.sell(event.quantity)
        if self.check_threshold:
            machine.check_low_stock()


class RefillSubscriber(MachineSubscriber):
    """Incrémente le stock ; vérifie le retour au seuil si check_threshold."""

    kind = events.EventKind.REFILL

    def __init__(self, machines: AbstractRepository, bus: MessageBus, check_threshold: bool = True):
        super().__init__(machines, bus)
        self.check_threshold = check_threshold

    def _handle(self, event: events.Refill, machine: model.Machine) -> None:
        machine.refill(event.quantity)
        if self.check_threshold:
            machine.check_stock_level_ok()


class LowStockWarningSubscriber(MachineSubscriber):
    """
    Émet LowStockWarning après une vente qui fait passer le stock sous le seuil.

    Doit être abonné à "sale" APRÈS SaleSubscriber, pour voir le stock
    déjà décrémenté.
    """

    kind = events.EventKind.SALE

    def _handle(self, event: events.Sale, machine: model.Machine) -> None:
        machine.check_low_stock()


class StockLevelOkSubscriber(MachineSubscriber):
    """Émet StockLevelOk après un réapprovisionnement qui ramène le stock au seuil."""

    kind = events.EventKind.REFILL

    def _handle(self, event: events.Refill, machine: model.Machine) -> None:
        machine.check_stock_level_ok()


class NotificationSubscriber(AbstractSubscriber):
    """Transmet les notifications de stock à l'adapter de notifications."""

    MESSAGES = {
        events.EventKind.LOW_STOCK_WARNING: "Stock bas sur la machine {machine_id}",
        events.EventKind.STOCK_LEVEL_OK: "Stock de nouveau suffisant sur la machine {machine_id}",
    }

    def __init__(self, notifications: AbstractNotifications, destination: str = "maintenance@example.com"):
        self.notifications = notifications
        self.destination = destination

    def handle(self, event: events.Event) -> None:
        template = self.MESSAGES.get(event.kind)
        if template is None:
            logger.debug("Pas de notification pour l'event %s", event)
            return
        self.notifications.send(
            destination=self.destination,
            message=template.format(machine_id=event.machine_id),
        )
