"""
Adapter pour les notifications.

Ce module fournit une abstraction sur l'envoi des notifications
de stock (alerte de stock bas, retour à la normale), permettant de
découpler le domaine du mécanisme de notification concret.
"""

from __future__ import annotations

import abc
import logging

logger = logging.getLogger(__name__)


class AbstractNotifications(abc.ABC):
    """Interface abstraite pour les notifications."""

    @abc.abstractmethod
    def send(self, destination: str, message: str) -> None:
        raise NotImplementedError


class LoggingNotifications(AbstractNotifications):
    """Implémentation par défaut : les notifications partent dans les logs."""

    def __init__(self, level: int = logging.WARNING):
        self.level = level

    def send(self, destination: str, message: str) -> None:
        logger.log(self.level, "Notification pour %s : %s", destination, message)
