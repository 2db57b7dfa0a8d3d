"""
Configuration partagée pour les tests.

Fournit un adapter de notifications en mémoire et un parc câblé
pour chacune des deux politiques de notification : les scénarios
doivent donner le même résultat quel que soit le propriétaire choisi.
"""

from __future__ import annotations

import pytest

from vending.adapters.notifications import AbstractNotifications
from vending.service_layer import bootstrap


class FakeNotifications(AbstractNotifications):
    """Capture les notifications envoyées pour vérification dans les tests."""

    def __init__(self) -> None:
        self.envoyées: list[tuple[str, str]] = []

    def send(self, destination: str, message: str) -> None:
        self.envoyées.append((destination, message))


@pytest.fixture
def notifications() -> FakeNotifications:
    return FakeNotifications()


@pytest.fixture(params=list(bootstrap.NotificationPolicy), ids=lambda p: p.value)
def fleet(request, notifications) -> bootstrap.Fleet:
    """Parc 001/002/003 câblé avec la politique en paramètre."""
    return bootstrap.bootstrap(
        notifications_adapter=notifications,
        notification_policy=request.param,
    )
