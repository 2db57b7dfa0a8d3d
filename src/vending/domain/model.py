"""
Modèle de domaine pour le parc de distributeurs automatiques.

Une Machine possède son niveau de stock et deux verrous (latches)
qui garantissent qu'une notification n'est émise qu'une seule fois
par franchissement du seuil :

- verrou "stock bas" : idle -> warned quand le stock passe sous le seuil ;
- verrou "stock OK" : idle -> ok-notified quand le stock revient au seuil.

Émettre l'une des notifications réarme le verrou opposé, ce qui
permet au franchissement suivant, dans l'autre sens, de notifier à nouveau.

C'est la Machine qui porte cette politique ; les subscribers se
contentent de lui demander de vérifier ses verrous (voir handlers).
"""

from __future__ import annotations

from vending.domain import events

INITIAL_STOCK_LEVEL = 10
LOW_STOCK_THRESHOLD = 3


class Machine:
    """
    Entité représentant un distributeur automatique.

    Une Machine a une identité (son id) qui ne change jamais.
    L'égalité et le hash sont basés sur cet id, comme pour toute entité.

    Le stock n'a pas de plancher : une vente plus grosse que le stock
    le rend négatif, le producteur d'events est supposé fiable.

    Une machine neuve est pleine : elle démarre dans un épisode
    "stock OK" considéré comme déjà notifié, un réapprovisionnement
    d'une machine saine n'émet donc rien.
    """

    def __init__(self, id: str):
        self.id = id
        self.stock_level = INITIAL_STOCK_LEVEL
        self.low_stock_warning_fired = False
        self.stock_level_ok_fired = True
        # Events dérivés en attente de publication, vidés par le subscriber
        # qui a provoqué la transition.
        self.events: list[events.Event] = []

    def __repr__(self) -> str:
        return f"<Machine {self.id} stock={self.stock_level}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Machine):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def is_low_stock(self) -> bool:
        return self.stock_level < LOW_STOCK_THRESHOLD

    def sell(self, quantity: int) -> None:
        self.stock_level -= quantity

    def refill(self, quantity: int) -> None:
        self.stock_level += quantity

    def check_low_stock(self) -> bool:
        """
        Transition idle -> warned du verrou "stock bas".

        Si le stock est sous le seuil et qu'aucune alerte n'a encore été
        émise pour cet épisode, enregistre un LowStockWarning, arme le
        verrou et réarme le verrou "stock OK". Retourne True si l'alerte
        a été émise.
        """
        if not self.is_low_stock or self.low_stock_warning_fired:
            return False
        self.low_stock_warning_fired = True
        self.stock_level_ok_fired = False
        self.events.append(events.LowStockWarning(machine_id=self.id))
        return True

    def check_stock_level_ok(self) -> bool:
        """
        Transition idle -> ok-notified du verrou "stock OK".

        Miroir de check_low_stock : n'émet StockLevelOk qu'une fois,
        au premier réapprovisionnement qui ramène le stock au seuil
        après une alerte.
        """
        if self.is_low_stock or self.stock_level_ok_fired:
            return False
        self.stock_level_ok_fired = True
        self.low_stock_warning_fired = False
        self.events.append(events.StockLevelOk(machine_id=self.id))
        return True

    def collect_new_events(self):
        """Vide la liste des events dérivés, dans l'ordre d'émission."""
        while self.events:
            yield self.events.pop(0)
