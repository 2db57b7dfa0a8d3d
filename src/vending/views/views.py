"""
Views (lecture) sur le parc de machines.

Fonctions de lecture pure : elles ne modifient aucune machine et
ne passent pas par le message bus.
"""

from __future__ import annotations

from vending.adapters import repository


def stock_levels(machines: repository.AbstractRepository) -> list[dict]:
    """Retourne le niveau de stock de chaque machine, dans l'ordre du parc."""
    return [
        {
            "machine_id": machine.id,
            "stock_level": machine.stock_level,
            "low_stock": machine.is_low_stock,
        }
        for machine in machines
    ]
