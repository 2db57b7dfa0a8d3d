"""
Point d'entrée en ligne de commande : simulation du parc.

Un thin adapter : il génère des events aléatoires de vente et de
réapprovisionnement, les publie sur le bus construit par le bootstrap,
puis affiche l'état final du stock. Aucune logique métier ici.
"""

from __future__ import annotations

import logging
import random
from typing import Sequence

import click

from vending.domain import events
from vending.service_layer import bootstrap
from vending.views import views

logger = logging.getLogger(__name__)

SALE_QUANTITIES = (1, 2)
REFILL_QUANTITIES = (3, 5)


def random_event(rng: random.Random, machine_ids: Sequence[str]) -> events.Event:
    """Une vente (1 ou 2) ou un réapprovisionnement (3 ou 5), à parts égales."""
    if rng.random() < 0.5:
        return events.Sale(machine_id=rng.choice(machine_ids), quantity=rng.choice(SALE_QUANTITIES))
    return events.Refill(machine_id=rng.choice(machine_ids), quantity=rng.choice(REFILL_QUANTITIES))


def run(fleet: bootstrap.Fleet, count: int, rng: random.Random) -> list[events.Event]:
    """Publie `count` events aléatoires sur le parc et les retourne."""
    machine_ids = [machine.id for machine in fleet.machines]
    published = []
    for _ in range(count):
        event = random_event(rng, machine_ids)
        logger.debug("Publication de %s", event)
        fleet.bus.publish(event)
        published.append(event)
    return published


@click.command()
@click.option("--events", "count", default=5, show_default=True, type=click.IntRange(min=0), help="Nombre d'events à publier")
@click.option("--seed", default=None, type=int, help="Graine du générateur aléatoire")
@click.option(
    "--machine",
    "machine_ids",
    multiple=True,
    default=bootstrap.DEFAULT_MACHINE_IDS,
    show_default=True,
    help="Id d'une machine du parc (répétable)",
)
@click.option(
    "--policy",
    default=bootstrap.NotificationPolicy.INLINE.value,
    show_default=True,
    type=click.Choice([p.value for p in bootstrap.NotificationPolicy]),
    help="Propriétaire de la politique de notification",
)
@click.option(
    "--log-level",
    default="INFO",
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
)
def main(count: int, seed: int | None, machine_ids: tuple[str, ...], policy: str, log_level: str) -> None:
    """Simule l'activité d'un parc de distributeurs automatiques."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    if len(set(machine_ids)) != len(machine_ids):
        raise click.BadParameter("ids de machine en double", param_hint="--machine")

    fleet = bootstrap.bootstrap(machine_ids=machine_ids, notification_policy=policy)
    for event in run(fleet, count, random.Random(seed)):
        click.echo(f"{event.kind.value} {event.machine_id} {event.quantity}")

    for row in views.stock_levels(fleet.machines):
        flag = " (stock bas)" if row["low_stock"] else ""
        click.echo(f"{row['machine_id']}: {row['stock_level']}{flag}")


if __name__ == "__main__":
    main()
