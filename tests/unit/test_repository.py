"""
Tests du repository en mémoire et de la view de stock.
"""

import pytest

from vending.adapters.repository import DuplicateMachine, InMemoryRepository
from vending.domain.model import Machine
from vending.views import views


class TestInMemoryRepository:
    def test_get_retourne_la_machine(self):
        machine = Machine("002")
        repo = InMemoryRepository([Machine("001"), machine])

        assert repo.get("002") is machine

    def test_get_retourne_none_si_id_inexistant(self):
        repo = InMemoryRepository([Machine("001")])

        assert repo.get("999") is None

    def test_conserve_l_ordre_d_enregistrement(self):
        repo = InMemoryRepository()
        for machine_id in ("003", "001", "002"):
            repo.add(Machine(machine_id))

        assert [m.id for m in repo.list()] == ["003", "001", "002"]
        assert len(repo) == 3

    def test_refuse_un_id_en_double(self):
        repo = InMemoryRepository([Machine("001")])

        with pytest.raises(DuplicateMachine, match="001"):
            repo.add(Machine("001"))
        assert len(repo) == 1

    def test_les_modifications_sont_partagées(self):
        """Toute lecture voit la même instance de machine."""
        repo = InMemoryRepository([Machine("001")])

        repo.get("001").sell(4)

        assert repo.list()[0].stock_level == 6


class TestStockLevels:
    def test_une_ligne_par_machine(self):
        repo = InMemoryRepository([Machine("001"), Machine("002")])
        repo.get("002").sell(9)

        assert views.stock_levels(repo) == [
            {"machine_id": "001", "stock_level": 10, "low_stock": False},
            {"machine_id": "002", "stock_level": 1, "low_stock": True},
        ]

    def test_parc_vide(self):
        assert views.stock_levels(InMemoryRepository()) == []
