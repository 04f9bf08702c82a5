"""
Testes do repositório de notas: gravação, leitura e numeração sequencial
"""

from dataclasses import replace
from datetime import datetime
from decimal import Decimal

from core.models import ACCESSORIES


def test_create_then_find_by_id(notas, nota_factory):
    nota = nota_factory(created_at=datetime(2025, 12, 1, 14, 30, 5))
    new_id = notas.create(nota)

    stored = notas.find_by_id(new_id)

    assert stored == replace(nota, id=new_id, remaining=Decimal("250.00"))


def test_remaining_is_recomputed_on_create(notas, nota_factory):
    # Restante vindo do formulário desatualizado é ignorado
    nota = nota_factory(value=Decimal("350.00"), deposit=Decimal("120.50"), remaining=Decimal("999"))
    stored = notas.find_by_id(notas.create(nota))

    assert stored.remaining == Decimal("229.50")
    assert stored.remaining == stored.value - stored.deposit


def test_remaining_can_be_negative(notas, nota_factory):
    stored = notas.find_by_id(notas.create(nota_factory(value=Decimal("100"), deposit=Decimal("150"))))
    assert stored.remaining == Decimal("-50")


def test_remaining_with_cents(notas, nota_factory):
    stored = notas.find_by_id(notas.create(nota_factory(value=Decimal("100.10"), deposit=Decimal("30.05"))))
    assert stored.remaining == Decimal("70.05")
    assert stored.remaining == stored.value - stored.deposit


def test_find_by_id_missing_returns_none(notas):
    assert notas.find_by_id(1) is None


def test_all_accessories_true_round_trip(notas, nota_factory):
    flags = {attr: True for attr, _ in ACCESSORIES}
    stored = notas.find_by_id(notas.create(nota_factory(**flags)))
    assert all(getattr(stored, attr) for attr in flags)


def test_all_accessories_false_round_trip(notas, nota_factory):
    flags = {attr: False for attr, _ in ACCESSORIES}
    stored = notas.find_by_id(notas.create(nota_factory(**flags)))
    assert not any(getattr(stored, attr) for attr in flags)


def test_flags_stored_as_integers(db, notas, nota_factory):
    new_id = notas.create(nota_factory(tie=True, vest=False))
    row = db.query_one("SELECT Gravata, Colete, DataCriacao FROM Notas WHERE Id = ?", (new_id,))
    assert (row["Gravata"], row["Colete"]) == (1, 0)


def test_timestamp_stored_in_fixed_format(db, notas, nota_factory):
    new_id = notas.create(nota_factory(created_at=datetime(2025, 3, 4, 5, 6, 7)))
    assert db.scalar("SELECT DataCriacao FROM Notas WHERE Id = ?", (new_id,)) == "2025-03-04 05:06:07"


def test_find_all_most_recent_first(notas, nota_factory):
    notas.create(nota_factory("010001", created_at=datetime(2025, 1, 10, 9, 0, 0)))
    notas.create(nota_factory("010002", created_at=datetime(2025, 3, 5, 9, 0, 0)))
    notas.create(nota_factory("010003", created_at=datetime(2025, 2, 20, 9, 0, 0)))

    assert [n.number for n in notas.find_all()] == ["010002", "010003", "010001"]


def test_null_columns_get_defaults(db, notas):
    before = datetime.now().replace(microsecond=0)
    new_id = db.insert("INSERT INTO Notas (NumeroNota) VALUES (?)", ("010001",))

    n = notas.find_by_id(new_id)

    assert n.customer_id == 0
    assert n.customer_name == "" and n.description == "" and n.renter == ""
    assert n.value == n.deposit == n.remaining == Decimal("0")
    assert not any(getattr(n, attr) for attr, _ in ACCESSORIES)
    assert n.created_at >= before


def test_customer_snapshot_not_synced_with_later_edits(customers, notas, maria, nota_factory):
    customer_id = customers.create(maria)
    customer = customers.find_by_id(customer_id)
    nota_id = notas.create(nota_factory().with_customer(customer))

    customers.update(replace(customer, name="Maria Nova", phone="0000"))
    customers.delete(customer_id)

    stored = notas.find_by_id(nota_id)
    assert stored.customer_id == customer_id
    assert stored.customer_name == "Maria Aparecida"
    assert stored.customer_phone == "(31) 99999-0000"


# ---- Numeração ----

def test_next_number_empty_store(notas):
    assert notas.next_number() == "010001"


def test_next_number_is_base_plus_count(notas, nota_factory):
    for i in range(37):
        notas.create(nota_factory(f"{10001 + i:06d}"))

    assert notas.count() == 37
    assert notas.next_number() == "010038"


def test_next_number_independent_from_internal_id(db, notas, nota_factory):
    db.execute("INSERT INTO sqlite_sequence (name, seq) VALUES ('Notas', 500)")
    new_id = notas.create(nota_factory())
    assert new_id == 501
    assert notas.next_number() == "010002"


def test_next_number_race_two_callers_get_same_number(notas, nota_factory):
    # Número vem da contagem: duas gerações antes de salvar repetem o número
    first = notas.next_number()
    second = notas.next_number()
    assert first == second == "010001"

    notas.create(nota_factory(first))
    notas.create(nota_factory(second))
    assert [n.number for n in notas.find_all()] == ["010001", "010001"]


def test_next_number_reused_after_row_removed(db, notas, nota_factory):
    notas.create(nota_factory("010001"))
    last_id = notas.create(nota_factory("010002"))
    assert notas.next_number() == "010003"

    db.execute("DELETE FROM Notas WHERE Id = ?", (last_id,))

    assert notas.next_number() == "010002"
