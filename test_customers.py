"""
Testes do repositório de clientes
"""

from dataclasses import replace

from core.models import Customer


def test_create_then_find_by_id_returns_same_record(customers, maria):
    new_id = customers.create(maria)

    assert new_id > 0
    assert customers.find_by_id(new_id) == replace(maria, id=new_id)


def test_ids_are_assigned_increasing(customers, maria):
    first = customers.create(maria)
    second = customers.create(replace(maria, name="Outra"))
    assert second > first


def test_find_by_id_missing_returns_none(customers):
    assert customers.find_by_id(999) is None


def test_find_all_sorted_by_name(customers):
    for name in ("Carla", "Ana", "Bruno"):
        customers.create(Customer(name=name))

    assert [c.name for c in customers.find_all()] == ["Ana", "Bruno", "Carla"]


def test_update_overwrites_all_fields(customers, maria):
    new_id = customers.create(maria)
    edited = Customer(id=new_id, name="Maria A. Souza", phone="3333-4444")

    customers.update(edited)

    assert customers.find_by_id(new_id) == edited


def test_update_missing_id_is_noop(customers, maria):
    new_id = customers.create(maria)

    customers.update(Customer(id=new_id + 100, name="Fantasma"))

    assert customers.find_all() == [replace(maria, id=new_id)]


def test_delete_removes_and_is_idempotent(customers, maria):
    new_id = customers.create(maria)

    customers.delete(new_id)
    customers.delete(new_id)

    assert customers.find_by_id(new_id) is None
    assert customers.find_all() == []


def test_empty_optional_fields_read_back_as_empty_strings(customers):
    new_id = customers.create(Customer(name="Só Nome"))

    c = customers.find_by_id(new_id)

    assert (c.address, c.number, c.neighborhood, c.city, c.phone, c.rg, c.cpf) == ("",) * 7


def test_null_columns_read_back_as_empty_strings(db, customers):
    new_id = db.insert("INSERT INTO Clientes (Nome) VALUES (?)", ("Legado",))

    c = customers.find_by_id(new_id)

    assert c == Customer(id=new_id, name="Legado")


def test_repository_does_not_validate(customers):
    # Validação é responsabilidade de quem chama
    new_id = customers.create(Customer(name=""))
    assert customers.find_by_id(new_id).name == ""


def test_values_are_bound_not_interpolated(customers):
    name = "Robert'); DROP TABLE Clientes;--"
    new_id = customers.create(Customer(name=name))
    assert customers.find_by_id(new_id).name == name
