"""
Testes da inicialização do banco e das funções de manutenção
"""

import os
import sqlite3

import pytest

from core.database import Database
from core.exceptions import AppError, StorageUnavailable
from core.models import Customer
from core.repositories import CustomerRepository


def _tables(db):
    return {r["name"] for r in db.query("SELECT name FROM sqlite_master WHERE type='table'")}


def test_schema_created_on_first_access(db):
    assert {"Clientes", "Notas"} <= _tables(db)


def test_schema_init_is_idempotent(db_path):
    first = Database(db_path)
    new_id = CustomerRepository(first).create(Customer(name="Persistente"))

    second = Database(db_path)

    assert CustomerRepository(second).find_by_id(new_id).name == "Persistente"


def test_missing_directory_raises_storage_unavailable(tmp_path):
    with pytest.raises(StorageUnavailable) as exc_info:
        Database(str(tmp_path / "nao_existe" / "blackteam.db"))
    assert isinstance(exc_info.value, AppError)
    assert exc_info.value.details["db_path"].endswith("blackteam.db")


def test_directory_as_path_raises_storage_unavailable(tmp_path):
    with pytest.raises(StorageUnavailable):
        Database(str(tmp_path))


def test_failed_statement_leaves_database_usable(db):
    with pytest.raises(sqlite3.OperationalError):
        db.execute("INSERT INTO TabelaInexistente VALUES (1)")

    assert db.insert("INSERT INTO Clientes (Nome) VALUES (?)", ("Ok",)) == 1


def test_error_inside_connection_rolls_back(db):
    with pytest.raises(RuntimeError):
        with db.connection() as conn:
            conn.execute("INSERT INTO Clientes (Nome) VALUES ('Temporario')")
            raise RuntimeError("falha no meio")

    assert db.scalar("SELECT COUNT(*) FROM Clientes") == 0


def test_verify_integrity(db):
    ok, msg = db.verify_integrity()
    assert ok
    assert "íntegro" in msg


def test_create_backup_copies_data(db, tmp_path):
    db.insert("INSERT INTO Clientes (Nome) VALUES (?)", ("Backup",))

    path = db.create_backup(str(tmp_path / "backups"))

    assert os.path.isfile(path)
    copy = Database(path)
    assert copy.scalar("SELECT Nome FROM Clientes") == "Backup"
