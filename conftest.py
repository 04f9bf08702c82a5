"""
Fixtures compartilhadas pelos testes: banco SQLite temporário e repositórios.
"""

import sys
import os
import tempfile
from decimal import Decimal

import pytest

# Adiciona o diretório raiz ao path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

# Logs dos testes fora da pasta do usuário; Qt sem janela
os.environ.setdefault("BLACKTEAM_LOG_DIR", os.path.join(tempfile.gettempdir(), "blackteam-test-logs"))
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from core.database import Database
from core.models import Customer, Nota
from core.repositories import CustomerRepository, NotaRepository


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "blackteam.db")


@pytest.fixture
def db(db_path):
    return Database(db_path)


@pytest.fixture
def customers(db):
    return CustomerRepository(db)


@pytest.fixture
def notas(db):
    return NotaRepository(db)


@pytest.fixture
def maria():
    return Customer(
        name="Maria Aparecida",
        address="Rua das Flores",
        number="120",
        neighborhood="Eldorado",
        city="Contagem",
        phone="(31) 99999-0000",
        rg="MG-12.345.678",
        cpf="123.456.789-00",
    )


def make_nota(number="010001", **fields):
    defaults = dict(
        number=number,
        customer_name="João da Silva",
        customer_phone="(31) 98888-1111",
        event_date="20/12/2025",
        fitting_date="10/12/2025",
        pickup_date="19/12/2025",
        return_date="22/12/2025",
        description="Terno preto slim 48",
        value=Decimal("350.00"),
        deposit=Decimal("100.00"),
        issue_date="01/12/2025",
        attendant="Ana",
        renter="João da Silva",
    )
    defaults.update(fields)
    return Nota(**defaults)


@pytest.fixture
def nota_factory():
    return make_nota


@pytest.fixture(scope="session")
def qapp():
    from PyQt6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def quiet_dialogs(monkeypatch):
    """Troca as caixas modais das páginas por respostas automáticas ("Sim"/OK)."""
    shown = []

    def fake_message(parent, title, text, *args, **kwargs):
        shown.append((title, text))
        return 0

    for module in ("ui.nota_form", "ui.notas_page", "BlackTeam"):
        monkeypatch.setattr(f"{module}.show_message", fake_message)
    for module in ("ui.nota_form", "BlackTeam"):
        monkeypatch.setattr(f"{module}.confirm", lambda *a, **k: True)
    for module in ("ui.nota_form", "ui.notas_page"):
        monkeypatch.setattr(f"{module}.open_pdf", lambda path: True)
    return shown
