# repositories.py
# Acesso a dados de clientes e notas

import sqlite3
from datetime import datetime
from typing import Any, List, Optional

from core.calculator import compute_remaining, to_decimal
from core.database import Database
from core.logger import log_event, log_debug, log_warning
from core.models import Customer, Nota

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Primeiro número emitido quando não há notas
FIRST_NOTA_NUMBER = 10001

def _text(row: sqlite3.Row, column: str) -> str:
    value = row[column]
    return "" if value is None else str(value)

def _flag(row: sqlite3.Row, column: str) -> bool:
    value = row[column]
    return value is not None and int(value) == 1

def _parse_timestamp(value: Any) -> datetime:
    if not value:
        return datetime.now().replace(microsecond=0)
    try:
        return datetime.strptime(str(value), TIMESTAMP_FORMAT)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        log_warning(f"DataCriacao inválida no banco: {value!r}; usando data atual")
        return datetime.now().replace(microsecond=0)


class CustomerRepository:
    """CRUD de clientes. Não valida conteúdo: isso é feito por quem chama."""

    def __init__(self, db: Database):
        self.db = db

    def create(self, customer: Customer) -> int:
        new_id = self.db.insert(
            """
            INSERT INTO Clientes (Nome, Endereco, Numero, Bairro, Cidade, Telefone, RG, CPF)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                customer.name, customer.address, customer.number, customer.neighborhood,
                customer.city, customer.phone, customer.rg, customer.cpf,
            ),
        )
        log_event(f"Cliente criado: id={new_id} nome={customer.name!r}")
        return new_id

    def find_all(self) -> List[Customer]:
        rows = self.db.query("SELECT * FROM Clientes ORDER BY Nome")
        return [self._from_row(r) for r in rows]

    def find_by_id(self, customer_id: int) -> Optional[Customer]:
        row = self.db.query_one("SELECT * FROM Clientes WHERE Id = ?", (customer_id,))
        return self._from_row(row) if row is not None else None

    def update(self, customer: Customer) -> None:
        """Sobrescreve todos os campos; id inexistente não altera nada."""
        changed = self.db.execute(
            """
            UPDATE Clientes SET
                Nome = ?, Endereco = ?, Numero = ?, Bairro = ?,
                Cidade = ?, Telefone = ?, RG = ?, CPF = ?
            WHERE Id = ?
            """,
            (
                customer.name, customer.address, customer.number, customer.neighborhood,
                customer.city, customer.phone, customer.rg, customer.cpf, customer.id,
            ),
        )
        if changed:
            log_event(f"Cliente atualizado: id={customer.id}")
        else:
            log_debug(f"Atualização ignorada, cliente inexistente: id={customer.id}")

    def delete(self, customer_id: int) -> None:
        if self.db.execute("DELETE FROM Clientes WHERE Id = ?", (customer_id,)):
            log_event(f"Cliente excluído: id={customer_id}")

    @staticmethod
    def _from_row(row: sqlite3.Row) -> Customer:
        return Customer(
            id=int(row["Id"]),
            name=_text(row, "Nome"),
            address=_text(row, "Endereco"),
            number=_text(row, "Numero"),
            neighborhood=_text(row, "Bairro"),
            city=_text(row, "Cidade"),
            phone=_text(row, "Telefone"),
            rg=_text(row, "RG"),
            cpf=_text(row, "CPF"),
        )


class NotaRepository:
    """Notas são apenas inseridas: depois de emitidas não mudam nem são excluídas."""

    def __init__(self, db: Database):
        self.db = db

    def create(self, nota: Nota) -> int:
        # Restante sempre recalculado a partir de valor e sinal
        remaining = compute_remaining(nota.value, nota.deposit)
        new_id = self.db.insert(
            """
            INSERT INTO Notas (
                NumeroNota, ClienteId, ClienteNome, ClienteEndereco, ClienteNumero,
                ClienteBairro, ClienteCidade, ClienteTelefone, ClienteRG, ClienteCPF,
                DataEvento, DataProva, DataRetirar, DataDevolucao, DescricaoProdutos,
                Valor, Sinal, Restante, Gravata, Sapato, Clutch, Estola, Camisa, Colete,
                DataContagem, Atendente, Locatario, DataCriacao
            ) VALUES (
                :number, :customer_id, :customer_name, :customer_address, :customer_number,
                :customer_neighborhood, :customer_city, :customer_phone, :customer_rg, :customer_cpf,
                :event_date, :fitting_date, :pickup_date, :return_date, :description,
                :value, :deposit, :remaining, :tie, :shoes, :clutch, :stole, :shirt, :vest,
                :issue_date, :attendant, :renter, :created_at
            )
            """,
            {
                "number": nota.number,
                "customer_id": nota.customer_id,
                "customer_name": nota.customer_name,
                "customer_address": nota.customer_address,
                "customer_number": nota.customer_number,
                "customer_neighborhood": nota.customer_neighborhood,
                "customer_city": nota.customer_city,
                "customer_phone": nota.customer_phone,
                "customer_rg": nota.customer_rg,
                "customer_cpf": nota.customer_cpf,
                "event_date": nota.event_date,
                "fitting_date": nota.fitting_date,
                "pickup_date": nota.pickup_date,
                "return_date": nota.return_date,
                "description": nota.description,
                "value": float(to_decimal(nota.value)),
                "deposit": float(to_decimal(nota.deposit)),
                "remaining": float(remaining),
                "tie": 1 if nota.tie else 0,
                "shoes": 1 if nota.shoes else 0,
                "clutch": 1 if nota.clutch else 0,
                "stole": 1 if nota.stole else 0,
                "shirt": 1 if nota.shirt else 0,
                "vest": 1 if nota.vest else 0,
                "issue_date": nota.issue_date,
                "attendant": nota.attendant,
                "renter": nota.renter,
                "created_at": (nota.created_at or datetime.now()).strftime(TIMESTAMP_FORMAT),
            },
        )
        log_event(f"Nota {nota.number} salva: id={new_id} cliente={nota.customer_name!r}")
        return new_id

    def find_all(self) -> List[Nota]:
        rows = self.db.query("SELECT * FROM Notas ORDER BY DataCriacao DESC")
        return [self._from_row(r) for r in rows]

    def find_by_id(self, nota_id: int) -> Optional[Nota]:
        row = self.db.query_one("SELECT * FROM Notas WHERE Id = ?", (nota_id,))
        return self._from_row(row) if row is not None else None

    def count(self) -> int:
        return int(self.db.scalar("SELECT COUNT(*) FROM Notas") or 0)

    def next_number(self) -> str:
        """Próximo número de nota: 10001 + quantidade de notas, com 6 dígitos.

        Baseado na contagem, não num contador salvo: excluir uma nota ou gerar o
        número sem salvar faz o número ser reutilizado.
        """
        return f"{FIRST_NOTA_NUMBER + self.count():06d}"

    @staticmethod
    def _from_row(row: sqlite3.Row) -> Nota:
        return Nota(
            id=int(row["Id"]),
            number=_text(row, "NumeroNota"),
            customer_id=int(row["ClienteId"]) if row["ClienteId"] is not None else 0,
            customer_name=_text(row, "ClienteNome"),
            customer_address=_text(row, "ClienteEndereco"),
            customer_number=_text(row, "ClienteNumero"),
            customer_neighborhood=_text(row, "ClienteBairro"),
            customer_city=_text(row, "ClienteCidade"),
            customer_phone=_text(row, "ClienteTelefone"),
            customer_rg=_text(row, "ClienteRG"),
            customer_cpf=_text(row, "ClienteCPF"),
            event_date=_text(row, "DataEvento"),
            fitting_date=_text(row, "DataProva"),
            pickup_date=_text(row, "DataRetirar"),
            return_date=_text(row, "DataDevolucao"),
            description=_text(row, "DescricaoProdutos"),
            value=to_decimal(row["Valor"]),
            deposit=to_decimal(row["Sinal"]),
            remaining=to_decimal(row["Restante"]),
            tie=_flag(row, "Gravata"),
            shoes=_flag(row, "Sapato"),
            clutch=_flag(row, "Clutch"),
            stole=_flag(row, "Estola"),
            shirt=_flag(row, "Camisa"),
            vest=_flag(row, "Colete"),
            issue_date=_text(row, "DataContagem"),
            attendant=_text(row, "Atendente"),
            renter=_text(row, "Locatario"),
            created_at=_parse_timestamp(row["DataCriacao"]),
        )
