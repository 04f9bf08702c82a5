# services.py
# Camada de serviços: validações e montagem das notas antes de chegar ao banco

from dataclasses import replace
from datetime import date, datetime
from typing import List, Optional

from core.calculator import compute_remaining
from core.exceptions import ValidationError
from core.models import Customer, Nota
from core.repositories import CustomerRepository, NotaRepository

def _matches(term: str, *fields: str) -> bool:
    return any(term in (f or "").lower() for f in fields)

class CustomerService:
    def __init__(self, customers: CustomerRepository):
        self.customers = customers

    def save(self, customer: Customer) -> int:
        """Cadastra (id 0) ou atualiza o cliente. Retorna o id."""
        if not customer.name.strip():
            raise ValidationError("Por favor, preencha o nome do cliente.", {"field": "name"})
        if customer.id == 0:
            return self.customers.create(customer)
        self.customers.update(customer)
        return customer.id

    def delete(self, customer_id: int) -> None:
        self.customers.delete(customer_id)

    def get(self, customer_id: int) -> Optional[Customer]:
        return self.customers.find_by_id(customer_id)

    def list(self) -> List[Customer]:
        return self.customers.find_all()

    def search(self, term: str) -> List[Customer]:
        """Filtra por nome, telefone ou CPF (sem diferenciar maiúsculas)."""
        all_customers = self.customers.find_all()
        term = (term or "").strip().lower()
        if not term:
            return all_customers
        return [c for c in all_customers if _matches(term, c.name, c.phone, c.cpf)]

class NotaService:
    def __init__(self, notas: NotaRepository):
        self.notas = notas

    def next_number(self) -> str:
        return self.notas.next_number()

    def new_nota(self, customer: Optional[Customer] = None) -> Nota:
        """Rascunho com o próximo número e a data de hoje."""
        nota = Nota(number=self.notas.next_number(), issue_date=date.today().strftime("%d/%m/%Y"))
        if customer is not None:
            nota = nota.with_customer(customer)
        return nota

    def issue(self, nota: Nota) -> Nota:
        """Salva a nota e retorna a versão gravada.

        O restante é recalculado e a data de criação é a do momento da emissão,
        não a de quando o rascunho foi aberto.
        """
        if not nota.customer_name.strip():
            raise ValidationError("Por favor, preencha o nome do cliente.", {"field": "customer_name"})
        nota = replace(
            nota,
            remaining=compute_remaining(nota.value, nota.deposit),
            created_at=datetime.now().replace(microsecond=0),
        )
        new_id = self.notas.create(nota)
        return replace(nota, id=new_id)

    def get(self, nota_id: int) -> Optional[Nota]:
        return self.notas.find_by_id(nota_id)

    def list(self) -> List[Nota]:
        return self.notas.find_all()

    def search(self, term: str) -> List[Nota]:
        """Filtra por número, nome do cliente ou telefone."""
        all_notas = self.notas.find_all()
        term = (term or "").strip().lower()
        if not term:
            return all_notas
        return [n for n in all_notas if _matches(term, n.number, n.customer_name, n.customer_phone)]
