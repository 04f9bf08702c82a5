# models.py
# Definições de dataclasses e modelos de domínio

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal

# Acessórios marcados na nota: (atributo, rótulo impresso)
ACCESSORIES = (
    ("tie", "Gravata"),
    ("shoes", "Sapato"),
    ("clutch", "Clutch"),
    ("stole", "Estola"),
    ("shirt", "Camisa"),
    ("vest", "Colete"),
)

@dataclass
class Customer:
    id: int = 0  # 0 = ainda não salvo
    name: str = ""
    address: str = ""
    number: str = ""
    neighborhood: str = ""
    city: str = ""
    phone: str = ""
    rg: str = ""
    cpf: str = ""

@dataclass
class Nota:
    """Nota/contrato de aluguel.

    Os campos customer_* são uma cópia dos dados do cliente no momento da emissão
    e não acompanham edições posteriores do cadastro.
    """
    id: int = 0
    number: str = ""
    customer_id: int = 0

    customer_name: str = ""
    customer_address: str = ""
    customer_number: str = ""
    customer_neighborhood: str = ""
    customer_city: str = ""
    customer_phone: str = ""
    customer_rg: str = ""
    customer_cpf: str = ""

    # Datas livres, como digitadas
    event_date: str = ""
    fitting_date: str = ""
    pickup_date: str = ""
    return_date: str = ""

    description: str = ""

    value: Decimal = Decimal("0")
    deposit: Decimal = Decimal("0")  # sinal
    remaining: Decimal = Decimal("0")  # restante

    tie: bool = False
    shoes: bool = False
    clutch: bool = False
    stole: bool = False
    shirt: bool = False
    vest: bool = False

    issue_date: str = ""  # data de contagem/emissão
    attendant: str = ""
    renter: str = ""  # locatário
    created_at: datetime = field(default_factory=lambda: datetime.now().replace(microsecond=0))

    def with_customer(self, customer: Customer) -> "Nota":
        """Retorna uma cópia da nota com o snapshot do cliente."""
        return replace(
            self,
            customer_id=customer.id,
            customer_name=customer.name,
            customer_address=customer.address,
            customer_number=customer.number,
            customer_neighborhood=customer.neighborhood,
            customer_city=customer.city,
            customer_phone=customer.phone,
            customer_rg=customer.rg,
            customer_cpf=customer.cpf,
        )

    def accessories(self) -> list[tuple[str, bool]]:
        return [(label, bool(getattr(self, attr))) for attr, label in ACCESSORIES]
