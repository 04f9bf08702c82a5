# calculator.py
# Cálculo do restante e conversão de valores monetários

from decimal import Decimal, InvalidOperation
from typing import Any, Union

Number = Union[Decimal, int, float, str]

ZERO = Decimal("0")

def to_decimal(value: Any) -> Decimal:
    """Converte o valor lido/recebido para Decimal; None vira zero."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # str() evita a expansão binária (0.1 -> 0.1000000000000000055...)
        return Decimal(str(value))
    return Decimal(value)

def compute_remaining(value: Number, deposit: Number) -> Decimal:
    """Restante = valor - sinal. Sem limitar a zero: sinal maior que o valor dá negativo."""
    return to_decimal(value) - to_decimal(deposit)

def parse_money(text: str) -> Decimal:
    """Converte o texto digitado (ex.: "1.234,56", "150,50", "R$ 80") em Decimal.

    Entradas vazias ou inválidas retornam zero.
    """
    if text is None:
        return ZERO
    s = str(text).strip().replace("R$", "").replace(" ", "")
    if not s:
        return ZERO
    if "," in s and "." in s:
        # 1.234,56 -> 1234.56
        s = s.replace(".", "").replace(",", ".")
    elif "," in s:
        s = s.replace(",", ".")
    try:
        d = Decimal(s)
    except InvalidOperation:
        return ZERO
    if not d.is_finite():
        return ZERO
    return d

def money(v: Number) -> str:
    """Formata no padrão brasileiro: 1234.5 -> "R$ 1.234,50"."""
    d = to_decimal(v)
    return f"R$ {d:,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
