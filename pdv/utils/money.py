from decimal import Decimal, ROUND_HALF_UP

CENTS = Decimal("0.01")


def to_money(value) -> Decimal:
    """Converte para Decimal arredondado em centavos (meio para cima)."""
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)
