from decimal import Decimal, InvalidOperation, localcontext
from typing import Union

DECIMALS: int = 18
WEI_TO_READABLE = Decimal("1000000000000000000")

# uint256 max has 78 digits, keep every conversion exact
PRECISION: int = 80


def _to_decimal(value: Union[str, int, Decimal]) -> Decimal:
    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError(f"Amounts must be given as str, int or Decimal, got {type(value)}")

    try:
        return Decimal(value)
    except (InvalidOperation, TypeError):
        raise TypeError(f"Invalid amount: {value}")


def scale_to_wei(value: Decimal) -> int:
    """
    Exact 18-decimal scaling of a token amount.
    :param value: the amount in token units
    :returns: the amount in wei
    """
    if not value.is_finite():
        raise ValueError(f"Amount is not a finite number: {value}")
    if value < 0:
        raise ValueError(f"Amount must not be negative: {value}")

    _, digits, exponent = value.as_tuple()
    mantissa = int("".join(map(str, digits))) if digits else 0
    shift = exponent + DECIMALS

    if shift >= 0:
        return mantissa * 10**shift

    if mantissa % 10**-shift:
        raise ValueError(f"Fractional component exceeds {DECIMALS} decimals: {value}")

    return mantissa // 10**-shift


def parse_ether(amount: Union[str, int, Decimal]) -> int:
    """
    Convert a human readable token amount to its wei representation.
    """
    return scale_to_wei(_to_decimal(amount))


class Balance:
    def __init__(self, value: str):
        if not isinstance(value, str):
            raise TypeError(f"Invalid balance format: {value}")

        self._value: str = value

        if self.unit and self.unit.split()[0] == "wei":
            with localcontext() as ctx:
                ctx.prec = PRECISION
                converted_value = (Decimal(self.value) / WEI_TO_READABLE).normalize()
            self._value = f"{converted_value:f} {self.unit.split(maxsplit=1)[1]}"

        self.balance_format_check()

    def balance_format_check(self):
        if len(self._value.split()) > 3 or self.unit is None:
            raise TypeError(f"Invalid balance format: {self._value}")

        try:
            _ = self.value
        except InvalidOperation:
            raise TypeError(f"Invalid balance value: {self._value}")

        return True

    @property
    def as_str(self) -> str:
        return self._value

    @property
    def value(self) -> Decimal:
        return Decimal(self._value.split()[0])

    @property
    def unit(self) -> str:
        return self._value.split(maxsplit=1)[1] if " " in self._value else None

    @property
    def as_wei(self) -> int:
        return scale_to_wei(self.value)

    @classmethod
    def from_wei(cls, value: int, unit: str):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"Wei amounts must be integers, got {type(value)}")

        return cls(f"{value} wei {unit}")

    def __eq__(self, other):
        if not isinstance(other, Balance):
            return False

        return self.value == other.value and self.unit == other.unit

    def __hash__(self):
        return hash((self.value, self.unit))

    def __repr__(self):
        return f"Balance(value={self.value}, unit='{self.unit}')"
