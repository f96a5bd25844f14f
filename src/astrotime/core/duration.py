"""
astrotime.core.duration

Signed time interval with attosecond (1e-18 s) resolution.

Representation
--------------
A Duration is a pair (seconds, attoseconds) with

    0 <= attoseconds < 10**18

and the sign carried entirely by `seconds` (floor convention), so that
-0.5 s is stored as (-1, 500_000_000_000_000_000). With this normal form the
lexicographic order of the pair is the numeric order of the interval, and
there is exactly one zero.

The whole-seconds field is bounded to a signed 96-bit range (about 4e28 s
either way), far beyond the age of the universe in both directions.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import Any, Dict, Union

from .errors import TimeOverflowError

ATTOS_PER_SECOND = 10**18
SECONDS_PER_DAY = 86400

MIN_SECONDS = -(2**95)
MAX_SECONDS = 2**95 - 1

Number = Union[int, Fraction, Decimal, float, str]


def _round_half_even(x: Fraction) -> int:
    # round() on a Fraction is exact and ties to even
    return round(x)


@dataclass(frozen=True, order=True)
class Duration:
    seconds: int = 0
    attoseconds: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.seconds, bool) or not isinstance(self.seconds, int):
            raise TypeError(f"seconds must be int, got {type(self.seconds).__name__}")
        if isinstance(self.attoseconds, bool) or not isinstance(self.attoseconds, int):
            raise TypeError(f"attoseconds must be int, got {type(self.attoseconds).__name__}")

        carry, attos = divmod(self.attoseconds, ATTOS_PER_SECOND)
        secs = self.seconds + carry
        if not (MIN_SECONDS <= secs <= MAX_SECONDS):
            raise TimeOverflowError(f"duration seconds out of range: {secs}")
        object.__setattr__(self, "seconds", secs)
        object.__setattr__(self, "attoseconds", attos)

    # ------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------

    @classmethod
    def from_parts(cls, seconds: int, attoseconds: int = 0, *, negative: bool = False) -> "Duration":
        """
        Build from a magnitude and a sign, e.g. from_parts(1, 101, negative=True)
        is -1.000000000000000101 s.
        """
        if seconds < 0 or attoseconds < 0:
            raise ValueError("from_parts expects non-negative magnitudes; use negative=True")
        if attoseconds >= ATTOS_PER_SECOND:
            raise ValueError(f"attoseconds must be < {ATTOS_PER_SECOND}: {attoseconds}")
        d = cls(seconds, attoseconds)
        return -d if negative else d

    @classmethod
    def from_attoseconds(cls, attoseconds: int) -> "Duration":
        return cls(0, attoseconds)

    @classmethod
    def from_seconds(cls, value: Number) -> "Duration":
        """Exact conversion, rounded half-even to the attosecond grid."""
        return cls.from_attoseconds(_round_half_even(Fraction(value) * ATTOS_PER_SECOND))

    @classmethod
    def from_days(cls, value: Number) -> "Duration":
        return cls.from_attoseconds(_round_half_even(Fraction(value) * SECONDS_PER_DAY * ATTOS_PER_SECOND))

    # ------------------------------------------------------------
    # Views
    # ------------------------------------------------------------

    @property
    def total_attoseconds(self) -> int:
        return self.seconds * ATTOS_PER_SECOND + self.attoseconds

    def as_fraction(self) -> Fraction:
        """The interval in seconds, exactly."""
        return Fraction(self.total_attoseconds, ATTOS_PER_SECOND)

    def __float__(self) -> float:
        return float(self.as_fraction())

    def is_zero(self) -> bool:
        return self.seconds == 0 and self.attoseconds == 0

    def is_negative(self) -> bool:
        return self.seconds < 0

    def __bool__(self) -> bool:
        return not self.is_zero()

    # ------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------

    def __neg__(self) -> "Duration":
        return Duration(-self.seconds, -self.attoseconds)

    def __pos__(self) -> "Duration":
        return self

    def __abs__(self) -> "Duration":
        return -self if self.is_negative() else self

    def __add__(self, other: Any) -> "Duration":
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.seconds + other.seconds, self.attoseconds + other.attoseconds)

    def __sub__(self, other: Any) -> "Duration":
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.seconds - other.seconds, self.attoseconds - other.attoseconds)

    def scale(self, factor: Union[int, Fraction]) -> "Duration":
        """
        Multiply by an exact factor. The product is computed on the full
        attosecond count, so no drift accumulates however large the duration.
        """
        if isinstance(factor, bool) or not isinstance(factor, (int, Fraction)):
            raise TypeError(f"scale factor must be int or Fraction, got {type(factor).__name__}")
        if isinstance(factor, int):
            return Duration.from_attoseconds(self.total_attoseconds * factor)
        return Duration.from_attoseconds(_round_half_even(self.total_attoseconds * factor))

    def __mul__(self, other: Any) -> "Duration":
        if isinstance(other, bool) or not isinstance(other, (int, Fraction)):
            return NotImplemented
        return self.scale(other)

    __rmul__ = __mul__

    def __truediv__(self, other: Any):
        if isinstance(other, Duration):
            if other.is_zero():
                raise ZeroDivisionError("division by zero duration")
            return Fraction(self.total_attoseconds, other.total_attoseconds)
        if isinstance(other, bool) or not isinstance(other, (int, Fraction)):
            return NotImplemented
        return self.scale(1 / Fraction(other))

    # ------------------------------------------------------------
    # Formatting / encoding
    # ------------------------------------------------------------

    def __str__(self) -> str:
        # ISO 8601 period, reflected through zero: only a leading sign
        neg = self.is_negative()
        mag = abs(self)
        s, a = mag.seconds, mag.attoseconds

        out = "-P" if neg else "P"
        days, s = divmod(s, SECONDS_PER_DAY)
        if days:
            out += f"{days}D"
        if s or a:
            out += "T"
        hours, s = divmod(s, 3600)
        if hours:
            out += f"{hours}H"
        minutes, s = divmod(s, 60)
        if minutes:
            out += f"{minutes}M"
        if s or a:
            out += f"{s}S" if a == 0 else f"{s}.{a:018d}S"
        return out

    def to_dict(self) -> Dict[str, int]:
        return {"seconds": self.seconds, "attoseconds": self.attoseconds}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Duration":
        return cls(int(data["seconds"]), int(data.get("attoseconds", 0)))


ZERO = Duration()
