"""Validated 6 red + 1 blue number set shared by tickets and draws."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from dball.errors import ValidationError, ValidationReason


RED_COUNT = 6
RED_MIN, RED_MAX = 1, 33
BLUE_MIN, BLUE_MAX = 1, 16

NumberTuple6 = tuple[int, int, int, int, int, int]


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class NumberSet:
    """Six distinct red numbers plus one blue number.

    Equality and hashing only look at the red *set* and the blue number, so
    `[1, 2, 3, 4, 5, 6] + 7` and `[6, 5, 4, 3, 2, 1] + 7` are the same value.
    Any iterable of reds is accepted and validated on construction.

    Raises:
        ValidationError: with reason WRONG_COUNT, OUT_OF_RANGE or DUPLICATE.
    """

    red: frozenset[int]
    blue: int

    def __post_init__(self) -> None:
        try:
            reds_list = list(self.red)
        except TypeError as e:
            raise ValidationError(
                "Red numbers must be a collection of integers",
                details={"red": repr(self.red)},
                reason=ValidationReason.INVALID,
            ) from e

        if len(reds_list) != RED_COUNT:
            raise ValidationError(
                f"Expected {RED_COUNT} red numbers, got {len(reds_list)}",
                details={"red": reds_list},
                reason=ValidationReason.WRONG_COUNT,
            )

        bad_reds = [r for r in reds_list if not _is_int(r) or not (RED_MIN <= r <= RED_MAX)]
        if bad_reds:
            raise ValidationError(
                f"Red numbers must be integers in {RED_MIN}-{RED_MAX}",
                details={"red": bad_reds},
                reason=ValidationReason.OUT_OF_RANGE,
            )

        if not _is_int(self.blue) or not (BLUE_MIN <= self.blue <= BLUE_MAX):
            raise ValidationError(
                f"Blue number must be an integer in {BLUE_MIN}-{BLUE_MAX}",
                details={"blue": self.blue},
                reason=ValidationReason.OUT_OF_RANGE,
            )

        red = frozenset(int(r) for r in reds_list)
        if len(red) != RED_COUNT:
            dupes = sorted({r for r in reds_list if reds_list.count(r) > 1})
            raise ValidationError(
                "Red numbers must be distinct",
                details={"red": dupes},
                reason=ValidationReason.DUPLICATE,
            )

        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "red", red)
        object.__setattr__(self, "blue", int(self.blue))

    @classmethod
    def construct(cls, reds: Iterable[int], blue: int) -> NumberSet:
        """Validate raw numbers and build a NumberSet."""

        return cls(red=tuple(reds), blue=blue)  # type: ignore[arg-type]

    @property
    def sorted_reds(self) -> NumberTuple6:
        r = sorted(self.red)
        return (r[0], r[1], r[2], r[3], r[4], r[5])

    def red_matches(self, other: NumberSet) -> int:
        return len(self.red & other.red)

    def blue_matches(self, other: NumberSet) -> bool:
        return self.blue == other.blue

    def __str__(self) -> str:
        reds = " ".join(f"{n:02d}" for n in self.sorted_reds)
        return f"{reds} + {self.blue:02d}"
