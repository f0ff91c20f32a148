"""Pure domain logic: number sets, prize classification, draw lifecycle."""

from dball.domain.lifecycle import DrawStatus
from dball.domain.number_set import NumberSet
from dball.domain.prize import JACKPOT, PrizeTier, classify, payout

__all__ = ["DrawStatus", "JACKPOT", "NumberSet", "PrizeTier", "classify", "payout"]
