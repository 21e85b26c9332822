"""Denominations, balances and payment checks for staking."""

from __future__ import annotations

from dataclasses import dataclass

from weightgroups.errors import ExtraDenoms, MissingDenom, NoFunds
from weightgroups.messages import Coin


@dataclass(frozen=True)
class NativeDenom:
    """A native chain coin, identified by its denomination."""

    denom: str


@dataclass(frozen=True)
class Cw20Denom:
    """A token held by a token contract at ``address``."""

    address: str


@dataclass(frozen=True)
class NativeBalance:
    """Native coins sent along with a message."""

    coins: tuple[Coin, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "coins", tuple(self.coins))


@dataclass(frozen=True)
class Cw20Balance:
    """Tokens received from the token contract at ``address``."""

    address: str
    amount: int


def must_pay_funds(balance: NativeBalance, denom: str) -> int:
    """Return the amount paid, which must be exactly one coin of ``denom``."""
    match balance.coins:
        case ():
            raise NoFunds()
        case (coin,):
            if coin.denom != denom:
                raise MissingDenom(denom)
            return coin.amount
        case _:
            raise ExtraDenoms(denom)


def coin_to_string(amount: int, denom: str) -> str:
    return f"{amount} {denom}"