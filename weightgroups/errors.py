"""Errors raised by the group and staking contracts."""

from __future__ import annotations


class ContractError(Exception):
    """Base class for every error a contract reports.

    Two errors compare equal when they are of the same kind and carry the
    same arguments.
    """

    message = "Contract error"

    def __str__(self) -> str:
        return self.message.format(*self.args)

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.args == other.args  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class Unauthorized(ContractError):
    message = "Unauthorized"


class NotAdmin(ContractError):
    message = "Caller is not admin"


class HookAlreadyRegistered(ContractError):
    message = "Given address already registered as a hook"


class HookNotRegistered(ContractError):
    message = "Given address not registered as a hook"


class NothingToClaim(ContractError):
    message = "No claims that can be released currently"


class _DenomError(ContractError):
    def __init__(self, denom: str) -> None:
        super().__init__(denom)

    @property
    def denom(self) -> str:
        return self.args[0]


class MissingDenom(_DenomError):
    message = "Must send '{0}' to stake"


class ExtraDenoms(_DenomError):
    message = "Sent unsupported denoms, must send '{0}' to stake"


class InvalidDenom(_DenomError):
    message = "Must send valid address to stake"


class MixedNativeAndCw20(ContractError):
    message = "Missed address or denom"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)


class NoFunds(ContractError):
    message = "No funds sent"


class NoData(ContractError):
    message = "No data in ReceiveMsg"


class Overflow(ContractError):
    """An arithmetic operation left the range of unsigned amounts."""

    message = "Cannot {0} with {1} and {2}"

    def __init__(self, operation: str, operand1: int, operand2: int) -> None:
        super().__init__(operation, operand1, operand2)

    @property
    def operation(self) -> str:
        return self.args[0]

    @property
    def operand1(self) -> int:
        return self.args[1]

    @property
    def operand2(self) -> int:
        return self.args[2]