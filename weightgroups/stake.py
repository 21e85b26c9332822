"""A staking contract: members earn weight by bonding tokens."""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass

from weightgroups.core import Admin, BlockInfo, Claim, Claims, Duration, Hooks, Response
from weightgroups.errors import (
    InvalidDenom,
    MixedNativeAndCw20,
    NoData,
    NothingToClaim,
    Overflow,
)
from weightgroups.funds import (
    Cw20Balance,
    Cw20Denom,
    NativeBalance,
    NativeDenom,
    coin_to_string,
    must_pay_funds,
)
from weightgroups.membership import StakeConfig, StakeMembership
from weightgroups.messages import BankSend, Coin, Member, WasmExecute

CONTRACT_NAME = "crates.io:cw4-stake"

DEFAULT_LIMIT = 10
MAX_LIMIT = 30


@dataclass(frozen=True)
class StakedResponse:
    """Tokens currently staked by an address, and what they are."""

    stake: int
    denom: NativeDenom | Cw20Denom


def _parse_receive_msg(msg: bytes) -> None:
    """Check that a forwarded token message asks to bond."""
    if not msg:
        raise NoData()
    try:
        payload = json.loads(msg)
    except (ValueError, UnicodeDecodeError) as exc:
        raise ValueError(f"invalid receive message: {exc}") from exc
    if payload != {"bond": {}}:
        raise ValueError(f"unknown receive message: {payload!r}")


class StakeContract:
    """Membership weighted by bonded stake, with delayed unbonding.

    Bonded tokens earn ``stake // tokens_per_weight`` weight once at least
    ``min_bond`` are staked. Unbonded tokens can be claimed back after the
    unbonding period. The admin may only manage hooks and hand over the role.
    """

    def __init__(
        self,
        denom: NativeDenom | Cw20Denom,
        tokens_per_weight: int,
        min_bond: int,
        unbonding_period: Duration,
        admin: str | None = None,
    ) -> None:
        self.contract_name = CONTRACT_NAME
        # min_bond is at least 1, so a zero stake never means membership
        self.config = StakeConfig(
            denom=denom,
            tokens_per_weight=tokens_per_weight,
            min_bond=max(min_bond, 1),
            unbonding_period=unbonding_period,
        )
        self._admin = Admin(admin)
        self._hooks = Hooks()
        self._membership = StakeMembership(self._hooks)
        self._claims = Claims()
        self._stake: dict[str, int] = {}

    def _bond(
        self, block: BlockInfo, amount: NativeBalance | Cw20Balance, sender: str
    ) -> Response:
        denom = self.config.denom
        match denom, amount:
            case NativeDenom(want), NativeBalance():
                paid = must_pay_funds(amount, want)
            case Cw20Denom(want), Cw20Balance(address, have):
                if want != address:
                    raise InvalidDenom(want)
                paid = have
            case _:
                raise MixedNativeAndCw20("Invalid address or denom")

        new_stake = self._stake.get(sender, 0) + paid
        self._stake[sender] = new_stake

        messages = self._membership.update(sender, new_stake, self.config, block.height)
        response = Response()
        for message in messages:
            response.add_message(message)
        return (
            response.add_attribute("action", "bond")
            .add_attribute("amount", paid)
            .add_attribute("sender", sender)
        )

    def bond(self, block: BlockInfo, sender: str, funds: Iterable[Coin]) -> Response:
        """Bond the native coins sent along by ``sender``."""
        return self._bond(block, NativeBalance(tuple(funds)), sender)

    def receive(
        self,
        block: BlockInfo,
        token_contract: str,
        sender: str,
        amount: int,
        msg: bytes,
    ) -> Response:
        """Bond tokens forwarded by ``token_contract`` on behalf of ``sender``."""
        _parse_receive_msg(msg)
        return self._bond(block, Cw20Balance(token_contract, amount), sender)

    def unbond(self, block: BlockInfo, sender: str, tokens: int) -> Response:
        """Start unbonding ``tokens``; weight drops at once, tokens come later."""
        stake = self._stake.get(sender, 0)
        if tokens > stake:
            raise Overflow("sub", stake, tokens)
        new_stake = stake - tokens
        self._stake[sender] = new_stake

        self._claims.create_claim(
            sender, tokens, self.config.unbonding_period.after(block)
        )
        messages = self._membership.update(sender, new_stake, self.config, block.height)
        response = Response()
        for message in messages:
            response.add_message(message)
        return (
            response.add_attribute("action", "unbond")
            .add_attribute("amount", tokens)
            .add_attribute("sender", sender)
        )

    def claim(self, block: BlockInfo, sender: str) -> Response:
        """Pay out every matured claim of ``sender``."""
        release = self._claims.claim_tokens(sender, block, None)
        if release == 0:
            raise NothingToClaim()

        denom = self.config.denom
        if isinstance(denom, NativeDenom):
            amount_str = coin_to_string(release, denom.denom)
            message: BankSend | WasmExecute = BankSend(
                to_address=sender, amount=(Coin(denom.denom, release),)
            )
        else:
            amount_str = coin_to_string(release, denom.address)
            transfer = {"transfer": {"recipient": sender, "amount": str(release)}}
            message = WasmExecute(
                contract_addr=denom.address,
                msg=json.dumps(transfer, separators=(",", ":")).encode("utf-8"),
            )

        return (
            Response()
            .add_message(message)
            .add_attribute("action", "claim")
            .add_attribute("tokens", amount_str)
            .add_attribute("sender", sender)
        )

    def update_admin(self, sender: str, admin: str | None) -> Response:
        return self._admin.execute_update_admin(sender, admin)

    def add_hook(self, sender: str, addr: str) -> Response:
        return self._hooks.add_hook(self._admin, sender, addr)

    def remove_hook(self, sender: str, addr: str) -> Response:
        return self._hooks.remove_hook(self._admin, sender, addr)

    def member(self, addr: str, at_height: int | None = None) -> int | None:
        """Weight of ``addr`` now, or at the start of block ``at_height``."""
        members = self._membership.members
        if at_height is None:
            return members.may_load(addr)
        return members.may_load_at_height(addr, at_height)

    def list_members(
        self, start_after: str | None = None, limit: int | None = None
    ) -> list[Member]:
        """Current members in address order, paginated."""
        limit = min(DEFAULT_LIMIT if limit is None else limit, MAX_LIMIT)
        return [
            Member(addr, weight)
            for addr, weight in self._membership.members.items(start_after, limit)
        ]

    def total_weight(self) -> int:
        return self._membership.total_weight()

    def staked(self, addr: str) -> StakedResponse:
        return StakedResponse(stake=self._stake.get(addr, 0), denom=self.config.denom)

    def claims(self, addr: str) -> list[Claim]:
        return self._claims.query_claims(addr)

    def query_admin(self) -> str | None:
        return self._admin.get()

    def query_hooks(self) -> list[str]:
        return self._hooks.query_hooks()