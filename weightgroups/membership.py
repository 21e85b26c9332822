"""Stake-based membership: weights derived from bonded tokens."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from weightgroups.core import Duration, Hooks, SnapshotMap
from weightgroups.funds import Cw20Denom, NativeDenom
from weightgroups.messages import MemberChangedHookMsg, MemberDiff


@dataclass(frozen=True)
class StakeConfig:
    """Staking parameters: what is staked and how stake maps to weight."""

    denom: NativeDenom | Cw20Denom
    tokens_per_weight: int
    min_bond: int
    unbonding_period: Duration


def calc_weight(stake: int, config: StakeConfig) -> int | None:
    """Weight earned by ``stake``, or ``None`` below the minimum bond."""
    if stake < config.min_bond:
        return None
    return stake // config.tokens_per_weight


class StakeMembership:
    """Member weights with per-block history, their total, and change hooks."""

    def __init__(self, hooks: Hooks | None = None) -> None:
        self.members = SnapshotMap()
        self.hooks = hooks if hooks is not None else Hooks()
        self._total = 0

    def update(
        self, sender: str, new_stake: int, config: StakeConfig, height: int
    ) -> list[Any]:
        """Record the weight for ``sender``'s new stake.

        Returns one hook message per registered hook, or nothing when the
        weight did not change.
        """
        new = calc_weight(new_stake, config)
        old = self.members.may_load(sender)
        if new == old:
            return []

        if new is None:
            self.members.remove(sender, height)
        else:
            self.members.save(sender, new, height)

        self._total += (new or 0) - (old or 0)

        diff = MemberDiff(sender, old, new)
        return self.hooks.prepare_hooks(
            lambda hook: MemberChangedHookMsg.one(diff).into_message(hook)
        )

    def total_weight(self) -> int:
        return self._total