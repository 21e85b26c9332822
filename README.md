# weightgroups

Weighted membership groups for voting and governance logic, held as plain
in-memory Python objects.

There are two kinds of group:

- **`GroupContract`** (`weightgroups.group`) is a list of members with weights,
  managed by an admin. The admin adds, updates and removes members. Each change
  is recorded against a block height, so you can read the weight a member held
  at the start of an earlier block.
- **`StakeContract`** (`weightgroups.stake`) gives members weight for the tokens
  they bond. The tokens are either native coins (`NativeDenom`) or tokens of a
  token contract (`Cw20Denom`). A member's weight is
  `stake // tokens_per_weight`, and only a stake of at least `min_bond` (never
  less than 1) makes an address a member. Unbonded tokens become claims. A claim
  can be collected once its unbonding period has passed.

Both kinds keep a running total weight and a list of hook addresses. Whenever
membership changes, each registered hook gets a `WasmExecute` message that
carries a JSON-encoded `member_changed_hook` payload built by
`MemberChangedHookMsg`. These messages come back in the `Response` that the call
returns.

## Installation

```
pip install weightgroups
```

The package has no runtime dependencies. To run the tests:

```
pip install "weightgroups[test]"
pytest
```

## A group

```python
from weightgroups.group import GroupContract
from weightgroups.messages import Member

group = GroupContract(admin="admin", members=[Member("alice", 5), Member("bob", 3)], height=1)
group.total_weight()                  # 8

group.add_hook("admin", "hook1")
response = group.execute_update_members(
    "admin", 5, add=[Member("carol", 2)], remove=["bob"]
)
len(response.messages)                # 1, one message per hook
group.member("bob")                   # None
group.member("bob", at_height=5)      # 3, the weight at the start of block 5
group.list_members()                  # [Member('alice', 5), Member('carol', 2)]
```

`update_members` applies the same change without building hook messages. It
returns the `MemberChangedHookMsg` with one `MemberDiff` per change. Additions
are listed first, then removals. An address that is both added and removed
ends up removed. Removing an address that is not a member does nothing.
`list_members` returns members in address order. It takes `start_after` and
`limit`, where `limit` defaults to 10 and is capped at 30. `update_admin`
passes the admin role to another address, or to `None`, which freezes the
group.

## A staking group

```python
from weightgroups.core import BlockInfo, Duration
from weightgroups.funds import NativeDenom
from weightgroups.messages import Coin
from weightgroups.stake import StakeContract

stake = StakeContract(
    NativeDenom("ustake"),
    tokens_per_weight=1000,
    min_bond=5000,
    unbonding_period=Duration.height(100),
    admin="admin",
)
stake.bond(BlockInfo(height=10), "alice", [Coin("ustake", 12_000)])
stake.member("alice")                 # 12
stake.unbond(BlockInfo(height=11), "alice", 4_500)
stake.member("alice")                 # 7
stake.claims("alice")                 # [Claim(amount=4500, release_at=Expiration.at_height(111))]
response = stake.claim(BlockInfo(height=111), "alice")
response.messages                     # [BankSend(to_address='alice', amount=(Coin('ustake', 4500),))]
```

If the group is configured with a `Cw20Denom`, tokens come in through
`receive(block, token_contract, sender, amount, msg)`. Here `msg` must be the
JSON document `{"bond": {}}`. An empty `msg` raises `NoData`, and any other
content raises `ValueError`. A claim pays out as a `WasmExecute` carrying a
JSON `transfer` message to the token contract. `staked(addr)` returns a
`StakedResponse` with the address's stake and the configured denom. The admin
of a staking group can only manage hooks and pass on the admin role.

## Building blocks

`weightgroups.core` holds the pieces the contracts are built from:

| Name | What it does |
| --- | --- |
| `BlockInfo` | The current block height and time (in seconds). |
| `Expiration` | A deadline at a height, at a time, or never. `is_expired(block)` checks it. |
| `Duration` | A span in blocks or seconds. `after(block)` returns an `Expiration`. |
| `Response` | Collects attributes and outgoing messages. |
| `SnapshotMap` | A map whose values can be read as they stood at the start of a past block. |
| `Admin` and `Hooks` | Admin checks and hook registration. |
| `Claim` and `Claims` | Unbonding claims per address. `claim_tokens` takes an optional cap. |

`weightgroups.messages` defines `Coin`, `Member`, `MemberDiff`,
`MemberChangedHookMsg`, `WasmExecute` and `BankSend`. It also has
`GroupMessenger`, which encodes an `update_members` call to a group as a
`WasmExecute` message.

`weightgroups.funds` defines the denoms and balances. `must_pay_funds` requires
exactly one coin of the expected denom, and `coin_to_string` formats an amount
with its denom.

`weightgroups.membership` has `StakeConfig`, `calc_weight` and
`StakeMembership`, which tracks the stake-derived weights and their total.

## Errors

Contract failures raise subclasses of `weightgroups.errors.ContractError`.
Two errors compare equal when they are of the same kind and carry the same
arguments.

| Exception | Raised when |
| --- | --- |
| `NotAdmin` | The sender is not the admin. |
| `HookAlreadyRegistered` / `HookNotRegistered` | A hook is added twice, or a hook that is not registered is removed. |
| `NoFunds` | No coin was sent with `bond`. |
| `MissingDenom` | The one coin sent has the wrong denom. |
| `ExtraDenoms` | More than one coin was sent. |
| `InvalidDenom` | Tokens came from a token contract other than the configured one. |
| `MixedNativeAndCw20` | Native coins were sent to a token-based group, or tokens to a coin-based group. |
| `NoData` | `receive` got an empty message. |
| `NothingToClaim` | No claim has matured yet. |
| `Overflow` | More tokens are unbonded than are staked. |

`Unauthorized` is defined as well, but no contract raises it.

## What it does not do

The groups live in memory only. Nothing is stored on disk, and nothing is sent
anywhere. The messages in a `Response` (hook notifications, bank sends, token
transfers) are returned to the caller and are never dispatched. There is no
command-line tool and no server. Addresses are plain strings and are not
validated.