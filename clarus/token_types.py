"""Errors, stored records, events and genesis configuration of the token pallet."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Hashable, Iterator

U32_MAX = 2**32 - 1


class TokenErrorKind(enum.Enum):
    """Every way a token pallet call can fail, with its description."""

    NoPermission = "Error thrown when account does not have permission"
    AccountDoesNotOwnThisToken = "Error thrown when account does not hold token"
    UnknownAsset = "Error thrown when asset detail is unknown"
    TransferUnderFlow = "Error thrown when transfer failed due to balance underflow"
    TransferOverFlow = "Error thrown when transfer failed due to balance overflow"
    InsufficientTransfer = "Error thrown when transfer failed due to insufficient balance"
    BurnUnderflow = "Error thrown when burn failed due to balance underflow"
    MintOverFlow = "Error thrown when mint failed due to balance overflow"
    BalanceUnderflow = "Error thrown when balance update failed due to balance underflow"
    BalanceOverflow = "Error thrown when balance update failed due to balance overflow"
    InsufficientBurn = "Error thrown when burn failed due to insufficient balance"
    AccountsUnderflow = "Error thrown when deleting accounts failed due to underflow"
    AccountsOverflow = "Error thrown when creating new accounts failed due to overflow"
    CallbackFailed = "Callback action resulted in error"
    MinBalanceZero = "Minimum balance should be non-zero."
    InUse = "The asset ID is already taken."

    @property
    def description(self) -> str:
        return self.value


class TokenError(Exception):
    """A token pallet call failed.

    Carries either one of the pallet's declared error kinds, or a free-form
    message for the checks the pallet reports with plain text.
    """

    def __init__(self, reason: TokenErrorKind | str) -> None:
        if isinstance(reason, TokenErrorKind):
            self.kind: TokenErrorKind | None = reason
            self.message = reason.name
        elif isinstance(reason, str):
            self.kind = None
            self.message = reason
        else:
            raise TypeError(f"unsupported error reason: {reason!r}")
        super().__init__(self.message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TokenError):
            return NotImplemented
        return self.kind == other.kind and self.message == other.message

    def __hash__(self) -> int:
        return hash((self.kind, self.message))

    def __repr__(self) -> str:
        reason = self.kind if self.kind is not None else self.message
        return f"TokenError({reason!r})"


class BadOriginError(Exception):
    """The call was not made from a signed origin."""

    def __init__(self, message: str = "BadOrigin") -> None:
        super().__init__(message)


def _check_balance(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")


def _check_accounts(value: int) -> None:
    _check_balance("accounts", value)
    if value > U32_MAX:
        raise ValueError(f"accounts must fit in an unsigned 32-bit integer, got {value}")


@dataclass
class AssetDetails:
    """Stored details of one asset class."""

    admin: Hashable
    issuer: Hashable
    supply: int = 0
    accounts: int = 0
    name: bytes = b""
    symbol: bytes = b""

    def __post_init__(self) -> None:
        _check_balance("supply", self.supply)
        _check_accounts(self.accounts)
        self.name = bytes(self.name)
        self.symbol = bytes(self.symbol)


@dataclass(frozen=True)
class Created:
    """An asset class was created."""

    asset_id: Hashable
    creator: Hashable
    issuer: Hashable


@dataclass(frozen=True)
class Transferred:
    """Tokens moved from one account to another."""

    asset_id: Hashable
    source: Hashable
    to: Hashable
    amount: int


@dataclass(frozen=True)
class Approval:
    """An allowance was granted or consumed."""

    asset_id: Hashable
    owner: Hashable
    spender: Hashable
    amount: int


@dataclass(frozen=True)
class Issued:
    """Tokens were minted to an account."""

    asset_id: Hashable
    owner: Hashable
    balance: int


@dataclass(frozen=True)
class Burned:
    """Tokens were destroyed from an account."""

    asset_id: Hashable
    owner: Hashable
    balance: int


@dataclass(frozen=True)
class GenesisAsset:
    """An asset class present at genesis, stored exactly as given."""

    asset_id: Hashable
    admin: Hashable
    issuer: Hashable
    supply: int
    accounts: int
    name: bytes
    symbol: bytes

    def __post_init__(self) -> None:
        _check_balance("supply", self.supply)
        _check_accounts(self.accounts)
        object.__setattr__(self, "name", bytes(self.name))
        object.__setattr__(self, "symbol", bytes(self.symbol))

    def details(self) -> AssetDetails:
        """A fresh stored record for this asset."""
        return AssetDetails(
            admin=self.admin,
            issuer=self.issuer,
            supply=self.supply,
            accounts=self.accounts,
            name=self.name,
            symbol=self.symbol,
        )


@dataclass(frozen=True)
class GenesisConfig:
    """Assets and balances the pallet starts with."""

    assets: tuple[GenesisAsset, ...] = field(default_factory=tuple)
    balances: tuple[tuple[Hashable, Hashable, int], ...] = field(default_factory=tuple)
    init_erc20_token: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "assets", tuple(self.assets))
        balances = tuple(tuple(entry) for entry in self.balances)
        for entry in balances:
            if len(entry) != 3:
                raise ValueError(
                    f"balance entries are (asset_id, account, balance), got {entry!r}"
                )
            _check_balance("balance", entry[2])
        object.__setattr__(self, "balances", balances)

    def asset_details(self) -> Iterator[tuple[Hashable, AssetDetails]]:
        """Yield each genesis asset's id with its stored record, in order."""
        for asset in self.assets:
            yield asset.asset_id, asset.details()