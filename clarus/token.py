"""Fungible token pallet: asset classes, balances, allowances and their calls."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import replace
from typing import Hashable, Iterator

from clarus.token_types import (
    U32_MAX,
    Approval,
    AssetDetails,
    BadOriginError,
    Burned,
    Created,
    GenesisConfig,
    Issued,
    TokenError,
    TokenErrorKind,
    Transferred,
)


class TokenPallet:
    """In-memory token pallet state together with its dispatchable calls.

    A signed origin is the caller's account id; ``None`` stands for an
    unsigned origin. Every call is transactional: when it raises, storage and
    the event log are left exactly as they were before the call.
    """

    def __init__(self, balance_bits: int = 128) -> None:
        if isinstance(balance_bits, bool) or not isinstance(balance_bits, int) or balance_bits <= 0:
            raise ValueError(f"balance_bits must be a positive integer, got {balance_bits!r}")
        self._max_balance = (1 << balance_bits) - 1
        self._assets: dict[Hashable, AssetDetails] = {}
        self._balances: dict[tuple[Hashable, Hashable], int] = {}
        self._allowances: dict[tuple[Hashable, Hashable, Hashable], int] = {}
        self._events: list[object] = []

    # ----------------------------------------------------------------- helpers

    @contextmanager
    def _transactional(self) -> Iterator[None]:
        assets = {key: replace(details) for key, details in self._assets.items()}
        balances = dict(self._balances)
        allowances = dict(self._allowances)
        event_count = len(self._events)
        try:
            yield
        except BaseException:
            self._assets = assets
            self._balances = balances
            self._allowances = allowances
            del self._events[event_count:]
            raise

    @staticmethod
    def _ensure_signed(origin: Hashable | None) -> Hashable:
        if origin is None:
            raise BadOriginError()
        return origin

    def _check_amount(self, name: str, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
        if value < 0:
            raise ValueError(f"{name} must not be negative, got {value}")
        if value > self._max_balance:
            raise ValueError(f"{name} exceeds the largest balance, got {value}")

    def _checked_add(self, left: int, right: int, kind: TokenErrorKind) -> int:
        total = left + right
        if total > self._max_balance:
            raise TokenError(kind)
        return total

    def _details(self, asset_id: Hashable) -> AssetDetails:
        details = self._assets.get(asset_id)
        if details is None:
            raise TokenError(TokenErrorKind.UnknownAsset)
        return details

    @staticmethod
    def _new_account(details: AssetDetails) -> None:
        if details.accounts >= U32_MAX:
            raise TokenError(TokenErrorKind.AccountsOverflow)
        details.accounts += 1

    @staticmethod
    def _drop_account(details: AssetDetails) -> None:
        if details.accounts == 0:
            raise TokenError(TokenErrorKind.AccountsUnderflow)
        details.accounts -= 1

    def _credit(
        self,
        asset_id: Hashable,
        account: Hashable,
        amount: int,
        details: AssetDetails,
        overflow: TokenErrorKind,
    ) -> None:
        key = (asset_id, account)
        current = self._balances.get(key, 0)
        new_balance = self._checked_add(current, amount, overflow)
        if current == 0:
            self._new_account(details)
        self._balances[key] = new_balance

    def _debit(
        self,
        asset_id: Hashable,
        account: Hashable,
        amount: int,
        details: AssetDetails,
        insufficient: TokenErrorKind,
    ) -> None:
        key = (asset_id, account)
        balance = self._balances.get(key, 0)
        if balance < amount:
            raise TokenError(insufficient)
        balance -= amount
        if balance == 0:
            self._drop_account(details)
            self._balances.pop(key, None)
        else:
            self._balances[key] = balance

    def _transfer(self, asset_id: Hashable, source: Hashable, to: Hashable, amount: int) -> None:
        if (asset_id, source) not in self._balances:
            raise TokenError(TokenErrorKind.AccountDoesNotOwnThisToken)
        details = self._details(asset_id)
        self._debit(asset_id, source, amount, details, TokenErrorKind.InsufficientTransfer)
        self._credit(asset_id, to, amount, details, TokenErrorKind.TransferOverFlow)
        self._events.append(Transferred(asset_id, source, to, amount))

    def _do_mint(
        self,
        asset_id: Hashable,
        beneficiary: Hashable,
        amount: int,
        check_issuer: Hashable | None,
    ) -> None:
        if amount != 0:
            details = self._details(asset_id)
            if check_issuer is not None and check_issuer != details.issuer:
                raise TokenError(TokenErrorKind.NoPermission)
            details.supply = self._checked_add(details.supply, amount, TokenErrorKind.MintOverFlow)
            self._credit(asset_id, beneficiary, amount, details, TokenErrorKind.BalanceOverflow)
        self._events.append(Issued(asset_id, beneficiary, amount))

    def _do_burn(
        self,
        asset_id: Hashable,
        target: Hashable,
        amount: int,
        check_admin: Hashable | None,
    ) -> int:
        if amount != 0:
            details = self._details(asset_id)
            if check_admin is not None and check_admin != details.issuer:
                raise TokenError(TokenErrorKind.NoPermission)
            if details.supply < amount:
                raise TokenError(TokenErrorKind.BurnUnderflow)
            details.supply -= amount
            self._debit(asset_id, target, amount, details, TokenErrorKind.InsufficientBurn)
        self._events.append(Burned(asset_id, target, amount))
        return amount

    # ------------------------------------------------------------------- calls

    def create(
        self,
        origin: Hashable | None,
        asset_id: Hashable,
        issuer: Hashable,
        min_balance: int,
        name: bytes,
        symbol: bytes,
    ) -> None:
        """Create a new asset class administered by the caller."""
        admin = self._ensure_signed(origin)
        self._check_amount("min_balance", min_balance)
        with self._transactional():
            if asset_id in self._assets:
                raise TokenError(TokenErrorKind.InUse)
            if min_balance == 0:
                raise TokenError(TokenErrorKind.MinBalanceZero)
            self._assets[asset_id] = AssetDetails(
                admin=admin, issuer=issuer, supply=0, accounts=0, name=name, symbol=symbol
            )
            self._events.append(Created(asset_id, admin, issuer))

    def transfer(self, origin: Hashable | None, asset_id: Hashable, to: Hashable, value: int) -> None:
        """Move ``value`` tokens from the caller to ``to``."""
        sender = self._ensure_signed(origin)
        self._check_amount("value", value)
        with self._transactional():
            self._transfer(asset_id, sender, to, value)

    def approve(
        self, origin: Hashable | None, token_id: Hashable, spender: Hashable, value: int
    ) -> None:
        """Raise the allowance ``spender`` may move from the caller by ``value``."""
        sender = self._ensure_signed(origin)
        self._check_amount("value", value)
        with self._transactional():
            if (token_id, sender) not in self._balances:
                raise TokenError("Account does not own this token")
            key = (token_id, sender, spender)
            updated = self._allowances.get(key, 0) + value
            if updated > self._max_balance:
                raise TokenError("overflow in calculating allowance")
            self._allowances[key] = updated
            self._events.append(Approval(token_id, sender, spender, value))

    def transfer_from(
        self,
        origin: Hashable | None,
        token_id: Hashable,
        owner: Hashable,
        to: Hashable,
        value: int,
    ) -> None:
        """Spend part of an allowance: move ``value`` from ``owner`` to ``to``."""
        spender = self._ensure_signed(origin)
        self._check_amount("value", value)
        with self._transactional():
            key = (token_id, owner, spender)
            if key not in self._allowances:
                raise TokenError("Allowance does not exist.")
            allowance = self._allowances[key]
            if allowance < value:
                raise TokenError("Not enough allowance.")
            updated = allowance - value
            self._allowances[key] = updated
            self._events.append(Approval(token_id, owner, spender, updated))
            self._transfer(token_id, owner, to, value)

    def mint(
        self, origin: Hashable | None, asset_id: Hashable, beneficiary: Hashable, amount: int
    ) -> None:
        """Issue ``amount`` new tokens to ``beneficiary``; the caller must be the issuer."""
        caller = self._ensure_signed(origin)
        self._check_amount("amount", amount)
        with self._transactional():
            self._do_mint(asset_id, beneficiary, amount, caller)

    def burn(self, origin: Hashable | None, asset_id: Hashable, who: Hashable, amount: int) -> None:
        """Destroy ``amount`` tokens held by ``who``; the caller must be the issuer."""
        caller = self._ensure_signed(origin)
        self._check_amount("amount", amount)
        with self._transactional():
            self._do_burn(asset_id, who, amount, caller)

    def transfer_all(self, asset_id: Hashable, source: Hashable, to: Hashable) -> None:
        """Move the whole balance of ``source`` to ``to``; does nothing if ``source`` holds none."""
        with self._transactional():
            key = (asset_id, source)
            if key not in self._balances:
                return
            details = self._details(asset_id)
            balance = self._balances.get(key, 0)
            if balance == 0:
                raise TokenError(TokenErrorKind.InsufficientTransfer)
            self._credit(asset_id, to, balance, details, TokenErrorKind.TransferOverFlow)
            self._events.append(Transferred(asset_id, source, to, balance))
            self._balances.pop(key, None)
            self._drop_account(details)

    # ----------------------------------------------------------------- queries

    def balance_of(self, asset_id: Hashable, account: Hashable) -> int:
        """Balance of ``account`` in ``asset_id``, zero when it holds none."""
        return self._balances.get((asset_id, account), 0)

    def allowance(self, asset_id: Hashable, owner: Hashable, delegate: Hashable) -> int:
        """What ``delegate`` may still move from ``owner``, zero when nothing was approved."""
        return self._allowances.get((asset_id, owner, delegate), 0)

    def asset(self, asset_id: Hashable) -> AssetDetails | None:
        """A copy of the stored details of ``asset_id``, or ``None`` if it does not exist."""
        details = self._assets.get(asset_id)
        return None if details is None else replace(details)

    def account_balances(self, account: Hashable) -> list[tuple[Hashable, int]]:
        """Every asset ``account`` holds, with its balance, in storage order."""
        return [
            (asset_id, balance)
            for (asset_id, holder), balance in self._balances.items()
            if holder == account
        ]

    def apply_genesis(self, config: GenesisConfig) -> None:
        """Store the assets and balances of a genesis configuration as given."""
        for asset_id, details in config.asset_details():
            self._assets[asset_id] = details
        for asset_id, account, balance in config.balances:
            self._balances[(asset_id, account)] = balance

    def take_events(self) -> list[object]:
        """Return the events deposited so far and clear the log."""
        events, self._events = self._events, []
        return events