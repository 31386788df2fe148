"""Pallet that lets a designated origin dispatch any call as root, free of charge."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable

from clarus.token_types import BadOriginError
from clarus.weights import Weight


class Pays(enum.Enum):
    """Whether the caller pays the transaction fee."""

    Yes = "Yes"
    No = "No"


@dataclass(frozen=True)
class RootOp:
    """A root operation was executed; ``result`` is ``None`` or the error it raised."""

    result: Exception | None

    @property
    def succeeded(self) -> bool:
        return self.result is None


@dataclass(frozen=True)
class MandateResult:
    """Post-dispatch information of a mandate call."""

    pays_fee: Pays = Pays.No
    actual_weight: Weight | None = None


class _RootOrigin:
    def __repr__(self) -> str:
        return "Root"


class MandatePallet:
    """Dispatches calls with the root origin on behalf of an external origin.

    ``external_origin`` decides which origins may use :meth:`mandate`. A call is
    any callable taking the origin it is dispatched with.
    """

    ROOT = _RootOrigin()

    def __init__(self, external_origin: Callable[[Any], bool]) -> None:
        self._is_external = external_origin
        self._events: list[RootOp] = []

    def mandate(self, origin: Any, call: Callable[[Any], Any]) -> MandateResult:
        """Run ``call`` as root and record its outcome; the caller pays nothing."""
        if not self._is_external(origin):
            raise BadOriginError()
        try:
            call(self.ROOT)
        except Exception as exc:
            result: Exception | None = exc
        else:
            result = None
        self._events.append(RootOp(result))
        return MandateResult(pays_fee=Pays.No)

    def take_events(self) -> list[RootOp]:
        """Return the events deposited so far and clear the log."""
        events, self._events = self._events, []
        return events