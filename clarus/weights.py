"""Benchmarked dispatch weights for the token pallet."""

from __future__ import annotations

from dataclasses import dataclass, field

U64_MAX = 2**64 - 1


def _check_u64(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if not 0 <= value <= U64_MAX:
        raise ValueError(f"{name} must fit in an unsigned 64-bit integer, got {value}")


def _saturate(value: int) -> int:
    return min(value, U64_MAX)


@dataclass(frozen=True)
class Weight:
    """Two-dimensional weight: execution time and proof size."""

    ref_time: int = 0
    proof_size: int = 0

    def __post_init__(self) -> None:
        _check_u64("ref_time", self.ref_time)
        _check_u64("proof_size", self.proof_size)

    def saturating_add(self, other: Weight) -> Weight:
        """Add component-wise, clamping each component at the u64 maximum."""
        return Weight(
            _saturate(self.ref_time + other.ref_time),
            _saturate(self.proof_size + other.proof_size),
        )


@dataclass(frozen=True)
class RuntimeDbWeight:
    """Cost in execution time of a single storage read and write."""

    read: int = 0
    write: int = 0

    def __post_init__(self) -> None:
        _check_u64("read", self.read)
        _check_u64("write", self.write)

    def reads(self, count: int) -> Weight:
        """Weight of ``count`` storage reads."""
        _check_u64("count", count)
        return Weight(_saturate(self.read * count), 0)

    def writes(self, count: int) -> Weight:
        """Weight of ``count`` storage writes."""
        _check_u64("count", count)
        return Weight(_saturate(self.write * count), 0)


@dataclass(frozen=True)
class SubstrateWeight:
    """Benchmarked weights of the token pallet's calls."""

    db_weight: RuntimeDbWeight = field(default_factory=RuntimeDbWeight)

    def _measured(self, ref_time: int, proof_size: int, reads: int, writes: int) -> Weight:
        return (
            Weight(ref_time, 0)
            .saturating_add(Weight(0, proof_size))
            .saturating_add(self.db_weight.reads(reads))
            .saturating_add(self.db_weight.writes(writes))
        )

    def mint(self) -> Weight:
        # Token::Asset r:1 w:1, Token::BalanceOf r:1 w:1
        return self._measured(30_192_000, 3616, 2, 2)

    def burn(self) -> Weight:
        # Token::Asset r:1 w:1, Token::BalanceOf r:1 w:1
        return self._measured(35_370_000, 3722, 2, 2)

    def transfer(self) -> Weight:
        # Token::BalanceOf r:2 w:2
        return self._measured(37_807_000, 6099, 2, 2)

    def transfer_from(self) -> Weight:
        # Token::Allowance r:1 w:1, Token::BalanceOf r:2 w:2
        return self._measured(71_373_000, 6262, 3, 3)

    def approve(self) -> Weight:
        # Token::BalanceOf r:1 w:0, Token::Allowance r:1 w:1
        return self._measured(40_868_000, 3634, 2, 1)