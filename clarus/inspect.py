"""Decode and pretty-print blocks and extrinsics, from the chain or from raw bytes."""

from __future__ import annotations

import argparse
import pprint
import re
import string
from dataclasses import dataclass
from typing import Any, Protocol, Sequence

_U64_BITS = 64
_HEX_DIGITS = frozenset(string.hexdigits)
_WHITESPACE = frozenset(b" \r\n\t")
_SUBCOMMANDS = ("block", "extrinsic")


class InspectError(Exception):
    """Failure while inspecting a block or extrinsic."""


class NotFoundError(InspectError):
    """The requested block or extrinsic does not exist."""


class AddressParseError(InspectError, ValueError):
    """A block or extrinsic address could not be parsed."""


class BlockAddress:
    """A block to retrieve: by hash, by number, or as raw encoded bytes."""


@dataclass(frozen=True)
class HashAddress(BlockAddress):
    value: bytes


@dataclass(frozen=True)
class NumberAddress(BlockAddress):
    value: int


@dataclass(frozen=True)
class BytesAddress(BlockAddress):
    value: bytes


class ExtrinsicAddress:
    """An extrinsic to decode: inside an existing block, or as raw encoded bytes."""


@dataclass(frozen=True)
class ExtrinsicInBlock(ExtrinsicAddress):
    block: BlockAddress
    index: int


@dataclass(frozen=True)
class ExtrinsicBytes(ExtrinsicAddress):
    value: bytes


class _Chain(Protocol):
    def block_hash(self, number: int) -> bytes | None: ...

    def header(self, block_hash: bytes) -> Any | None: ...

    def block_body(self, block_hash: bytes) -> Sequence[Any] | None: ...


class _Codec(Protocol):
    def decode_block(self, data: bytes) -> Any: ...

    def decode_extrinsic(self, data: bytes) -> Any: ...

    def encode_block(self, block: Any) -> bytes: ...

    def encode_extrinsic(self, extrinsic: Any) -> bytes: ...

    def new_block(self, header: Any, extrinsics: Sequence[Any]) -> Any: ...


def from_hex(text: str) -> bytes:
    """Decode hex with an optional ``0x`` prefix; whitespace is ignored, odd length allowed."""
    stripped = text.startswith("0x")
    raw = (text[2:] if stripped else text).encode("utf-8")
    out = bytearray((len(raw) + 1) // 2)
    modulus = len(raw) % 2
    buf = 0
    pos = 0
    for index, byte in enumerate(raw):
        if byte in _WHITESPACE:
            continue
        char = chr(byte)
        if char not in _HEX_DIGITS:
            offset = 2 if stripped else 0
            raise AddressParseError(f"invalid hex character: {char}, at {index + offset}")
        buf = ((buf << 4) & 0xFF) | int(char, 16)
        modulus += 1
        if modulus == 2:
            modulus = 0
            out[pos] = buf
            pos += 1
    return bytes(out)


def _parse_uint(text: str, bits: int) -> int:
    if not text:
        raise ValueError("cannot parse integer from empty string")
    digits = text[1:] if text[0] == "+" else text
    if not digits or any(c not in "0123456789" for c in digits):
        raise ValueError("invalid digit found in string")
    value = int(digits)
    if value >= 1 << bits:
        raise ValueError("number too large to fit in target type")
    return value


def _parse_hash(text: str, size: int) -> bytes:
    body = text[2:] if text.startswith("0x") else text
    if len(body) != size * 2 or any(c not in _HEX_DIGITS for c in body):
        raise ValueError(f"not a {size}-byte hash")
    return bytes.fromhex(body)


def parse_block_address(text: str, hash_size: int = 32) -> BlockAddress:
    """Parse a block hash, then a block number, then hex-encoded block bytes."""
    try:
        return HashAddress(_parse_hash(text, hash_size))
    except ValueError:
        pass
    try:
        return NumberAddress(_parse_uint(text, _U64_BITS))
    except ValueError:
        pass
    try:
        return BytesAddress(from_hex(text))
    except AddressParseError as exc:
        raise AddressParseError(
            "Given string does not look like hash or number. "
            f"It could not be parsed as bytes either: {exc}"
        ) from None


def parse_extrinsic_address(text: str, hash_size: int = 32) -> ExtrinsicAddress:
    """Parse hex extrinsic bytes, or ``{block}:{index}`` (``.`` and space also separate)."""
    try:
        return ExtrinsicBytes(from_hex(text))
    except AddressParseError:
        pass
    parts = re.split(r"[.: ]", text)
    block = parse_block_address(parts[0], hash_size)
    if len(parts) < 2:
        raise AddressParseError('Extrinsic index missing: example "5:0"')
    try:
        index = _parse_uint(parts[1], _U64_BITS)
    except ValueError as exc:
        raise AddressParseError(f"Invalid index format: {exc}") from None
    return ExtrinsicInBlock(block, index)


class DebugPrinter:
    """Plain debug formatting of blocks and extrinsics."""

    def __init__(self, codec: _Codec) -> None:
        self._codec = codec

    def fmt_block(self, block: Any) -> str:
        extrinsics = list(block.extrinsics)
        parts = [
            "Header:\n",
            f"{block.header!r}\n",
            f"Block bytes: {self._codec.encode_block(block).hex()}\n",
            f"Extrinsics ({len(extrinsics)})\n",
        ]
        for idx, extrinsic in enumerate(extrinsics):
            parts.append(f"- {idx}:\n")
            parts.append(self.fmt_extrinsic(extrinsic))
        return "".join(parts)

    def fmt_extrinsic(self, extrinsic: Any) -> str:
        return (
            f" {pprint.pformat(extrinsic)}\n"
            f" Bytes: {self._codec.encode_extrinsic(extrinsic).hex()}\n"
        )


class Inspector:
    """Looks up blocks and extrinsics and renders them with a printer."""

    def __init__(self, chain: _Chain, codec: _Codec, printer: Any = None) -> None:
        self._chain = chain
        self._codec = codec
        self._printer = printer if printer is not None else DebugPrinter(codec)

    def block(self, address: BlockAddress) -> str:
        """Return the pretty-printed block at ``address``."""
        return self._printer.fmt_block(self._get_block(address))

    def extrinsic(self, address: ExtrinsicAddress) -> str:
        """Return the pretty-printed extrinsic at ``address``."""
        if isinstance(address, ExtrinsicInBlock):
            block = self._get_block(address.block)
            extrinsics = list(block.extrinsics)
            if address.index >= len(extrinsics):
                raise NotFoundError(
                    f"Could not find extrinsic {address.index} in block {block!r}"
                )
            extrinsic = extrinsics[address.index]
        elif isinstance(address, ExtrinsicBytes):
            extrinsic = self._decode(self._codec.decode_extrinsic, address.value)
        else:
            raise TypeError(f"unsupported extrinsic address: {address!r}")
        return self._printer.fmt_extrinsic(extrinsic)

    @staticmethod
    def _decode(decoder: Any, data: bytes) -> Any:
        try:
            return decoder(data)
        except ValueError as exc:
            raise InspectError(str(exc)) from exc

    def _get_block(self, address: BlockAddress) -> Any:
        if isinstance(address, BytesAddress):
            return self._decode(self._codec.decode_block, address.value)
        if isinstance(address, NumberAddress):
            block_id = f"Number({address.value})"
            block_hash = self._chain.block_hash(address.value)
            if block_hash is None:
                raise InspectError(f"UnknownBlock: Expect block hash from id: {block_id}")
        elif isinstance(address, HashAddress):
            block_hash = address.value
            block_id = f"Hash(0x{block_hash.hex()})"
        else:
            raise TypeError(f"unsupported block address: {address!r}")

        not_found = f"Could not find block {block_id}"
        body = self._chain.block_body(block_hash)
        if body is None:
            raise NotFoundError(not_found)
        header = self._chain.header(block_hash)
        if header is None:
            raise NotFoundError(not_found)
        return self._codec.new_block(header, body)


@dataclass(frozen=True)
class InspectCommand:
    """The ``inspect`` command: which kind of item to print and its address."""

    subcommand: str
    input: str

    def __post_init__(self) -> None:
        if self.subcommand not in _SUBCOMMANDS:
            raise ValueError(f"unknown inspect sub-command: {self.subcommand!r}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inspect", description="Print decoded chain data."
    )
    sub = parser.add_subparsers(dest="subcommand", required=True)
    block = sub.add_parser(
        "block", help="Decode block with native version of runtime and print out the details."
    )
    block.add_argument(
        "input",
        metavar="HASH or NUMBER or BYTES",
        help="A block hash (no 0x prefix), a number, or 0x-prefixed encoded block bytes.",
    )
    extrinsic = sub.add_parser(
        "extrinsic",
        help="Decode extrinsic with native version of runtime and print out the details.",
    )
    extrinsic.add_argument(
        "input",
        metavar="BLOCK:INDEX or BYTES",
        help="A {block}:{index} pair or 0x-prefixed encoded extrinsic bytes.",
    )
    return parser


def parse_command(argv: Sequence[str] | None = None) -> InspectCommand:
    """Parse command-line arguments into an :class:`InspectCommand`."""
    namespace = _build_parser().parse_args(argv)
    return InspectCommand(namespace.subcommand, namespace.input)


def run_command(command: InspectCommand, inspector: Inspector, hash_size: int = 32) -> str:
    """Run ``command`` against ``inspector``, print the result and return it."""
    if command.subcommand == "block":
        result = inspector.block(parse_block_address(command.input, hash_size))
    else:
        result = inspector.extrinsic(parse_extrinsic_address(command.input, hash_size))
    print(result)
    return result