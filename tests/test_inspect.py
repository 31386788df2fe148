from dataclasses import dataclass

import pytest

from clarus.inspect import (
    AddressParseError,
    BytesAddress,
    DebugPrinter,
    ExtrinsicBytes,
    ExtrinsicInBlock,
    HashAddress,
    InspectCommand,
    InspectError,
    Inspector,
    NotFoundError,
    NumberAddress,
    from_hex,
    parse_block_address,
    parse_command,
    parse_extrinsic_address,
    run_command,
)

H160_TEXT = "3BfC20f0B9aFcAcE800D73D2191166FF16540258"
H160 = bytes.fromhex(H160_TEXT)

HASH_ONE = b"\x11" * 32
HASH_MISSING = b"\x22" * 32


@dataclass
class _Block:
    header: int
    extrinsics: list


class _Codec:
    def decode_block(self, data):
        if not data:
            raise ValueError("Not enough data to fill buffer")
        return _Block(data[0], list(data[1:]))

    def decode_extrinsic(self, data):
        if len(data) != 1:
            raise ValueError("Input buffer has still data left after decoding!")
        return data[0]

    def encode_block(self, block):
        return bytes([block.header, *block.extrinsics])

    def encode_extrinsic(self, extrinsic):
        return bytes([extrinsic])

    def new_block(self, header, extrinsics):
        return _Block(header, list(extrinsics))


class _Chain:
    def __init__(self):
        self.hashes = {1: HASH_ONE, 2: HASH_MISSING}
        self.headers = {HASH_ONE: 7}
        self.bodies = {HASH_ONE: [1, 2]}

    def block_hash(self, number):
        return self.hashes.get(number)

    def header(self, block_hash):
        return self.headers.get(block_hash)

    def block_body(self, block_hash):
        return self.bodies.get(block_hash)


EXPECTED_BLOCK = (
    "Header:\n7\nBlock bytes: 070102\nExtrinsics (2)\n"
    "- 0:\n 1\n Bytes: 01\n- 1:\n 2\n Bytes: 02\n"
)


@pytest.fixture
def inspector():
    return Inspector(_Chain(), _Codec())


# Cases carried over from the source's own tests.


def test_should_parse_block_strings():
    assert parse_block_address(H160_TEXT, 20) == HashAddress(H160)
    assert parse_block_address("1234", 20) == NumberAddress(1234)
    assert parse_block_address("0", 20) == NumberAddress(0)
    assert parse_block_address("0x0012345f", 20) == BytesAddress(bytes([0, 0x12, 0x34, 0x5F]))


def test_should_parse_extrinsic_address():
    assert parse_extrinsic_address("1234", 20) == ExtrinsicBytes(bytes([0x12, 0x34]))
    assert parse_extrinsic_address(H160_TEXT + ":5", 20) == ExtrinsicInBlock(HashAddress(H160), 5)
    assert parse_extrinsic_address("1234:0", 20) == ExtrinsicInBlock(NumberAddress(1234), 0)
    assert parse_extrinsic_address("0 0", 20) == ExtrinsicBytes(bytes([0, 0]))
    assert parse_extrinsic_address("0x0012345f", 20) == ExtrinsicBytes(
        bytes([0, 0x12, 0x34, 0x5F])
    )


# Further cases.


def test_from_hex_odd_length_and_prefix():
    assert from_hex("0x0012345f") == bytes([0, 0x12, 0x34, 0x5F])
    assert from_hex("123") == bytes([0x01, 0x23])
    assert from_hex("") == b""


def test_from_hex_reports_invalid_character_position():
    with pytest.raises(AddressParseError, match="invalid hex character: g, at 3"):
        from_hex("0x0g")


def test_block_address_with_dot_separator_in_extrinsic():
    assert parse_extrinsic_address("7.3", 20) == ExtrinsicInBlock(NumberAddress(7), 3)


def test_unparseable_block_address():
    with pytest.raises(AddressParseError, match="does not look like hash or number"):
        parse_block_address("xyz", 20)


def test_number_overflow_falls_back_to_bytes():
    assert parse_block_address("18446744073709551616", 20) == BytesAddress(
        from_hex("18446744073709551616")
    )


def test_extrinsic_index_invalid():
    with pytest.raises(AddressParseError, match="Invalid index format: invalid digit"):
        parse_extrinsic_address("5:x", 20)


def test_extrinsic_index_empty():
    with pytest.raises(AddressParseError, match="cannot parse integer from empty string"):
        parse_extrinsic_address("5:", 20)


def test_block_by_number(inspector):
    assert inspector.block(NumberAddress(1)) == EXPECTED_BLOCK


def test_block_by_hash_and_bytes_agree(inspector):
    by_hash = inspector.block(HashAddress(HASH_ONE))
    by_bytes = inspector.block(BytesAddress(bytes([7, 1, 2])))
    assert by_hash == by_bytes == EXPECTED_BLOCK


def test_block_unknown_number(inspector):
    with pytest.raises(InspectError, match="Expect block hash from id: Number\\(9\\)"):
        inspector.block(NumberAddress(9))


def test_block_missing_body(inspector):
    with pytest.raises(NotFoundError) as info:
        inspector.block(NumberAddress(2))
    assert str(info.value) == f"Could not find block Number(2)"


def test_block_missing_by_hash(inspector):
    with pytest.raises(NotFoundError) as info:
        inspector.block(HashAddress(HASH_MISSING))
    assert str(info.value) == f"Could not find block Hash(0x{HASH_MISSING.hex()})"


def test_block_decode_error(inspector):
    with pytest.raises(InspectError, match="Not enough data"):
        inspector.block(BytesAddress(b""))


def test_extrinsic_in_block(inspector):
    assert inspector.extrinsic(ExtrinsicInBlock(NumberAddress(1), 1)) == " 2\n Bytes: 02\n"


def test_extrinsic_index_out_of_range(inspector):
    with pytest.raises(NotFoundError, match="Could not find extrinsic 5 in block"):
        inspector.extrinsic(ExtrinsicInBlock(NumberAddress(1), 5))


def test_extrinsic_from_bytes(inspector):
    assert inspector.extrinsic(ExtrinsicBytes(b"\x09")) == " 9\n Bytes: 09\n"


def test_extrinsic_decode_error(inspector):
    with pytest.raises(InspectError):
        inspector.extrinsic(ExtrinsicBytes(b"\x01\x02"))


def test_debug_printer_block_contains_each_extrinsic():
    printer = DebugPrinter(_Codec())
    text = printer.fmt_block(_Block(3, [4, 5, 6]))
    assert "Extrinsics (3)" in text
    assert text.count(" Bytes: ") == 3


def test_parse_command():
    assert parse_command(["block", "1234"]) == InspectCommand("block", "1234")
    assert parse_command(["extrinsic", "1:0"]) == InspectCommand("extrinsic", "1:0")


def test_parse_command_requires_subcommand():
    with pytest.raises(SystemExit):
        parse_command([])


def test_inspect_command_rejects_unknown_subcommand():
    with pytest.raises(ValueError):
        InspectCommand("header", "1")


def test_run_command_block_prints(inspector, capsys):
    result = run_command(InspectCommand("block", "1"), inspector)
    assert result == EXPECTED_BLOCK
    assert capsys.readouterr().out == EXPECTED_BLOCK + "\n"


def test_run_command_extrinsic(inspector, capsys):
    result = run_command(InspectCommand("extrinsic", "1:0"), inspector)
    assert result == " 1\n Bytes: 01\n"
    assert capsys.readouterr().out == result + "\n"


def test_run_command_bad_input(inspector):
    with pytest.raises(AddressParseError):
        run_command(InspectCommand("extrinsic", "q"), inspector)