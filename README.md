# clarus

An in-memory model of a chain runtime's token ledger, together with the
pieces around it: a pallet that runs calls with root rights, the
benchmarked weight of each token call, and an inspector that prints
blocks and extrinsics.

Python 3.10 or later; only the standard library is used.

## Modules

- `clarus.token`: `TokenPallet`, an ERC20-style multi-asset ledger.
- `clarus.token_types`: errors, stored records, events and genesis
  configuration used by the ledger.
- `clarus.mandate`: `MandatePallet`, which dispatches a call as root on
  behalf of an allowed origin.
- `clarus.weights`: `Weight`, `RuntimeDbWeight` and `SubstrateWeight`.
- `clarus.inspect`: address parsing, `DebugPrinter`, `Inspector` and the
  `inspect` command's argument handling.

## Token ledger

```python
from clarus.token import TokenPallet

ledger = TokenPallet()                       # balances are 128-bit by default
ledger.create("alice", 1, "bob", 1, b"Coin", b"CN")   # alice is admin, bob is issuer
ledger.mint("bob", 1, "carol", 100)          # only the issuer may mint
ledger.transfer("carol", 1, "dave", 40)
ledger.approve("carol", 1, "erin", 10)       # adds 10 to erin's allowance
ledger.transfer_from("erin", 1, "carol", "dave", 5)
ledger.burn("bob", 1, "dave", 20)            # only the issuer may burn

ledger.balance_of(1, "carol")                # 55
ledger.allowance(1, "carol", "erin")         # 5
ledger.asset(1)                              # a copy of the AssetDetails, or None
ledger.account_balances("dave")              # [(1, 25)]
ledger.take_events()                         # events so far; the log is then cleared
```

The first argument of each call is the origin: the caller's account id,
or `None` for an unsigned origin, which raises `BadOriginError`.
`transfer_all(asset_id, source, to)` moves the whole balance of `source`
and does nothing when `source` holds none of that asset.

Every call is transactional: if it raises, storage and the event log are
left as they were. Failures raise `TokenError`. For the pallet's declared
errors, `error.kind` is a `TokenErrorKind` (for example `UnknownAsset`,
`InUse`, `MinBalanceZero`, `NoPermission`, `AccountDoesNotOwnThisToken`,
`InsufficientTransfer`, `InsufficientBurn`). The allowance checks in
`approve` and `transfer_from` raise a `TokenError` with `kind` set to
`None` and a text message such as `"Not enough allowance."`. Amounts
that are negative or exceed the balance width raise `ValueError`.

Events are the dataclasses `Created`, `Transferred` (fields `asset_id`,
`source`, `to`, `amount`), `Approval`, `Issued` and `Burned`. After
`transfer_from`, the `Approval` event carries the remaining allowance.

`apply_genesis(config)` stores the `GenesisAsset` records and the
`(asset_id, account, balance)` entries of a `GenesisConfig` exactly as
given.

## Mandate

```python
from clarus.mandate import MandatePallet

pallet = MandatePallet(lambda origin: origin == "council")
result = pallet.mandate("council", lambda origin: ...)   # the call gets MandatePallet.ROOT
result.pays_fee                                          # Pays.No
pallet.take_events()                                     # [RootOp(result=None)]
```

An origin the predicate rejects raises `BadOriginError`. An exception
raised by the call does not escape `mandate`; it is recorded in the
`RootOp` event (`RootOp.succeeded` is then `False`).

## Weights

```python
from clarus.weights import RuntimeDbWeight, SubstrateWeight

SubstrateWeight().transfer()     # Weight(ref_time=37807000, proof_size=6099)
SubstrateWeight(RuntimeDbWeight(read=25_000_000, write=100_000_000)).mint()
```

Each of `mint`, `burn`, `transfer`, `transfer_from` and `approve` adds
the benchmarked execution time, the proof size, and the cost of its
storage reads and writes under the given `RuntimeDbWeight` (zero by
default). Additions saturate at the unsigned 64-bit maximum.

## Inspector

```python
from clarus.inspect import from_hex, parse_block_address, parse_extrinsic_address

from_hex("0x0012345f")                     # b"\x00\x12\x34\x5f"
parse_block_address("1234", 20)            # NumberAddress(1234)
parse_block_address("0x0012345f", 20)      # BytesAddress(b"\x00\x12\x34\x5f")
parse_extrinsic_address("1234:0", 20)      # ExtrinsicInBlock(NumberAddress(1234), 0)
parse_extrinsic_address("1234", 20)        # ExtrinsicBytes(b"\x12\x34")
```

The second argument is the block hash length in bytes (32 by default).
A block address is read as a hash first, then as a number, then as hex
bytes; if none fits, `AddressParseError` is raised. An extrinsic address
is read as hex bytes first; otherwise it is split at `.`, `:` or a space
into a block address and an index.

`Inspector(chain, codec, printer=None)` needs two objects from the
caller:

- `chain` with `block_hash(number)`, `header(hash)` and
  `block_body(hash)`, each returning `None` when nothing is stored;
- `codec` with `decode_block`, `decode_extrinsic`, `encode_block`,
  `encode_extrinsic` and `new_block(header, extrinsics)`. Blocks must
  have `header` and `extrinsics` attributes.

`Inspector.block(address)` and `Inspector.extrinsic(address)` return the
text of the printer (`DebugPrinter` by default). A missing body, header
or extrinsic index raises `NotFoundError`; an unknown block number or a
decoder `ValueError` raises `InspectError`.

`parse_command(argv)` reads `block <input>` or `extrinsic <input>` into
an `InspectCommand`, and `run_command(command, inspector, hash_size)`
parses the input, prints the result and returns it.

## What this package does not do

- It has no chain database, no network node and no RPC server; the
  inspector works only against the `chain` and `codec` objects you pass
  in, and the package ships no binary block or extrinsic codec.
- No console command is installed; `parse_command` and `run_command` are
  for use from your own entry point.
- Ledger and mandate state lives in memory only and is not persisted.