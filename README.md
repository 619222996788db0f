# sequencer

A registry of rollapp sequencers, kept in an in-memory key-value store. It provides:

- `sequencer.types`: the records kept for each sequencer (`Sequencer`, `Scheduler`, `SequencersByRollapp`, `SequencerInfo`), their store keys (`sequencer_key`, `scheduler_key`, `sequencers_by_rollapp_key`), the operating status (`OperatingStatus`: `UNSPECIFIED`, `INACTIVE`, `PROPOSER`), the empty parameter set (`Params`) and a simple rollapp lookup (`Rollapp`, `RollappKeeper`).
- `sequencer.description`: `Description`, with byte-length limits on its fields.
- `sequencer.message`: the create-sequencer message (`MsgCreateSequencer`, `new_msg_create_sequencer`), public keys (`PubKey`) and bech32 decoding of `dym` account addresses (`decode_bech32_address`).
- `sequencer.store`: `KVStore`, `PrefixStore` and `paginate`, with `PageRequest` and `PageResponse`.
- `sequencer.keeper`: `Keeper`, which reads and writes the records.
- `sequencer.queries`: `QueryService`, the read-only queries.
- `sequencer.msg_server`: `MsgServer` and `handle`, the message handling.
- `sequencer.hooks`: `RollappHooks`, the check run before a rollapp state update.
- `sequencer.genesis_state` and `sequencer.module`: `GenesisState`, `default_genesis`, `init_genesis`, `export_genesis` and `AppModule`.
- `sequencer.errors`: the exceptions listed below.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Registering sequencers

```python
from sequencer.description import Description
from sequencer.keeper import Keeper
from sequencer.message import PubKey, new_msg_create_sequencer
from sequencer.msg_server import MsgServer
from sequencer.types import Rollapp, RollappKeeper

rollapps = RollappKeeper([Rollapp("rollapp-1", max_sequencers=3)])
keeper = Keeper(rollapp_keeper=rollapps)

creator = "dym1..."  # the creator's bech32 account address
msg = new_msg_create_sequencer(creator, PubKey(key=bytes(33)), "rollapp-1", Description(moniker="node-a"))
MsgServer(keeper).create_sequencer(msg)
```

The first sequencer registered for a rollapp is stored with status `PROPOSER`. Each later one starts as `INACTIVE` and is appended to the rollapp's address list.

`create_sequencer` raises a `SequencerError` subclass when:

- the message has no public key and the keeper was not created with `is_simulation=True` (`ErrInvalidPubKey`);
- a sequencer with that address already exists (`ErrSequencerExists`);
- the rollapp is not known to the `RollappKeeper` (`ErrUnknownRollappID`);
- the rollapp has a non-empty permissioned list and the creator is not on it (`ErrSequencerNotPermissioned`);
- the rollapp already has `max_sequencers` sequencers (`ErrMaxSequencersLimit`);
- a description field is too long (`ErrInvalidRequest`).

`create_sequencer` does not check the creator address. Call `MsgCreateSequencer.validate_basic()` for that. It raises `ErrInvalidAddress` for an address that is not a valid `dym` bech32 address, `ErrInvalidType` for a key that is not a `PubKey`, and `ErrInvalidRequest` for an over-long description.

`handle(keeper, msg)` dispatches a `MsgCreateSequencer` to the server. For any other message type it raises `ErrUnknownRequest`.

## Querying

```python
from sequencer.queries import QueryGetSequencerRequest, QueryService

service = QueryService(keeper)
info = service.sequencer(QueryGetSequencerRequest(sequencer_address=creator)).sequencer_info
print(info.status)
```

The single-record queries are `params`, `scheduler`, `sequencer` and `sequencers_by_rollapp`. The list queries are `scheduler_all`, `sequencer_all` and `sequencers_by_rollapp_all`.

Queries raise `QueryError`, which carries a `StatusCode`:

- `INVALID_ARGUMENT` when the request is `None`;
- `NOT_FOUND` when the requested record does not exist;
- `INTERNAL` when a list query fails while paging.

A single-record query raises `ErrLogic` when a sequencer has no scheduler entry.

The list queries take a `PageRequest`, which selects a page either by `offset` or by start `key`, never both. The returned `PageResponse.next_key` points at the next entry.

When paging by offset, `total` is filled in if `count_total` is set or if `limit` is 0. A `limit` of 0 means 100.

## Rollapp state updates

`RollappHooks(keeper).before_update_state(address, rollapp_id)` returns quietly only when the sequencer is registered for that rollapp and is its proposer. Otherwise it raises one of:

- `ErrUnknownSequencer`;
- `ErrSequencerRollappMismatch`;
- `ErrNotActiveSequencer`;
- `ErrLogic`, when the sequencer has no scheduler entry.

## Genesis

- `default_genesis()` returns an empty `GenesisState`.
- `GenesisState.validate()` raises `ValueError` on duplicated sequencer, per-rollapp or scheduler entries.
- `init_genesis(keeper, state)` writes a state into a keeper.
- `export_genesis(keeper)` reads the whole state back.

`AppModule(keeper)` offers the same operations on JSON:

- `default_genesis()` and `export_genesis()` return JSON bytes.
- `validate_genesis(data)` and `init_genesis(data)` decode JSON and raise `ValueError` on malformed input.
- `route()` returns the routing key and a handler bound to the keeper.

## What this package does not do

- State lives only in memory, in `KVStore`. Nothing is written to disk.
- There is no command-line tool.
- There is no network server or client for the queries and messages.
- Transactions are not signed or broadcast.
- Rollapps come from the `RollappKeeper` you pass in. The package does not register or manage them itself.