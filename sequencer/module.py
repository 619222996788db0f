"""Genesis import and export, and the module's entry points."""

from __future__ import annotations

import functools
import json
from typing import Any, Callable

from .genesis_state import GenesisState, default_genesis
from .keeper import Keeper
from .msg_server import handle
from .types import MODULE_NAME, ROUTER_KEY

CONSENSUS_VERSION = 2


def init_genesis(keeper: Keeper, genesis_state: GenesisState) -> None:
    """Write every record of ``genesis_state`` into the keeper's store."""
    for sequencer in genesis_state.sequencer_list:
        keeper.set_sequencer(sequencer)
    for entry in genesis_state.sequencers_by_rollapp_list:
        keeper.set_sequencers_by_rollapp(entry)
    for scheduler in genesis_state.scheduler_list:
        keeper.set_scheduler(scheduler)
    keeper.set_params(genesis_state.params)


def export_genesis(keeper: Keeper) -> GenesisState:
    """Read the keeper's whole state back as a genesis state."""
    genesis = default_genesis()
    genesis.params = keeper.get_params()
    genesis.sequencer_list = keeper.get_all_sequencer()
    genesis.sequencers_by_rollapp_list = keeper.get_all_sequencers_by_rollapp()
    genesis.scheduler_list = keeper.get_all_scheduler()
    return genesis


def _encode_genesis(genesis: GenesisState) -> bytes:
    return json.dumps(genesis.to_dict(), separators=(",", ":")).encode("utf-8")


def _decode_genesis(data: bytes | str) -> GenesisState:
    try:
        decoded = json.loads(data)
        if not isinstance(decoded, dict):
            raise ValueError(f"expected a JSON object, got {type(decoded).__name__}")
        return GenesisState.from_dict(decoded)
    except (ValueError, TypeError, AttributeError, KeyError) as exc:
        raise ValueError(f"failed to unmarshal {MODULE_NAME} genesis state: {exc}") from exc


class AppModule:
    """The sequencer module as seen by the application."""

    def __init__(self, keeper: Keeper) -> None:
        self.keeper = keeper

    def name(self) -> str:
        return MODULE_NAME

    def route(self) -> tuple[str, Callable[[Any], Any]]:
        """The routing key and the handler for the module's messages."""
        return ROUTER_KEY, functools.partial(handle, self.keeper)

    def default_genesis(self) -> bytes:
        """The default genesis state as JSON."""
        return _encode_genesis(default_genesis())

    def validate_genesis(self, data: bytes | str) -> None:
        """Decode a JSON genesis state and validate it; raises ValueError."""
        _decode_genesis(data).validate()

    def init_genesis(self, data: bytes | str) -> list[Any]:
        """Load a JSON genesis state; returns no validator updates."""
        init_genesis(self.keeper, _decode_genesis(data))
        return []

    def export_genesis(self) -> bytes:
        """The current state as JSON genesis."""
        return _encode_genesis(export_genesis(self.keeper))

    def consensus_version(self) -> int:
        return CONSENSUS_VERSION

    def end_block(self) -> list[Any]:
        """Nothing happens at end of block; no validator updates."""
        return []