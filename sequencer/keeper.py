"""State access for sequencers, schedulers and per-rollapp sequencer lists."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol, TypeVar

from .store import KVStore, PrefixStore
from .types import (
    MODULE_NAME,
    SCHEDULER_KEY_PREFIX,
    SEQUENCER_KEY_PREFIX,
    SEQUENCERS_BY_ROLLAPP_KEY_PREFIX,
    Params,
    RollappKeeper,
    Scheduler,
    Sequencer,
    SequencersByRollapp,
    default_params,
    key_prefix,
    scheduler_key,
    sequencer_key,
    sequencers_by_rollapp_key,
)


class _Record(Protocol):
    def to_dict(self) -> dict[str, Any]: ...


_R = TypeVar("_R")


def _encode(record: _Record) -> bytes:
    return json.dumps(record.to_dict(), sort_keys=True, separators=(",", ":")).encode("utf-8")


def _decode(cls: Any, raw: bytes) -> Any:
    return cls.from_dict(json.loads(raw))


class Keeper:
    """Reads and writes the module's records in a key-value store."""

    def __init__(
        self,
        store: KVStore | None = None,
        rollapp_keeper: RollappKeeper | None = None,
        is_simulation: bool = False,
    ) -> None:
        self.store = store if store is not None else KVStore()
        self.rollapp_keeper = rollapp_keeper if rollapp_keeper is not None else RollappKeeper()
        self.is_simulation = is_simulation
        self.logger = logging.getLogger(f"x/{MODULE_NAME}")
        self._params = default_params()

    def _prefixed(self, prefix: str) -> PrefixStore:
        return PrefixStore(self.store, key_prefix(prefix))

    def _get(self, prefix: str, key: bytes, cls: type[_R]) -> _R | None:
        raw = self._prefixed(prefix).get(key)
        return None if raw is None else _decode(cls, raw)

    def _all(self, prefix: str, cls: type[_R]) -> list[_R]:
        return [_decode(cls, raw) for _, raw in self._prefixed(prefix).items()]

    def get_params(self) -> Params:
        """Return the module parameters."""
        return Params()

    def set_params(self, params: Params) -> None:
        """Store the module parameters."""
        self._params = params

    def set_scheduler(self, scheduler: Scheduler) -> None:
        self._prefixed(SCHEDULER_KEY_PREFIX).set(scheduler_key(scheduler.sequencer_address), _encode(scheduler))

    def get_scheduler(self, sequencer_address: str) -> Scheduler | None:
        """Return the scheduler entry of a sequencer, or None."""
        return self._get(SCHEDULER_KEY_PREFIX, scheduler_key(sequencer_address), Scheduler)

    def remove_scheduler(self, sequencer_address: str) -> None:
        self._prefixed(SCHEDULER_KEY_PREFIX).delete(scheduler_key(sequencer_address))

    def get_all_scheduler(self) -> list[Scheduler]:
        """All scheduler entries, in key order."""
        return self._all(SCHEDULER_KEY_PREFIX, Scheduler)

    def set_sequencer(self, sequencer: Sequencer) -> None:
        self._prefixed(SEQUENCER_KEY_PREFIX).set(sequencer_key(sequencer.sequencer_address), _encode(sequencer))

    def get_sequencer(self, sequencer_address: str) -> Sequencer | None:
        """Return a sequencer by address, or None."""
        return self._get(SEQUENCER_KEY_PREFIX, sequencer_key(sequencer_address), Sequencer)

    def remove_sequencer(self, sequencer_address: str) -> None:
        self._prefixed(SEQUENCER_KEY_PREFIX).delete(sequencer_key(sequencer_address))

    def get_all_sequencer(self) -> list[Sequencer]:
        """All sequencers, in key order."""
        return self._all(SEQUENCER_KEY_PREFIX, Sequencer)

    def set_sequencers_by_rollapp(self, sequencers_by_rollapp: SequencersByRollapp) -> None:
        self._prefixed(SEQUENCERS_BY_ROLLAPP_KEY_PREFIX).set(
            sequencers_by_rollapp_key(sequencers_by_rollapp.rollapp_id),
            _encode(sequencers_by_rollapp),
        )

    def get_sequencers_by_rollapp(self, rollapp_id: str) -> SequencersByRollapp | None:
        """Return the sequencer list of a rollapp, or None."""
        return self._get(
            SEQUENCERS_BY_ROLLAPP_KEY_PREFIX, sequencers_by_rollapp_key(rollapp_id), SequencersByRollapp
        )

    def remove_sequencers_by_rollapp(self, rollapp_id: str) -> None:
        self._prefixed(SEQUENCERS_BY_ROLLAPP_KEY_PREFIX).delete(sequencers_by_rollapp_key(rollapp_id))

    def get_all_sequencers_by_rollapp(self) -> list[SequencersByRollapp]:
        """All per-rollapp sequencer lists, in key order."""
        return self._all(SEQUENCERS_BY_ROLLAPP_KEY_PREFIX, SequencersByRollapp)