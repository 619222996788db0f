"""Genesis state of the sequencer module."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping

from .types import (
    Params,
    Scheduler,
    Sequencer,
    SequencersByRollapp,
    default_params,
    scheduler_key,
    sequencer_key,
    sequencers_by_rollapp_key,
)

DEFAULT_INDEX = 1


def _check_unique(items: Iterable[Any], key: Callable[[Any], bytes], name: str) -> None:
    seen: set[bytes] = set()
    for item in items:
        index = key(item)
        if index in seen:
            raise ValueError(f"duplicated index for {name}")
        seen.add(index)


@dataclass
class GenesisState:
    """Everything stored by the module at chain start."""

    params: Params = field(default_factory=Params)
    sequencer_list: list[Sequencer] = field(default_factory=list)
    sequencers_by_rollapp_list: list[SequencersByRollapp] = field(default_factory=list)
    scheduler_list: list[Scheduler] = field(default_factory=list)

    def validate(self) -> None:
        """Raise ValueError on duplicated indexes, then validate params."""
        _check_unique(self.sequencer_list, lambda s: sequencer_key(s.sequencer_address), "sequencer")
        _check_unique(
            self.sequencers_by_rollapp_list,
            lambda s: sequencers_by_rollapp_key(s.rollapp_id),
            "sequencersByRollapp",
        )
        _check_unique(self.scheduler_list, lambda s: scheduler_key(s.sequencer_address), "scheduler")
        self.params.validate()

    def to_dict(self) -> dict[str, Any]:
        return {
            "params": {},
            "sequencerList": [s.to_dict() for s in self.sequencer_list],
            "sequencersByRollappList": [s.to_dict() for s in self.sequencers_by_rollapp_list],
            "schedulerList": [s.to_dict() for s in self.scheduler_list],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GenesisState":
        return cls(
            params=Params(),
            sequencer_list=[Sequencer.from_dict(d) for d in data.get("sequencerList") or []],
            sequencers_by_rollapp_list=[
                SequencersByRollapp.from_dict(d) for d in data.get("sequencersByRollappList") or []
            ],
            scheduler_list=[Scheduler.from_dict(d) for d in data.get("schedulerList") or []],
        )


def default_genesis() -> GenesisState:
    """Return the empty default genesis state."""
    return GenesisState(params=default_params())