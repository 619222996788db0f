"""Store keys, records and collaborators of the sequencer module."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from .description import Description

MODULE_NAME = "sequencer"
STORE_KEY = MODULE_NAME
ROUTER_KEY = MODULE_NAME
QUERIER_ROUTE = MODULE_NAME
MEM_STORE_KEY = "mem_sequencer"

SEQUENCER_KEY_PREFIX = "Sequencer/value/"
SCHEDULER_KEY_PREFIX = "Scheduler/value/"
SEQUENCERS_BY_ROLLAPP_KEY_PREFIX = "SequencersByRollapp/value/"

MSG_CREATE_SEQUENCER_AMINO_NAME = "sequencer/CreateSequencer"


def key_prefix(prefix: str) -> bytes:
    """Return the store prefix for ``prefix``."""
    return prefix.encode("utf-8")


def _index_key(index: str) -> bytes:
    return index.encode("utf-8") + b"/"


def sequencer_key(sequencer_address: str) -> bytes:
    """Store key of a sequencer."""
    return _index_key(sequencer_address)


def scheduler_key(sequencer_address: str) -> bytes:
    """Store key of a scheduler entry."""
    return _index_key(sequencer_address)


def sequencers_by_rollapp_key(rollapp_id: str) -> bytes:
    """Store key of the sequencer list of a rollapp."""
    return _index_key(rollapp_id)


class OperatingStatus(enum.IntEnum):
    """Operating status of a sequencer."""

    UNSPECIFIED = 0
    INACTIVE = 1
    PROPOSER = 2

    @property
    def proto_name(self) -> str:
        return f"OPERATING_STATUS_{self.name}"

    @classmethod
    def parse(cls, value: Any) -> "OperatingStatus":
        """Accept an enum, an integer or a wire name."""
        if isinstance(value, str):
            for status in cls:
                if value in (status.proto_name, status.name):
                    return status
            raise ValueError(f"unknown operating status {value!r}")
        return cls(value)


@dataclass
class Sequencer:
    """A registered sequencer. ``dymint_pub_key`` is the JSON form of its key."""

    sequencer_address: str = ""
    dymint_pub_key: dict[str, str] | None = None
    rollapp_id: str = ""
    description: Description = field(default_factory=Description)

    def to_dict(self) -> dict[str, Any]:
        return {
            "sequencerAddress": self.sequencer_address,
            "dymintPubKey": dict(self.dymint_pub_key) if self.dymint_pub_key is not None else None,
            "rollappId": self.rollapp_id,
            "description": self.description.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Sequencer":
        pub_key = data.get("dymintPubKey")
        return cls(
            sequencer_address=data.get("sequencerAddress", ""),
            dymint_pub_key=dict(pub_key) if pub_key is not None else None,
            rollapp_id=data.get("rollappId", ""),
            description=Description.from_dict(data.get("description") or {}),
        )


@dataclass
class Scheduler:
    """Operating status of a sequencer, indexed by its address."""

    sequencer_address: str = ""
    status: OperatingStatus = OperatingStatus.UNSPECIFIED

    def to_dict(self) -> dict[str, Any]:
        return {
            "sequencerAddress": self.sequencer_address,
            "status": OperatingStatus(self.status).proto_name,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Scheduler":
        return cls(
            sequencer_address=data.get("sequencerAddress", ""),
            status=OperatingStatus.parse(data.get("status", OperatingStatus.UNSPECIFIED)),
        )


@dataclass
class SequencersByRollapp:
    """Addresses of the sequencers serving a rollapp, in registration order."""

    rollapp_id: str = ""
    addresses: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "rollappId": self.rollapp_id,
            "sequencers": {"addresses": list(self.addresses)},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SequencersByRollapp":
        sequencers = data.get("sequencers") or {}
        return cls(
            rollapp_id=data.get("rollappId", ""),
            addresses=list(sequencers.get("addresses") or []),
        )


@dataclass
class SequencerInfo:
    """A sequencer together with its operating status."""

    sequencer: Sequencer = field(default_factory=Sequencer)
    status: OperatingStatus = OperatingStatus.UNSPECIFIED


@dataclass(frozen=True)
class Params:
    """Module parameters; the module currently has none."""

    def validate(self) -> None:
        """Every parameter set is valid."""
        return None

    def __str__(self) -> str:
        return "{}\n"


def default_params() -> Params:
    """Return the default parameter set."""
    return Params()


@dataclass
class Rollapp:
    """The part of a rollapp record the sequencer module reads."""

    rollapp_id: str
    max_sequencers: int = 0
    permissioned_addresses: list[str] = field(default_factory=list)


class RollappKeeper:
    """Lookup of registered rollapps by id."""

    def __init__(self, rollapps: Iterable[Rollapp] = ()) -> None:
        self._rollapps = {rollapp.rollapp_id: rollapp for rollapp in rollapps}

    def get_rollapp(self, rollapp_id: str) -> Rollapp | None:
        """Return the rollapp, or None if it is not registered."""
        return self._rollapps.get(rollapp_id)