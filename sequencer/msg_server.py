"""Message handling: registration of new sequencers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import (
    ErrInvalidPubKey,
    ErrLogic,
    ErrMaxSequencersLimit,
    ErrSequencerExists,
    ErrSequencerNotPermissioned,
    ErrUnknownRequest,
    ErrUnknownRollappID,
)
from .keeper import Keeper
from .message import MsgCreateSequencer, PubKey
from .types import MODULE_NAME, OperatingStatus, Scheduler, Sequencer, SequencersByRollapp


@dataclass
class MsgCreateSequencerResponse:
    """Empty reply to a successful registration."""


class MsgServer:
    """Executes module messages against a Keeper."""

    def __init__(self, keeper: Keeper) -> None:
        self.keeper = keeper

    def create_sequencer(self, msg: MsgCreateSequencer) -> MsgCreateSequencerResponse:
        """Register the message's creator as a sequencer of its rollapp."""
        keeper = self.keeper

        # A missing key is tolerated only in simulation mode.
        if not keeper.is_simulation and msg.dymint_pub_key is None:
            raise ErrInvalidPubKey("sequencer pubkey can not be empty")

        if keeper.get_sequencer(msg.creator) is not None:
            raise ErrSequencerExists()

        rollapp = keeper.rollapp_keeper.get_rollapp(msg.rollapp_id)
        if rollapp is None:
            raise ErrUnknownRollappID()

        permissioned = rollapp.permissioned_addresses
        if permissioned and msg.creator not in permissioned:
            raise ErrSequencerNotPermissioned()

        existing = keeper.get_sequencers_by_rollapp(msg.rollapp_id)
        if existing is not None:
            max_sequencers = rollapp.max_sequencers
            current = len(existing.addresses)
            if max_sequencers < current:
                raise ErrLogic(
                    f"rollapp id: {msg.rollapp_id} cannot have more than {max_sequencers} "
                    f"sequencers but got: {current}"
                )
            if max_sequencers == current:
                raise ErrMaxSequencersLimit()
            by_rollapp = SequencersByRollapp(
                rollapp_id=existing.rollapp_id, addresses=[*existing.addresses, msg.creator]
            )
            status = OperatingStatus.INACTIVE
        else:
            by_rollapp = SequencersByRollapp(rollapp_id=msg.rollapp_id, addresses=[msg.creator])
            status = OperatingStatus.PROPOSER

        msg.description.ensure_length()

        keeper.set_scheduler(Scheduler(sequencer_address=msg.creator, status=status))
        keeper.set_sequencers_by_rollapp(by_rollapp)
        keeper.set_sequencer(
            Sequencer(
                sequencer_address=msg.creator,
                dymint_pub_key=_pub_key_json(msg.dymint_pub_key),
                description=msg.description,
                rollapp_id=msg.rollapp_id,
            )
        )
        return MsgCreateSequencerResponse()


def _pub_key_json(pub_key: Any) -> dict[str, str] | None:
    if pub_key is None:
        return None
    if isinstance(pub_key, PubKey):
        return pub_key.to_dict()
    return dict(pub_key)


def handle(keeper: Keeper, msg: object) -> MsgCreateSequencerResponse:
    """Dispatch a module message to its handler."""
    if isinstance(msg, MsgCreateSequencer):
        return MsgServer(keeper).create_sequencer(msg)
    raise ErrUnknownRequest(f"unrecognized {MODULE_NAME} message type: {type(msg).__name__}")