"""Checks run by the rollapp module before it accepts a state update."""

from __future__ import annotations

from .errors import (
    ErrLogic,
    ErrNotActiveSequencer,
    ErrSequencerRollappMismatch,
    ErrUnknownSequencer,
)
from .keeper import Keeper
from .types import OperatingStatus


class RollappHooks:
    """Rollapp hooks backed by the sequencer keeper."""

    def __init__(self, keeper: Keeper) -> None:
        self.keeper = keeper

    def before_update_state(self, sequencer_address: str, rollapp_id: str) -> None:
        """Raise unless the sequencer is the active proposer of ``rollapp_id``."""
        sequencer = self.keeper.get_sequencer(sequencer_address)
        if sequencer is None:
            raise ErrUnknownSequencer()

        if sequencer.rollapp_id != rollapp_id:
            raise ErrSequencerRollappMismatch()

        scheduler = self.keeper.get_scheduler(sequencer_address)
        if scheduler is None:
            raise ErrLogic(f"sequencer address: {sequencer_address} not registered in scheduler")
        if scheduler.status != OperatingStatus.PROPOSER:
            raise ErrNotActiveSequencer()