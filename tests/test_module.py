import json

import pytest

from sequencer.errors import ErrUnknownRequest
from sequencer.genesis_state import GenesisState
from sequencer.keeper import Keeper
from sequencer.module import AppModule, export_genesis, init_genesis
from sequencer.types import (
    Scheduler,
    Sequencer,
    SequencersByRollapp,
    default_params,
)


def _genesis_state():
    return GenesisState(
        params=default_params(),
        sequencer_list=[Sequencer(sequencer_address="0"), Sequencer(sequencer_address="1")],
        sequencers_by_rollapp_list=[
            SequencersByRollapp(rollapp_id="0"),
            SequencersByRollapp(rollapp_id="1"),
        ],
        scheduler_list=[Scheduler(sequencer_address="0"), Scheduler(sequencer_address="1")],
    )


def _by(attr):
    return lambda item: getattr(item, attr)


def test_genesis_round_trip():
    genesis_state = _genesis_state()
    keeper = Keeper()
    init_genesis(keeper, genesis_state)
    got = export_genesis(keeper)

    assert sorted(got.sequencer_list, key=_by("sequencer_address")) == sorted(
        genesis_state.sequencer_list, key=_by("sequencer_address")
    )
    assert sorted(got.sequencers_by_rollapp_list, key=_by("rollapp_id")) == sorted(
        genesis_state.sequencers_by_rollapp_list, key=_by("rollapp_id")
    )
    assert sorted(got.scheduler_list, key=_by("sequencer_address")) == sorted(
        genesis_state.scheduler_list, key=_by("sequencer_address")
    )
    assert got.params == default_params()


def test_app_module_json_round_trip():
    module = AppModule(Keeper())
    data = json.dumps(_genesis_state().to_dict())
    assert module.init_genesis(data) == []
    exported = GenesisState.from_dict(json.loads(module.export_genesis()))
    assert exported.sequencer_list == _genesis_state().sequencer_list
    assert exported.scheduler_list == _genesis_state().scheduler_list


def test_default_genesis_is_empty_and_valid():
    module = AppModule(Keeper())
    decoded = json.loads(module.default_genesis())
    assert decoded["sequencerList"] == []
    assert decoded["schedulerList"] == []
    assert decoded["sequencersByRollappList"] == []
    module.validate_genesis(module.default_genesis())


def test_validate_genesis_rejects_duplicates():
    state = GenesisState(
        sequencer_list=[Sequencer(sequencer_address="0"), Sequencer(sequencer_address="0")]
    )
    with pytest.raises(ValueError, match="duplicated index for sequencer"):
        AppModule(Keeper()).validate_genesis(json.dumps(state.to_dict()))


def test_validate_genesis_rejects_bad_json():
    with pytest.raises(ValueError, match="failed to unmarshal sequencer genesis state"):
        AppModule(Keeper()).validate_genesis(b"not json")


def test_validate_genesis_rejects_non_object():
    with pytest.raises(ValueError, match="failed to unmarshal sequencer genesis state"):
        AppModule(Keeper()).validate_genesis("[1, 2]")


def test_module_identity():
    module = AppModule(Keeper())
    assert module.name() == "sequencer"
    assert module.consensus_version() == 2
    assert module.end_block() == []


def test_route_rejects_unknown_message():
    key, handler = AppModule(Keeper()).route()
    assert key == "sequencer"
    with pytest.raises(ErrUnknownRequest) as info:
        handler(object())
    assert "unrecognized sequencer message type" in str(info.value)