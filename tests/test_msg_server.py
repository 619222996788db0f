import pytest

from sequencer.description import MAX_MONIKER_LENGTH, Description
from sequencer.errors import (
    ErrInvalidPubKey,
    ErrInvalidRequest,
    ErrLogic,
    ErrMaxSequencersLimit,
    ErrSequencerExists,
    ErrSequencerNotPermissioned,
    ErrUnknownRequest,
    ErrUnknownRollappID,
)
from sequencer.keeper import Keeper
from sequencer.message import MsgCreateSequencer, PubKey
from sequencer.msg_server import MsgCreateSequencerResponse, MsgServer, handle
from sequencer.types import OperatingStatus, Rollapp, RollappKeeper, SequencersByRollapp

PUB_KEY = PubKey(key=b"\x02" * 33)


def setup_msg_server(rollapps=(), is_simulation=False):
    keeper = Keeper(rollapp_keeper=RollappKeeper(rollapps), is_simulation=is_simulation)
    return MsgServer(keeper), keeper


def msg(creator, rollapp_id="r1", pub_key=PUB_KEY, description=None):
    return MsgCreateSequencer(
        creator=creator,
        dymint_pub_key=pub_key,
        rollapp_id=rollapp_id,
        description=description or Description(),
    )


def test_first_sequencer_becomes_proposer():
    server, keeper = setup_msg_server([Rollapp("r1", max_sequencers=3)])
    assert server.create_sequencer(msg("alice")) == MsgCreateSequencerResponse()
    assert keeper.get_scheduler("alice").status is OperatingStatus.PROPOSER
    assert keeper.get_sequencers_by_rollapp("r1") == SequencersByRollapp("r1", ["alice"])
    stored = keeper.get_sequencer("alice")
    assert stored.rollapp_id == "r1"
    assert stored.dymint_pub_key == PUB_KEY.to_dict()


def test_next_sequencers_are_inactive():
    server, keeper = setup_msg_server([Rollapp("r1", max_sequencers=3)])
    server.create_sequencer(msg("alice"))
    server.create_sequencer(msg("bob"))
    assert keeper.get_scheduler("bob").status is OperatingStatus.INACTIVE
    assert keeper.get_sequencers_by_rollapp("r1").addresses == ["alice", "bob"]


def test_duplicate_sequencer_rejected():
    server, _ = setup_msg_server([Rollapp("r1", max_sequencers=3)])
    server.create_sequencer(msg("alice"))
    with pytest.raises(ErrSequencerExists):
        server.create_sequencer(msg("alice"))


def test_unknown_rollapp_rejected():
    server, keeper = setup_msg_server([])
    with pytest.raises(ErrUnknownRollappID):
        server.create_sequencer(msg("alice", rollapp_id="missing"))
    assert keeper.get_sequencer("alice") is None


def test_permissioned_rollapp():
    server, keeper = setup_msg_server(
        [Rollapp("r1", max_sequencers=3, permissioned_addresses=["alice"])]
    )
    with pytest.raises(ErrSequencerNotPermissioned):
        server.create_sequencer(msg("bob"))
    server.create_sequencer(msg("alice"))
    assert keeper.get_sequencer("alice").sequencer_address == "alice"
    assert keeper.get_sequencer("bob") is None


def test_max_sequencers_limit():
    server, keeper = setup_msg_server([Rollapp("r1", max_sequencers=1)])
    server.create_sequencer(msg("alice"))
    with pytest.raises(ErrMaxSequencersLimit):
        server.create_sequencer(msg("bob"))
    assert keeper.get_sequencers_by_rollapp("r1").addresses == ["alice"]


def test_more_sequencers_than_limit_is_logic_error():
    server, keeper = setup_msg_server([Rollapp("r1", max_sequencers=1)])
    keeper.set_sequencers_by_rollapp(SequencersByRollapp("r1", ["x", "y"]))
    with pytest.raises(ErrLogic) as exc:
        server.create_sequencer(msg("alice"))
    assert "cannot have more than 1 sequencers but got: 2" in str(exc.value)


def test_missing_pub_key_rejected():
    server, _ = setup_msg_server([Rollapp("r1", max_sequencers=3)])
    with pytest.raises(ErrInvalidPubKey):
        server.create_sequencer(msg("alice", pub_key=None))


def test_missing_pub_key_allowed_in_simulation():
    server, keeper = setup_msg_server([Rollapp("r1", max_sequencers=3)], is_simulation=True)
    server.create_sequencer(msg("alice", pub_key=None))
    assert keeper.get_sequencer("alice").dymint_pub_key is None


def test_long_description_rejected():
    server, keeper = setup_msg_server([Rollapp("r1", max_sequencers=3)])
    description = Description(moniker="a" * (MAX_MONIKER_LENGTH + 1))
    with pytest.raises(ErrInvalidRequest):
        server.create_sequencer(msg("alice", description=description))
    assert keeper.get_sequencer("alice") is None


def test_description_is_stored():
    server, keeper = setup_msg_server([Rollapp("r1", max_sequencers=3)])
    description = Description(moniker="node", website="example.com")
    server.create_sequencer(msg("alice", description=description))
    assert keeper.get_sequencer("alice").description == description


def test_handle_dispatches_create_sequencer():
    _, keeper = setup_msg_server([Rollapp("r1", max_sequencers=3)])
    assert handle(keeper, msg("alice")) == MsgCreateSequencerResponse()
    assert keeper.get_scheduler("alice").status is OperatingStatus.PROPOSER


def test_handle_unknown_message():
    _, keeper = setup_msg_server([])
    with pytest.raises(ErrUnknownRequest) as exc:
        handle(keeper, object())
    assert "unrecognized sequencer message type: object" in str(exc.value)