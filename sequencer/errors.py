"""Errors raised by the sequencer module and its query service."""

from __future__ import annotations

import enum


class SequencerError(Exception):
    """Base of every registered error, optionally wrapped with context."""

    codespace = "sequencer"
    code = 1
    description = "sequencer error"

    def __init__(self, message: str = "") -> None:
        self.message = message
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.message:
            return f"{self.message}: {self.description}"
        return self.description


class ErrSequencerExists(SequencerError):
    code = 1000
    description = "sequencer already exist for this address; must use new sequencer address"


class ErrInvalidSequencerAddress(SequencerError):
    code = 1001
    description = "invalid sequencer address"


class ErrUnknownRollappID(SequencerError):
    code = 1002
    description = "rollapp does not exist"


class ErrMaxSequencersLimit(SequencerError):
    code = 1003
    description = "too many sequencers for rollapp"


class ErrSequencerNotPermissioned(SequencerError):
    code = 1004
    description = "sequencer is not permissioned for serving the rollapp"


class ErrUnknownSequencer(SequencerError):
    code = 1005
    description = "sequencer was not registered"


class ErrSequencerRollappMismatch(SequencerError):
    code = 1006
    description = "sequencer was not registered for this rollapp"


class ErrNotActiveSequencer(SequencerError):
    code = 1007
    description = "sequencer is not active"


class _SdkError(SequencerError):
    codespace = "sdk"


class ErrUnknownRequest(_SdkError):
    code = 6
    description = "unknown request"


class ErrInvalidAddress(_SdkError):
    code = 7
    description = "invalid address"


class ErrInvalidPubKey(_SdkError):
    code = 8
    description = "invalid pubkey"


class ErrInvalidRequest(_SdkError):
    code = 18
    description = "invalid request"


class ErrInvalidType(_SdkError):
    code = 29
    description = "invalid type"


class ErrLogic(_SdkError):
    code = 35
    description = "internal logic error"


class StatusCode(enum.IntEnum):
    """Status codes carried by query errors."""

    OK = 0
    CANCELLED = 1
    UNKNOWN = 2
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    PERMISSION_DENIED = 7
    RESOURCE_EXHAUSTED = 8
    FAILED_PRECONDITION = 9
    ABORTED = 10
    OUT_OF_RANGE = 11
    UNIMPLEMENTED = 12
    INTERNAL = 13
    UNAVAILABLE = 14
    DATA_LOSS = 15
    UNAUTHENTICATED = 16

    @property
    def label(self) -> str:
        """The conventional camel-case name of the code."""
        if self is StatusCode.OK:
            return "OK"
        if self is StatusCode.CANCELLED:
            return "Canceled"
        return "".join(part.capitalize() for part in self.name.split("_"))


class QueryError(Exception):
    """An error answered by the query service: a status code and a message."""

    def __init__(self, code: StatusCode, message: str) -> None:
        self.code = StatusCode(code)
        self.message = message
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"rpc error: code = {self.code.label} desc = {self.message}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QueryError):
            return NotImplemented
        return (self.code, self.message) == (other.code, other.message)

    def __hash__(self) -> int:
        return hash((self.code, self.message))