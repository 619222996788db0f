"""Read-only query service of the sequencer module."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, TypeVar

from .errors import ErrLogic, QueryError, SequencerError, StatusCode
from .keeper import Keeper
from .store import PageRequest, PageResponse, PrefixStore, paginate
from .types import (
    SCHEDULER_KEY_PREFIX,
    SEQUENCER_KEY_PREFIX,
    SEQUENCERS_BY_ROLLAPP_KEY_PREFIX,
    Params,
    Scheduler,
    Sequencer,
    SequencerInfo,
    SequencersByRollapp,
    key_prefix,
    scheduler_key,
    sequencer_key,
)

_T = TypeVar("_T")


@dataclass
class QueryParamsRequest:
    """Asks for the module parameters."""


@dataclass
class QueryParamsResponse:
    params: Params = field(default_factory=Params)


@dataclass
class QueryGetSchedulerRequest:
    sequencer_address: str = ""


@dataclass
class QueryGetSchedulerResponse:
    scheduler: Scheduler = field(default_factory=Scheduler)


@dataclass
class QueryAllSchedulerRequest:
    pagination: PageRequest | None = None


@dataclass
class QueryAllSchedulerResponse:
    scheduler: list[Scheduler] = field(default_factory=list)
    pagination: PageResponse = field(default_factory=PageResponse)


@dataclass
class QueryGetSequencerRequest:
    sequencer_address: str = ""


@dataclass
class QueryGetSequencerResponse:
    sequencer_info: SequencerInfo = field(default_factory=SequencerInfo)


@dataclass
class QueryAllSequencerRequest:
    pagination: PageRequest | None = None


@dataclass
class QueryAllSequencerResponse:
    sequencer_info_list: list[SequencerInfo] = field(default_factory=list)
    pagination: PageResponse = field(default_factory=PageResponse)


@dataclass
class QueryGetSequencersByRollappRequest:
    rollapp_id: str = ""


@dataclass
class QueryGetSequencersByRollappResponse:
    rollapp_id: str = ""
    sequencer_info_list: list[SequencerInfo] = field(default_factory=list)


@dataclass
class QueryAllSequencersByRollappRequest:
    pagination: PageRequest | None = None


@dataclass
class QueryAllSequencersByRollappResponse:
    sequencers_by_rollapp: list[QueryGetSequencersByRollappResponse] = field(default_factory=list)
    pagination: PageResponse = field(default_factory=PageResponse)


def _load(cls: Any, raw: bytes) -> Any:
    return cls.from_dict(json.loads(raw))


def _require(request: object) -> None:
    if request is None:
        raise QueryError(StatusCode.INVALID_ARGUMENT, "invalid request")


class QueryService:
    """Answers queries against the state kept by a Keeper."""

    def __init__(self, keeper: Keeper) -> None:
        self.keeper = keeper

    def _prefixed(self, prefix: str) -> PrefixStore:
        return PrefixStore(self.keeper.store, key_prefix(prefix))

    def _page(
        self,
        prefix: str,
        page_request: PageRequest | None,
        convert: Callable[[bytes], _T],
    ) -> tuple[list[_T], PageResponse]:
        results: list[_T] = []
        try:
            page = paginate(
                self._prefixed(prefix),
                page_request,
                lambda _key, value: results.append(convert(value)),
            )
        except (SequencerError, ValueError) as exc:
            raise QueryError(StatusCode.INTERNAL, str(exc)) from exc
        return results, page

    def _info(self, sequencer: Sequencer) -> SequencerInfo:
        raw = self._prefixed(SCHEDULER_KEY_PREFIX).get(scheduler_key(sequencer.sequencer_address))
        if raw is None:
            raise ErrLogic(f"scheduler was not found for sequencer {sequencer.sequencer_address}")
        scheduler = _load(Scheduler, raw)
        return SequencerInfo(sequencer=sequencer, status=scheduler.status)

    def _infos(self, addresses: Iterable[str]) -> list[SequencerInfo]:
        sequencer_store = self._prefixed(SEQUENCER_KEY_PREFIX)
        infos = []
        for address in addresses:
            raw = sequencer_store.get(sequencer_key(address))
            if raw is None:
                raise ErrLogic(f"sequencer was not found for address {address}")
            infos.append(self._info(_load(Sequencer, raw)))
        return infos

    def params(self, request: QueryParamsRequest | None) -> QueryParamsResponse:
        _require(request)
        return QueryParamsResponse(params=self.keeper.get_params())

    def scheduler(self, request: QueryGetSchedulerRequest | None) -> QueryGetSchedulerResponse:
        _require(request)
        found = self.keeper.get_scheduler(request.sequencer_address)
        if found is None:
            raise QueryError(StatusCode.NOT_FOUND, "not found")
        return QueryGetSchedulerResponse(scheduler=found)

    def scheduler_all(self, request: QueryAllSchedulerRequest | None) -> QueryAllSchedulerResponse:
        _require(request)
        schedulers, page = self._page(
            SCHEDULER_KEY_PREFIX, request.pagination, lambda raw: _load(Scheduler, raw)
        )
        return QueryAllSchedulerResponse(scheduler=schedulers, pagination=page)

    def sequencer(self, request: QueryGetSequencerRequest | None) -> QueryGetSequencerResponse:
        _require(request)
        found = self.keeper.get_sequencer(request.sequencer_address)
        if found is None:
            raise QueryError(StatusCode.NOT_FOUND, "not found")
        scheduler = self.keeper.get_scheduler(request.sequencer_address)
        if scheduler is None:
            raise ErrLogic(f"scheduler was not found for sequencer {request.sequencer_address}")
        return QueryGetSequencerResponse(
            sequencer_info=SequencerInfo(sequencer=found, status=scheduler.status)
        )

    def sequencer_all(self, request: QueryAllSequencerRequest | None) -> QueryAllSequencerResponse:
        _require(request)
        infos, page = self._page(
            SEQUENCER_KEY_PREFIX,
            request.pagination,
            lambda raw: self._info(_load(Sequencer, raw)),
        )
        return QueryAllSequencerResponse(sequencer_info_list=infos, pagination=page)

    def sequencers_by_rollapp(
        self, request: QueryGetSequencersByRollappRequest | None
    ) -> QueryGetSequencersByRollappResponse:
        _require(request)
        found = self.keeper.get_sequencers_by_rollapp(request.rollapp_id)
        if found is None:
            raise QueryError(StatusCode.NOT_FOUND, "not found")
        return QueryGetSequencersByRollappResponse(
            rollapp_id=request.rollapp_id,
            sequencer_info_list=self._infos(found.addresses),
        )

    def sequencers_by_rollapp_all(
        self, request: QueryAllSequencersByRollappRequest | None
    ) -> QueryAllSequencersByRollappResponse:
        _require(request)

        def convert(raw: bytes) -> QueryGetSequencersByRollappResponse:
            entry = _load(SequencersByRollapp, raw)
            return QueryGetSequencersByRollappResponse(
                rollapp_id=entry.rollapp_id,
                sequencer_info_list=self._infos(entry.addresses),
            )

        entries, page = self._page(SEQUENCERS_BY_ROLLAPP_KEY_PREFIX, request.pagination, convert)
        return QueryAllSequencersByRollappResponse(sequencers_by_rollapp=entries, pagination=page)