"""
Typed walletd requests and the response shapes they decode into.

Every request is a frozen dataclass that knows its endpoint schema, the type
its 200 body decodes into, and whether a 204 No Content reply is an
acceptable success. Only requests that override ``is_empty_response`` accept
an empty body.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar, Dict, Generic, List, Mapping, Optional, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from sia_client.sia_api.schema import EndpointSchema, HttpMethod
from sia_client.types import Address, Currency, Hash256, Uint64

ResponseT = TypeVar("ResponseT")


class SiaModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class EmptyResponse(SiaModel):
    """Returned by requests whose endpoint answers 204 No Content."""


class ChainIndex(SiaModel):
    height: Uint64
    id: str


class ConsensusTipResponse(SiaModel):
    height: Uint64
    id: str


class AddressBalanceResponse(SiaModel):
    siacoins: Currency
    immature_siacoins: Currency = Field(alias="immatureSiacoins")
    siafunds: Uint64


class Event(SiaModel):
    id: str
    index: ChainIndex
    timestamp: datetime
    maturity_height: Uint64 = Field(alias="maturityHeight")
    type: str
    data: Dict[str, Any]
    relevant: List[str] = Field(default_factory=list)


class SiacoinOutput(SiaModel):
    value: Currency
    address: str


class SiacoinElement(SiaModel):
    id: str
    siacoin_output: SiacoinOutput = Field(alias="siacoinOutput")
    maturity_height: Uint64 = Field(alias="maturityHeight")


class SiaApiRequest(ABC, Generic[ResponseT]):
    """A request value paired with exactly one response type."""

    response_type: ClassVar[Any]

    @abstractmethod
    def to_endpoint_schema(self) -> EndpointSchema:
        """Describe the HTTP call for this request."""

    @classmethod
    def is_empty_response(cls) -> Optional[ResponseT]:
        """Value to return on 204 No Content, or None if 204 is not acceptable."""
        return None


@dataclass(frozen=True)
class ConsensusTipRequest(SiaApiRequest[ConsensusTipResponse]):
    response_type: ClassVar[Any] = ConsensusTipResponse

    def to_endpoint_schema(self) -> EndpointSchema:
        return EndpointSchema(method=HttpMethod.GET, path_schema="api/consensus/tip")


@dataclass(frozen=True)
class AddressBalanceRequest(SiaApiRequest[AddressBalanceResponse]):
    address: Address

    response_type: ClassVar[Any] = AddressBalanceResponse

    def to_endpoint_schema(self) -> EndpointSchema:
        return EndpointSchema(
            method=HttpMethod.GET,
            path_schema="api/addresses/{address}/balance",
            path_params={"address": str(self.address)},
        )


@dataclass(frozen=True)
class GetEventRequest(SiaApiRequest[Event]):
    txid: Hash256

    response_type: ClassVar[Any] = Event

    def to_endpoint_schema(self) -> EndpointSchema:
        return EndpointSchema(
            method=HttpMethod.GET,
            path_schema="api/events/{txid}",
            path_params={"txid": str(self.txid)},
        )


@dataclass(frozen=True)
class AddressUnspentSiacoinsRequest(SiaApiRequest[List[SiacoinElement]]):
    address: Address

    response_type: ClassVar[Any] = List[SiacoinElement]

    def to_endpoint_schema(self) -> EndpointSchema:
        return EndpointSchema(
            method=HttpMethod.GET,
            path_schema="api/addresses/{address}/outputs/siacoin",
            path_params={"address": str(self.address)},
        )


@dataclass(frozen=True)
class TxpoolFeeRequest(SiaApiRequest[int]):
    """Recommended fee per byte, in hastings."""

    response_type: ClassVar[Any] = Currency

    def to_endpoint_schema(self) -> EndpointSchema:
        return EndpointSchema(method=HttpMethod.GET, path_schema="api/txpool/fee")


@dataclass(frozen=True)
class TxpoolBroadcastRequest(SiaApiRequest[EmptyResponse]):
    """
    Submit signed transactions to the node's pool.

    Transactions are passed through as already-encoded JSON objects; walletd
    answers 204 No Content on success.
    """

    transactions: Tuple[Mapping[str, Any], ...] = ()
    v2transactions: Tuple[Mapping[str, Any], ...] = ()
    basis: Optional[ChainIndex] = None

    response_type: ClassVar[Any] = EmptyResponse

    def to_endpoint_schema(self) -> EndpointSchema:
        body: Dict[str, Any] = {
            "transactions": [dict(txn) for txn in self.transactions],
            "v2transactions": [dict(txn) for txn in self.v2transactions],
        }
        if self.basis is not None:
            body["basis"] = self.basis.model_dump(by_alias=True)
        return EndpointSchema(
            method=HttpMethod.POST,
            path_schema="api/txpool/broadcast",
            body=body,
        )

    @classmethod
    def is_empty_response(cls) -> Optional[EmptyResponse]:
        return EmptyResponse()
