"""
The API client contract shared by every transport.

``ApiClient`` owns the request/response round trip: it asks a typed request
for its endpoint schema, lets the concrete transport bind and execute it, then
resolves the status code:

* 200 decodes the body into the request's response type;
* 204 returns the request's empty-success value, if it declares one;
* anything else raises UnexpectedHttpStatus without reading the body.

Concrete clients only say how a schema becomes a transport request, how that
request is executed, and where the status and body live on the response.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from functools import lru_cache
from http import HTTPStatus
from typing import TYPE_CHECKING, Any, Generic, List, Mapping, Optional, Sequence, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from sia_client.errors import (
    ResponseDecodeError,
    UnexpectedEmptyResponse,
    UnexpectedHttpStatus,
)
from sia_client.sia_api.endpoints import (
    AddressBalanceRequest,
    AddressBalanceResponse,
    AddressUnspentSiacoinsRequest,
    ConsensusTipRequest,
    EmptyResponse,
    Event,
    GetEventRequest,
    SiaApiRequest,
    SiacoinElement,
    TxpoolBroadcastRequest,
    TxpoolFeeRequest,
)
from sia_client.sia_api.schema import EndpointSchema
from sia_client.types import Address, Hash256

logger = logging.getLogger(__name__)

TransportRequestT = TypeVar("TransportRequestT")
TransportResponseT = TypeVar("TransportResponseT")
ResponseT = TypeVar("ResponseT")


def response_type_name(request_cls: Type[SiaApiRequest[Any]]) -> str:
    response_type = request_cls.response_type
    return getattr(response_type, "__name__", None) or repr(response_type)


@lru_cache(maxsize=None)
def _adapter_for(request_cls: Type[SiaApiRequest[Any]]) -> TypeAdapter[Any]:
    return TypeAdapter(request_cls.response_type)


def decode_response(
    request_cls: Type[SiaApiRequest[ResponseT]], body: bytes, *, url: Optional[str] = None
) -> ResponseT:
    """Decode a JSON body into the request's response type, all or nothing."""
    try:
        return _adapter_for(request_cls).validate_json(body)
    except ValidationError as exc:
        raise ResponseDecodeError(
            f"Response body does not match {response_type_name(request_cls)}", url=url
        ) from exc


class ApiClient(ABC, Generic[TransportRequestT, TransportResponseT]):
    """Dispatch typed requests over a transport."""

    @abstractmethod
    def process_schema(self, schema: EndpointSchema) -> TransportRequestT:
        """Bind a schema to this client's base URL."""

    def to_data_request(self, request: SiaApiRequest[Any]) -> TransportRequestT:
        return self.process_schema(request.to_endpoint_schema())

    @abstractmethod
    async def execute_request(self, request: TransportRequestT) -> TransportResponseT:
        """Send the request, mapping transport failures to TransportError or ApiTimeoutError."""

    @abstractmethod
    def status_code_of(self, response: TransportResponseT) -> int:
        ...

    @abstractmethod
    def response_body(self, response: TransportResponseT) -> bytes:
        ...

    def url_of(self, request: TransportRequestT) -> Optional[str]:
        return None

    async def dispatch(self, request: SiaApiRequest[ResponseT]) -> ResponseT:
        """Full round trip from a typed request to its typed response."""
        data_request = self.to_data_request(request)
        url = self.url_of(data_request)
        response = await self.execute_request(data_request)
        status_code = self.status_code_of(response)
        logger.debug(
            "request=%s url=%s status_code=%s",
            type(request).__name__,
            url,
            status_code,
            extra={"url": url, "status_code": status_code},
        )

        if status_code == HTTPStatus.OK:
            return decode_response(type(request), self.response_body(response), url=url)
        if status_code == HTTPStatus.NO_CONTENT:
            empty = request.is_empty_response()
            if empty is None:
                raise UnexpectedEmptyResponse(response_type_name(type(request)), url=url)
            return empty
        raise UnexpectedHttpStatus(status_code, url=url)


def _as_address(address: Address | str) -> Address:
    return address if isinstance(address, Address) else Address.parse(address)


def _as_hash(value: Hash256 | str) -> Hash256:
    return value if isinstance(value, Hash256) else Hash256.parse(value)


class ApiClientHelpers:
    """Convenience calls built only on ``dispatch``; mix into an ApiClient."""

    if TYPE_CHECKING:

        async def dispatch(self, request: SiaApiRequest[ResponseT]) -> ResponseT:
            ...

    async def current_height(self) -> int:
        tip = await self.dispatch(ConsensusTipRequest())
        return tip.height

    async def address_balance(self, address: Address | str) -> AddressBalanceResponse:
        return await self.dispatch(AddressBalanceRequest(address=_as_address(address)))

    async def get_event(self, txid: Hash256 | str) -> Event:
        return await self.dispatch(GetEventRequest(txid=_as_hash(txid)))

    async def address_unspent_siacoins(self, address: Address | str) -> List[SiacoinElement]:
        return await self.dispatch(
            AddressUnspentSiacoinsRequest(address=_as_address(address))
        )

    async def txpool_fee(self) -> int:
        return await self.dispatch(TxpoolFeeRequest())

    async def broadcast_transaction(
        self,
        transactions: Sequence[Mapping[str, Any]] = (),
        v2transactions: Sequence[Mapping[str, Any]] = (),
    ) -> EmptyResponse:
        request = TxpoolBroadcastRequest(
            transactions=tuple(transactions), v2transactions=tuple(v2transactions)
        )
        return await self.dispatch(request)
