"""Typed request dispatch for the walletd HTTP API."""

from sia_client.errors import (
    ApiClientError,
    ApiTimeoutError,
    BuildError,
    InvalidIdentifierError,
    NodeUnreachableError,
    ResponseDecodeError,
    TransportError,
    UnexpectedEmptyResponse,
    UnexpectedHttpStatus,
    UrlParseError,
)

from .client import ApiClient, ApiClientHelpers
from .endpoints import (
    AddressBalanceRequest,
    AddressBalanceResponse,
    AddressUnspentSiacoinsRequest,
    ChainIndex,
    ConsensusTipRequest,
    ConsensusTipResponse,
    EmptyResponse,
    Event,
    GetEventRequest,
    SiaApiRequest,
    SiacoinElement,
    SiacoinOutput,
    TxpoolBroadcastRequest,
    TxpoolFeeRequest,
)
from .native import NativeClient
from .schema import EndpointSchema, HttpMethod

__all__ = [
    "ApiClient",
    "ApiClientHelpers",
    "NativeClient",
    "EndpointSchema",
    "HttpMethod",
    "SiaApiRequest",
    "ConsensusTipRequest",
    "ConsensusTipResponse",
    "AddressBalanceRequest",
    "AddressBalanceResponse",
    "GetEventRequest",
    "Event",
    "ChainIndex",
    "AddressUnspentSiacoinsRequest",
    "SiacoinElement",
    "SiacoinOutput",
    "TxpoolFeeRequest",
    "TxpoolBroadcastRequest",
    "EmptyResponse",
    "ApiClientError",
    "BuildError",
    "UrlParseError",
    "TransportError",
    "NodeUnreachableError",
    "ResponseDecodeError",
    "ApiTimeoutError",
    "UnexpectedHttpStatus",
    "UnexpectedEmptyResponse",
    "InvalidIdentifierError",
]
