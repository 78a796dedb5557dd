"""End-to-end dispatch against an in-process FastAPI stand-in for walletd."""

import base64

import httpx
import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from sia_client.config import ClientConf
from sia_client.errors import ResponseDecodeError, UnexpectedHttpStatus
from sia_client.sia_api.endpoints import EmptyResponse, GetEventRequest
from sia_client.sia_api.native import NativeClient
from sia_client.types import Hash256

KNOWN_EVENT_ID = "ab" * 32


def create_fake_walletd(password: str = "password") -> FastAPI:
    app = FastAPI()
    app.state.broadcasts = []
    expected_auth = "Basic " + base64.b64encode(f":{password}".encode()).decode()

    @app.middleware("http")
    async def require_password(request: Request, call_next):
        if request.headers.get("authorization") != expected_auth:
            return PlainTextResponse("API authentication failed", status_code=401)
        return await call_next(request)

    @app.get("/api/consensus/tip")
    async def consensus_tip():
        return {"height": 500000, "id": "bid:" + "00" * 32}

    @app.get("/api/addresses/{address}/balance")
    async def address_balance(address: str):
        return {"siacoins": "1000000000000000000000000", "immatureSiacoins": "0", "siafunds": 0}

    @app.get("/api/events/{event_id}")
    async def event(event_id: str):
        if event_id != KNOWN_EVENT_ID:
            return PlainTextResponse("event not found", status_code=404)
        return {
            "id": event_id,
            "index": {"height": 499990, "id": "bid"},
            "timestamp": "2024-05-01T12:00:00Z",
            "maturityHeight": 500134,
            "type": "miner",
            "data": {"siacoinElement": {"id": "x"}},
            "relevant": ["addr1"],
        }

    @app.get("/api/txpool/fee")
    async def txpool_fee():
        return "30"

    @app.get("/api/addresses/{address}/outputs/siacoin")
    async def unspent(address: str):
        return JSONResponse({"unexpected": "shape"})

    @app.post("/api/txpool/broadcast")
    async def broadcast(request: Request):
        app.state.broadcasts.append(await request.json())
        return Response(status_code=204)

    return app


@pytest.fixture
def fake_walletd() -> FastAPI:
    return create_fake_walletd()


def walletd_conf(password: str = "password") -> ClientConf:
    return ClientConf(url="https://node.example/", password=password, timeout=10)


@pytest.mark.asyncio
async def test_round_trip_against_fake_node(fake_walletd, address):
    transport = httpx.ASGITransport(app=fake_walletd)
    client = await NativeClient.new(walletd_conf(), transport=transport)
    async with client:
        assert await client.current_height() == 500000

        balance = await client.address_balance(address)
        assert balance.siacoins == 10**24
        assert balance.siafunds == 0

        assert await client.txpool_fee() == 30

        event = await client.dispatch(GetEventRequest(txid=Hash256.parse(KNOWN_EVENT_ID)))
        assert event.maturity_height == 500134
        assert event.index.height == 499990
        assert event.timestamp.year == 2024

        result = await client.broadcast_transaction(v2transactions=[{"id": "t1"}])
        assert result == EmptyResponse()
    assert fake_walletd.state.broadcasts == [{"transactions": [], "v2transactions": [{"id": "t1"}]}]


@pytest.mark.asyncio
async def test_wrong_password_fails_startup_check(fake_walletd):
    transport = httpx.ASGITransport(app=fake_walletd)
    with pytest.raises(UnexpectedHttpStatus) as excinfo:
        await NativeClient.new(walletd_conf("wrong"), transport=transport)
    assert excinfo.value.status_code == 401


@pytest.mark.asyncio
async def test_unknown_event_is_unexpected_status(fake_walletd):
    async with NativeClient(walletd_conf(), transport=httpx.ASGITransport(app=fake_walletd)) as client:
        with pytest.raises(UnexpectedHttpStatus) as excinfo:
            await client.get_event("cd" * 32)
    assert excinfo.value.status_code == 404
    assert excinfo.value.url.endswith("/api/events/" + "cd" * 32)


@pytest.mark.asyncio
async def test_shape_drift_is_decode_error(fake_walletd, address):
    async with NativeClient(walletd_conf(), transport=httpx.ASGITransport(app=fake_walletd)) as client:
        with pytest.raises(ResponseDecodeError):
            await client.address_unspent_siacoins(address)
