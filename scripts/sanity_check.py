"""Minimal sanity checks against a running walletd node."""

from __future__ import annotations

import asyncio
import logging
import os
import sys

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from sia_client.config import ClientConf, configure_logging  # noqa: E402
from sia_client.errors import ApiClientError  # noqa: E402
from sia_client.sia_api import NativeClient  # noqa: E402

logger = logging.getLogger("sanity_check")

# Optional inputs; the corresponding checks are skipped when unset.
SAMPLE_ADDRESS = os.getenv("SIA_SAMPLE_ADDRESS")
SAMPLE_EVENT_ID = os.getenv("SIA_SAMPLE_EVENT_ID")


async def main() -> int:
    configure_logging()
    try:
        client = await NativeClient.new(ClientConf.from_env())
    except ApiClientError as exc:
        logger.error("walletd not usable: %s", exc, extra={"error": type(exc).__name__})
        return 1

    async with client:
        print("Current height:", await client.current_height())
        print("Txpool fee:", await client.txpool_fee())
        if SAMPLE_ADDRESS:
            print("Balance:", await client.address_balance(SAMPLE_ADDRESS))
        if SAMPLE_EVENT_ID:
            print("Event:", await client.get_event(SAMPLE_EVENT_ID))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
