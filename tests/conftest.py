import os
import sys

import pytest

# Ensure repository root is on sys.path before importing project modules.
repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

from sia_client.config import ClientConf  # noqa: E402
from sia_client.types import Address, Hash256  # noqa: E402

BASE_URL = "https://node.example/"
PASSWORD = "password"


@pytest.fixture
def conf() -> ClientConf:
    return ClientConf(url=BASE_URL, password=PASSWORD, timeout=10)


@pytest.fixture
def address() -> Address:
    return Address(bytes(range(32)))


@pytest.fixture
def txid() -> Hash256:
    return Hash256(bytes(range(32, 64)))
