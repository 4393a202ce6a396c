"""Shared pytest fixtures for forge-ledger tests."""

import json
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest

from forge_ledger.config import ExtractConfig
from forge_ledger.constants import ADMIN_SLOT, IMPLEMENTATION_SLOT

REGISTRY = "0x1111111111111111111111111111111111111111"
VAULT_IMPLEMENTATION = "0x2222222222222222222222222222222222222222"
VAULT_PROXY = "0x3333333333333333333333333333333333333333"
VALIDATOR = "0x5555555555555555555555555555555555555555"
VORTEX = "0x6666666666666666666666666666666666666666"
PROXY_ADMIN = "0x7777777777777777777777777777777777777777"


class FakeChainReader:
    """In-memory ChainReader; unknown queries return None."""

    def __init__(
        self,
        calls: Optional[Dict[Tuple[str, str], str]] = None,
        storage: Optional[Dict[Tuple[str, str], str]] = None,
    ):
        self.calls = calls or {}
        self.storage = storage or {}
        self.queries: List[Tuple[str, ...]] = []

    def to_checksum_address(self, address: Optional[str]) -> Optional[str]:
        return address or None

    def parse_bytes32_address(self, word: str) -> Optional[str]:
        word = word[2:] if word.startswith("0x") else word
        return "0x" + word[-40:]

    def read_storage_address(self, address: str, slot: str) -> Optional[str]:
        self.queries.append(("storage", address, slot))
        return self.storage.get((address, slot))

    def call_string(self, address: str, function: str) -> Optional[str]:
        self.queries.append(("call", address, function))
        return self.calls.get((address, function))


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def project_dir(tmp_path: Path, fixtures_dir: Path) -> Path:
    """Copy the sample Foundry project into a temporary directory."""
    root = tmp_path / "project"
    shutil.copytree(fixtures_dir / "project", root)
    return root


@pytest.fixture
def broadcast_path(project_dir: Path) -> Path:
    return project_dir / "broadcast" / "Deploy.s.sol" / "1" / "run-latest.json"


@pytest.fixture
def sample_broadcast_json(broadcast_path: Path) -> Dict[str, Any]:
    """Load and return the sample run-latest.json fixture."""
    with open(broadcast_path) as f:
        return json.load(f)


@pytest.fixture
def ledger_path(project_dir: Path) -> Path:
    return project_dir / "deployments" / "json" / "1.json"


@pytest.fixture
def config(project_dir: Path) -> ExtractConfig:
    return ExtractConfig.create(chain_id=1, rpc_url="http://rpc.example.com", root=project_dir)


@pytest.fixture
def make_reader():
    """Factory for in-memory chain readers."""
    return FakeChainReader


@pytest.fixture
def chain_reader() -> FakeChainReader:
    """Chain state matching the sample broadcast."""
    return FakeChainReader(
        calls={
            (REGISTRY, "version()"): "1.0.0",
            (VAULT_PROXY, "version()"): "2.0.0",
            (VALIDATOR, "name()"): "OwnableValidator",
            (VORTEX, "accountId()"): "vendor.vortex.1.2.0",
        },
        storage={
            (VAULT_PROXY, ADMIN_SLOT): PROXY_ADMIN,
            (VAULT_PROXY, IMPLEMENTATION_SLOT): VAULT_IMPLEMENTATION,
        },
    )


@pytest.fixture
def build_calls() -> List[Path]:
    """Project roots passed to the build step; use `build=build_calls.append`."""
    return []
