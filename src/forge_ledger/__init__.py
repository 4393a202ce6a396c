"""
forge-ledger: versioned deployment ledgers from Foundry broadcasts
"""

from importlib.metadata import PackageNotFoundError, version

from .chain import CastChainReader, ChainReader, RpcChainReader
from .config import ExtractConfig
from .exceptions import (
    ArtifactNotFoundError,
    BroadcastNotFoundError,
    BuildError,
    CommitAlreadyProcessedError,
    ConstructorArgumentsMismatchError,
    ExtractionError,
    ImplementationMismatchError,
    InvalidBroadcastError,
    LedgerNotFoundError,
    ScriptNotFoundError,
    UnsupportedChainError,
)
from .extract import generate_ledger, generate_markdown
from .types import ContractSnapshot, DeploymentRecord, HistoryEntry, Ledger

try:
    __version__ = version("forge-ledger")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "generate_ledger",
    "generate_markdown",
    "ExtractConfig",
    "ChainReader",
    "CastChainReader",
    "RpcChainReader",
    "Ledger",
    "DeploymentRecord",
    "HistoryEntry",
    "ContractSnapshot",
    "ExtractionError",
    "CommitAlreadyProcessedError",
    "ImplementationMismatchError",
    "ConstructorArgumentsMismatchError",
    "ArtifactNotFoundError",
    "ScriptNotFoundError",
    "LedgerNotFoundError",
    "BroadcastNotFoundError",
    "InvalidBroadcastError",
    "UnsupportedChainError",
    "BuildError",
]
