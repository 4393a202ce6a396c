"""Run configuration for forge-ledger."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .constants import DEFAULT_RPC_ENV, DEFAULT_SCRIPT_NAME, SCRIPT_EXTENSION
from .paths import get_default_root


def normalize_script_name(name: str) -> str:
    """Append the Foundry script extension when it is missing."""
    if not name.endswith(SCRIPT_EXTENSION):
        return name + SCRIPT_EXTENSION
    return name


@dataclass(frozen=True)
class ExtractConfig:
    """Immutable settings for one extraction run."""

    chain_id: int
    rpc_url: Optional[str] = None
    script_name: str = DEFAULT_SCRIPT_NAME
    force: bool = False
    skip_json: bool = False
    root: Path = field(default_factory=get_default_root)
    reader: str = "cast"

    @classmethod
    def create(
        cls,
        chain_id: int,
        rpc_url: Optional[str] = None,
        script_name: Optional[str] = None,
        force: bool = False,
        skip_json: bool = False,
        root: Optional[Path] = None,
        reader: str = "cast",
    ) -> "ExtractConfig":
        """
        Build a configuration, applying defaults.

        Args:
            chain_id: Chain id of the broadcast
            rpc_url: RPC endpoint (defaults to $RPC_URL)
            script_name: Deployment script name, with or without ".s.sol"
            force: Reprocess a commit that is already in the ledger history
            skip_json: Render markdown from the existing ledger only
            root: Foundry project root (defaults to cwd)
            reader: Chain reader backend, "cast" or "rpc"

        Returns:
            ExtractConfig instance
        """
        if rpc_url is None:
            rpc_url = os.environ.get(DEFAULT_RPC_ENV)

        return cls(
            chain_id=chain_id,
            rpc_url=rpc_url,
            script_name=normalize_script_name(script_name or DEFAULT_SCRIPT_NAME),
            force=force,
            skip_json=skip_json,
            root=Path(root).absolute() if root is not None else get_default_root(),
            reader=reader,
        )
