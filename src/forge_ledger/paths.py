"""Path management utilities for forge-ledger."""

from pathlib import Path
from typing import Optional, Union


def get_default_root() -> Path:
    """
    Get default project root (current working directory).

    Returns:
        Absolute path of the Foundry project being processed
    """
    return Path.cwd()


def _resolve_root(root: Optional[Union[Path, str]]) -> Path:
    if root is None:
        return get_default_root()
    return Path(root).absolute()


def get_ledger_paths(
    chain_id: int, root: Optional[Union[Path, str]] = None
) -> tuple[Path, Path]:
    """
    Get ledger output paths for a chain.

    Args:
        chain_id: Numeric chain id
        root: Project root (defaults to the current working directory)

    Returns:
        Tuple of (json_path, markdown_path)
    """
    deployments_dir = _resolve_root(root) / "deployments"

    json_path = deployments_dir / "json" / f"{chain_id}.json"
    markdown_path = deployments_dir / f"{chain_id}.md"

    return (json_path, markdown_path)


def get_broadcast_path(
    script_name: str, chain_id: int, root: Optional[Union[Path, str]] = None
) -> Path:
    """Path to the latest Foundry broadcast of a script on a chain."""
    return _resolve_root(root) / "broadcast" / script_name / str(chain_id) / "run-latest.json"


def get_script_path(script_name: str, root: Optional[Union[Path, str]] = None) -> Path:
    """Path to a deployment script under script/."""
    return _resolve_root(root) / "script" / script_name


def get_artifacts_dir(root: Optional[Union[Path, str]] = None, out_dir: str = "out") -> Path:
    """Directory holding Foundry build artifacts."""
    return _resolve_root(root) / out_dir
