"""Repository metadata and build steps run through external tools."""

import logging
import subprocess
from pathlib import Path

from .exceptions import BuildError

logger = logging.getLogger(__name__)


def get_project_url(root: Path) -> str:
    """
    URL of the `origin` remote without the ".git" suffix.

    Raises:
        RuntimeError: If git fails
    """
    try:
        result = subprocess.run(
            ["git", "-C", str(root), "remote", "get-url", "origin"],
            check=True,
            capture_output=True,
            text=True,
        )
    except subprocess.CalledProcessError as e:
        raise RuntimeError(f"Failed to get origin remote: {e.stderr}") from e
    except OSError as e:
        raise RuntimeError(f"Failed to run git: {e}") from e

    url = result.stdout.strip()
    return url[: -len(".git")] if url.endswith(".git") else url


def project_name_from_url(url: str) -> str:
    """
    Title-case the repository name of a remote URL.

    "https://github.com/org/smart_account-contracts.git" -> "Smart Account Contracts"
    """
    repo = url.rstrip("/").replace(":", "/").split("/")[-1]
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    return " ".join(word[:1].upper() + word[1:] for word in repo.replace("_", "-").split("-"))


def build_artifacts(root: Path) -> None:
    """
    Run `forge build` so that ABI artifacts are up to date.

    Raises:
        BuildError: If forge is missing or the build fails
    """
    logger.info("Building contract artifacts")
    try:
        subprocess.run(["forge", "build"], cwd=root, check=True, capture_output=True, text=True)
    except subprocess.CalledProcessError as e:
        raise BuildError(f"forge build failed: {e.stderr}") from e
    except OSError as e:
        raise BuildError(f"Failed to run forge: {e}") from e
