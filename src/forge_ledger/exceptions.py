"""Custom exception classes for forge-ledger."""


class ExtractionError(Exception):
    """Base exception for every fatal extraction error."""

    pass


class CommitAlreadyProcessedError(ExtractionError, ValueError):
    """Raised when a broadcast commit is already recorded in the ledger history."""

    pass


class ImplementationMismatchError(ExtractionError, ValueError):
    """Raised when a proxy's on-chain implementation differs from the broadcast."""

    pass


class ConstructorArgumentsMismatchError(ExtractionError, ValueError):
    """Raised when constructor arguments do not match the ABI constructor inputs."""

    pass


class ArtifactNotFoundError(ExtractionError, FileNotFoundError):
    """Raised when a compiled contract artifact (ABI) is not found."""

    pass


class ScriptNotFoundError(ExtractionError, FileNotFoundError):
    """Raised when the deployment script does not exist."""

    pass


class LedgerNotFoundError(ExtractionError, FileNotFoundError):
    """Raised when markdown is requested from a ledger that does not exist."""

    pass


class UnsupportedChainError(ExtractionError, ValueError):
    """Raised when no block explorer is known for a chain id."""

    pass


class BroadcastNotFoundError(ExtractionError, FileNotFoundError):
    """Raised when no broadcast exists for the script and chain."""

    pass


class InvalidBroadcastError(ExtractionError, ValueError):
    """Raised when a broadcast file is missing required fields."""

    pass


class BuildError(ExtractionError, RuntimeError):
    """Raised when the contract artifacts could not be built."""

    pass
