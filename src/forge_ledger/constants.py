"""Configuration constants for forge-ledger."""

# Block explorers keyed by numeric chain id
CHAIN_CONFIG = {
    1: {"chain_name": "Ethereum", "block_explorer_url": "https://etherscan.io"},
    5: {"chain_name": "Goerli", "block_explorer_url": "https://goerli.etherscan.io"},
    10: {"chain_name": "Optimism", "block_explorer_url": "https://optimistic.etherscan.io"},
    100: {"chain_name": "Gnosis Chain", "block_explorer_url": "https://gnosisscan.io"},
    137: {"chain_name": "Polygon", "block_explorer_url": "https://polygonscan.com"},
    8453: {"chain_name": "Base", "block_explorer_url": "https://basescan.org"},
    42161: {"chain_name": "Arbitrum One", "block_explorer_url": "https://arbiscan.io"},
    80002: {"chain_name": "Polygon Amoy", "block_explorer_url": "https://amoy.polygonscan.com"},
    84532: {"chain_name": "Base Sepolia", "block_explorer_url": "https://sepolia.basescan.org"},
    421614: {"chain_name": "Arbitrum Sepolia", "block_explorer_url": "https://sepolia.arbiscan.io"},
    11155111: {"chain_name": "Sepolia", "block_explorer_url": "https://sepolia.etherscan.io"},
    11155420: {
        "chain_name": "Optimism Sepolia",
        "block_explorer_url": "https://sepolia-optimistic.etherscan.io",
    },
}

# ERC-1967 storage slots
IMPLEMENTATION_SLOT = "0x360894a13ba1a3210667c828492db98dca3e2076cc3735a920a3ca505d382bbc"
ADMIN_SLOT = "0xb53127684a568b3173ae13b9f8a6016e243e63b6e8ee1178d6a717850b5d6103"

# Proxy contract name -> index of the initializer calldata in its constructor arguments
PROXY_INITIALIZER_INDEX = {
    "TransparentUpgradeableProxy": 2,
    "ERC1967Proxy": 1,
}

CREATE_TRANSACTION_TYPES = ("CREATE", "CREATE2")
MODULE_DEPLOY_SIGNATURE = "deployModule(bytes32,bytes,bytes)"

# Contracts whose version is encoded in accountId() instead of version()
ACCOUNT_CONTRACT_NAMES = ("Vortex",)

DEFAULT_SCRIPT_NAME = "Deploy.s.sol"
SCRIPT_EXTENSION = ".s.sol"
DEFAULT_RPC_ENV = "RPC_URL"

# Substring of a lowercased contract name -> source directory under src/
CONTRACT_SOURCE_DIRS = (
    ("factory", "factories"),
    ("executor", "modules/executors"),
    ("fallback", "modules/fallbacks"),
    ("validator", "modules/validators"),
)
