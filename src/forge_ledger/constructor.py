"""Constructor argument decoding for forge-ledger."""

from typing import Any, Dict, List, Optional, Union

from .chain import ChainReader
from .exceptions import ConstructorArgumentsMismatchError


def format_parameter_name(name: str) -> str:
    """
    Strip one leading underscore, or else one trailing underscore.

    "_owner" -> "owner", "limit_" -> "limit"
    """
    if name.startswith("_"):
        return name[1:]
    if name.endswith("_"):
        return name[:-1]
    return name


def find_constructor(abi: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    for item in abi:
        if item.get("type") == "constructor":
            return item
    return None


def decode_tuple_argument(components: List[Dict[str, Any]], argument: str) -> Dict[str, str]:
    """
    Best-effort split of a textual tuple such as "(0xabc, 100)".

    Values containing ", " (nested tuples, strings) are not decoded correctly.
    """
    text = argument.strip()
    if text.startswith("(") and text.endswith(")"):
        text = text[1:-1]
    values = text.split(", ")

    return {
        format_parameter_name(component["name"]): value
        for component, value in zip(components, values)
    }


def decode_constructor_inputs(
    abi: List[Dict[str, Any]],
    arguments: Optional[Union[List[Any], str]],
    reader: ChainReader,
) -> Dict[str, Any]:
    """
    Map constructor arguments to the constructor's parameter names.

    Args:
        abi: Contract ABI
        arguments: Decoded argument list from the broadcast, or the raw
            ABI-encoded arguments as a hex string (module deployments)
        reader: Chain reader used to decode raw address words

    Returns:
        Parameter name -> argument. Raw hex arguments are decoded as
        addresses keyed by position ("0", "1", ...). Empty when the
        contract has no constructor or no arguments were given.

    Raises:
        ConstructorArgumentsMismatchError: If argument and parameter counts differ
    """
    constructor = find_constructor(abi)
    if constructor is None or arguments is None:
        return {}

    if isinstance(arguments, str):
        words = [arguments[i : i + 64] for i in range(0, len(arguments), 64)]
        return {str(i): reader.parse_bytes32_address(word) for i, word in enumerate(words)}

    params = constructor.get("inputs", [])
    if len(params) != len(arguments):
        raise ConstructorArgumentsMismatchError(
            f"Constructor inputs and arguments mismatched: "
            f"expected {len(params)}, got {len(arguments)}"
        )

    inputs: Dict[str, Any] = {}
    for param, argument in zip(params, arguments):
        name = format_parameter_name(param["name"])
        if param["type"] == "tuple" and isinstance(argument, str):
            inputs[name] = decode_tuple_argument(param.get("components", []), argument)
        else:
            inputs[name] = argument

    return inputs
