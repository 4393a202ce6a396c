"""Unit tests for constructor argument decoding."""

import pytest

from forge_ledger.constructor import (
    decode_constructor_inputs,
    decode_tuple_argument,
    format_parameter_name,
)
from forge_ledger.exceptions import ConstructorArgumentsMismatchError

OWNER_LIMIT_ABI = [
    {
        "type": "constructor",
        "inputs": [
            {"name": "_owner", "type": "address"},
            {"name": "limit_", "type": "uint256"},
        ],
    }
]


class TestFormatParameterName:
    """Test the format_parameter_name function."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("_owner", "owner"),
            ("limit_", "limit"),
            ("plain", "plain"),
            ("__private", "_private"),
            ("_both_", "both_"),
            ("", ""),
        ],
    )
    def test_strips_single_underscore(self, name, expected):
        assert format_parameter_name(name) == expected


class TestDecodeTupleArgument:
    """Test best-effort textual tuple decoding."""

    def test_zips_components(self):
        components = [{"name": "_token"}, {"name": "amount"}]

        result = decode_tuple_argument(components, "(0xABC, 100)")

        assert result == {"token": "0xABC", "amount": "100"}

    def test_missing_values_are_dropped(self):
        components = [{"name": "a"}, {"name": "b"}, {"name": "c"}]

        assert decode_tuple_argument(components, "(1, 2)") == {"a": "1", "b": "2"}


class TestDecodeConstructorInputs:
    """Test the decode_constructor_inputs function."""

    def test_named_arguments(self, make_reader):
        result = decode_constructor_inputs(OWNER_LIMIT_ABI, ["0xABC", "100"], make_reader())

        assert result == {"owner": "0xABC", "limit": "100"}

    def test_tuple_parameter(self, make_reader):
        abi = [
            {
                "type": "constructor",
                "inputs": [
                    {"name": "_admin", "type": "address"},
                    {
                        "name": "config_",
                        "type": "tuple",
                        "components": [
                            {"name": "_fee", "type": "uint256"},
                            {"name": "recipient", "type": "address"},
                        ],
                    },
                ],
            }
        ]

        result = decode_constructor_inputs(abi, ["0xA", "(30, 0xB)"], make_reader())

        assert result == {"admin": "0xA", "config": {"fee": "30", "recipient": "0xB"}}

    def test_mismatched_argument_count_raises(self, make_reader):
        with pytest.raises(ConstructorArgumentsMismatchError):
            decode_constructor_inputs(OWNER_LIMIT_ABI, ["0xABC"], make_reader())

    def test_no_constructor(self, make_reader):
        abi = [{"type": "function", "name": "foo", "inputs": []}]

        assert decode_constructor_inputs(abi, ["0xABC"], make_reader()) == {}

    def test_no_arguments(self, make_reader):
        assert decode_constructor_inputs(OWNER_LIMIT_ABI, None, make_reader()) == {}

    def test_empty_constructor(self, make_reader):
        abi = [{"type": "constructor", "inputs": []}]

        assert decode_constructor_inputs(abi, [], make_reader()) == {}

    def test_encoded_arguments_decoded_as_addresses(self, make_reader):
        encoded = "0" * 24 + "1" * 40 + "0" * 24 + "2" * 40

        result = decode_constructor_inputs(OWNER_LIMIT_ABI, encoded, make_reader())

        assert result == {"0": "0x" + "1" * 40, "1": "0x" + "2" * 40}

    def test_encoded_arguments_without_constructor(self, make_reader):
        assert decode_constructor_inputs([], "0" * 64, make_reader()) == {}
