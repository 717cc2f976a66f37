"""
Gleam-specific type mappings.

Maps schema primitive names to Gleam types and to the ``gleam/decode``
decoders that read them from dynamic data.
"""

from ...core.schema import BOOL_TYPES, FLOAT_TYPES, INT_TYPES, STRING_TYPES

DECODE_IMPORT = "import gleam/decode"
DYNAMIC_IMPORT = "import gleam/dynamic.{type Dynamic}"
DICT_IMPORT = "import gleam/dict.{type Dict}"
OPTION_IMPORT = "import gleam/option.{type Option}"


def _mapping(names, value):
    return {name: value for name in names}


# Gleam type mappings
GLEAM_TYPE_MAP = {
    **_mapping(STRING_TYPES, "String"),
    **_mapping(BOOL_TYPES, "Bool"),
    **_mapping(INT_TYPES, "Int"),
    **_mapping(FLOAT_TYPES, "Float"),
}

# Primitive decoders from gleam/decode
GLEAM_DECODER_MAP = {
    **_mapping(STRING_TYPES, "decode.string"),
    **_mapping(BOOL_TYPES, "decode.bool"),
    **_mapping(INT_TYPES, "decode.int"),
    **_mapping(FLOAT_TYPES, "decode.float"),
}
