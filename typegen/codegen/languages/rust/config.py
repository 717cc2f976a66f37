"""
Rust-specific type mappings and defaults.
"""

# Rust type mappings
RUST_TYPE_MAP = {
    "String": "String",
    "Bool": "bool",
    "Int": "i64",
    "UInt": "u64",
    "Int8": "i8",
    "UInt8": "u8",
    "Int16": "i16",
    "UInt16": "u16",
    "Int32": "i32",
    "UInt32": "u32",
    "Int64": "i64",
    "UInt64": "u64",
    "ISize": "isize",
    "USize": "usize",
    "Float": "f32",
    "Double": "f64",
}

HASHMAP_IMPORT = "use std::collections::HashMap;"

MODULE_INDEX_NAME = "mod"

DEFAULT_DERIVES = [
    "Debug",
    "Clone",
    "PartialEq",
    "Default",
    "serde::Serialize",
    "serde::Deserialize",
]
