"""
Lenient accessors over a parsed JSON tree.

Every accessor treats a missing key, a non-object parent and a value of the
wrong type the same way: the caller's fallback is returned. One bad field
never rejects the rest of the document.
"""

import math
import re
from typing import Any, Callable, Dict, Iterator, Optional, Tuple

from system_info_utils.data.definitions import LUID_SIZE

_HEX_PREFIX = re.compile(r"[0-9a-fA-F]*")


def _to_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _to_bool(value: Any) -> Optional[bool]:
    # Numbers are not booleans in the documents.
    return value if isinstance(value, bool) else None


def _to_unsigned(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, float) and math.isfinite(value) and value.is_integer() and value >= 0:
        return int(value)
    return None


_CONVERTERS: Dict[type, Callable[[Any], Any]] = {
    str: _to_str,
    bool: _to_bool,
    int: _to_unsigned,
}


def has_node(node: Any, key: str) -> bool:
    """
    Return True when ``node`` is a JSON object holding ``key``.

    Only presence is checked; the value may be of any type, including null.
    """
    return isinstance(node, dict) and key in node


def get_value(node: Any, key: str, fallback: Any, value_type: Optional[type] = None) -> Any:
    """
    Get the value stored under ``key`` converted to the expected type.

    The expected type is ``value_type`` when given, otherwise the type of
    ``fallback``. Returns ``fallback`` whenever the key is absent or the
    value cannot be converted.
    """
    if not has_node(node, key):
        return fallback

    converter = _CONVERTERS.get(value_type or type(fallback))
    if converter is None:
        return fallback

    result = converter(node[key])
    return fallback if result is None else result


def is_unsigned(value: Any) -> bool:
    """True for JSON integers that are not negative (booleans excluded)."""
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def iter_nodes(node: Any) -> Iterator[Any]:
    """
    Iterate the children of a JSON container.

    Arrays yield their elements, objects their values in document order,
    scalars nothing.
    """
    if isinstance(node, list):
        return iter(node)
    if isinstance(node, dict):
        return iter(node.values())
    return iter(())


def iter_members(node: Any) -> Iterator[Tuple[str, Any]]:
    """Iterate the ``(key, value)`` pairs of a JSON object in document order."""
    if isinstance(node, dict):
        return iter(node.items())
    return iter(())


def parse_luid(text: str) -> bytes:
    """
    Decode a LUID hex string into its fixed size byte buffer.

    Two characters make one byte, filling the buffer from index 0. A short
    string leaves the trailing bytes zero. A fragment contributes the value
    of its longest hex prefix, so ``"zz"`` gives 0 and ``"az"`` gives 0x0a.
    """
    buffer = bytearray(LUID_SIZE)
    for index in range(0, min(len(text), LUID_SIZE * 2), 2):
        digits = _HEX_PREFIX.match(text[index:index + 2]).group()
        buffer[index // 2] = int(digits, 16) if digits else 0
    return bytes(buffer)


def get_node(node: Any, key: str) -> Any:
    """Return the child stored under ``key``, or None when it is absent."""
    if has_node(node, key):
        return node[key]
    return None
