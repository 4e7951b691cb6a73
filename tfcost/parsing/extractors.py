"""
Text utilities for pulling values and blocks out of Terraform resource bodies.

These work on a flat grammar: a block body is scanned with regular
expressions, not parsed. Nested blocks are supported to exactly one level,
and a nested block that itself contains braces is cut at its first closing
brace.
"""
import re
from typing import Optional


def extract_value(body: str, key: str) -> Optional[str]:
    """
    Return the value bound to `key` in a block body.

    Only the first `key = value` binding is used. One layer of surrounding
    double quotes is stripped and whitespace trimmed; the value is not
    otherwise interpreted (numbers and booleans come back as text).

    Args:
        body: Resource or block body text
        key: Attribute name (e.g., 'instance_type')

    Returns:
        The value text, or None if the key does not appear
    """
    pattern = re.compile(rf'(?<![\w-]){re.escape(key)}\s*=\s*"?([^"\n]*)"?')
    match = pattern.search(body)
    if not match:
        return None
    return match.group(1).strip()


def extract_block(body: str, block_name: str) -> Optional[str]:
    """
    Return the inner text of `block_name { ... }` in a block body.

    Matching stops at the first closing brace, so only one level of
    nesting is understood.

    Args:
        body: Resource body text
        block_name: Nested block name (e.g., 'root_block_device')

    Returns:
        Inner block text, or None if the block is absent
    """
    pattern = re.compile(rf"(?<![\w-]){re.escape(block_name)}\s*\{{([^}}]*)\}}")
    match = pattern.search(body)
    return match.group(1) if match else None


def parse_int(value: Optional[str], default: Optional[int], minimum: int = 0) -> Optional[int]:
    """
    Parse an extracted value as an integer, falling back to `default`.

    Unresolved expressions such as `var.count` fall back rather than fail.
    The result is clamped to `minimum`.
    """
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        try:
            parsed = int(float(value))
        except (ValueError, OverflowError):
            return default
    return max(parsed, minimum)
