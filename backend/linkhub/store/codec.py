"""
Record codec: a collection <-> the bytes stored in its backing file.

A collection is stored as one pretty-printed JSON array of objects.
"""

import json
from typing import Any, Dict, List, Optional, Sequence

from linkhub.store.errors import DecodeError

Record = Dict[str, Any]


def encode(records: Sequence[Record]) -> bytes:
    """
    Serialize a collection to UTF-8 JSON.

    Args:
        records: Ordered records (plain dicts)

    Returns:
        JSON array bytes, two-space indented, newline terminated
    """
    text = json.dumps(list(records), indent=2, ensure_ascii=False)
    return (text + "\n").encode("utf-8")


def decode(data: Optional[bytes]) -> List[Record]:
    """
    Deserialize a collection.

    Args:
        data: File contents, or None when the file does not exist

    Returns:
        Ordered list of records; empty for missing or blank input

    Raises:
        DecodeError: If the bytes are not a JSON array of objects
    """
    if data is None:
        return []

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"Collection is not valid UTF-8: {exc}") from exc

    if not text.strip():
        return []

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"Collection is not valid JSON: {exc}") from exc

    if not isinstance(payload, list):
        raise DecodeError(
            f"Collection must be a JSON array, got {type(payload).__name__}"
        )
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise DecodeError(
                f"Collection entry {index} must be an object, got {type(item).__name__}"
            )

    return payload
