"""
apisnap Response Normalizer

Masks volatile fields in decoded JSON so two captures taken at different
times can be compared line by line.
"""

from typing import Any

VOLATILE_KEYS = frozenset({'timestamp', 'createdAt', 'updatedAt', 'date'})
SENTINEL_TIMESTAMP = '2025-01-01T00:00:00.000Z'


def normalize_response(data: Any) -> Any:
    """
    Return a copy of a JSON value with volatile fields replaced.

    Every key in VOLATILE_KEYS, at any depth and inside lists, gets the
    SENTINEL_TIMESTAMP value whatever its original type. The input is never
    mutated. Normalizing an already normalized value returns an equal value.

    Args:
        data: Value produced by json.loads (None, bool, int, float, str,
              list or dict)

    Returns:
        Normalized value

    Raises:
        TypeError: If data contains a type JSON cannot produce

    Example:
        normalize_response({"status": "ok", "timestamp": 1717200000})
        # {"status": "ok", "timestamp": "2025-01-01T00:00:00.000Z"}
    """
    if data is None:
        return None
    # bool before numbers: bool is a subclass of int
    if isinstance(data, bool):
        return data
    if isinstance(data, (int, float)):
        return data
    if isinstance(data, str):
        return data
    if isinstance(data, (list, tuple)):
        return [normalize_response(item) for item in data]
    if isinstance(data, dict):
        return _normalize_object(data)
    raise TypeError(f"Unsupported JSON value type: {type(data).__name__}")


def _normalize_object(data: dict) -> dict:
    normalized = {}
    for key, value in data.items():
        if key in VOLATILE_KEYS:
            normalized[key] = SENTINEL_TIMESTAMP
        else:
            normalized[key] = normalize_response(value)
    return normalized
