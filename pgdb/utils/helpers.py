import jsonpickle
from datetime import datetime, timezone


def now() -> str:
    return datetime.now(timezone.utc).isoformat()


def sort_dict_keys(d):
    """Recursively sort dictionary keys and handle nested structures.

    Args:
        d: Data structure (dict, list, or primitive type)

    Returns:
        Sorted version of the data structure
    """
    if isinstance(d, dict):
        return {key: sort_dict_keys(value) for key, value in sorted(d.items())}
    elif isinstance(d, list):
        return [sort_dict_keys(item) for item in d]
    else:
        return d


def canonicalize_dict(data) -> str:
    """
    Returns a canonical JSON representation of a dictionary.

    Keys are sorted recursively, so two dictionaries holding the same data
    always produce the same string regardless of insertion order.
    """
    return jsonpickle.dumps(sort_dict_keys(data), unpicklable=False)


def drop_nulls(data):
    """Recursively remove keys whose value is None."""
    if isinstance(data, dict):
        return {k: drop_nulls(v) for k, v in data.items() if v is not None}
    elif isinstance(data, list):
        return [drop_nulls(item) for item in data]
    return data


def retention_to_days(retention: str) -> int:
    """Convert a retention string such as ``7d`` or ``2w`` to days.

    Months count as 30 days and years as 365 days.
    """
    multipliers = {"d": 1, "w": 7, "m": 30, "y": 365}
    amount, unit = retention[:-1], retention[-1]
    if unit not in multipliers or not amount.isdigit():
        raise ValueError(f"'{retention}' is not a valid retention period")
    return int(amount) * multipliers[unit]
