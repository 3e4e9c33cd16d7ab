"""Helpers for filtering, masking and normalizing snapshot records."""

from collections.abc import Callable, Iterable, Mapping
from typing import Any


def filter_items(
    record: Mapping[str, Any], include: Callable[[str, Any], bool]
) -> dict[str, Any]:
    """
    Return a new dict with only the entries accepted by the predicate.

    The input is left untouched and the surviving entries keep the input's
    iteration order.

    Parameters:
        record: The mapping to filter.
        include: Predicate called with each key and value.

    Returns:
        dict[str, Any]: The accepted entries.
    """
    return {key: value for key, value in record.items() if include(key, value)}


def mask(
    record: Mapping[str, Any], masks: Mapping[str, Any], ci: bool = False
) -> dict[str, Any]:
    """
    Replace truthy values of masked keys with their replacement.

    Keys that are absent from the record, or whose value is falsy, are left
    alone. In CI the record is returned unmasked.

    Parameters:
        record: The mapping to mask.
        masks: Replacement value per key.
        ci: Whether the report is collected in a CI environment.

    Returns:
        dict[str, Any]: A masked copy of the record.
    """
    output = dict(record)
    if ci:
        return output

    for key, replacement in masks.items():
        if output.get(key):
            output[key] = replacement

    return output


def uniq(items: Iterable[str]) -> list[str]:
    """
    Drop empty entries and duplicates, keeping the first occurrence of each.

    Parameters:
        items: Entries in their original order (e.g. a split PATH).

    Returns:
        list[str]: The non-empty, first-seen-unique entries.
    """
    return list(dict.fromkeys(item for item in items if item))
