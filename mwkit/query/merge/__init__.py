"""Deep merge engine for partial entities."""

from .engine import MergeValues, default_merge_values, describe_value, merge_entity

__all__ = [
    "MergeValues",
    "merge_entity",
    "default_merge_values",
    "describe_value",
]
