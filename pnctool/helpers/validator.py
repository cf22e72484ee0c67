import re
from typing import Dict, Iterable, Pattern, Union


class Validator:
    """Collects field-level validation failures for a single check pass.

    Only the first failure recorded for a given key is kept, so the
    messages callers see always describe the earliest rule that broke.
    """

    def __init__(self):
        self.errors: Dict[str, str] = {}

    def valid(self) -> bool:
        return not self.errors

    def add_error(self, key: str, message: str):
        if key not in self.errors:
            self.errors[key] = message

    def check(self, ok: bool, key: str, message: str):
        if not ok:
            self.add_error(key, message)


def matches(value: str, pattern: Union[str, Pattern]) -> bool:
    """Return True if the value matches the regular expression pattern"""
    if isinstance(pattern, str):
        pattern = re.compile(pattern)
    return pattern.search(value) is not None


def permitted_value(value, *permitted) -> bool:
    """Return True if the value is one of the permitted values"""
    return value in permitted


def unique(values: Iterable) -> bool:
    """Return True if all values in the iterable are distinct"""
    values = list(values)
    return len(values) == len(set(values))
