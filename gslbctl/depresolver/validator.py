"""Chainable validation of configuration and spec fields."""

from __future__ import annotations

import re
from typing import List, Optional

GEO_TAG_REGEX = r"^[a-zA-Z\-\d]*$"
HOST_NAME_PART = (
    r"(([a-zA-Z0-9]|[a-zA-Z0-9][a-zA-Z0-9\-]*[a-zA-Z0-9])\.)*"
    r"([A-Za-z0-9]|[A-Za-z0-9][A-Za-z0-9\-]*[A-Za-z0-9])"
)
HOST_NAME_REGEX = "^" + HOST_NAME_PART + "$"
HOST_NAMES_WITH_PORTS_REGEX1 = "^(" + HOST_NAME_PART + r"(:\d{1,5})?(\s*,\s*)?)+$"
HOST_NAMES_WITH_PORTS_REGEX2 = "^.*[^,]$"
IP_ADDRESS_REGEX = (
    r"^(([0-9]|[1-9][0-9]|1[0-9]{2}|2[0-4][0-9]|25[0-5])\.){3}"
    r"([0-9]|[1-9][0-9]|1[0-9]{2}|2[0-4][0-9]|25[0-5])$"
)
VERSION_NUMBER_REGEX = (
    r"^(v){0,1}(0|(?:[1-9]\d*))(?:\.(0|(?:[1-9]\d*))(?:\.(0|(?:[1-9]\d*)))?"
    r"(?:\-([\w][\w\.\-_]*))?)?$"
)
K8S_NAMESPACE_REGEX = r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$"


class ValidationError(ValueError):
    """A field failed validation."""


class Validator:
    """Wraps a field value; each check records the first failure in ``error``."""

    def __init__(
        self,
        name: str,
        *,
        str_value: str = "",
        str_arr: Optional[List[str]] = None,
        int_value: int = 0,
        error: Optional[ValidationError] = None,
    ) -> None:
        self.name = name
        self.str_value = str_value
        self.str_arr = list(str_arr) if str_arr is not None else []
        self.int_value = int_value
        self.error = error

    def _fail(self, message: str) -> "Validator":
        self.error = ValidationError(message)
        return self

    def is_not_empty(self) -> "Validator":
        if self.error is None and self.str_value == "":
            self._fail(f"'{self.name}' is empty")
        return self

    def match_regexp(self, regex: str) -> "Validator":
        if self.error is not None or self.str_value == "":
            return self
        if re.search(regex, self.str_value, re.ASCII) is None:
            self._fail(f"'{self.str_value}' does not match given criteria ({regex})")
        return self

    def match_regexps(self, *args: str) -> "Validator":
        """Pass if the value matches any of the expressions."""
        if self.error is not None:
            return self
        for regex in args:
            self.error = None
            if self.match_regexp(regex).error is None:
                return self
        return self

    def is_higher_than_zero(self) -> "Validator":
        if self.error is None and self.int_value <= 0:
            self._fail(f"'{self.name}' is less or equal to zero")
        return self

    def is_higher_or_equal_to_zero(self) -> "Validator":
        if self.error is None and self.int_value < 0:
            self._fail(f"'{self.name}' is less than zero")
        return self

    def is_less_or_equal_to(self, num: int) -> "Validator":
        if self.error is None and self.int_value > num:
            self._fail(f"'{self.name}' is higher than '{num}'")
        return self

    def is_higher_than(self, num: int) -> "Validator":
        if self.error is None and self.int_value <= num:
            self._fail(f"'{self.name}' is higher than '{num}'")
        return self

    def has_items(self) -> "Validator":
        if self.error is None and not self.str_arr:
            self._fail(f"'{self.name}' should contain at least one item")
        return self

    def has_unique_items(self) -> "Validator":
        if self.error is None and len(set(self.str_arr)) != len(self.str_arr):
            values = "[" + " ".join(self.str_arr) + "]"
            self._fail(f"'{self.name}' contains redundant values '{values}'")
        return self


def field(name: str, value: object) -> Validator:
    """Create a validator for an int, a string or a list of strings."""
    if isinstance(value, int) and not isinstance(value, bool):
        return Validator(name, int_value=value)
    if isinstance(value, str):
        return Validator(name, str_value=value)
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return Validator(name, str_arr=value)
    return Validator(
        name,
        error=ValidationError(
            f"can't parse '{value}' of type '{type(value).__name__}' as int or string"
        ),
    )


def is_not_empty(s: str) -> bool:
    """True when the string holds anything besides spaces."""
    return s.replace(" ", "") != ""