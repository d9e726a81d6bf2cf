# utils/fields.py
"""
Explicit tri-state parsing of optional form fields.

A submitted form distinguishes three cases per field:
- the key is absent          -> FieldChange.UNSET (leave stored value alone)
- the key is present, empty  -> FieldChange.CLEAR (store NULL)
- the key carries a value    -> FieldChange.set(value)
"""
import enum
import math
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from .errors import ValidationError


class Presence(enum.Enum):
     UNSET = "unset"
     CLEAR = "clear"
     SET = "set"


@dataclass(frozen=True)
class FieldChange:
     presence: Presence
     value: Any = None

     @classmethod
     def set(cls, value: Any) -> "FieldChange":
          return cls(Presence.SET, value)

     @property
     def is_unset(self) -> bool:
          return self.presence is Presence.UNSET

     def resolved(self) -> Any:
          """Value to store; only meaningful when the change is not UNSET."""
          return self.value if self.presence is Presence.SET else None


FieldChange.UNSET = FieldChange(Presence.UNSET)
FieldChange.CLEAR = FieldChange(Presence.CLEAR)


def raw_value(form: Mapping[str, Any], key: str) -> Optional[str]:
     """Return the submitted string for key, or None when the key is absent."""
     if key not in form:
          return None
     value = form.get(key)
     if value is None:
          return ""
     return str(value)


def text_change(form: Mapping[str, Any], key: str) -> FieldChange:
     value = raw_value(form, key)
     if value is None:
          return FieldChange.UNSET
     if value == "":
          return FieldChange.CLEAR
     return FieldChange.set(value)


def parse_float(value: str) -> Optional[float]:
     try:
          number = float(value.strip())
     except (TypeError, ValueError):
          return None
     if math.isnan(number) or math.isinf(number):
          return None
     return number


def parse_int(value: str) -> Optional[int]:
     try:
          return int(value.strip())
     except (TypeError, ValueError):
          return None


def number_change(
     form: Mapping[str, Any],
     key: str,
     parser: Callable[[str], Optional[float]],
     label: str,
     minimum: Optional[float] = 0,
     maximum: Optional[float] = None,
) -> FieldChange:
     """
     Tri-state parse of a numeric field.

     The empty string clears the field. Anything unparseable (whitespace
     included) or outside [minimum, maximum] raises
     ValidationError("Invalid <label> value").
     """
     value = raw_value(form, key)
     if value is None:
          return FieldChange.UNSET
     if value == "":
          return FieldChange.CLEAR

     number = parser(value)
     if number is None:
          raise ValidationError(f"Invalid {label} value")
     if minimum is not None and number < minimum:
          raise ValidationError(f"Invalid {label} value")
     if maximum is not None and number > maximum:
          raise ValidationError(f"Invalid {label} value")
     return FieldChange.set(number)


def optional_number(
     form: Mapping[str, Any],
     key: str,
     parser: Callable[[str], Optional[float]],
     label: str,
     minimum: Optional[float] = 0,
     maximum: Optional[float] = None,
):
     """Creation-time variant: absent or empty both mean NULL."""
     return number_change(form, key, parser, label, minimum, maximum).resolved()


def required_int(value: Optional[str], message: str) -> int:
     """Parse an identifier that has already been checked for presence."""
     number = parse_int(value or "")
     if number is None:
          raise ValidationError(message)
     return number
