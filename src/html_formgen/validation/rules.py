"""
Default rule catalogue.

Statically declared mapping from rule name to predicate. Every predicate
has the signature ``(value, parameters) -> bool``; ``parameters`` is the
tuple of strings from the rule spec. Applications inject their own table
through RuleTable when they need other rules.
"""

from datetime import datetime
from numbers import Number
from typing import Any, Callable, Dict, Mapping, Optional, Sequence
import re

from html_formgen.core.value_utils import as_list, is_blank

RulePredicate = Callable[[Any, Sequence[str]], bool]

_ALPHA = re.compile(r"^[^\W\d_]+$")
_ALPHA_DASH = re.compile(r"^[\w-]+$")
_ALPHA_NUM = re.compile(r"^[^\W_]+$")
_NUMERIC = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")
_INTEGER = re.compile(r"^\s*[+-]?\d+\s*$")
_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_URL = re.compile(r"^(https?|ftp)://[^\s/$.?#][^\s]*$", re.IGNORECASE)

# d-m-Y style format characters -> strptime directives
_DATE_FORMAT_CODES = {
    "d": "%d", "j": "%d",
    "m": "%m", "n": "%m",
    "Y": "%Y", "y": "%y",
    "H": "%H", "G": "%H",
    "i": "%M", "s": "%S",
    "D": "%a", "l": "%A",
    "M": "%b", "F": "%B",
}

_LOOSE_DATE_FORMATS = ("%Y-%m-%d", "%d-%m-%Y", "%Y/%m/%d", "%d/%m/%Y", "%d.%m.%Y",
                       "%Y-%m-%d %H:%M:%S", "%Y-%m-%dT%H:%M:%S")


def to_strptime_format(date_format: str) -> str:
    """Translate a ``d-m-Y`` style format to ``%d-%m-%Y``."""
    return "".join(_DATE_FORMAT_CODES.get(char, char.replace("%", "%%")) for char in date_format)


def _is_scalar(value: Any) -> bool:
    return not isinstance(value, (list, tuple, set, Mapping))


def _is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, Number):
        return True
    return isinstance(value, str) and bool(_NUMERIC.match(value))


def _matches(pattern: "re.Pattern", value: Any) -> bool:
    return _is_scalar(value) and bool(pattern.match(str(value)))


def _measure(value: Any) -> float:
    """Numbers compare by value, strings by length, collections by count."""
    if _is_numeric(value):
        return float(value)
    if isinstance(value, str):
        return len(value)
    return len(as_list(value))


def _parse_date(value: Any) -> Optional[datetime]:
    if not _is_scalar(value):
        return None
    text = str(value).strip()
    for fmt in _LOOSE_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def validate_required(value, parameters) -> bool:
    return not is_blank(value)


def validate_not_empty(value, parameters) -> bool:
    return not is_blank(value)


def validate_accepted(value, parameters) -> bool:
    return _is_scalar(value) and str(value).strip().lower() in {"yes", "on", "1", "true"}


def validate_alpha(value, parameters) -> bool:
    return _matches(_ALPHA, value)


def validate_alpha_dash(value, parameters) -> bool:
    return _matches(_ALPHA_DASH, value)


def validate_alpha_num(value, parameters) -> bool:
    return _matches(_ALPHA_NUM, value)


def validate_array(value, parameters) -> bool:
    return isinstance(value, (list, tuple, Mapping))


def validate_not_array(value, parameters) -> bool:
    return _is_scalar(value)


def validate_assoc_array(value, parameters) -> bool:
    return isinstance(value, Mapping)


def validate_boolean(value, parameters) -> bool:
    if isinstance(value, bool):
        return True
    return value in (0, 1, "0", "1")


def validate_numeric(value, parameters) -> bool:
    return _is_numeric(value)


def validate_integer(value, parameters) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return _matches(_INTEGER, value)


def validate_digits(value, parameters) -> bool:
    return _is_scalar(value) and str(value).isdigit() and len(str(value)) == int(parameters[0])


def validate_min(value, parameters) -> bool:
    return _measure(value) >= float(parameters[0])


def validate_max(value, parameters) -> bool:
    return _measure(value) <= float(parameters[0])


def validate_between(value, parameters) -> bool:
    return float(parameters[0]) <= _measure(value) <= float(parameters[1])


def validate_size(value, parameters) -> bool:
    return _measure(value) == float(parameters[0])


def validate_email(value, parameters) -> bool:
    return _matches(_EMAIL, value)


def validate_url(value, parameters) -> bool:
    return _matches(_URL, value)


def validate_in(value, parameters) -> bool:
    return _is_scalar(value) and str(value) in parameters


def validate_not_in(value, parameters) -> bool:
    return _is_scalar(value) and str(value) not in parameters


def validate_all_in(value, parameters) -> bool:
    """Every submitted value (single or multiple) must be in the allow-list."""
    return all(str(item) in parameters for item in as_list(value))


def validate_date(value, parameters) -> bool:
    return _parse_date(value) is not None


def validate_date_format(value, parameters) -> bool:
    """Leading zeroes are optional: '8-2-2013' matches 'd-m-Y'."""
    if not _is_scalar(value):
        return False
    try:
        datetime.strptime(str(value).strip(), to_strptime_format(parameters[0]))
    except ValueError:
        return False
    return True


def validate_after(value, parameters) -> bool:
    date, limit = _parse_date(value), _parse_date(parameters[0])
    return date is not None and limit is not None and date > limit


def validate_before(value, parameters) -> bool:
    date, limit = _parse_date(value), _parse_date(parameters[0])
    return date is not None and limit is not None and date < limit


def validate_regex(value, parameters) -> bool:
    pattern = parameters[0]
    # delimited pattern: /pattern/flags
    if len(pattern) > 1 and pattern[0] == "/" and pattern.rfind("/") > 0:
        end = pattern.rfind("/")
        flags = re.IGNORECASE if "i" in pattern[end + 1:] else 0
        pattern = pattern[1:end]
    else:
        flags = 0
    return _is_scalar(value) and re.search(pattern, str(value), flags) is not None


DEFAULT_RULES: Dict[str, RulePredicate] = {
    "accepted": validate_accepted,
    "after": validate_after,
    "all_in": validate_all_in,
    "alpha": validate_alpha,
    "alpha_dash": validate_alpha_dash,
    "alpha_num": validate_alpha_num,
    "array": validate_array,
    "assoc_array": validate_assoc_array,
    "before": validate_before,
    "between": validate_between,
    "boolean": validate_boolean,
    "date": validate_date,
    "date_format": validate_date_format,
    "digits": validate_digits,
    "email": validate_email,
    "in": validate_in,
    "integer": validate_integer,
    "max": validate_max,
    "min": validate_min,
    "not_array": validate_not_array,
    "not_empty": validate_not_empty,
    "not_in": validate_not_in,
    "numeric": validate_numeric,
    "regex": validate_regex,
    "required": validate_required,
    "size": validate_size,
    "url": validate_url,
}

# Rules that still run when the value is blank; every other rule passes on blank input
IMPLICIT_RULES = frozenset({"required", "accepted", "not_empty"})
