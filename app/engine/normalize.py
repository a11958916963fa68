# app/engine/normalize.py
"""
Turns raw form input into a typed Profile.

Malformed numeric text never raises here: it normalizes to None, which the
evaluator reads as "unconstrained" for that axis.
"""
from __future__ import annotations

import math
from typing import Any, Iterable, Optional

from app.options import ALL_INDIA, STATES, EDUCATION_LEVELS, OCCUPATIONS, SCHEME_TYPES
from app.schemas import Caste, Gender, Profile, ProfileForm


class UnknownProfileField(KeyError):
    """Raised by the tagged setter for a name that is not a Profile field."""


DEFAULT_PROFILE = Profile()


def normalize_text(text: Any) -> str:
    if text is None:
        return ""
    return str(text).casefold().strip()


def search_tokens(text: Any) -> tuple[str, ...]:
    return tuple(t for t in normalize_text(text).split() if t)


def parse_optional_number(raw: Any, *, allow_negative: bool = True) -> Optional[float]:
    # bool is an int subclass; a checkbox value is never a number here
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        s = str(raw).strip()
        if not s:
            return None
        try:
            value = float(s)
        except ValueError:
            return None
    if not math.isfinite(value):
        return None
    if value < 0 and not allow_negative:
        return None
    return value


def parse_optional_int(raw: Any) -> Optional[int]:
    # "20.5" is malformed for a whole-number field, never rounded into range
    value = parse_optional_number(raw)
    if value is None or not value.is_integer():
        return None
    return int(value)


def parse_optional_choice(raw: Any, allowed: Iterable[str]) -> Optional[str]:
    if raw is None:
        return None
    s = str(raw).strip()
    if not s:
        return None
    return s if s in allowed else None


def _parse_gender(raw: Any) -> Optional[Gender]:
    # select values are lowercase ("female"), be lenient on case
    value = parse_optional_choice(normalize_text(raw), [g.value for g in Gender])
    return Gender(value) if value else None


def _parse_caste(raw: Any) -> Optional[Caste]:
    value = parse_optional_choice(raw, [c.value for c in Caste])
    return Caste(value) if value else None


def _parse_state(raw: Any) -> str:
    return parse_optional_choice(raw, STATES) or ALL_INDIA


def _parse_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return DEFAULT_PROFILE.eligible_only
    return normalize_text(raw) in ("1", "true", "yes", "on")


_FIELD_PARSERS = {
    "age": parse_optional_int,
    "gender": _parse_gender,
    "caste": _parse_caste,
    "income": lambda raw: parse_optional_number(raw, allow_negative=False),
    "education": lambda raw: parse_optional_choice(raw, EDUCATION_LEVELS),
    "occupation": lambda raw: parse_optional_choice(raw, OCCUPATIONS),
    "state": _parse_state,
    "scheme_type": lambda raw: parse_optional_choice(raw, SCHEME_TYPES),
    "search": lambda raw: "" if raw is None else str(raw),
    "eligible_only": _parse_bool,
}


def normalize_field(field: str, raw: Any) -> Any:
    parser = _FIELD_PARSERS.get(field)
    if parser is None:
        raise UnknownProfileField(field)
    return parser(raw)


def profile_from_form(form: ProfileForm) -> Profile:
    """Build a typed Profile from raw form state."""
    values = {name: normalize_field(name, getattr(form, name)) for name in _FIELD_PARSERS}
    return Profile(**values)


def apply_update(profile: Profile, field: str, raw: Any) -> Profile:
    """Tagged setter: returns a copy of ``profile`` with one field re-normalized."""
    return profile.model_copy(update={field: normalize_field(field, raw)})


def merge_profile(profile: Profile, fields: dict[str, Any]) -> Profile:
    for name, raw in fields.items():
        profile = apply_update(profile, name, raw)
    return profile
