# app/schemas.py
from __future__ import annotations

from enum import Enum
from typing import Optional, List, Union

from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator

from .options import ALL_INDIA, STATES, EDUCATION_LEVELS, OCCUPATIONS, SCHEME_TYPES, AMOUNT_FREQUENCIES


class Gender(str, Enum):
    FEMALE = "female"
    MALE = "male"
    OTHER = "other"


class Caste(str, Enum):
    GENERAL = "General"
    OBC = "OBC"
    SC = "SC"
    ST = "ST"
    EWS = "EWS"


def _check_choice(value: Optional[str], allowed: list[str], label: str) -> Optional[str]:
    if value is None or value in allowed:
        return value
    raise ValueError(f"Unknown {label}: {value!r}")


# -------------------------
# Profile (typed, normalized)
# -------------------------
class Profile(BaseModel):
    """Normalized user profile. Every optional field left as None means
    "no constraint on this axis"."""

    age: Optional[int] = None
    gender: Optional[Gender] = None
    caste: Optional[Caste] = None
    income: Optional[float] = Field(None, ge=0)
    education: Optional[str] = None
    occupation: Optional[str] = None
    state: str = ALL_INDIA
    scheme_type: Optional[str] = None
    search: str = ""
    eligible_only: bool = True

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator("education")
    @classmethod
    def _education(cls, v):
        return _check_choice(v, EDUCATION_LEVELS, "education level")

    @field_validator("occupation")
    @classmethod
    def _occupation(cls, v):
        return _check_choice(v, OCCUPATIONS, "occupation")

    @field_validator("state")
    @classmethod
    def _state(cls, v):
        return _check_choice(v, STATES, "state")

    @field_validator("scheme_type")
    @classmethod
    def _scheme_type(cls, v):
        return _check_choice(v, SCHEME_TYPES, "scheme type")


RawField = Union[str, int, float, None]


class ProfileForm(BaseModel):
    """Raw form state as the UI submits it: text inputs, selects and one checkbox."""

    age: RawField = ""
    gender: RawField = ""
    caste: RawField = ""
    income: RawField = ""
    education: RawField = ""
    occupation: RawField = ""
    state: RawField = ALL_INDIA
    scheme_type: RawField = ""
    search: RawField = ""
    eligible_only: bool = True


# -------------------------
# Catalog records (read-only)
# -------------------------
class AgeRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: int
    max: int

    @model_validator(mode="after")
    def _ordered(self):
        if self.min > self.max:
            raise ValueError("age.min must be <= age.max")
        return self


class Amount(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: float = Field(..., ge=0)
    frequency: str

    @field_validator("frequency")
    @classmethod
    def _frequency(cls, v):
        return _check_choice(v, AMOUNT_FREQUENCIES, "amount frequency")


class Eligibility(BaseModel):
    """Scheme constraints; an absent field means unconstrained on that axis."""

    model_config = ConfigDict(frozen=True)

    age: Optional[AgeRange] = None
    gender: Optional[frozenset[Gender]] = None
    caste: Optional[frozenset[Caste]] = None
    income_max: Optional[float] = None
    education: Optional[frozenset[str]] = None
    occupation: Optional[frozenset[str]] = None
    states: Optional[frozenset[str]] = None


class Scheme(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    ministry: str
    source: str
    website: str
    deadline: Optional[str] = None
    scheme_type: str
    amount: Amount
    tags: tuple[str, ...] = ()
    eligibility: Eligibility = Field(default_factory=Eligibility)


# -------------------------
# API responses
# -------------------------
class SchemeCard(BaseModel):
    id: str
    name: str
    ministry: str
    scheme_type: str
    amount: str
    deadline: str
    tags: List[str] = Field(default_factory=list)
    source: str
    website: str

    score: int
    match_percent: int
    eligible: bool
    match_label: str
    reasons: List[str] = Field(default_factory=list)


class MatchResponse(BaseModel):
    eligible_count: int
    total_count: int
    shown_count: int
    results: List[SchemeCard] = Field(default_factory=list)


class OptionsResponse(BaseModel):
    states: List[str]
    education_levels: List[str]
    occupations: List[str]
    scheme_types: List[str]
    genders: List[str]
    castes: List[str]


class SavedProfileResponse(BaseModel):
    key: str
    profile: Profile
