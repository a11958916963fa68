from __future__ import annotations

import pytest
from pydantic import ValidationError

from app.engine.catalog import SCHEME_CATALOG, load_catalog, get_scheme, catalog_options
from app.engine.normalize import (
    DEFAULT_PROFILE,
    UnknownProfileField,
    apply_update,
    merge_profile,
    parse_optional_int,
    parse_optional_number,
    profile_from_form,
    search_tokens,
)
from app.engine.ranking import match_schemes
from app.engine.rules import AXIS_POINTS, SEARCH_TOKEN_POINTS, evaluate_scheme
from app.options import ALL_INDIA
from app.schemas import Caste, Gender, Profile, ProfileForm, Scheme


def _scheme(scheme_id: str = "s1", eligibility: dict | None = None, **overrides) -> Scheme:
    rec = {
        "id": scheme_id,
        "name": f"Scheme {scheme_id}",
        "ministry": "Ministry of Testing",
        "source": "NSP",
        "website": "https://example.gov.in",
        "scheme_type": "scholarship",
        "amount": {"value": 10000, "frequency": "yearly"},
        "tags": ["education"],
        "eligibility": eligibility or {},
    }
    rec.update(overrides)
    return Scheme.model_validate(rec)


YOUTH_WOMEN = {"age": {"min": 18, "max": 25}, "gender": ["female"], "income_max": 200000}


# -------------------------
# NORMALIZER
# -------------------------
def test_empty_numeric_text_is_unconstrained_not_zero():
    assert parse_optional_number("") is None
    assert parse_optional_number("   ") is None
    assert parse_optional_number("0") == 0.0


def test_malformed_numeric_text_is_unconstrained():
    assert parse_optional_number("abc") is None
    assert parse_optional_number("12abc") is None
    assert parse_optional_number("nan") is None
    assert parse_optional_number("inf") is None
    assert parse_optional_int("twenty") is None


def test_numbers_pass_through():
    assert parse_optional_int("20") == 20
    assert parse_optional_int(" 42 ") == 42
    assert parse_optional_int(21.0) == 21
    assert parse_optional_int("20.0") == 20
    assert parse_optional_number(100000) == 100000.0
    assert parse_optional_number(True) is None


def test_search_tokens_casefold_trim_and_split():
    assert search_tokens("  Women   ENGINEERING ") == ("women", "engineering")
    assert search_tokens("agri\tloan\nwomen") == ("agri", "loan", "women")
    assert search_tokens("   ") == ()
    assert search_tokens("") == ()


def test_profile_from_form_parses_raw_text():
    form = ProfileForm(
        age="20",
        gender="female",
        caste="SC",
        income="100000",
        education="Class 12",
        occupation="Student",
        state="Kerala",
        scheme_type="scholarship",
        search="women",
        eligible_only=False,
    )
    profile = profile_from_form(form)
    assert profile.age == 20
    assert profile.gender == Gender.FEMALE
    assert profile.caste == Caste.SC
    assert profile.income == 100000.0
    assert profile.education == "Class 12"
    assert profile.occupation == "Student"
    assert profile.state == "Kerala"
    assert profile.scheme_type == "scholarship"
    assert profile.search == "women"
    assert profile.eligible_only is False


def test_profile_from_blank_form_is_default():
    assert profile_from_form(ProfileForm()) == DEFAULT_PROFILE
    assert DEFAULT_PROFILE.state == ALL_INDIA
    assert DEFAULT_PROFILE.eligible_only is True


def test_profile_from_form_drops_unknown_choices():
    form = ProfileForm(gender="robot", caste="XYZ", education="Bootcamp", state="Atlantis", income="-5")
    profile = profile_from_form(form)
    assert profile.gender is None
    assert profile.caste is None
    assert profile.education is None
    assert profile.state == ALL_INDIA
    assert profile.income is None


def test_apply_update_returns_new_profile():
    updated = apply_update(DEFAULT_PROFILE, "age", "33")
    assert updated.age == 33
    assert DEFAULT_PROFILE.age is None

    cleared = apply_update(updated, "age", "")
    assert cleared.age is None


def test_apply_update_rejects_unknown_field():
    with pytest.raises(UnknownProfileField):
        apply_update(DEFAULT_PROFILE, "favourite_colour", "blue")


def test_fractional_age_is_malformed_not_truncated():
    assert parse_optional_int("20.5") is None
    assert parse_optional_int(20.9) is None

    profile = profile_from_form(ProfileForm(age="20.5"))
    assert profile.age is None
    out = evaluate_scheme(profile, _scheme(eligibility={"age": {"min": 18, "max": 20}}))
    assert out.score == 0
    assert not any("Age must be" in r for r in out.reasons)


def test_null_checkbox_keeps_eligible_only_default():
    assert merge_profile(DEFAULT_PROFILE, {"eligible_only": None}).eligible_only is True
    assert merge_profile(DEFAULT_PROFILE, {"eligible_only": "off"}).eligible_only is False


def test_profiles_are_immutable_values():
    with pytest.raises(ValidationError):
        DEFAULT_PROFILE.age = 40
    assert DEFAULT_PROFILE.age is None
    assert apply_update(DEFAULT_PROFILE, "age", "40").age == 40


def test_merge_profile_applies_every_field():
    profile = merge_profile(DEFAULT_PROFILE, {"gender": "male", "income": "250000", "eligible_only": "false"})
    assert profile.gender == Gender.MALE
    assert profile.income == 250000.0
    assert profile.eligible_only is False


# -------------------------
# EVALUATOR
# -------------------------
def test_youth_woman_is_eligible_with_41_points():
    profile = Profile(age=20, gender="female", income=100000, state=ALL_INDIA)
    out = evaluate_scheme(profile, _scheme(eligibility=YOUTH_WOMEN))
    assert out.eligible is True
    assert out.score == 15 + 12 + 14
    assert out.reasons == ()


def test_age_failure_excludes_but_other_axes_still_score():
    profile = Profile(age=30, gender="female", income=100000)
    out = evaluate_scheme(profile, _scheme(eligibility=YOUTH_WOMEN))
    assert out.eligible is False
    assert out.score == 12 + 14
    assert any("Age must be" in r for r in out.reasons)


def test_age_bounds_are_inclusive():
    scheme = _scheme(eligibility={"age": {"min": 18, "max": 25}})
    assert evaluate_scheme(Profile(age=18), scheme).eligible
    assert evaluate_scheme(Profile(age=25), scheme).eligible
    assert not evaluate_scheme(Profile(age=17), scheme).eligible
    assert not evaluate_scheme(Profile(age=26), scheme).eligible


def test_income_at_limit_passes():
    scheme = _scheme(eligibility={"income_max": 250000})
    assert evaluate_scheme(Profile(income=250000), scheme).score == AXIS_POINTS["income"]
    assert not evaluate_scheme(Profile(income=250001), scheme).eligible


def test_zero_income_limit_is_a_real_constraint():
    scheme = _scheme(eligibility={"income_max": 0})
    assert evaluate_scheme(Profile(income=0), scheme).eligible
    assert not evaluate_scheme(Profile(income=1), scheme).eligible


def test_unset_profile_fields_neither_exclude_nor_score():
    scheme = _scheme(eligibility={
        **YOUTH_WOMEN,
        "caste": ["SC"],
        "education": ["Class 12"],
        "occupation": ["Student"],
    })
    out = evaluate_scheme(Profile(), scheme)
    assert out.eligible is True
    assert out.score == 0


def test_every_axis_matching_scores_full_points():
    scheme = _scheme(eligibility={
        **YOUTH_WOMEN,
        "caste": ["SC", "ST"],
        "education": ["Class 12"],
        "occupation": ["Student"],
        "states": ["Kerala"],
    })
    profile = Profile(
        age=20, gender="female", caste="ST", income=1000,
        education="Class 12", occupation="Student", state="Kerala",
    )
    out = evaluate_scheme(profile, scheme)
    assert out.eligible is True
    assert out.score == sum(AXIS_POINTS.values())


@pytest.mark.parametrize(
    "field,value,eligibility",
    [
        ("gender", "male", {"gender": ["female"]}),
        ("caste", "General", {"caste": ["SC", "ST"]}),
        ("education", "Primary", {"education": ["Class 12"]}),
        ("occupation", "Farmer", {"occupation": ["Student"]}),
        ("state", "Bihar", {"states": ["Kerala"]}),
    ],
)
def test_set_membership_axes_exclude(field, value, eligibility):
    out = evaluate_scheme(Profile(**{field: value}), _scheme(eligibility=eligibility))
    assert out.eligible is False
    assert out.score == 0
    assert len(out.reasons) == 1


def test_state_all_india_wildcard_and_sentinel_profile():
    nationwide = _scheme(eligibility={"states": [ALL_INDIA]})
    assert evaluate_scheme(Profile(state="Bihar"), nationwide).score == AXIS_POINTS["state"]

    kerala_only = _scheme(eligibility={"states": ["Kerala"]})
    assert not evaluate_scheme(Profile(), kerala_only).eligible
    assert evaluate_scheme(Profile(state="Kerala"), kerala_only).eligible


def test_scheme_type_filter_excludes_without_points():
    scheme = _scheme(scheme_type="loan")
    out = evaluate_scheme(Profile(scheme_type="scholarship"), scheme)
    assert out.eligible is False
    assert out.score == 0
    assert evaluate_scheme(Profile(scheme_type="loan"), scheme).eligible


def test_search_one_token_match_adds_six():
    scheme = _scheme(name="Pragati Scholarship", tags=["women", "girls"])
    out = evaluate_scheme(Profile(search="women engineering"), scheme)
    assert out.eligible is True
    assert out.score == SEARCH_TOKEN_POINTS


def test_search_no_match_excludes():
    scheme = _scheme(name="Pension Scheme", tags=["old age"])
    out = evaluate_scheme(Profile(search="engineering"), scheme)
    assert out.eligible is False
    assert out.score == 0


def test_search_counts_duplicate_tokens_and_substrings():
    scheme = _scheme(name="Women Entrepreneurship Loan", tags=[])
    out = evaluate_scheme(Profile(search="women WOMEN entre"), scheme)
    assert out.score == 3 * SEARCH_TOKEN_POINTS


def test_search_looks_at_ministry():
    scheme = _scheme(ministry="Ministry of Tribal Affairs")
    assert evaluate_scheme(Profile(search="tribal"), scheme).eligible


def test_unconstrained_scheme_accepts_everyone_with_zero_score():
    scheme = _scheme(eligibility={})
    profiles = [
        Profile(),
        Profile(age=90, gender="other", caste="EWS", income=5_000_000,
                education="PhD", occupation="Retired", state="Goa"),
    ]
    for profile in profiles:
        out = evaluate_scheme(profile, scheme)
        assert out.eligible is True
        assert out.score == 0


def test_evaluation_is_deterministic():
    profile = Profile(age=20, gender="female", income=100000, search="scheme")
    scheme = _scheme(eligibility=YOUTH_WOMEN)
    assert evaluate_scheme(profile, scheme) == evaluate_scheme(profile, scheme)


# -------------------------
# RANKER
# -------------------------
def test_empty_catalog():
    summary = match_schemes(Profile(), [])
    assert summary.results == ()
    assert summary.eligible_count == 0
    assert summary.total_count == 0


def test_results_sorted_by_score_desc():
    catalog = [
        _scheme("low", eligibility={"occupation": ["Student"]}),
        _scheme("high", eligibility={"age": {"min": 10, "max": 30}, "occupation": ["Student"]}),
        _scheme("none"),
    ]
    summary = match_schemes(Profile(age=20, occupation="Student"), catalog)
    assert [r.scheme.id for r in summary.results] == ["high", "low", "none"]
    assert [r.score for r in summary.results] == [25, 10, 0]


def test_ties_keep_catalog_order():
    catalog = [_scheme(f"s{i}", eligibility={"gender": ["female"]}) for i in range(6)]
    summary = match_schemes(Profile(gender="female"), catalog)
    assert [r.scheme.id for r in summary.results] == [f"s{i}" for i in range(6)]


def test_eligible_only_drops_ineligible():
    catalog = [
        _scheme("women", eligibility={"gender": ["female"]}),
        _scheme("men", eligibility={"gender": ["male"]}),
    ]
    summary = match_schemes(Profile(gender="female"), catalog)
    assert [r.scheme.id for r in summary.results] == ["women"]
    assert summary.eligible_count == 1
    assert summary.total_count == 2


def test_toggling_eligible_only_adds_entries_without_changing_scores():
    profile = Profile(age=20, gender="female", income=100000)
    catalog = load_catalog()
    strict = match_schemes(profile, catalog)
    loose = match_schemes(profile.model_copy(update={"eligible_only": False}), catalog)

    assert len(loose.results) == len(catalog)
    assert len(loose.results) >= len(strict.results)
    loose_scores = {r.scheme.id: r.score for r in loose.results}
    for r in strict.results:
        assert loose_scores[r.scheme.id] == r.score
    assert strict.eligible_count == loose.eligible_count


def test_matching_is_idempotent():
    profile = Profile(age=22, gender="female", caste="SC", income=150000, search="education")
    first = match_schemes(profile)
    second = match_schemes(profile)
    assert first == second


def test_scores_are_sums_of_axis_points():
    profile = Profile(
        age=22, gender="female", caste="SC", income=150000,
        education="Class 12", occupation="Student", search="women education",
        eligible_only=False,
    )
    axis_sums = {0}
    for points in AXIS_POINTS.values():
        axis_sums |= {s + points for s in axis_sums}
    possible = {s + SEARCH_TOKEN_POINTS * k for s in axis_sums for k in range(3)}

    for r in match_schemes(profile).results:
        assert isinstance(r.score, int)
        assert r.score >= 0
        assert r.score in possible


def test_catalog_does_not_mutate_between_calls():
    before = load_catalog()
    match_schemes(Profile(age=30, search="farmers"))
    assert load_catalog() is before


def test_non_numeric_age_is_unconstrained_for_all_schemes():
    profile = profile_from_form(ProfileForm(age="abc", eligible_only=False))
    assert profile.age is None
    summary = match_schemes(profile)
    assert summary.eligible_count == sum(
        1 for s in load_catalog() if s.eligibility.states is None or ALL_INDIA in s.eligibility.states
    )


# -------------------------
# CATALOG
# -------------------------
def test_catalog_loads_every_record_in_order():
    catalog = load_catalog()
    assert [s.id for s in catalog] == [rec["id"] for rec in SCHEME_CATALOG]
    assert len({s.id for s in catalog}) == len(catalog)


def test_get_scheme():
    assert get_scheme("pm-kisan").name == "Pradhan Mantri Kisan Samman Nidhi"
    assert get_scheme("does-not-exist") is None


def test_catalog_options():
    opts = catalog_options()
    assert opts["states"][0] == ALL_INDIA
    assert opts["genders"] == ["female", "male", "other"]
    assert "EWS" in opts["castes"]
