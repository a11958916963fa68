# app/engine/__init__.py
from .catalog import load_catalog, get_scheme, catalog_options
from .normalize import profile_from_form, apply_update, merge_profile, search_tokens, UnknownProfileField, DEFAULT_PROFILE
from .rules import MatchResult, evaluate_scheme
from .ranking import MatchSummary, match_schemes
