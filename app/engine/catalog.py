# app/engine/catalog.py
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from app.options import ALL_INDIA, STATES, EDUCATION_LEVELS, OCCUPATIONS, SCHEME_TYPES
from app.schemas import Caste, Gender, Scheme

logger = logging.getLogger(__name__)

# Records are config, not code. Absent eligibility keys mean "unconstrained".
SCHEME_CATALOG = [
    {
        "id": "nsp-post-matric-sc",
        "name": "Post Matric Scholarship for SC Students",
        "ministry": "Ministry of Social Justice and Empowerment",
        "source": "NSP",
        "website": "https://scholarships.gov.in",
        "deadline": "2025-10-31",
        "scheme_type": "scholarship",
        "amount": {"value": 13500, "frequency": "yearly"},
        "tags": ["education", "students", "sc", "post-matric", "dbt"],
        "eligibility": {
            "caste": ["SC"],
            "income_max": 250000,
            "education": ["Class 10", "Class 12", "Diploma", "Undergraduate", "Postgraduate", "PhD"],
            "occupation": ["Student"],
            "states": [ALL_INDIA],
        },
    },
    {
        "id": "nsp-post-matric-st",
        "name": "Post Matric Scholarship for ST Students",
        "ministry": "Ministry of Tribal Affairs",
        "source": "NSP",
        "website": "https://scholarships.gov.in",
        "deadline": "2025-10-31",
        "scheme_type": "scholarship",
        "amount": {"value": 12000, "frequency": "yearly"},
        "tags": ["education", "students", "st", "tribal", "post-matric"],
        "eligibility": {
            "caste": ["ST"],
            "income_max": 250000,
            "education": ["Class 10", "Class 12", "Diploma", "Undergraduate", "Postgraduate", "PhD"],
            "occupation": ["Student"],
        },
    },
    {
        "id": "nsp-obc-pre-matric",
        "name": "Pre Matric Scholarship for OBC Students",
        "ministry": "Ministry of Social Justice and Empowerment",
        "source": "NSP",
        "website": "https://scholarships.gov.in",
        "deadline": "2025-10-15",
        "scheme_type": "scholarship",
        "amount": {"value": 1500, "frequency": "yearly"},
        "tags": ["education", "students", "obc", "pre-matric", "school"],
        "eligibility": {
            "age": {"min": 10, "max": 18},
            "caste": ["OBC"],
            "income_max": 250000,
            "education": ["Primary", "Class 8"],
            "occupation": ["Student"],
        },
    },
    {
        "id": "aicte-pragati",
        "name": "AICTE Pragati Scholarship for Girls",
        "ministry": "Ministry of Education",
        "source": "Buddy4Study",
        "website": "https://www.aicte-india.org/schemes/students-development-schemes",
        "deadline": "2025-12-31",
        "scheme_type": "scholarship",
        "amount": {"value": 50000, "frequency": "yearly"},
        "tags": ["women", "girls", "engineering", "technical education", "aicte"],
        "eligibility": {
            "age": {"min": 17, "max": 25},
            "gender": ["female"],
            "income_max": 800000,
            "education": ["Class 12", "Diploma"],
            "occupation": ["Student"],
        },
    },
    {
        "id": "aicte-saksham",
        "name": "AICTE Saksham Scholarship for Specially Abled Students",
        "ministry": "Ministry of Education",
        "source": "Buddy4Study",
        "website": "https://www.aicte-india.org/schemes/students-development-schemes",
        "deadline": "2025-12-31",
        "scheme_type": "scholarship",
        "amount": {"value": 50000, "frequency": "yearly"},
        "tags": ["disability", "engineering", "technical education", "aicte"],
        "eligibility": {
            "income_max": 800000,
            "education": ["Class 12", "Diploma", "Undergraduate"],
            "occupation": ["Student"],
        },
    },
    {
        "id": "central-sector-scholarship",
        "name": "Central Sector Scheme of Scholarship for College and University Students",
        "ministry": "Ministry of Education",
        "source": "NSP",
        "website": "https://scholarships.gov.in",
        "deadline": "2025-10-31",
        "scheme_type": "scholarship",
        "amount": {"value": 12000, "frequency": "yearly"},
        "tags": ["education", "merit", "college", "university"],
        "eligibility": {
            "age": {"min": 17, "max": 25},
            "income_max": 450000,
            "education": ["Class 12", "Undergraduate", "Postgraduate"],
            "occupation": ["Student"],
        },
    },
    {
        "id": "pm-kisan",
        "name": "Pradhan Mantri Kisan Samman Nidhi",
        "ministry": "Ministry of Agriculture and Farmers Welfare",
        "source": "MyGov",
        "website": "https://pmkisan.gov.in",
        "scheme_type": "grant",
        "amount": {"value": 6000, "frequency": "yearly"},
        "tags": ["agriculture", "farmers", "income support", "dbt"],
        "eligibility": {
            "age": {"min": 18, "max": 100},
            "occupation": ["Farmer"],
            "states": [ALL_INDIA],
        },
    },
    {
        "id": "pmfby",
        "name": "Pradhan Mantri Fasal Bima Yojana",
        "ministry": "Ministry of Agriculture and Farmers Welfare",
        "source": "Official portal",
        "website": "https://pmfby.gov.in",
        "scheme_type": "insurance",
        "amount": {"value": 200000, "frequency": "one-time"},
        "tags": ["agriculture", "crop insurance", "farmers", "drought", "flood"],
        "eligibility": {
            "occupation": ["Farmer"],
        },
    },
    {
        "id": "pm-svanidhi",
        "name": "PM Street Vendor's AtmaNirbhar Nidhi",
        "ministry": "Ministry of Housing and Urban Affairs",
        "source": "MyGov",
        "website": "https://pmsvanidhi.mohua.gov.in",
        "scheme_type": "loan",
        "amount": {"value": 50000, "frequency": "one-time"},
        "tags": ["street vendors", "working capital", "urban", "micro credit"],
        "eligibility": {
            "age": {"min": 18, "max": 65},
            "occupation": ["Self-employed", "Daily wage worker"],
        },
    },
    {
        "id": "pmay-urban",
        "name": "Pradhan Mantri Awas Yojana (Urban)",
        "ministry": "Ministry of Housing and Urban Affairs",
        "source": "Official portal",
        "website": "https://pmaymis.gov.in",
        "scheme_type": "housing",
        "amount": {"value": 267000, "frequency": "one-time"},
        "tags": ["housing", "urban", "interest subsidy", "ews", "lig"],
        "eligibility": {
            "age": {"min": 18, "max": 70},
            "income_max": 1800000,
        },
    },
    {
        "id": "pmay-gramin",
        "name": "Pradhan Mantri Awas Yojana (Gramin)",
        "ministry": "Ministry of Rural Development",
        "source": "Official portal",
        "website": "https://pmayg.nic.in",
        "scheme_type": "housing",
        "amount": {"value": 120000, "frequency": "one-time"},
        "tags": ["housing", "rural", "women", "pucca house"],
        "eligibility": {
            "age": {"min": 18, "max": 100},
            "income_max": 300000,
            "occupation": ["Farmer", "Daily wage worker", "Unemployed", "Artisan", "Homemaker"],
        },
    },
    {
        "id": "ujjwala",
        "name": "Pradhan Mantri Ujjwala Yojana",
        "ministry": "Ministry of Petroleum and Natural Gas",
        "source": "MyGov",
        "website": "https://pmuy.gov.in",
        "scheme_type": "subsidy",
        "amount": {"value": 1600, "frequency": "one-time"},
        "tags": ["women", "lpg", "clean cooking", "bpl"],
        "eligibility": {
            "age": {"min": 18, "max": 100},
            "gender": ["female"],
            "income_max": 250000,
        },
    },
    {
        "id": "stand-up-india",
        "name": "Stand-Up India",
        "ministry": "Ministry of Finance",
        "source": "Official portal",
        "website": "https://www.standupmitra.in",
        "scheme_type": "loan",
        "amount": {"value": 10000000, "frequency": "one-time"},
        "tags": ["entrepreneurship", "women", "sc", "st", "greenfield enterprise"],
        "eligibility": {
            "age": {"min": 18, "max": 65},
            "caste": ["SC", "ST"],
            "occupation": ["Entrepreneur", "Self-employed"],
        },
    },
    {
        "id": "mudra-shishu",
        "name": "Pradhan Mantri Mudra Yojana (Shishu)",
        "ministry": "Ministry of Finance",
        "source": "Official portal",
        "website": "https://www.mudra.org.in",
        "scheme_type": "loan",
        "amount": {"value": 50000, "frequency": "one-time"},
        "tags": ["micro enterprise", "entrepreneurship", "small business", "collateral free"],
        "eligibility": {
            "age": {"min": 18, "max": 65},
            "occupation": ["Entrepreneur", "Self-employed", "Artisan"],
        },
    },
    {
        "id": "pmkvy",
        "name": "Pradhan Mantri Kaushal Vikas Yojana",
        "ministry": "Ministry of Skill Development and Entrepreneurship",
        "source": "MyGov",
        "website": "https://www.pmkvyofficial.org",
        "scheme_type": "skill",
        "amount": {"value": 8000, "frequency": "one-time"},
        "tags": ["skills", "training", "certification", "youth", "employment"],
        "eligibility": {
            "age": {"min": 15, "max": 45},
            "occupation": ["Unemployed", "Student", "Daily wage worker"],
        },
    },
    {
        "id": "pm-vishwakarma",
        "name": "PM Vishwakarma",
        "ministry": "Ministry of Micro, Small and Medium Enterprises",
        "source": "Official portal",
        "website": "https://pmvishwakarma.gov.in",
        "scheme_type": "loan",
        "amount": {"value": 300000, "frequency": "one-time"},
        "tags": ["artisans", "craftspeople", "toolkit", "skills", "credit"],
        "eligibility": {
            "age": {"min": 18, "max": 100},
            "occupation": ["Artisan"],
        },
    },
    {
        "id": "atal-pension",
        "name": "Atal Pension Yojana",
        "ministry": "Ministry of Finance",
        "source": "Official portal",
        "website": "https://www.npscra.nsdl.co.in",
        "scheme_type": "pension",
        "amount": {"value": 5000, "frequency": "monthly"},
        "tags": ["pension", "unorganised sector", "old age", "retirement"],
        "eligibility": {
            "age": {"min": 18, "max": 40},
        },
    },
    {
        "id": "ignoaps",
        "name": "Indira Gandhi National Old Age Pension Scheme",
        "ministry": "Ministry of Rural Development",
        "source": "Official portal",
        "website": "https://nsap.nic.in",
        "scheme_type": "pension",
        "amount": {"value": 200, "frequency": "monthly"},
        "tags": ["old age", "pension", "bpl", "senior citizens"],
        "eligibility": {
            "age": {"min": 60, "max": 120},
            "income_max": 100000,
        },
    },
    {
        "id": "pmjjby",
        "name": "Pradhan Mantri Jeevan Jyoti Bima Yojana",
        "ministry": "Ministry of Finance",
        "source": "MyGov",
        "website": "https://jansuraksha.gov.in",
        "scheme_type": "insurance",
        "amount": {"value": 200000, "frequency": "one-time"},
        "tags": ["life insurance", "bank account", "low premium"],
        "eligibility": {
            "age": {"min": 18, "max": 50},
        },
    },
    {
        "id": "ladli-behna",
        "name": "Mukhyamantri Ladli Behna Yojana",
        "ministry": "Women and Child Development Department, Madhya Pradesh",
        "source": "State portal",
        "website": "https://cmladlibahna.mp.gov.in",
        "scheme_type": "grant",
        "amount": {"value": 1250, "frequency": "monthly"},
        "tags": ["women", "financial independence", "dbt", "madhya pradesh"],
        "eligibility": {
            "age": {"min": 21, "max": 60},
            "gender": ["female"],
            "income_max": 250000,
            "states": ["Madhya Pradesh"],
        },
    },
    {
        "id": "kalia",
        "name": "Krushak Assistance for Livelihood and Income Augmentation",
        "ministry": "Agriculture and Farmers' Empowerment Department, Odisha",
        "source": "State portal",
        "website": "https://kalia.odisha.gov.in",
        "scheme_type": "grant",
        "amount": {"value": 10000, "frequency": "yearly"},
        "tags": ["agriculture", "farmers", "landless", "odisha"],
        "eligibility": {
            "occupation": ["Farmer"],
            "states": ["Odisha"],
        },
    },
    {
        "id": "free-coaching-sc-obc",
        "name": "Free Coaching Scheme for SC and OBC Students",
        "ministry": "Ministry of Social Justice and Empowerment",
        "source": "NSP",
        "website": "https://coaching.dosje.gov.in",
        "deadline": "2025-09-30",
        "scheme_type": "skill",
        "amount": {"value": 4000, "frequency": "monthly"},
        "tags": ["coaching", "competitive exams", "education", "students"],
        "eligibility": {
            "caste": ["SC", "OBC"],
            "income_max": 800000,
            "education": ["Class 12", "Undergraduate", "Postgraduate"],
        },
    },
]


@lru_cache
def load_catalog() -> tuple[Scheme, ...]:
    """Validate the raw records once; the result is shared and read-only."""
    schemes = tuple(Scheme.model_validate(rec) for rec in SCHEME_CATALOG)
    logger.info("catalog loaded: %d schemes", len(schemes))
    return schemes


def get_scheme(scheme_id: str) -> Optional[Scheme]:
    for scheme in load_catalog():
        if scheme.id == scheme_id:
            return scheme
    return None


def catalog_options() -> dict[str, list[str]]:
    return {
        "states": list(STATES),
        "education_levels": list(EDUCATION_LEVELS),
        "occupations": list(OCCUPATIONS),
        "scheme_types": list(SCHEME_TYPES),
        "genders": [g.value for g in Gender],
        "castes": [c.value for c in Caste],
    }
