# grading/departments.py
import logging

logger = logging.getLogger(__name__)

# clé -> (nom DB, libellé, abréviation, alias)
DEPARTMENTS = {
    "kg": {
        "db_name": "KG",
        "display_name": "KG",
        "short_name": "KG",
        "aliases": ["kg", "kindergarten"],
    },
    "primary": {
        "db_name": "PRIMARY",
        "display_name": "PRIMARY",
        "short_name": "PRI",
        "aliases": ["primary", "p", "pri", "primary school"],
    },
    "jhs": {
        "db_name": "JUNIOR HIGH",
        "display_name": "JUNIOR HIGH",
        "short_name": "JHS",
        "aliases": ["jhs", "junior high", "junior high school", "j.h.s", "j.h.s."],
    },
    "shs": {
        "db_name": "SENIOR HIGH",
        "display_name": "SENIOR HIGH",
        "short_name": "SHS",
        "aliases": ["shs", "senior high", "senior high school", "s.h.s", "s.h.s."],
    },
}

_ALIAS_TO_KEY = {
    alias: key
    for key, info in DEPARTMENTS.items()
    for alias in info["aliases"] + [info["db_name"].lower()]
}

TERMS = ("first", "second", "third")


def department_key(value):
    """'JHS', 'Junior High School' ... -> 'jhs' (None si inconnu)."""
    if not value:
        return None
    return _ALIAS_TO_KEY.get(value.strip().lower())


def normalize_department_name(value) -> str:
    """
    Nom standard en base: PRIMARY, JUNIOR HIGH, SENIOR HIGH, KG.
    Inconnu -> version majuscule (avec warning).
    """
    if not value:
        return ""
    key = department_key(value)
    if key:
        return DEPARTMENTS[key]["db_name"]
    logger.warning('Unknown department name "%s", using upper-case value', value)
    return value.strip().upper()


def department_display_name(value) -> str:
    """Libellé affiché (JHS -> JUNIOR HIGH)."""
    key = department_key(value)
    if key:
        return DEPARTMENTS[key]["display_name"]
    return normalize_department_name(value)


def grading_scale_department(value) -> str:
    """
    Les bandes de notation sont stockées sous l'abréviation
    (JHS et non JUNIOR HIGH), sauf KG/PRIMARY.
    """
    key = department_key(value)
    if key == "primary":
        return "PRIMARY"
    if key:
        return DEPARTMENTS[key]["short_name"]
    return (value or "").strip().upper()


def normalize_term(value) -> str:
    """'First Term', '1', '1st' -> 'first'. Défaut: 'first'."""
    term = (value or "").strip().lower()
    if "first" in term or term == "1" or "1st" in term:
        return "first"
    if "second" in term or term == "2" or "2nd" in term:
        return "second"
    if "third" in term or term == "3" or "3rd" in term:
        return "third"
    return "first"
