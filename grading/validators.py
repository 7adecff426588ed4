import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

PERCENT_MIN = 0
PERCENT_MAX = 100

MSG_GRADE_REQUIRED = "Grade is required"
MSG_REMARK_REQUIRED = "Remark is required"
MSG_FROM_RANGE = "From percentage must be between 0 and 100"
MSG_TO_RANGE = "To percentage must be between 0 and 100"
MSG_INVERTED = "From percentage cannot be greater than to percentage"


@dataclass(frozen=True)
class GradingScale:
    """
    Une bande de notation: grade ("A1") + remarque ("Excellent")
    sur l'intervalle inclusif [from_, to] (pourcentages).
    Aucune conversion à la construction: un from_/to non numérique
    est conservé tel quel et signalé par la validation.
    """
    grade: Any
    remark: Any
    from_: Any
    to: Any

    @classmethod
    def from_mapping(cls, data):
        """Accepte {"from","to"} (front) ou {"from_percentage","to_percentage"} (DB/API)."""
        return cls(
            grade=data.get("grade"),
            remark=data.get("remark"),
            from_=data["from"] if "from" in data else data.get("from_percentage"),
            to=data["to"] if "to" in data else data.get("to_percentage"),
        )


def is_number(value) -> bool:
    # bool est un int en Python: on le refuse explicitement
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return False
    if isinstance(value, float):
        return not math.isnan(value)
    if isinstance(value, Decimal):
        return not value.is_nan()
    return True


def _is_blank(value) -> bool:
    return not isinstance(value, str) or not value.strip()


def _in_percent_range(value) -> bool:
    return is_number(value) and PERCENT_MIN <= value <= PERCENT_MAX


def format_percentage(value) -> str:
    """80.00 -> "80", 79.50 -> "79.5" (même rendu que l'écran de réglages)."""
    if not is_number(value):
        return str(value)
    d = Decimal(str(value))
    if d.is_infinite():
        return str(value)
    if d == d.to_integral_value():
        return str(int(d))
    return format(d.normalize(), "f")


def validate_scale(scale: GradingScale):
    """
    Contrôles indépendants d'une bande (aucun ne court-circuite les autres).
    Retourne la liste des messages, dans l'ordre fixe des contrôles.
    """
    errors = []
    if _is_blank(scale.grade):
        errors.append(MSG_GRADE_REQUIRED)
    if _is_blank(scale.remark):
        errors.append(MSG_REMARK_REQUIRED)
    if not _in_percent_range(scale.from_):
        errors.append(MSG_FROM_RANGE)
    if not _in_percent_range(scale.to):
        errors.append(MSG_TO_RANGE)
    if is_number(scale.from_) and is_number(scale.to) and scale.from_ > scale.to:
        errors.append(MSG_INVERTED)
    return errors


def _sort_key(scale):
    # bornes non numériques en fin de liste; sorted() est stable
    if is_number(scale.from_):
        return (0, scale.from_)
    return (1, 0)


def validate_scale_set(scales):
    """
    Détection des chevauchements entre bandes voisines après tri par `from_`.
    Seules les paires adjacentes sont comparées: une bande imbriquée dans une
    bande non voisine n'est pas signalée tant que la paire voisine n'est pas
    corrigée.
    """
    errors = []
    ordered = sorted(scales, key=_sort_key)
    for current, nxt in zip(ordered, ordered[1:]):
        if not (is_number(current.to) and is_number(nxt.from_)):
            continue
        if current.to >= nxt.from_:
            errors.append(
                "Overlapping ranges: "
                f"{format_percentage(current.from_)}-{format_percentage(current.to)}% and "
                f"{format_percentage(nxt.from_)}-{format_percentage(nxt.to)}%"
            )
    return errors


def validate_department_grading_scales(scales):
    """Erreurs par bande (ordre d'entrée), puis erreurs de chevauchement. Ne lève jamais."""
    scales = list(scales)
    errors = []
    for scale in scales:
        errors.extend(validate_scale(scale))
    errors.extend(validate_scale_set(scales))
    return errors
