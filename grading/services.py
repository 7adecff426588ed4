import logging
from dataclasses import replace
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from django.db import transaction

from grading.departments import grading_scale_department, normalize_term
from grading.exceptions import GradingScaleError
from grading.models import CommentOption, GradingSettings, GradeBand
from grading.validators import is_number, validate_department_grading_scales

logger = logging.getLogger(__name__)

DEFAULT_GRADE_STEPS = [
    (80, "A"),
    (70, "B"),
    (60, "C"),
    (50, "D"),
    (40, "E"),
]

SCORE_FIELDS = ("ca1_score", "ca2_score", "ca3_score", "ca4_score", "exam_score")

# précision des colonnes from_percentage / to_percentage
PERCENT_QUANTUM = Decimal("0.01")


def _to_decimal(x):
    try:
        return Decimal(str(x))
    except (InvalidOperation, TypeError, ValueError):
        return None


def _quantize(value):
    if not is_number(value):
        return value
    try:
        return Decimal(str(value)).quantize(PERCENT_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # infini / hors précision: laissé tel quel, la validation le signale
        return value


def storable_scale(scale):
    """
    Bornes arrondies à 2 décimales, comme en base.
    À appliquer AVANT la validation: 79.999 devient 80.00 et le
    chevauchement avec 80-100 est détecté au lieu d'apparaître après écriture.
    """
    return replace(scale, from_=_quantize(scale.from_), to=_quantize(scale.to))


def grade_for(score, scales):
    """
    Retourne (grade, remark) de la première bande contenant le score
    (bornes inclusives), ou None.
    """
    value = _to_decimal(score)
    if value is None or value.is_nan():
        return None
    for scale in scales:
        if not (is_number(scale.from_) and is_number(scale.to)):
            continue
        if scale.from_ <= value <= scale.to:
            return scale.grade, scale.remark
    return None


def default_grade(score) -> str:
    """Barème de repli quand aucune bande n'est configurée."""
    value = _to_decimal(score)
    if value is None or value.is_nan():
        return "F"
    for threshold, letter in DEFAULT_GRADE_STEPS:
        if value >= threshold:
            return letter
    return "F"


def department_scales(settings_obj, department):
    """Bandes stockées d'un département, converties en GradingScale."""
    qs = GradeBand.objects.filter(settings=settings_obj, department=grading_scale_department(department))
    return [b.to_scale() for b in qs]


@transaction.atomic
def replace_department_bands(settings_obj, department, scales):
    """
    Remplace toutes les bandes d'un département pour ces réglages.
    Rien n'est écrit si la validation retourne au moins un message.
    """
    scales = [storable_scale(s) for s in scales]
    dept = grading_scale_department(department)
    errors = validate_department_grading_scales(scales)
    if errors:
        logger.info("Rejected %d grading scale(s) for %s: %d error(s)", len(scales), dept, len(errors))
        raise GradingScaleError(errors)

    GradeBand.objects.filter(settings=settings_obj, department=dept).delete()
    bands = GradeBand.objects.bulk_create([
        GradeBand(
            settings=settings_obj,
            department=dept,
            from_percentage=s.from_,
            to_percentage=s.to,
            grade=s.grade.strip(),
            remark=s.remark.strip(),
        )
        for s in scales
    ])
    logger.info("Saved %d grading band(s) for %s (%s)", len(bands), dept, settings_obj)
    return bands


# -------------------------
#  Options de commentaires (conduite, attitude, intérêt, enseignant)
# -------------------------

def prepare_comment_options(options_by_type):
    """
    options_by_type: {"conduct": ["Good", {"value": "Polite"}, ...], ...}
    Valeurs nettoyées (trim), sort_order = position d'origine dans la liste.
    Retourne {
      "valid": [{"option_type", "option_value", "sort_order"}],
      "invalid_types": [types inconnus],
      "rejected": [{"type", "value", "reason"}],
    }
    Les valeurs vides sont rejetées (le reste est enregistré);
    un type inconnu bloque l'enregistrement.
    """
    allowed = set(CommentOption.OptionType.values)
    valid, rejected, invalid_types = [], [], []

    for option_type, options in options_by_type.items():
        if option_type not in allowed:
            invalid_types.append(option_type)
        for i, opt in enumerate(options or []):
            raw = opt.get("value") if isinstance(opt, dict) else opt
            value = raw.strip() if isinstance(raw, str) else ""
            if not value:
                rejected.append({"type": option_type, "value": raw or "(empty)", "reason": "Blank or empty value"})
                continue
            if option_type not in allowed:
                rejected.append({"type": option_type, "value": value, "reason": "Invalid option type"})
                continue
            valid.append({"option_type": option_type, "option_value": value, "sort_order": i})

    if rejected:
        logger.warning("Rejected %d comment option(s): %s", len(rejected), rejected)
    return {"valid": valid, "invalid_types": invalid_types, "rejected": rejected}


@transaction.atomic
def replace_comment_options(option_types, valid_options):
    """Remplace les options des types fournis par la liste déjà validée."""
    CommentOption.objects.filter(option_type__in=option_types).delete()
    created = CommentOption.objects.bulk_create([CommentOption(**o) for o in valid_options])
    logger.info("Saved %d comment option(s) for %s", len(created), ", ".join(option_types))
    return created


def save_grading_settings(academic_year, term, scales_by_department, comment_options=None, **fields):
    """
    Enregistre les réglages d'un trimestre + les bandes de chaque département
    + les options de commentaires.
    Tout est validé AVANT toute écriture: une seule erreur bloque l'ensemble.
    fields: term_begin, term_ends, next_term_begin, attendance_for_term
    """
    term = normalize_term(term)
    scales_by_department = {
        dept: [storable_scale(s) for s in scales] for dept, scales in scales_by_department.items()
    }
    collected = {}
    for department, scales in scales_by_department.items():
        errors = validate_department_grading_scales(scales)
        if errors:
            collected[grading_scale_department(department)] = errors

    prepared = prepare_comment_options(comment_options or {})
    if prepared["invalid_types"]:
        collected["comment_options"] = [
            f"Invalid comment option type(s): {', '.join(map(str, prepared['invalid_types']))}. "
            f"Allowed types: {', '.join(CommentOption.OptionType.values)}."
        ]

    if collected:
        logger.info("Grading settings %s/%s blocked: %s", academic_year, term, ", ".join(collected))
        raise GradingScaleError(collected)

    with transaction.atomic():
        settings_obj, created = GradingSettings.objects.update_or_create(
            academic_year=academic_year, term=term,
            defaults={k: v for k, v in fields.items() if v is not None},
        )
        for department, scales in scales_by_department.items():
            if scales:
                replace_department_bands(settings_obj, department, scales)
        if comment_options:
            replace_comment_options(list(comment_options), prepared["valid"])
    logger.info("Grading settings %s %s", settings_obj, "created" if created else "updated")
    return settings_obj


def is_result_entry_ready(form, assessment_type, existing_result_error, subject_marks) -> bool:
    """
    Formulaire de saisie des résultats prêt à l'envoi si:
      - classe, élève, trimestre et type d'évaluation (SBA) renseignés
      - pas de résultat existant en conflit
      - au moins une note CA1..CA4/examen non nulle
    """
    has_basic_info = all(form.get(k) for k in ("class_id", "student_id", "term")) and bool(assessment_type)
    has_marks = any(
        mark and any(mark.get(f) for f in SCORE_FIELDS)
        for mark in subject_marks.values()
    )
    return has_basic_info and not existing_result_error and has_marks


def lookup_grade(settings_obj, department, score):
    """(grade, remark) via les bandes stockées; sinon barème par défaut sans remarque."""
    found = grade_for(score, department_scales(settings_obj, department))
    if found:
        return found
    return default_grade(score), ""
