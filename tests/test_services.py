from decimal import Decimal

import pytest

from grading.exceptions import GradingScaleError
from grading.models import CommentOption, GradingSettings, GradeBand
from grading.services import (
    default_grade,
    department_scales,
    prepare_comment_options,
    storable_scale,
    grade_for,
    is_result_entry_ready,
    lookup_grade,
    replace_department_bands,
    save_grading_settings,
)
from grading.validators import validate_department_grading_scales
from tests.conftest import band

YEAR = "2030/2031"


# -------------------------
#  Grade lookup
# -------------------------

def test_grade_for_inclusive_bounds(jhs_scales):
    assert grade_for(80, jhs_scales) == ("A1", "Excellent")
    assert grade_for(79, jhs_scales) == ("B2", "Very Good")
    assert grade_for("50", jhs_scales) == ("C4", "Good")


def test_grade_for_no_match(jhs_scales):
    assert grade_for(79.5, jhs_scales) is None
    assert grade_for(10, jhs_scales) is None
    assert grade_for("abc", jhs_scales) is None


@pytest.mark.parametrize("score, letter", [(95, "A"), (80, "A"), (79.99, "B"), (60, "C"), (50, "D"), (40, "E"), (39, "F"), ("x", "F")])
def test_default_grade(score, letter):
    assert default_grade(score) == letter


# -------------------------
#  Saving
# -------------------------

@pytest.mark.django_db
def test_replace_department_bands_saves_trimmed_values():
    gs = GradingSettings.objects.create(academic_year=YEAR, term="first")
    replace_department_bands(gs, "Junior High", [band(" A1 ", " Excellent ", 80, 100), band("B2", "Very Good", 70, 79)])
    bands = list(GradeBand.objects.filter(settings=gs).order_by("-from_percentage"))
    assert [(b.department, b.grade, b.remark) for b in bands] == [
        ("JHS", "A1", "Excellent"),
        ("JHS", "B2", "Very Good"),
    ]
    assert bands[0].from_percentage == Decimal("80")


@pytest.mark.django_db
def test_replace_department_bands_replaces_previous_set(jhs_scales):
    gs = GradingSettings.objects.create(academic_year=YEAR, term="first")
    replace_department_bands(gs, "jhs", jhs_scales)
    replace_department_bands(gs, "jhs", [band("P", "Pass", 0, 100)])
    assert list(GradeBand.objects.filter(settings=gs).values_list("grade", flat=True)) == ["P"]


@pytest.mark.django_db
def test_invalid_set_blocks_save_and_keeps_existing_bands(jhs_scales):
    gs = GradingSettings.objects.create(academic_year=YEAR, term="first")
    replace_department_bands(gs, "jhs", jhs_scales)
    with pytest.raises(GradingScaleError) as exc:
        replace_department_bands(gs, "jhs", [band("A1", "Excellent", 75, 100), band("B2", "Very Good", 70, 90)])
    assert exc.value.errors == ["Overlapping ranges: 70-90% and 75-100%"]
    assert GradeBand.objects.filter(settings=gs).count() == 3


@pytest.mark.django_db
def test_save_grading_settings_validates_every_department_first(jhs_scales):
    with pytest.raises(GradingScaleError) as exc:
        save_grading_settings(YEAR, "Second Term", {
            "primary": jhs_scales,
            "jhs": [band("F9", "Fail", 60, 40)],
        })
    assert exc.value.errors == {"JHS": ["From percentage cannot be greater than to percentage"]}
    assert not GradingSettings.objects.filter(academic_year=YEAR).exists()


@pytest.mark.django_db
def test_save_grading_settings_creates_then_updates(jhs_scales):
    gs = save_grading_settings(YEAR, "2nd", {"kg": jhs_scales, "jhs": jhs_scales, "shs": []}, attendance_for_term=60)
    assert gs.term == "second"
    assert gs.attendance_for_term == 60
    assert GradeBand.objects.filter(settings=gs, department="KG").count() == 3
    assert GradeBand.objects.filter(settings=gs, department="SHS").count() == 0

    again = save_grading_settings(YEAR, "second", {"kg": [band("P", "Pass", 0, 100)]}, attendance_for_term=62)
    assert again.pk == gs.pk
    again.refresh_from_db()
    assert again.attendance_for_term == 62
    assert GradeBand.objects.filter(settings=gs, department="KG").count() == 1
    assert GradeBand.objects.filter(settings=gs, department="JHS").count() == 3


@pytest.mark.django_db
def test_lookup_grade_uses_stored_bands_then_default(jhs_scales):
    gs = GradingSettings.objects.create(academic_year=YEAR, term="first")
    replace_department_bands(gs, "jhs", jhs_scales)
    assert lookup_grade(gs, "JUNIOR HIGH", 72) == ("B2", "Very Good")
    assert lookup_grade(gs, "jhs", Decimal("79.5")) == ("B", "")
    assert lookup_grade(gs, "primary", 85) == ("A", "")


@pytest.mark.django_db
def test_default_scale_is_seeded():
    gs = GradingSettings.objects.get(academic_year="2025/2026", term="first")
    assert lookup_grade(gs, "jhs", 66) == ("B3", "Good")
    assert lookup_grade(gs, "primary", 12) == ("F9", "Fail")


@pytest.mark.django_db
def test_seeded_scale_has_no_gaps_between_bands():
    gs = GradingSettings.objects.get(academic_year="2025/2026", term="first")
    assert lookup_grade(gs, "jhs", Decimal("79.5")) == ("B2", "Very Good")
    assert lookup_grade(gs, "kg", Decimal("39.99")) == ("F9", "Fail")
    assert department_scales(gs, "jhs") and not validate_department_grading_scales(department_scales(gs, "jhs"))


# -------------------------
#  Précision stockée (2 décimales)
# -------------------------

def test_storable_scale_rounds_to_two_decimals():
    scale = storable_scale(band("B2", "Very Good", 70, 79.999))
    assert scale.from_ == Decimal("70.00")
    assert scale.to == Decimal("80.00")
    # valeurs non numériques laissées telles quelles
    assert storable_scale(band("B2", "Very Good", "70", None)).from_ == "70"


@pytest.mark.django_db
def test_bounds_overlapping_after_rounding_are_rejected():
    gs = GradingSettings.objects.create(academic_year=YEAR, term="first")
    with pytest.raises(GradingScaleError) as exc:
        replace_department_bands(gs, "jhs", [band("A1", "Excellent", 80, 100), band("B2", "Very Good", 70, 79.999)])
    assert exc.value.errors == ["Overlapping ranges: 70-80% and 80-100%"]
    assert not GradeBand.objects.filter(settings=gs).exists()


@pytest.mark.django_db
def test_stored_bands_are_still_valid_when_read_back():
    gs = GradingSettings.objects.create(academic_year=YEAR, term="first")
    replace_department_bands(gs, "jhs", [
        band("A1", "Excellent", 80, 100),
        band("B2", "Very Good", 70, 79.994),
        band("C4", "Good", 50.005, 69.99),
    ])
    stored = department_scales(gs, "jhs")
    assert sorted(s.to for s in stored) == [Decimal("69.99"), Decimal("79.99"), Decimal("100.00")]
    assert validate_department_grading_scales(stored) == []


# -------------------------
#  Options de commentaires
# -------------------------

def test_prepare_comment_options_trims_and_keeps_position():
    prepared = prepare_comment_options({
        "conduct": ["  Good ", "", {"value": "Polite"}],
        "teacher": ["   "],
    })
    assert prepared["valid"] == [
        {"option_type": "conduct", "option_value": "Good", "sort_order": 0},
        {"option_type": "conduct", "option_value": "Polite", "sort_order": 2},
    ]
    assert [(r["type"], r["reason"]) for r in prepared["rejected"]] == [
        ("conduct", "Blank or empty value"),
        ("teacher", "Blank or empty value"),
    ]
    assert prepared["invalid_types"] == []


def test_prepare_comment_options_flags_unknown_type():
    prepared = prepare_comment_options({"behaviour": ["Calm"], "interest": ["Music"]})
    assert prepared["invalid_types"] == ["behaviour"]
    assert prepared["rejected"] == [{"type": "behaviour", "value": "Calm", "reason": "Invalid option type"}]
    assert [o["option_value"] for o in prepared["valid"]] == ["Music"]


@pytest.mark.django_db
def test_save_grading_settings_replaces_comment_options_per_type(jhs_scales):
    CommentOption.objects.create(option_type="conduct", option_value="Old", sort_order=0)
    CommentOption.objects.create(option_type="interest", option_value="Sports", sort_order=0)
    save_grading_settings(YEAR, "first", {"jhs": jhs_scales}, comment_options={
        "conduct": ["Respectful ", "", "Punctual"],
        "attitude": ["Hardworking"],
    })
    conduct = CommentOption.objects.filter(option_type="conduct")
    assert [(o.option_value, o.sort_order) for o in conduct] == [("Respectful", 0), ("Punctual", 2)]
    assert CommentOption.objects.filter(option_type="attitude").count() == 1
    # type non envoyé: inchangé
    assert CommentOption.objects.get(option_type="interest").option_value == "Sports"


@pytest.mark.django_db
def test_invalid_comment_option_type_blocks_everything(jhs_scales):
    with pytest.raises(GradingScaleError) as exc:
        save_grading_settings(YEAR, "first", {"jhs": jhs_scales}, comment_options={"behaviour": ["Calm"]})
    assert exc.value.errors == {"comment_options": [
        "Invalid comment option type(s): behaviour. Allowed types: conduct, attitude, interest, teacher."
    ]}
    assert not GradingSettings.objects.filter(academic_year=YEAR).exists()
    assert not CommentOption.objects.exists()


# -------------------------
#  Results entry form
# -------------------------

FORM = {"class_id": "c1", "student_id": "s1", "term": "first"}


def test_result_entry_ready():
    marks = {"math": {"ca1_score": None, "exam_score": 55}}
    assert is_result_entry_ready(FORM, {"id": "sba"}, None, marks) is True


@pytest.mark.parametrize("form, sba, error, marks", [
    ({**FORM, "student_id": ""}, {"id": "sba"}, None, {"math": {"exam_score": 55}}),
    (FORM, None, None, {"math": {"exam_score": 55}}),
    (FORM, {"id": "sba"}, "Result already exists", {"math": {"exam_score": 55}}),
    (FORM, {"id": "sba"}, None, {"math": {"ca1_score": 0, "exam_score": None}, "eng": None}),
    (FORM, {"id": "sba"}, None, {}),
])
def test_result_entry_not_ready(form, sba, error, marks):
    assert not is_result_entry_ready(form, sba, error, marks)
