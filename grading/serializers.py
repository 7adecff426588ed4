from rest_framework import serializers

from .departments import department_display_name, grading_scale_department, normalize_term
from .models import CommentOption, GradingSettings, GradeBand
from .services import replace_department_bands, save_grading_settings, storable_scale
from .validators import GradingScale, validate_department_grading_scales


# -------------------------
#  Model Serializers
# -------------------------

class GradingSettingsSerializer(serializers.ModelSerializer):
    class Meta:
        model = GradingSettings
        fields = ["id", "academic_year", "term", "term_begin", "term_ends",
                  "next_term_begin", "attendance_for_term", "is_active"]


class GradeBandSerializer(serializers.ModelSerializer):
    class Meta:
        model = GradeBand
        fields = ["id", "settings", "department", "from_percentage", "to_percentage", "grade", "remark"]

    def to_representation(self, instance):
        data = super().to_representation(instance)
        # Decimal -> float pour le front
        for key in ("from_percentage", "to_percentage"):
            if data.get(key) is not None:
                data[key] = float(data[key])
        return data

    def validate_department(self, value):
        return grading_scale_department(value)

    def validate(self, data):
        """
        La bande modifiée est validée avec le reste de son département
        (chevauchements compris).
        """
        instance = self.instance

        def pick(key):
            if key in data:
                return data[key]
            return getattr(instance, key) if instance else None

        settings_obj = pick("settings")
        department = pick("department")
        candidate = GradingScale(
            grade=pick("grade"),
            remark=pick("remark"),
            from_=pick("from_percentage"),
            to=pick("to_percentage"),
        )
        others = GradeBand.objects.filter(settings=settings_obj, department=department)
        if instance is not None:
            others = others.exclude(pk=instance.pk)
        errors = validate_department_grading_scales([b.to_scale() for b in others] + [candidate])
        if errors:
            raise serializers.ValidationError(errors)
        return data


# -------------------------
#  BULK / VALIDATION
# -------------------------

def _scales_from_entries(entries):
    # arrondi à la précision stockée avant validation
    return [storable_scale(GradingScale.from_mapping(e)) for e in entries]


class ScaleSetValidateSerializer(serializers.Serializer):
    """
    Validation sans enregistrement.
    Body: { "scales": [ {"grade":"A1","remark":"Excellent","from":80,"to":100}, ... ] }
    """
    scales = serializers.ListField(child=serializers.DictField(), allow_empty=True)

    def to_result(self):
        scales = _scales_from_entries(self.validated_data["scales"])
        errors = validate_department_grading_scales(scales)
        return {"valid": not errors, "errors": errors}


class DepartmentScalesUpsertSerializer(serializers.Serializer):
    """
    Remplacement en lot des bandes d'UN département pour (année, trimestre).
    {
      "academic_year": "2025/2026",
      "term": "First Term",            // normalisé -> "first"
      "department": "JHS",
      "scales": [ {"grade":"A1","remark":"Excellent","from":80,"to":100}, ... ]
    }
    Les valeurs non numériques sont laissées telles quelles: elles deviennent
    des messages de validation, pas des erreurs de champ.
    """
    academic_year = serializers.CharField(max_length=9)
    term = serializers.CharField()
    department = serializers.CharField()
    scales = serializers.ListField(child=serializers.DictField(), allow_empty=True)

    def validate_term(self, value):
        return normalize_term(value)

    def validate_department(self, value):
        return grading_scale_department(value)

    def validate(self, attrs):
        scales = _scales_from_entries(attrs["scales"])
        errors = validate_department_grading_scales(scales)
        if errors:
            raise serializers.ValidationError({"scales": errors})
        attrs["scale_objs"] = scales
        return attrs

    def create(self, validated):
        settings_obj, _ = GradingSettings.objects.get_or_create(
            academic_year=validated["academic_year"], term=validated["term"]
        )
        bands = replace_department_bands(settings_obj, validated["department"], validated["scale_objs"])
        return {
            "settings": settings_obj.id,
            "department": validated["department"],
            "department_name": department_display_name(validated["department"]),
            "bands": bands,
        }


class CommentOptionSerializer(serializers.ModelSerializer):
    class Meta:
        model = CommentOption
        fields = ["id", "option_type", "option_value", "sort_order", "is_active"]


class GradingSettingsSaveSerializer(serializers.Serializer):
    """
    Enregistrement complet de l'écran "Réglages de notation".
    {
      "academic_year": "2025/2026",
      "term": "First Term",
      "term_begin": "2025-09-08", "term_ends": null, "next_term_begin": null,
      "attendance_for_term": 60,
      "departments": { "kg": [ {...}, ... ], "primary": [...], "jhs": [...] },
      "comment_options": { "conduct": ["Good", "Polite"], "teacher": [...] }
    }
    Tout est validé avant écriture (services.save_grading_settings).
    """
    academic_year = serializers.CharField(max_length=9)
    term = serializers.CharField()
    term_begin = serializers.DateField(required=False, allow_null=True)
    term_ends = serializers.DateField(required=False, allow_null=True)
    next_term_begin = serializers.DateField(required=False, allow_null=True)
    attendance_for_term = serializers.IntegerField(required=False, allow_null=True, min_value=0)
    departments = serializers.DictField(child=serializers.ListField(child=serializers.DictField()), required=False)
    comment_options = serializers.DictField(child=serializers.ListField(), required=False)

    def create(self, validated):
        # GradingScaleError est traduite en 400 par la vue
        scales_by_department = {
            dept: _scales_from_entries(entries)
            for dept, entries in validated.get("departments", {}).items()
        }
        return save_grading_settings(
            validated["academic_year"],
            validated["term"],
            scales_by_department,
            comment_options=validated.get("comment_options"),
            term_begin=validated.get("term_begin"),
            term_ends=validated.get("term_ends"),
            next_term_begin=validated.get("next_term_begin"),
            attendance_for_term=validated.get("attendance_for_term"),
        )
