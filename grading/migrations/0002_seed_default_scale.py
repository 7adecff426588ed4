from decimal import Decimal

from django.db import migrations

DEFAULT_YEAR = "2025/2026"

# bornes hautes en .99: pas de trou entre deux bandes pour des notes à 2 décimales
BANDS = [
    ("A1", "Excellent", 80, 100),
    ("B2", "Very Good", 70, "79.99"),
    ("B3", "Good", 65, "69.99"),
    ("C4", "Credit", 60, "64.99"),
    ("C5", "Credit", 55, "59.99"),
    ("C6", "Credit", 50, "54.99"),
    ("D7", "Pass", 45, "49.99"),
    ("E8", "Pass", 40, "44.99"),
    ("F9", "Fail", 0, "39.99"),
]

DEPARTMENTS = ["KG", "PRIMARY", "JHS"]

def seed(apps, schema_editor):
    GradingSettings = apps.get_model("grading", "GradingSettings")
    GradeBand = apps.get_model("grading", "GradeBand")

    gs, _ = GradingSettings.objects.get_or_create(academic_year=DEFAULT_YEAR, term="first")
    for dept in DEPARTMENTS:
        for grade, remark, lo, hi in BANDS:
            GradeBand.objects.get_or_create(
                settings=gs, department=dept, grade=grade,
                defaults={"remark": remark, "from_percentage": Decimal(str(lo)), "to_percentage": Decimal(hi)}
            )

def unseed(apps, schema_editor):
    GradingSettings = apps.get_model("grading", "GradingSettings")
    GradingSettings.objects.filter(academic_year=DEFAULT_YEAR, term="first").delete()

class Migration(migrations.Migration):

    dependencies = [
        ("grading", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed, reverse_code=unseed),
    ]
