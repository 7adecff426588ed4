import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="GradingSettings",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("academic_year", models.CharField(max_length=9)),
                ("term", models.CharField(choices=[("first", "First Term"), ("second", "Second Term"), ("third", "Third Term")], default="first", max_length=8)),
                ("term_begin", models.DateField(blank=True, null=True)),
                ("term_ends", models.DateField(blank=True, null=True)),
                ("next_term_begin", models.DateField(blank=True, null=True)),
                ("attendance_for_term", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "ordering": ["-academic_year", "term"],
                "verbose_name_plural": "grading settings",
                "unique_together": {("academic_year", "term")},
            },
        ),
        migrations.CreateModel(
            name="GradeBand",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("department", models.CharField(max_length=16)),
                ("from_percentage", models.DecimalField(decimal_places=2, max_digits=5, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)])),
                ("to_percentage", models.DecimalField(decimal_places=2, max_digits=5, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)])),
                ("grade", models.CharField(max_length=4)),
                ("remark", models.CharField(max_length=64)),
                ("settings", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="bands", to="grading.gradingsettings")),
            ],
            options={
                "ordering": ["settings", "department", "-from_percentage"],
            },
        ),
    ]
