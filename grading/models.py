from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator

from .validators import GradingScale

# Create your models here.

class GradingSettings(models.Model):
    class Term(models.TextChoices):
        FIRST = "first", "First Term"
        SECOND = "second", "Second Term"
        THIRD = "third", "Third Term"

    academic_year = models.CharField(max_length=9)  # ex: '2025/2026'
    term = models.CharField(max_length=8, choices=Term.choices, default=Term.FIRST)
    term_begin = models.DateField(null=True, blank=True)
    term_ends = models.DateField(null=True, blank=True)
    next_term_begin = models.DateField(null=True, blank=True)
    attendance_for_term = models.PositiveSmallIntegerField(null=True, blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        unique_together = (("academic_year", "term"),)
        ordering = ["-academic_year", "term"]
        verbose_name_plural = "grading settings"

    def __str__(self):
        return f"{self.academic_year} - {self.get_term_display()}"


class GradeBand(models.Model):
    settings = models.ForeignKey(GradingSettings, on_delete=models.CASCADE, related_name="bands")
    department = models.CharField(max_length=16)  # KG, PRIMARY, JHS, SHS
    from_percentage = models.DecimalField(max_digits=5, decimal_places=2,
                                          validators=[MinValueValidator(0), MaxValueValidator(100)])  # inclusif
    to_percentage = models.DecimalField(max_digits=5, decimal_places=2,
                                        validators=[MinValueValidator(0), MaxValueValidator(100)])  # inclusif
    grade = models.CharField(max_length=4)  # A1, B2, ...
    remark = models.CharField(max_length=64)

    class Meta:
        ordering = ["settings", "department", "-from_percentage"]

    def __str__(self):
        return f"{self.department} {self.grade}: {self.from_percentage}-{self.to_percentage}"

    def to_scale(self) -> GradingScale:
        return GradingScale(
            grade=self.grade,
            remark=self.remark,
            from_=self.from_percentage,
            to=self.to_percentage,
        )


class CommentOption(models.Model):
    """Choix proposés dans les bulletins (conduite, attitude, intérêt, appréciation)."""
    class OptionType(models.TextChoices):
        CONDUCT = "conduct", "Conduct"
        ATTITUDE = "attitude", "Attitude"
        INTEREST = "interest", "Interest"
        TEACHER = "teacher", "Teacher's comment"

    option_type = models.CharField(max_length=16, choices=OptionType.choices)
    option_value = models.CharField(max_length=255)
    sort_order = models.PositiveSmallIntegerField(default=0)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["option_type", "sort_order"]

    def __str__(self):
        return f"{self.option_type}: {self.option_value}"
