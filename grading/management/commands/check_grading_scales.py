from collections import defaultdict

from django.core.management.base import BaseCommand, CommandError

from grading.departments import department_display_name, normalize_term
from grading.models import GradingSettings
from grading.validators import validate_department_grading_scales


class Command(BaseCommand):
    help = "Validate stored grading bands for every department (range checks + overlaps)."

    def add_arguments(self, parser):
        parser.add_argument("--academic-year", dest="academic_year")
        parser.add_argument("--term")

    def handle(self, *args, **options):
        qs = GradingSettings.objects.prefetch_related("bands")
        if options.get("academic_year"):
            qs = qs.filter(academic_year=options["academic_year"])
        if options.get("term"):
            qs = qs.filter(term=normalize_term(options["term"]))

        invalid = 0
        for gs in qs:
            by_dept = defaultdict(list)
            for band in gs.bands.all():
                by_dept[band.department].append(band.to_scale())
            for dept in sorted(by_dept):
                errors = validate_department_grading_scales(by_dept[dept])
                if not errors:
                    self.stdout.write(f"{gs} | {department_display_name(dept)}: OK ({len(by_dept[dept])} bands)")
                    continue
                invalid += 1
                self.stdout.write(self.style.ERROR(f"{gs} | {department_display_name(dept)}: {len(errors)} error(s)"))
                for msg in errors:
                    self.stdout.write(f"  - {msg}")

        if invalid:
            raise CommandError(f"{invalid} department grading scale set(s) are invalid.")
        self.stdout.write(self.style.SUCCESS("All grading scales are valid."))
