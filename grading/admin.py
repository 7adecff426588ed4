from django.contrib import admin
from .models import CommentOption, GradingSettings, GradeBand
# Register your models here.

class GradeBandInline(admin.TabularInline):
    model = GradeBand
    extra = 1

@admin.register(GradingSettings)
class GradingSettingsAdmin(admin.ModelAdmin):
    list_display = ("academic_year", "term", "term_begin", "term_ends", "is_active")
    list_filter = ("academic_year", "term", "is_active")
    inlines = [GradeBandInline]

@admin.register(GradeBand)
class GradeBandAdmin(admin.ModelAdmin):
    list_display = ("department", "grade", "from_percentage", "to_percentage", "remark", "settings")
    list_filter = ("department", "settings__academic_year", "settings__term")
    search_fields = ("grade", "remark")

@admin.register(CommentOption)
class CommentOptionAdmin(admin.ModelAdmin):
    list_display = ("option_type", "option_value", "sort_order", "is_active")
    list_filter = ("option_type", "is_active")
    search_fields = ("option_value",)
