# core/admin.py

from django.contrib import admin

from core.models import DocumentSequence


@admin.register(DocumentSequence)
class DocumentSequenceAdmin(admin.ModelAdmin):
    list_display = ("prefix", "year", "last_value", "updated_at")
    list_filter = ("prefix", "year")
    readonly_fields = ("prefix", "year", "last_value", "updated_at")
