"""
Django admin registrations for the core models.

Superusers can inspect bookings, webinar seats and symptom checks at
``/admin/``.  Symptom checks are read-only records, so their entries are
shown inline rather than edited separately.
"""

from django.contrib import admin

from .models import (
    AuditEvent,
    Consultation,
    Symptom,
    SymptomCheck,
    SymptomCheckEntry,
    User,
    Webinar,
    WebinarRegistration,
)


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('email', 'first_name', 'last_name', 'role', 'profile_complete', 'is_staff')
    list_filter = ('role', 'is_staff')
    search_fields = ('email', 'first_name', 'last_name')


@admin.register(Consultation)
class ConsultationAdmin(admin.ModelAdmin):
    list_display = ('id', 'requester', 'professional', 'date', 'duration', 'status')
    list_filter = ('status',)
    search_fields = ('topic', 'requester__email', 'professional__email')
    date_hierarchy = 'date'


class WebinarRegistrationInline(admin.TabularInline):
    model = WebinarRegistration
    extra = 0


@admin.register(Webinar)
class WebinarAdmin(admin.ModelAdmin):
    list_display = ('id', 'title', 'presenter', 'date', 'capacity', 'is_recorded')
    list_filter = ('is_recorded',)
    search_fields = ('title', 'presenter__email')
    inlines = [WebinarRegistrationInline]


@admin.register(Symptom)
class SymptomAdmin(admin.ModelAdmin):
    list_display = ('name', 'severity', 'category', 'seek_medical_attention')
    list_filter = ('severity', 'category')
    search_fields = ('name',)


class SymptomCheckEntryInline(admin.TabularInline):
    model = SymptomCheckEntry
    extra = 0
    can_delete = False
    readonly_fields = ('position', 'symptom', 'severity', 'duration')


@admin.register(SymptomCheck)
class SymptomCheckAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'tier', 'seek_medical_attention', 'created_at')
    list_filter = ('tier', 'seek_medical_attention')
    search_fields = ('user__email',)
    readonly_fields = ('user', 'tier', 'assessment', 'recommendation', 'seek_medical_attention', 'created_at')
    inlines = [SymptomCheckEntryInline]


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('action', 'user', 'object_type', 'object_id', 'created_at')
    list_filter = ('action', 'object_type')
    search_fields = ('action', 'user__email')
