"""
Database models for the NurtureBloom backend.

Users carry a role (patient, professional or admin).  Patients book
one-on-one consultations with professionals, register for webinars
presented by professionals and submit symptom checks against a static
catalog of postpartum symptoms.
"""
from __future__ import annotations

from datetime import timedelta

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Custom user model with a role.

    The email address is the login identifier; ``username`` is kept equal
    to it so Django's stock authentication backend keeps working.
    """
    ROLE_PATIENT = 'patient'
    ROLE_PROFESSIONAL = 'professional'
    ROLE_ADMIN = 'admin'
    ROLE_CHOICES = [
        (ROLE_PATIENT, 'Patient'),
        (ROLE_PROFESSIONAL, 'Professional'),
        (ROLE_ADMIN, 'Administrator'),
    ]
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=16, choices=ROLE_CHOICES, default=ROLE_PATIENT, db_index=True)
    child_birth_date = models.DateField(null=True, blank=True)
    profile_complete = models.BooleanField(default=False)

    def __str__(self) -> str:
        return f"{self.email} ({self.role})"


class Consultation(models.Model):
    """A one-on-one booking between a requester and a professional.

    ``date`` is the start of the booked window and ``duration`` its length
    in minutes; the end is derived.
    """
    STATUS_SCHEDULED = 'scheduled'
    STATUS_COMPLETED = 'completed'
    STATUS_CANCELED = 'canceled'
    STATUS_RESCHEDULED = 'rescheduled'
    STATUS_CHOICES = (
        (STATUS_SCHEDULED, 'scheduled'),
        (STATUS_COMPLETED, 'completed'),
        (STATUS_CANCELED, 'canceled'),
        (STATUS_RESCHEDULED, 'rescheduled'),
    )

    requester = models.ForeignKey(User, on_delete=models.CASCADE, related_name='consultations')
    professional = models.ForeignKey(User, on_delete=models.CASCADE, related_name='professional_consultations')
    date = models.DateTimeField()
    duration = models.PositiveIntegerField(help_text="Length in minutes")
    topic = models.CharField(max_length=255)
    notes = models.TextField(blank=True, default='')
    concerns = models.TextField(blank=True, default='')
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_SCHEDULED)
    meeting_link = models.CharField(max_length=255, blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['professional', 'status', 'date'], name='consult_prof_status_date_idx'),
            models.Index(fields=['requester', 'date'], name='consult_requester_date_idx'),
        ]

    @property
    def end(self):
        return self.date + timedelta(minutes=self.duration)

    def __str__(self):
        return f"consult {self.id} p={self.professional_id} r={self.requester_id} @ {self.date:%F %T}"


class Webinar(models.Model):
    """A scheduled group session with limited seats."""
    title = models.CharField(max_length=255)
    description = models.TextField()
    presenter = models.ForeignKey(User, on_delete=models.CASCADE, related_name='webinars')
    date = models.DateTimeField(db_index=True)
    duration = models.PositiveIntegerField(help_text="Length in minutes")
    capacity = models.PositiveIntegerField()
    recording_url = models.CharField(max_length=512, blank=True, default='')
    is_recorded = models.BooleanField(default=False)
    tags = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    @property
    def end(self):
        return self.date + timedelta(minutes=self.duration)

    def __str__(self) -> str:
        return f"{self.title} ({self.date:%F %H:%M})"


class WebinarRegistration(models.Model):
    webinar = models.ForeignKey(Webinar, on_delete=models.CASCADE, related_name='registrations')
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='webinar_registrations')
    registered_at = models.DateTimeField(auto_now_add=True)
    attended = models.BooleanField(default=False)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['webinar', 'user'], name='unique_webinar_attendee'),
        ]

    def __str__(self):
        return f"reg webinar={self.webinar_id} user={self.user_id}"


class Symptom(models.Model):
    """Static reference entry of the symptom catalog."""
    SEVERITY_MILD = 'mild'
    SEVERITY_MODERATE = 'moderate'
    SEVERITY_SEVERE = 'severe'
    SEVERITY_EMERGENCY = 'emergency'
    SEVERITY_CHOICES = (
        (SEVERITY_MILD, 'mild'),
        (SEVERITY_MODERATE, 'moderate'),
        (SEVERITY_SEVERE, 'severe'),
        (SEVERITY_EMERGENCY, 'emergency'),
    )
    CATEGORY_CHOICES = (
        ('physical', 'physical'),
        ('emotional', 'emotional'),
        ('breastfeeding', 'breastfeeding'),
        ('newborn', 'newborn'),
        ('other', 'other'),
    )

    name = models.CharField(max_length=255)
    description = models.TextField()
    severity = models.CharField(max_length=16, choices=SEVERITY_CHOICES)
    common_causes = models.JSONField(default=list, blank=True)
    recommended_actions = models.JSONField(default=list, blank=True)
    seek_medical_attention = models.BooleanField()
    related_symptoms = models.JSONField(default=list, blank=True)
    category = models.CharField(max_length=16, choices=CATEGORY_CHOICES, db_index=True)

    def __str__(self) -> str:
        return f"{self.name} [{self.severity}]"


class SymptomCheck(models.Model):
    """One symptom-checker submission and its outcome.  Never updated."""
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='symptom_checks')
    tier = models.CharField(max_length=16, choices=Symptom.SEVERITY_CHOICES)
    assessment = models.TextField()
    recommendation = models.TextField()
    seek_medical_attention = models.BooleanField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [models.Index(fields=['user', 'created_at'], name='symptomcheck_user_created_idx')]

    def __str__(self):
        return f"check {self.id} user={self.user_id} tier={self.tier}"


class SymptomCheckEntry(models.Model):
    check_run = models.ForeignKey(SymptomCheck, on_delete=models.CASCADE, related_name='entries')
    symptom = models.ForeignKey(Symptom, on_delete=models.PROTECT, related_name='+')
    position = models.PositiveIntegerField()
    severity = models.PositiveSmallIntegerField(help_text="Self-reported, 1-10")
    duration = models.CharField(max_length=64, default='Not specified')

    class Meta:
        ordering = ['position']

    def __str__(self):
        return f"entry {self.position} of check {self.check_run_id}"


class AuditEvent(models.Model):
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.IntegerField(blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='audit_action_created_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='audit_object_created_idx'),
        ]
