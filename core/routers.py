"""
URL mappings for the NurtureBloom API.

Trailing slashes are deliberately omitted; ``APPEND_SLASH`` is off.  Static
segments (``all``, ``professional``, ``user/registered``) are listed before
the ``<int:...>`` detail routes they would otherwise shadow.
"""
from django.urls import path

from .auth_views import current_user_view, login_view, logout_view, refresh_view, register_view
from .views import consult, health, symptoms, webinars

urlpatterns = [
    path('healthz', health.healthz, name='healthz'),

    # auth
    path('api/auth/register', register_view, name='register_view'),
    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/user', current_user_view, name='current_user_view'),
    path('api/auth/logout', logout_view, name='logout_view'),
    path('api/auth/refresh', refresh_view, name='refresh_view'),

    # consultations
    path('api/consultations', consult.consultations, name='consultations'),
    path('api/consultations/professional', consult.professional_consultations, name='professional_consultations'),
    path('api/consultations/professionals/list', consult.professionals_list, name='professionals_list'),
    path('api/consultations/<int:consult_id>', consult.consultation_detail, name='consultation_detail'),

    # webinars
    path('api/webinars', webinars.webinars, name='webinars'),
    path('api/webinars/all', webinars.webinars_all, name='webinars_all'),
    path('api/webinars/recorded', webinars.webinars_recorded, name='webinars_recorded'),
    path('api/webinars/tags/<str:tag>', webinars.webinars_by_tag, name='webinars_by_tag'),
    path('api/webinars/user/registered', webinars.webinars_registered, name='webinars_registered'),
    path('api/webinars/<int:webinar_id>', webinars.webinar_detail, name='webinar_detail'),
    path('api/webinars/<int:webinar_id>/register', webinars.webinar_register, name='webinar_register'),
    path('api/webinars/<int:webinar_id>/attendance', webinars.webinar_attendance, name='webinar_attendance'),

    # symptoms
    path('api/symptoms', symptoms.symptom_list, name='symptom_list'),
    path('api/symptoms/category/<str:category>', symptoms.symptoms_by_category, name='symptoms_by_category'),
    path('api/symptoms/check', symptoms.symptom_check, name='symptom_check'),
    path('api/symptoms/check/<int:check_id>', symptoms.symptom_check_detail, name='symptom_check_detail'),
    path('api/symptoms/history', symptoms.symptom_history, name='symptom_history'),
    path('api/symptoms/seed', symptoms.symptom_seed, name='symptom_seed'),
]
