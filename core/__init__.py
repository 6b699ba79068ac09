"""Core application for the NurtureBloom backend.

This package contains models, serializers, services, views and route
registrations for consultations, webinars and the symptom checker.
"""
