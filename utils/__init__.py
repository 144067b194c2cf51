"""Utility helpers for the CoachNova onboarding wizard."""
