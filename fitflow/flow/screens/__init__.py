"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
FitFlow, a product of Garudex Labs

FitFlow Screens - Application screens.

- Welcome: intro carousel
- Onboarding: the five profile steps
- Main: authenticated tab set (Home, Workout, Progress, Profile)
"""

from fitflow.flow.screens.main_tabs import load_profile, show_main
from fitflow.flow.screens.onboarding import build_profile, show_onboarding_step
from fitflow.flow.screens.welcome import show_welcome, wait_for_action

__all__ = [
    "show_welcome",
    "wait_for_action",
    "show_onboarding_step",
    "build_profile",
    "show_main",
    "load_profile",
]
