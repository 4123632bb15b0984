"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
FitFlow, a product of Garudex Labs

FitFlow Components - UI building blocks.

Provides reusable UI components:
- Menu: Arrow-key navigable menus
- Prompt: Enhanced input with autocomplete
- StepProgress: Onboarding step indicators
"""

from fitflow.flow.components.menu import Menu, MenuItem
from fitflow.flow.components.progress import ProgressStep, StepProgress
from fitflow.flow.components.prompt import FlowPrompt

__all__ = [
    "Menu",
    "MenuItem",
    "FlowPrompt",
    "ProgressStep",
    "StepProgress",
]
