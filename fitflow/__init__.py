"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
FitFlow, a product of Garudex Labs

FitFlow - AI Fitness companion client

FitFlow provides the session/navigation state machine that decides which
screens a user can reach (welcome, onboarding, the authenticated app), plus
an interactive terminal client built on top of it.
"""

from fitflow._version import __version__

__all__ = ["__version__"]
