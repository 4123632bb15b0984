"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
FitFlow, a product of Garudex Labs

FitFlow terminal client.

Renders the screen for the route on top of the navigation stack and turns
user actions into session intents:
- Welcome carousel
- Five-step onboarding with progress indicators
- Tabbed main screen with Log Out
"""

from fitflow._version import __version__

__all__ = ["__version__"]
