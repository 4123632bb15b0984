"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
FitFlow, a product of Garudex Labs

FitFlow Core - the navigation/session state machine.

- store: persisted key/value session store
- session: session flags, phases and the startup resolver
- navigation: route table and navigation stack
- transitions: the transition engine handling user intents
"""

from fitflow.core.navigation import (
    MAIN_ROUTE,
    WELCOME_ROUTE,
    NavigationController,
    NavigationStack,
)
from fitflow.core.session import (
    SESSION_KEYS,
    OnboardingStep,
    Phase,
    SessionFlags,
    SessionResolver,
)
from fitflow.core.store import FileSessionStore, MemorySessionStore, SessionStore
from fitflow.core.transitions import Intent, IntentResult, TransitionEngine

__all__ = [
    "MAIN_ROUTE",
    "WELCOME_ROUTE",
    "NavigationController",
    "NavigationStack",
    "SESSION_KEYS",
    "OnboardingStep",
    "Phase",
    "SessionFlags",
    "SessionResolver",
    "FileSessionStore",
    "MemorySessionStore",
    "SessionStore",
    "Intent",
    "IntentResult",
    "TransitionEngine",
]
