"""
Exception hierarchy for FitFlow.

All custom exceptions inherit from FitFlowError base class.
"""


class FitFlowError(Exception):
    """Base exception for all FitFlow errors."""
    pass


# Session Store Errors
class StoreError(FitFlowError):
    """Base exception for session store errors."""
    pass


class StoreReadError(StoreError):
    """Raised when reading from the session store fails."""
    pass


class StoreWriteError(StoreError):
    """Raised when writing to or removing from the session store fails."""
    pass


# Transition Errors
class TransitionError(FitFlowError):
    """Base exception for session transition errors."""
    pass


class InvalidTransitionError(TransitionError):
    """Raised when an intent is not allowed from the current phase."""
    pass


class IntentInProgressError(TransitionError):
    """Raised when an intent arrives while another one is still outstanding."""
    pass


# Navigation Errors
class NavigationError(FitFlowError):
    """Base exception for navigation errors."""
    pass


class UnknownRouteError(NavigationError):
    """Raised when a navigation directive names a route that does not exist."""
    pass


# Configuration Errors
class ConfigurationError(FitFlowError):
    """Base exception for configuration-related errors."""
    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration is invalid or malformed."""
    pass
