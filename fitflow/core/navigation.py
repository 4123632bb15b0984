"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
FitFlow, a product of Garudex Labs

Navigation stack for FitFlow.

The transition engine drives navigation through two directives only:

- push(route): append a route, keeping history reachable
- reset(route): discard the whole history; route becomes the only entry

Backward movement is user-initiated (go_back) and is refused on routes whose
back gesture is disabled, which covers every phase-defining screen.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from fitflow.core.session import OnboardingStep, Phase
from fitflow.exceptions import UnknownRouteError
from fitflow.logging_config import get_logger, log_navigation_directive

logger = get_logger(__name__)


WELCOME_ROUTE = "Welcome"
MAIN_ROUTE = "Main"


@dataclass(frozen=True)
class RouteSpec:
    """Static description of a route."""

    name: str
    phase: Phase
    gesture_enabled: bool = False
    step: Optional[OnboardingStep] = None


ROUTE_TABLE: dict[str, RouteSpec] = {
    WELCOME_ROUTE: RouteSpec(WELCOME_ROUTE, Phase.WELCOME),
    OnboardingStep.USER_INFO.value: RouteSpec(
        OnboardingStep.USER_INFO.value,
        Phase.ONBOARDING,
        gesture_enabled=True,
        step=OnboardingStep.USER_INFO,
    ),
    OnboardingStep.WORKOUT_PREFERENCE.value: RouteSpec(
        OnboardingStep.WORKOUT_PREFERENCE.value,
        Phase.ONBOARDING,
        step=OnboardingStep.WORKOUT_PREFERENCE,
    ),
    OnboardingStep.EQUIPMENT.value: RouteSpec(
        OnboardingStep.EQUIPMENT.value,
        Phase.ONBOARDING,
        step=OnboardingStep.EQUIPMENT,
    ),
    OnboardingStep.GYM_EQUIPMENT.value: RouteSpec(
        OnboardingStep.GYM_EQUIPMENT.value,
        Phase.ONBOARDING,
        step=OnboardingStep.GYM_EQUIPMENT,
    ),
    OnboardingStep.FITNESS_GOAL.value: RouteSpec(
        OnboardingStep.FITNESS_GOAL.value,
        Phase.ONBOARDING,
        step=OnboardingStep.FITNESS_GOAL,
    ),
    MAIN_ROUTE: RouteSpec(MAIN_ROUTE, Phase.AUTHENTICATED),
}


def get_route(name: str) -> RouteSpec:
    """
    Look up a route by name.

    Raises:
        UnknownRouteError: If no such route exists
    """
    try:
        return ROUTE_TABLE[name]
    except KeyError:
        raise UnknownRouteError(f"Unknown route: {name!r}") from None


def route_for_step(step: OnboardingStep) -> str:
    return step.value


def root_route_for(phase: Phase) -> str:
    """Sole route of the stack right after entering phase."""
    if phase is Phase.AUTHENTICATED:
        return MAIN_ROUTE
    if phase is Phase.ONBOARDING:
        return route_for_step(OnboardingStep.first())
    return WELCOME_ROUTE


class NavigationController(ABC):
    """Navigation directives consumed by the transition engine."""

    @abstractmethod
    def push(self, route: str) -> None:
        """Append route to the history."""

    @abstractmethod
    def reset(self, route: str) -> None:
        """Replace the entire history with route."""


class NavigationStack(NavigationController):
    """
    In-process navigation history.

    Args:
        initial_route: Optional route the stack starts with. An empty stack
            is valid until the first directive (the app is still loading).
    """

    def __init__(self, initial_route: Optional[str] = None):
        self._routes: list[str] = []
        if initial_route is not None:
            get_route(initial_route)
            self._routes.append(initial_route)

    @property
    def routes(self) -> tuple[str, ...]:
        """Current history, bottom first."""
        return tuple(self._routes)

    @property
    def current_route(self) -> Optional[str]:
        """Route on top of the stack."""
        return self._routes[-1] if self._routes else None

    @property
    def depth(self) -> int:
        return len(self._routes)

    def push(self, route: str) -> None:
        get_route(route)
        self._routes.append(route)
        log_navigation_directive(logger, "push", route, len(self._routes))

    def reset(self, route: str) -> None:
        get_route(route)
        self._routes = [route]
        log_navigation_directive(logger, "reset", route, len(self._routes))

    def can_go_back(self) -> bool:
        """Whether a user back gesture is currently allowed."""
        if len(self._routes) < 2:
            return False
        return get_route(self._routes[-1]).gesture_enabled

    def go_back(self) -> Optional[str]:
        """
        Handle a user back gesture.

        Returns:
            The route now on top, or None if the gesture was refused.
        """
        if not self.can_go_back():
            return None
        self._routes.pop()
        route = self._routes[-1]
        log_navigation_directive(logger, "back", route, len(self._routes))
        return route

    def __repr__(self) -> str:
        return f"NavigationStack(routes={self._routes!r})"
