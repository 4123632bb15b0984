"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
FitFlow, a product of Garudex Labs

Session transition engine.

The only writer of the session flags. Each intent runs in three stages:

1. check the intent is allowed from the current phase
2. apply the store writes and wait for them to settle
3. update the in-memory phase and issue one navigation directive

A failure in stage 1 or 2 aborts the intent before any directive is issued;
the caller gets an IntentResult describing the failure and the app stays on
the current screen. Intents are handled one at a time; an intent arriving
while another is outstanding is rejected.
"""

import asyncio
import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, Optional, Sequence, Union

from fitflow.core.navigation import (
    MAIN_ROUTE,
    WELCOME_ROUTE,
    NavigationController,
    get_route,
    root_route_for,
    route_for_step,
)
from fitflow.core.session import (
    FLAG_TRUE,
    HAS_COMPLETED_ONBOARDING_KEY,
    IS_LOGGED_IN_KEY,
    SESSION_KEYS,
    USER_PROFILE_KEY,
    OnboardingStep,
    Phase,
    SessionFlags,
    SessionResolver,
)
from fitflow.core.store import SessionStore
from fitflow.exceptions import (
    FitFlowError,
    IntentInProgressError,
    InvalidTransitionError,
    StoreError,
    StoreWriteError,
    TransitionError,
)
from fitflow.logging_config import (
    clear_correlation_id,
    get_logger,
    log_intent_transition,
    set_correlation_id,
)

logger = get_logger(__name__)


class Intent(Enum):
    """User actions that may change the session."""
    START_ONBOARDING = "start_onboarding"
    ADVANCE_ONBOARDING = "advance_onboarding"
    COMPLETE_ONBOARDING = "complete_onboarding"
    LOGOUT = "logout"


@dataclass
class IntentResult:
    """Outcome of one intent."""

    intent: Intent
    success: bool
    phase: Phase
    step: Optional[OnboardingStep] = None
    route: Optional[str] = None           # Directive target, None on failure
    error: Optional[FitFlowError] = None

    @property
    def message(self) -> str:
        if self.success:
            return ""
        return str(self.error) if self.error else "Unknown error"


class TransitionEngine:
    """
    Navigation/session state machine.

    Args:
        store: Session store holding the flags.
        navigator: Navigation controller receiving push/reset directives.
        resolver: Startup resolver. Defaults to a SessionResolver over store.
    """

    def __init__(
        self,
        store: SessionStore,
        navigator: NavigationController,
        resolver: Optional[SessionResolver] = None,
    ):
        self.store = store
        self.navigator = navigator
        self.resolver = resolver or SessionResolver(store)

        self._phase = Phase.LOADING
        self._step: Optional[OnboardingStep] = None
        self._flags = SessionFlags()
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def step(self) -> Optional[OnboardingStep]:
        """Current onboarding step, None outside onboarding."""
        return self._step

    @property
    def flags(self) -> SessionFlags:
        """Session flags as last written or resolved by this engine."""
        return self._flags

    @property
    def is_busy(self) -> bool:
        """Whether an intent is outstanding."""
        return self._lock.locked()

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    async def restore(self) -> Phase:
        """
        Resolve the session from the store and reset navigation to match.

        The phase is Loading until the resolve settles. Store read failures
        resolve to Welcome.

        Raises:
            IntentInProgressError: If an intent is outstanding
        """
        if self._lock.locked():
            raise IntentInProgressError("Cannot restore the session while an intent is outstanding")

        async with self._lock:
            self._phase = Phase.LOADING
            self._step = None
            phase, flags = await self.resolver.resolve_session()
            self._flags = flags
            self._phase = phase
            self.navigator.reset(root_route_for(phase))
            return phase

    async def clear_session(self) -> None:
        """
        Erase every session key before the session is restored.

        Raises:
            InvalidTransitionError: If the session was already restored
            IntentInProgressError: If an intent is outstanding
            StoreWriteError: If the store rejects the removal
        """
        if self._phase is not Phase.LOADING:
            raise InvalidTransitionError("The session can only be cleared before it is restored")
        if self._lock.locked():
            raise IntentInProgressError("Cannot clear the session while an intent is outstanding")

        async with self._lock:
            await self._commit(
                "multi_remove",
                SESSION_KEYS,
                self.store.multi_remove(list(SESSION_KEYS)),
            )
            self._flags = SessionFlags()
            logger.info("session_cleared", keys=list(SESSION_KEYS))

    # ------------------------------------------------------------------
    # Intent surface
    # ------------------------------------------------------------------

    async def on_welcome_skip(self) -> IntentResult:
        """Welcome carousel skipped."""
        return await self._run(Intent.START_ONBOARDING, self._start_onboarding, source="skip")

    async def on_welcome_get_started(self) -> IntentResult:
        """Welcome carousel finished with Get Started."""
        return await self._run(Intent.START_ONBOARDING, self._start_onboarding, source="get_started")

    async def on_onboarding_step_complete(
        self,
        step: Union[OnboardingStep, str],
    ) -> IntentResult:
        """An intermediate onboarding step was answered."""
        return await self._run(
            Intent.ADVANCE_ONBOARDING,
            lambda: self._advance_onboarding(step),
            step=getattr(step, "value", step),
        )

    async def on_final_onboarding_complete(
        self,
        profile: Optional[Mapping[str, Any]] = None,
    ) -> IntentResult:
        """The last onboarding step was answered; establish the session."""
        return await self._run(
            Intent.COMPLETE_ONBOARDING,
            lambda: self._complete_onboarding(profile),
        )

    async def on_logout_requested(self) -> IntentResult:
        """Tear the session down."""
        return await self._run(Intent.LOGOUT, self._logout)

    def on_back_navigated(self, route: str) -> None:
        """
        Follow a user back gesture already applied to the navigation stack.

        Only the screen directly before the current onboarding step is
        accepted, and only from a step whose back gesture is enabled.

        Raises:
            IntentInProgressError: If an intent is outstanding
            InvalidTransitionError: If no back gesture is allowed from the
                current step, or route is not the screen before it
            UnknownRouteError: If route does not exist
        """
        if self._lock.locked():
            raise IntentInProgressError("Cannot navigate back while an intent is outstanding")

        target = get_route(route)
        if self._phase is not Phase.ONBOARDING or self._step is None:
            raise InvalidTransitionError(
                f"Back navigation is not allowed in phase {self._phase.value}"
            )
        if not get_route(route_for_step(self._step)).gesture_enabled:
            raise InvalidTransitionError(
                f"Back navigation is disabled on {self._step.value}"
            )

        previous = self._step.previous()
        expected = route_for_step(previous) if previous else WELCOME_ROUTE
        if route != expected:
            raise InvalidTransitionError(
                f"Back navigation from {self._step.value} must land on {expected!r}, not {route!r}"
            )

        self._phase = target.phase
        self._step = target.step

    # ------------------------------------------------------------------
    # Intent handlers
    # ------------------------------------------------------------------

    async def _start_onboarding(self) -> str:
        self._require_phase(Phase.WELCOME, Intent.START_ONBOARDING)

        # Same flag as full completion; see DESIGN.md (open questions)
        await self._commit(
            "set_item",
            [HAS_COMPLETED_ONBOARDING_KEY],
            self.store.set_item(HAS_COMPLETED_ONBOARDING_KEY, FLAG_TRUE),
        )
        self._flags = SessionFlags(
            has_completed_onboarding=True,
            is_logged_in=self._flags.is_logged_in,
        )

        step = OnboardingStep.first()
        self._phase = Phase.ONBOARDING
        self._step = step
        route = route_for_step(step)
        self.navigator.push(route)
        return route

    async def _advance_onboarding(self, step: Union[OnboardingStep, str]) -> str:
        self._require_phase(Phase.ONBOARDING, Intent.ADVANCE_ONBOARDING)

        try:
            step = OnboardingStep(step)
        except ValueError:
            raise InvalidTransitionError(f"Unknown onboarding step: {step!r}") from None

        if step is not self._step:
            raise InvalidTransitionError(
                f"Step {step.value} completed while on step {self._step.value}"
            )

        next_step = step.next()
        if next_step is None:
            raise InvalidTransitionError(
                f"{step.value} is the final step; it completes onboarding instead"
            )

        self._step = next_step
        route = route_for_step(next_step)
        self.navigator.push(route)
        return route

    async def _complete_onboarding(self, profile: Optional[Mapping[str, Any]]) -> str:
        self._require_phase(Phase.ONBOARDING, Intent.COMPLETE_ONBOARDING)
        if not self._step or not self._step.is_last:
            raise InvalidTransitionError(
                f"Onboarding can only be completed from {OnboardingStep.FITNESS_GOAL.value}"
            )

        pairs = []
        if profile is not None:
            try:
                pairs.append((USER_PROFILE_KEY, json.dumps(dict(profile))))
            except (TypeError, ValueError) as e:
                raise StoreWriteError(f"Profile is not serializable: {e}") from e

        # isLoggedIn goes last so a per-key store never holds it without
        # hasCompletedOnboarding
        pairs.append((HAS_COMPLETED_ONBOARDING_KEY, FLAG_TRUE))
        pairs.append((IS_LOGGED_IN_KEY, FLAG_TRUE))

        await self._commit(
            "multi_set",
            [key for key, _ in pairs],
            self.store.multi_set(pairs),
        )
        self._flags = SessionFlags(has_completed_onboarding=True, is_logged_in=True)

        self._phase = Phase.AUTHENTICATED
        self._step = None
        self.navigator.reset(MAIN_ROUTE)
        return MAIN_ROUTE

    async def _logout(self) -> str:
        self._require_phase(Phase.AUTHENTICATED, Intent.LOGOUT)

        await self._commit(
            "multi_remove",
            SESSION_KEYS,
            self.store.multi_remove(list(SESSION_KEYS)),
        )
        self._flags = SessionFlags()

        self._phase = Phase.WELCOME
        self._step = None
        self.navigator.reset(WELCOME_ROUTE)
        return WELCOME_ROUTE

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_phase(self, expected: Phase, intent: Intent) -> None:
        if self._phase is Phase.LOADING:
            raise InvalidTransitionError(
                f"{intent.value} rejected: the session is still loading"
            )
        if self._phase is not expected:
            raise InvalidTransitionError(
                f"{intent.value} is not allowed in phase {self._phase.value}"
            )

    async def _commit(self, operation: str, keys: Sequence[str], call: Awaitable[None]) -> None:
        """Await a store mutation, normalising failures to StoreWriteError."""
        try:
            await call
        except StoreError:
            raise
        except Exception as e:
            raise StoreWriteError(f"{operation} failed for {list(keys)}: {e}") from e

    async def _run(
        self,
        intent: Intent,
        handler: Callable[[], Awaitable[str]],
        **context: Any,
    ) -> IntentResult:
        if self._lock.locked():
            error = IntentInProgressError(
                f"{intent.value} rejected: another intent is outstanding"
            )
            log_intent_transition(
                logger,
                intent=intent.value,
                from_phase=self._phase.value,
                to_phase=self._phase.value,
                success=False,
                reason=str(error),
                **context,
            )
            return IntentResult(intent, False, self._phase, self._step, error=error)

        async with self._lock:
            set_correlation_id()
            from_phase = self._phase
            try:
                route = await handler()
            except (StoreError, TransitionError) as e:
                log_intent_transition(
                    logger,
                    intent=intent.value,
                    from_phase=from_phase.value,
                    to_phase=self._phase.value,
                    success=False,
                    reason=str(e),
                    error_type=type(e).__name__,
                    **context,
                )
                return IntentResult(intent, False, self._phase, self._step, error=e)
            else:
                log_intent_transition(
                    logger,
                    intent=intent.value,
                    from_phase=from_phase.value,
                    to_phase=self._phase.value,
                    success=True,
                    route=route,
                    **context,
                )
                return IntentResult(intent, True, self._phase, self._step, route=route)
            finally:
                clear_correlation_id()
