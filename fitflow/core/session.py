"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
FitFlow, a product of Garudex Labs

Session model and startup resolution.

The session is described by two persisted flags. Only the exact string
"true" counts as set; an absent key, any other value, or a failed read all
count as not set. From the flags the resolver derives the phase the app
starts in: Authenticated when both flags are set, Welcome otherwise.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from fitflow.exceptions import StoreReadError
from fitflow.logging_config import get_logger, log_session_resolved
from fitflow.core.store import SessionStore

logger = get_logger(__name__)


# Store keys
HAS_COMPLETED_ONBOARDING_KEY = "hasCompletedOnboarding"
IS_LOGGED_IN_KEY = "isLoggedIn"
USER_DATA_KEY = "userData"
USER_PROFILE_KEY = "userProfile"

FLAG_TRUE = "true"

# Removed together on logout. isLoggedIn leads so that a store applying the
# removals one at a time never keeps it after the profile is gone.
SESSION_KEYS = (
    IS_LOGGED_IN_KEY,
    USER_DATA_KEY,
    HAS_COMPLETED_ONBOARDING_KEY,
    USER_PROFILE_KEY,
)


class Phase(Enum):
    """Which screen set is reachable."""
    LOADING = "loading"
    WELCOME = "welcome"
    ONBOARDING = "onboarding"
    AUTHENTICATED = "authenticated"


class OnboardingStep(Enum):
    """Onboarding steps, in order."""
    USER_INFO = "UserInfo"
    WORKOUT_PREFERENCE = "WorkoutPreference"
    EQUIPMENT = "Equipment"
    GYM_EQUIPMENT = "GymEquipment"
    FITNESS_GOAL = "FitnessGoal"

    @classmethod
    def first(cls) -> "OnboardingStep":
        return ONBOARDING_STEPS[0]

    @property
    def is_last(self) -> bool:
        return self is ONBOARDING_STEPS[-1]

    @property
    def index(self) -> int:
        return ONBOARDING_STEPS.index(self)

    def next(self) -> Optional["OnboardingStep"]:
        """Following step, or None for the last one."""
        position = self.index + 1
        if position < len(ONBOARDING_STEPS):
            return ONBOARDING_STEPS[position]
        return None

    def previous(self) -> Optional["OnboardingStep"]:
        """Preceding step, or None for the first one."""
        if self.index == 0:
            return None
        return ONBOARDING_STEPS[self.index - 1]


ONBOARDING_STEPS = tuple(OnboardingStep)


@dataclass(frozen=True)
class SessionFlags:
    """The two persisted session flags, as interpreted booleans."""

    has_completed_onboarding: bool = False
    is_logged_in: bool = False

    @classmethod
    def from_values(
        cls,
        has_completed_onboarding: Optional[str],
        is_logged_in: Optional[str],
    ) -> "SessionFlags":
        """Interpret raw store values. Only the exact string "true" is set."""
        return cls(
            has_completed_onboarding=has_completed_onboarding == FLAG_TRUE,
            is_logged_in=is_logged_in == FLAG_TRUE,
        )

    @property
    def phase(self) -> Phase:
        if self.has_completed_onboarding and self.is_logged_in:
            return Phase.AUTHENTICATED
        return Phase.WELCOME


class SessionResolver:
    """
    Derives the initial phase from the session store.

    Args:
        store: Session store to read the flags from.
    """

    def __init__(self, store: SessionStore):
        self.store = store

    async def read_flags(self) -> SessionFlags:
        """
        Read both flags concurrently.

        Raises:
            StoreReadError: If either read fails
        """
        try:
            has_completed_onboarding, is_logged_in = await asyncio.gather(
                self.store.get_item(HAS_COMPLETED_ONBOARDING_KEY),
                self.store.get_item(IS_LOGGED_IN_KEY),
            )
        except StoreReadError:
            raise
        except Exception as e:
            raise StoreReadError(f"Failed to read session flags: {e}") from e
        return SessionFlags.from_values(has_completed_onboarding, is_logged_in)

    async def resolve_session(self) -> tuple[Phase, SessionFlags]:
        """
        Resolve the startup phase together with the flags it came from.

        Never raises: a failed read is treated as both flags absent.
        """
        try:
            flags = await self.read_flags()
        except StoreReadError as e:
            log_session_resolved(
                logger,
                phase=Phase.WELCOME.value,
                has_completed_onboarding=False,
                is_logged_in=False,
                read_failed=True,
                error=str(e),
            )
            return Phase.WELCOME, SessionFlags()

        log_session_resolved(
            logger,
            phase=flags.phase.value,
            has_completed_onboarding=flags.has_completed_onboarding,
            is_logged_in=flags.is_logged_in,
        )
        return flags.phase, flags

    async def resolve(self) -> Phase:
        """
        Resolve the startup phase.

        Never raises: a failed read resolves to Welcome.

        Returns:
            Phase.AUTHENTICATED or Phase.WELCOME
        """
        phase, _ = await self.resolve_session()
        return phase
