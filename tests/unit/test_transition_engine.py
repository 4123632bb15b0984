"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
FitFlow, a product of Garudex Labs

Unit tests for the session transition engine.

Tests phase changes, store writes, navigation directives and failure
handling for every intent.
"""

import asyncio
import json

import pytest

from fitflow.core.navigation import NavigationStack
from fitflow.core.session import (
    HAS_COMPLETED_ONBOARDING_KEY,
    IS_LOGGED_IN_KEY,
    USER_DATA_KEY,
    USER_PROFILE_KEY,
    OnboardingStep,
    Phase,
)
from fitflow.core.store import MemorySessionStore
from fitflow.core.transitions import Intent, TransitionEngine
from fitflow.exceptions import (
    IntentInProgressError,
    InvalidTransitionError,
    StoreWriteError,
    UnknownRouteError,
)

from conftest import DelayedStore, FlakyStore


AUTHENTICATED_ITEMS = {
    HAS_COMPLETED_ONBOARDING_KEY: "true",
    IS_LOGGED_IN_KEY: "true",
}


async def walk_to_final_step(engine: TransitionEngine) -> None:
    """Drive a restored engine from Welcome to the FitnessGoal step."""
    result = await engine.on_welcome_get_started()
    assert result.success
    for step in list(OnboardingStep)[:-1]:
        result = await engine.on_onboarding_step_complete(step)
        assert result.success, result.message


class TestRestore:
    """Test startup restore."""

    @pytest.mark.asyncio
    async def test_starts_loading(self, engine):
        assert engine.phase == Phase.LOADING
        assert engine.step is None

    @pytest.mark.asyncio
    async def test_restore_empty_store(self, engine, navigation):
        """Test that an empty store restores to Welcome."""
        phase = await engine.restore()

        assert phase == Phase.WELCOME
        assert engine.phase == Phase.WELCOME
        assert navigation.routes == ("Welcome",)

    @pytest.mark.asyncio
    async def test_restore_authenticated(self, navigation):
        """Test that both flags restore straight to Main."""
        engine = TransitionEngine(MemorySessionStore(AUTHENTICATED_ITEMS), navigation)

        assert await engine.restore() == Phase.AUTHENTICATED
        assert navigation.routes == ("Main",)
        assert engine.flags.is_logged_in

    @pytest.mark.asyncio
    async def test_restore_read_failure(self, navigation):
        """Test that a failed read restores to Welcome."""
        store = FlakyStore(AUTHENTICATED_ITEMS, fail_reads=True)
        engine = TransitionEngine(store, navigation)

        assert await engine.restore() == Phase.WELCOME
        assert navigation.routes == ("Welcome",)


class TestLoadingPhase:
    """Test that nothing happens before the session is restored."""

    @pytest.mark.asyncio
    async def test_intents_rejected_while_loading(self, engine, store, navigation):
        for call in (
            engine.on_welcome_skip,
            engine.on_welcome_get_started,
            lambda: engine.on_onboarding_step_complete(OnboardingStep.USER_INFO),
            engine.on_final_onboarding_complete,
            engine.on_logout_requested,
        ):
            result = await call()
            assert not result.success
            assert isinstance(result.error, InvalidTransitionError)
            assert "loading" in result.message

        assert store.snapshot() == {}
        assert navigation.routes == ()
        assert engine.phase == Phase.LOADING

    @pytest.mark.asyncio
    async def test_clear_session_before_restore(self, navigation):
        store = MemorySessionStore({**AUTHENTICATED_ITEMS, USER_PROFILE_KEY: "{}"})
        engine = TransitionEngine(store, navigation)

        await engine.clear_session()
        assert store.snapshot() == {}

        assert await engine.restore() == Phase.WELCOME

    @pytest.mark.asyncio
    async def test_clear_session_after_restore_rejected(self, engine):
        await engine.restore()

        with pytest.raises(InvalidTransitionError):
            await engine.clear_session()


class TestStartOnboarding:
    """Test the welcome intents."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("source", ["skip", "get_started"])
    async def test_start_onboarding(self, engine, store, navigation, source):
        """Test that both welcome actions write the flag then push UserInfo."""
        await engine.restore()

        call = engine.on_welcome_skip if source == "skip" else engine.on_welcome_get_started
        result = await call()

        assert result.success
        assert result.intent == Intent.START_ONBOARDING
        assert result.route == "UserInfo"
        assert engine.phase == Phase.ONBOARDING
        assert engine.step == OnboardingStep.USER_INFO
        assert navigation.routes == ("Welcome", "UserInfo")
        assert store.snapshot() == {HAS_COMPLETED_ONBOARDING_KEY: "true"}

    @pytest.mark.asyncio
    async def test_write_failure_keeps_welcome(self, navigation):
        """Test that a failed write issues no directive."""
        store = FlakyStore(fail_writes_after=0)
        engine = TransitionEngine(store, navigation)
        await engine.restore()

        result = await engine.on_welcome_skip()

        assert not result.success
        assert isinstance(result.error, StoreWriteError)
        assert result.route is None
        assert engine.phase == Phase.WELCOME
        assert navigation.routes == ("Welcome",)

    @pytest.mark.asyncio
    async def test_retry_after_failure(self, navigation):
        store = FlakyStore(fail_writes_after=0)
        engine = TransitionEngine(store, navigation)
        await engine.restore()
        assert not (await engine.on_welcome_skip()).success

        store.fail_writes_after = None
        result = await engine.on_welcome_skip()

        assert result.success
        assert navigation.routes == ("Welcome", "UserInfo")

    @pytest.mark.asyncio
    async def test_rejected_outside_welcome(self, engine, navigation):
        await engine.restore()
        await engine.on_welcome_skip()

        result = await engine.on_welcome_skip()

        assert not result.success
        assert isinstance(result.error, InvalidTransitionError)
        assert navigation.routes == ("Welcome", "UserInfo")


class TestAdvanceOnboarding:
    """Test moving between onboarding steps."""

    @pytest.mark.asyncio
    async def test_walk_all_steps(self, engine, store, navigation):
        await engine.restore()
        await walk_to_final_step(engine)

        assert engine.step == OnboardingStep.FITNESS_GOAL
        assert navigation.routes == (
            "Welcome",
            "UserInfo",
            "WorkoutPreference",
            "Equipment",
            "GymEquipment",
            "FitnessGoal",
        )
        # Advancing never touches the store
        assert store.snapshot() == {HAS_COMPLETED_ONBOARDING_KEY: "true"}

    @pytest.mark.asyncio
    async def test_accepts_route_name(self, engine, navigation):
        await engine.restore()
        await engine.on_welcome_skip()

        result = await engine.on_onboarding_step_complete("UserInfo")

        assert result.success
        assert navigation.current_route == "WorkoutPreference"

    @pytest.mark.asyncio
    async def test_wrong_step_rejected(self, engine, navigation):
        """Test that completing a step other than the current one fails."""
        await engine.restore()
        await engine.on_welcome_skip()

        result = await engine.on_onboarding_step_complete(OnboardingStep.EQUIPMENT)

        assert not result.success
        assert isinstance(result.error, InvalidTransitionError)
        assert navigation.current_route == "UserInfo"

    @pytest.mark.asyncio
    async def test_unknown_step_rejected(self, engine):
        await engine.restore()
        await engine.on_welcome_skip()

        result = await engine.on_onboarding_step_complete("Cardio")

        assert not result.success
        assert "Unknown onboarding step" in result.message

    @pytest.mark.asyncio
    async def test_final_step_cannot_advance(self, engine, navigation):
        await engine.restore()
        await walk_to_final_step(engine)

        result = await engine.on_onboarding_step_complete(OnboardingStep.FITNESS_GOAL)

        assert not result.success
        assert navigation.current_route == "FitnessGoal"


class TestCompleteOnboarding:
    """Test establishing the session."""

    @pytest.mark.asyncio
    async def test_complete(self, engine, store, navigation, sample_profile):
        """Test that completion writes both flags and resets to Main."""
        await engine.restore()
        await walk_to_final_step(engine)

        result = await engine.on_final_onboarding_complete(sample_profile)

        assert result.success
        assert result.route == "Main"
        assert engine.phase == Phase.AUTHENTICATED
        assert engine.step is None
        assert navigation.routes == ("Main",)

        items = store.snapshot()
        assert items[HAS_COMPLETED_ONBOARDING_KEY] == "true"
        assert items[IS_LOGGED_IN_KEY] == "true"
        assert json.loads(items[USER_PROFILE_KEY]) == sample_profile

    @pytest.mark.asyncio
    async def test_complete_without_profile(self, engine, store):
        await engine.restore()
        await walk_to_final_step(engine)

        result = await engine.on_final_onboarding_complete()

        assert result.success
        assert USER_PROFILE_KEY not in store.snapshot()

    @pytest.mark.asyncio
    async def test_complete_before_final_step_rejected(self, engine, navigation):
        await engine.restore()
        await engine.on_welcome_skip()

        result = await engine.on_final_onboarding_complete()

        assert not result.success
        assert isinstance(result.error, InvalidTransitionError)
        assert navigation.current_route == "UserInfo"

    @pytest.mark.asyncio
    async def test_unserializable_profile(self, engine, store, navigation):
        """Test that a profile that cannot be stored aborts before any write."""
        await engine.restore()
        await walk_to_final_step(engine)

        result = await engine.on_final_onboarding_complete({"when": object()})

        assert not result.success
        assert isinstance(result.error, StoreWriteError)
        assert IS_LOGGED_IN_KEY not in store.snapshot()
        assert engine.phase == Phase.ONBOARDING
        assert navigation.current_route == "FitnessGoal"

    @pytest.mark.asyncio
    async def test_write_failure_stays_on_final_step(self, navigation):
        store = FlakyStore(atomic_batch=True)
        engine = TransitionEngine(store, navigation)
        await engine.restore()
        await walk_to_final_step(engine)
        store.fail_writes_after = store.writes

        result = await engine.on_final_onboarding_complete({"name": "Alex"})

        assert not result.success
        assert engine.phase == Phase.ONBOARDING
        assert navigation.current_route == "FitnessGoal"
        assert IS_LOGGED_IN_KEY not in store.snapshot()

    @pytest.mark.asyncio
    async def test_login_flag_written_last(self, navigation):
        """Test that a per-key store never holds isLoggedIn alone."""
        store = FlakyStore(atomic_batch=False)
        engine = TransitionEngine(store, navigation)
        await engine.restore()
        await walk_to_final_step(engine)
        # Profile and hasCompletedOnboarding land, isLoggedIn fails
        store.fail_writes_after = store.writes + 2

        result = await engine.on_final_onboarding_complete({"name": "Alex"})

        assert not result.success
        items = store.snapshot()
        assert IS_LOGGED_IN_KEY not in items
        assert items[HAS_COMPLETED_ONBOARDING_KEY] == "true"


class TestLogout:
    """Test tearing the session down."""

    @pytest.mark.asyncio
    async def test_logout(self, navigation):
        store = MemorySessionStore(
            {**AUTHENTICATED_ITEMS, USER_DATA_KEY: "{}", USER_PROFILE_KEY: "{}", "theme": "dark"}
        )
        engine = TransitionEngine(store, navigation)
        await engine.restore()

        result = await engine.on_logout_requested()

        assert result.success
        assert result.route == "Welcome"
        assert engine.phase == Phase.WELCOME
        assert navigation.routes == ("Welcome",)
        # Unrelated keys survive
        assert store.snapshot() == {"theme": "dark"}

    @pytest.mark.asyncio
    async def test_logout_outside_authenticated(self, engine, navigation):
        await engine.restore()

        result = await engine.on_logout_requested()

        assert not result.success
        assert navigation.routes == ("Welcome",)

    @pytest.mark.asyncio
    async def test_logout_write_failure_stays_on_main(self, navigation):
        store = FlakyStore(AUTHENTICATED_ITEMS, atomic_batch=True, fail_writes_after=0)
        engine = TransitionEngine(store, navigation)
        await engine.restore()

        result = await engine.on_logout_requested()

        assert not result.success
        assert engine.phase == Phase.AUTHENTICATED
        assert navigation.routes == ("Main",)
        assert store.snapshot() == AUTHENTICATED_ITEMS

    @pytest.mark.asyncio
    async def test_partial_logout_never_keeps_login_flag(self, navigation):
        """Test that isLoggedIn is the first key a per-key store drops."""
        store = FlakyStore(
            {**AUTHENTICATED_ITEMS, USER_PROFILE_KEY: "{}"},
            atomic_batch=False,
            fail_writes_after=1,
        )
        engine = TransitionEngine(store, navigation)
        await engine.restore()

        result = await engine.on_logout_requested()

        assert not result.success
        assert IS_LOGGED_IN_KEY not in store.snapshot()
        assert navigation.routes == ("Main",)

        # Next launch sees a logged-out user
        restarted = TransitionEngine(store, NavigationStack())
        assert await restarted.restore() == Phase.WELCOME


class TestBackNavigation:
    """Test user back gestures."""

    @pytest.mark.asyncio
    async def test_back_from_user_info(self, engine, navigation):
        await engine.restore()
        await engine.on_welcome_skip()

        route = navigation.go_back()
        engine.on_back_navigated(route)

        assert route == "Welcome"
        assert engine.phase == Phase.WELCOME
        assert engine.step is None

        # The welcome intents work again
        result = await engine.on_welcome_get_started()
        assert result.success
        assert navigation.routes == ("Welcome", "UserInfo")

    @pytest.mark.asyncio
    async def test_back_disabled_on_later_steps(self, engine, navigation):
        await engine.restore()
        await engine.on_welcome_skip()
        await engine.on_onboarding_step_complete(OnboardingStep.USER_INFO)

        assert navigation.go_back() is None
        assert navigation.current_route == "WorkoutPreference"

    @pytest.mark.asyncio
    async def test_back_to_main_rejected(self, engine):
        await engine.restore()

        with pytest.raises(InvalidTransitionError):
            engine.on_back_navigated("Main")

    @pytest.mark.asyncio
    async def test_back_to_unknown_route(self, engine):
        await engine.restore()

        with pytest.raises(UnknownRouteError):
            engine.on_back_navigated("Settings")

    @pytest.mark.asyncio
    async def test_back_rejected_when_authenticated(self, navigation):
        """Test that a back gesture cannot leave the authenticated session."""
        store = MemorySessionStore(AUTHENTICATED_ITEMS)
        engine = TransitionEngine(store, navigation)
        await engine.restore()

        with pytest.raises(InvalidTransitionError):
            engine.on_back_navigated("Welcome")

        assert engine.phase == Phase.AUTHENTICATED
        assert navigation.routes == ("Main",)

        # Onboarding can never be pushed above Main
        result = await engine.on_welcome_get_started()
        assert not result.success
        assert navigation.routes == ("Main",)
        assert store.snapshot() == AUTHENTICATED_ITEMS

    @pytest.mark.asyncio
    async def test_back_cannot_skip_ahead(self, engine, store, navigation):
        """Test that a back gesture to a later step is rejected."""
        await engine.restore()
        await engine.on_welcome_skip()

        with pytest.raises(InvalidTransitionError):
            engine.on_back_navigated("FitnessGoal")
        assert engine.step == OnboardingStep.USER_INFO

        result = await engine.on_final_onboarding_complete({"name": "Alex"})
        assert not result.success
        assert IS_LOGGED_IN_KEY not in store.snapshot()
        assert navigation.routes == ("Welcome", "UserInfo")

    @pytest.mark.asyncio
    async def test_back_rejected_on_step_without_gesture(self, engine):
        await engine.restore()
        await engine.on_welcome_skip()
        await engine.on_onboarding_step_complete(OnboardingStep.USER_INFO)

        with pytest.raises(InvalidTransitionError, match="disabled"):
            engine.on_back_navigated("UserInfo")
        assert engine.step == OnboardingStep.WORKOUT_PREFERENCE


class TestConcurrency:
    """Test the single-outstanding-intent rule."""

    @pytest.mark.asyncio
    async def test_second_intent_rejected(self, navigation):
        """Test that a double tap runs the intent once."""
        store = DelayedStore(max_delay=0.01)
        engine = TransitionEngine(store, navigation)
        await engine.restore()

        first, second = await asyncio.gather(
            engine.on_welcome_skip(),
            engine.on_welcome_get_started(),
        )

        assert first.success
        assert not second.success
        assert isinstance(second.error, IntentInProgressError)
        assert navigation.routes == ("Welcome", "UserInfo")

    @pytest.mark.asyncio
    async def test_is_busy_while_outstanding(self, navigation):
        store = DelayedStore(max_delay=0.01)
        engine = TransitionEngine(store, navigation)
        await engine.restore()

        task = asyncio.ensure_future(engine.on_welcome_skip())
        await asyncio.sleep(0)
        assert engine.is_busy
        with pytest.raises(IntentInProgressError):
            engine.on_back_navigated("Welcome")

        await task
        assert not engine.is_busy
