"""
FitFlow Application Controller.

Main application class orchestrating the terminal experience:
- Application lifecycle (start, run, exit)
- Session restore with a loading indicator
- Rendering the screen for the route on top of the navigation stack
- Turning screen actions into session intents
"""

import asyncio
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

from rich.console import Console

from fitflow.config.settings import FitFlowConfig, get_default_config
from fitflow.core.navigation import MAIN_ROUTE, WELCOME_ROUTE, NavigationStack
from fitflow.core.session import OnboardingStep
from fitflow.core.store import FileSessionStore, MemorySessionStore, SessionStore
from fitflow.core.transitions import IntentResult, TransitionEngine
from fitflow.flow.screens.main_tabs import load_profile, show_main
from fitflow.flow.screens.onboarding import build_profile, show_onboarding_step
from fitflow.flow.screens.welcome import wait_for_action
from fitflow.flow.theme import FLOW_THEME, Colors, Icons
from fitflow.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def create_session_store(config: FitFlowConfig) -> SessionStore:
    """Build the session store selected by configuration."""
    if config.storage.backend == "memory":
        return MemorySessionStore()
    return FileSessionStore(Path(config.storage.session_store))


class FlowApp:
    """Main FitFlow application."""

    def __init__(
        self,
        config: Optional[FitFlowConfig] = None,
        console: Optional[Console] = None,
        store: Optional[SessionStore] = None,
    ):
        self.config = config or get_default_config()

        # Log to the workspace file so log lines never land on the screen
        log_file = self.config.logging.file
        setup_logging(
            level=self.config.logging.level if log_file else "WARNING",
            log_file=Path(log_file) if log_file else None,
            json_format=self.config.logging.json_format,
        )

        self.console = console or Console(theme=FLOW_THEME)
        self.store = store or create_session_store(self.config)
        self.navigation = NavigationStack()
        self.engine = TransitionEngine(self.store, self.navigation)

        self.answers: dict[str, Any] = {}
        self.tab = "home"
        self._error: Optional[str] = None
        self._running = False

    def start(self, reset: bool = False) -> None:
        """Start the application."""
        try:
            asyncio.run(self.run(reset=reset))
        except (KeyboardInterrupt, EOFError):
            self._goodbye()

    async def run(self, reset: bool = False) -> None:
        """Restore the session, then render screens until the user quits."""
        self._running = True
        try:
            if reset:
                await self.engine.clear_session()

            with self.console.status(f"[{Colors.PRIMARY}]Loading...[/]", spinner="dots"):
                await self.engine.restore()

            while self._running:
                await self.render_current()

            self._goodbye()
        finally:
            self._running = False

    async def render_current(self) -> None:
        """Render the screen for the current route and handle its action."""
        route = self.navigation.current_route
        error, self._error = self._error, None

        if route == WELCOME_ROUTE:
            await self._run_welcome(error)
        elif route == MAIN_ROUTE:
            await self._run_main(error)
        else:
            await self._run_onboarding_step(OnboardingStep(route), error)

    # ------------------------------------------------------------------
    # Screens
    # ------------------------------------------------------------------

    async def _run_welcome(self, error: Optional[str]) -> None:
        action = await wait_for_action(
            self.console,
            compact=self.config.ui.compact_mode,
            show_hints=self.config.ui.show_hints,
            error=error,
        )

        if action == "quit":
            self._running = False
        elif action == "skip":
            await self._perform(self.engine.on_welcome_skip)
        elif action == "get_started":
            await self._perform(self.engine.on_welcome_get_started)

    async def _run_onboarding_step(self, step: OnboardingStep, error: Optional[str]) -> None:
        action = await show_onboarding_step(
            self.console,
            step,
            self.answers,
            can_go_back=self.navigation.can_go_back(),
            show_hints=self.config.ui.show_hints,
            error=error,
        )

        if action == "quit":
            self._running = False
        elif action == "back":
            route = self.navigation.go_back()
            if route is not None:
                self.engine.on_back_navigated(route)
        elif step.is_last:
            result = await self._perform(
                lambda: self.engine.on_final_onboarding_complete(build_profile(self.answers))
            )
            if result.success:
                self.answers = {}
                self.tab = "home"
        else:
            await self._perform(lambda: self.engine.on_onboarding_step_complete(step))

    async def _run_main(self, error: Optional[str]) -> None:
        profile = await load_profile(self.store)
        action = await show_main(
            self.console,
            profile,
            tab=self.tab,
            show_hints=self.config.ui.show_hints,
            error=error,
        )

        if action == "quit":
            self._running = False
        elif action == "logout":
            result = await self._perform(self.engine.on_logout_requested)
            if result.success:
                self.answers = {}
                self.tab = "home"
        elif action.startswith("tab:"):
            self.tab = action.split(":", 1)[1]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _perform(self, call: Callable[[], Awaitable[IntentResult]]) -> IntentResult:
        """
        Run one intent behind a busy indicator.

        No menu is on screen while the intent is outstanding, so the
        triggering control cannot fire twice. A failure is kept for the next
        render of the same screen.
        """
        with self.console.status(f"[{Colors.PRIMARY}]Saving...[/]", spinner="dots"):
            result = await call()

        if not result.success:
            self._error = f"{result.message}. Please try again."
        return result

    def _goodbye(self) -> None:
        """Show goodbye message."""
        self.console.print()
        self.console.print(f"  [{Colors.INFO}]{Icons.SUCCESS} Goodbye! Use 'fitflow' to return.[/]")
        self.console.print()
