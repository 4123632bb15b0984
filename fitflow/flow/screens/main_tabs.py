"""
FitFlow Main Screen.

The authenticated root. Hosts four tabs:
- Home: greeting, quick start, today's plan, recent activity
- Workout
- Progress
- Profile: onboarding answers and Log Out

Switching tabs is local UI state; only Log Out reaches the session.
"""

import json
from typing import Any, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from fitflow.core.session import USER_PROFILE_KEY
from fitflow.core.store import SessionStore
from fitflow.exceptions import StoreReadError
from fitflow.flow.components.menu import Menu, MenuItem
from fitflow.flow.theme import Colors, Icons
from fitflow.logging_config import get_logger

logger = get_logger(__name__)


DEFAULT_DISPLAY_NAME = "User"

TABS = (
    ("home", "Home", Icons.HOME),
    ("workout", "Workout", Icons.WORKOUT),
    ("progress", "Progress", Icons.PROGRESS),
    ("profile", "Profile", Icons.PROFILE),
)

PROFILE_LABELS = (
    ("age", "Age"),
    ("workout_preference", "Workout preference"),
    ("equipment", "Equipment"),
    ("gym_equipment", "Gym equipment"),
    ("fitness_goal", "Fitness goal"),
)


async def load_profile(store: SessionStore) -> dict[str, Any]:
    """Read the stored user profile; empty when missing or unreadable."""
    try:
        raw = await store.get_item(USER_PROFILE_KEY)
    except StoreReadError as e:
        logger.warning("profile_load_failed", error=str(e))
        return {}
    if not raw:
        return {}
    try:
        profile = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("profile_malformed")
        return {}
    return profile if isinstance(profile, dict) else {}


def display_name(profile: dict[str, Any]) -> str:
    name = profile.get("name")
    if isinstance(name, str) and name.strip():
        return name.strip()
    return DEFAULT_DISPLAY_NAME


def _render_home(console: Console, profile: dict[str, Any]) -> None:
    console.print(f"  [bold {Colors.NEUTRAL}]Hello, {display_name(profile)}! {Icons.WAVE}[/]")
    console.print(f"  [{Colors.DIM}]Ready for your next workout?[/]")
    console.print()

    console.print(f"  [bold {Colors.INFO}]Quick Start[/]")
    console.print(
        f"    [{Colors.WORKOUT}]{Icons.WORKOUT} Start Workout[/]    "
        f"[{Colors.PROGRESS}]{Icons.PROGRESS} View Progress[/]"
    )
    console.print()

    console.print(
        Panel(
            f"[{Colors.DIM}]45 min {Icons.DOT_INACTIVE} 8 exercises[/]",
            title=f"[bold {Colors.INFO}]Today's Plan: Full Body Workout[/]",
            border_style=Colors.PRIMARY,
            padding=(0, 2),
        )
    )

    console.print(f"  [bold {Colors.INFO}]Recent Activity[/]")
    console.print(f"    {Icons.WORKOUT} Upper Body Workout  [{Colors.DIM}]Yesterday {Icons.DOT_INACTIVE} 40 min[/]")


def _render_workout(console: Console, profile: dict[str, Any]) -> None:
    console.print(f"  [bold {Colors.INFO}]Workouts[/]")
    preference = profile.get("workout_preference", "any location")
    console.print(f"  [{Colors.DIM}]Plans tailored for training: {preference}[/]")


def _render_progress(console: Console, profile: dict[str, Any]) -> None:
    console.print(f"  [bold {Colors.INFO}]Progress[/]")
    goal = profile.get("fitness_goal", "not set")
    console.print(f"  [{Colors.DIM}]Goal: {goal}[/]")


def _render_profile(console: Console, profile: dict[str, Any]) -> None:
    console.print(f"  [bold {Colors.INFO}]{display_name(profile)}[/]")
    console.print()

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style=Colors.DIM)
    table.add_column("Value")
    for key, label in PROFILE_LABELS:
        value = profile.get(key)
        table.add_row(label, str(value) if value is not None else "-")
    console.print(table)


_RENDERERS = {
    "home": _render_home,
    "workout": _render_workout,
    "progress": _render_progress,
    "profile": _render_profile,
}


def main_actions(tab: str) -> list[MenuItem]:
    """Menu items for the active tab: other tabs, Log Out on Profile, Quit."""
    items = [
        MenuItem(key=f"tab:{key}", label=label, icon=icon)
        for key, label, icon in TABS
        if key != tab
    ]
    if tab == "profile":
        items.append(
            MenuItem(
                key="logout",
                label="Log Out",
                description="Sign out and clear your data on this device",
                icon=Icons.LOGOUT,
            )
        )
    items.append(MenuItem(key="quit", label="Quit"))
    return items


async def show_main(
    console: Console,
    profile: dict[str, Any],
    tab: str = "home",
    show_hints: bool = True,
    error: Optional[str] = None,
) -> str:
    """
    Show the active tab.

    Returns:
        'tab:<name>', 'logout', or 'quit'
    """
    console.clear()

    header = "  ".join(
        f"[bold {Colors.PRIMARY}]{icon} {label}[/]" if key == tab else f"[{Colors.DIM}]{label}[/]"
        for key, label, icon in TABS
    )
    console.print()
    console.print(f"  {header}")
    console.print()

    _RENDERERS[tab](console, profile)
    console.print()

    if error:
        console.print(f"  [{Colors.ERROR}]{Icons.ERROR} {error}[/]")

    menu = Menu(title="", items=main_actions(tab), show_hints=show_hints)
    result = await menu.run_async()
    if result is None:
        return "quit"
    return result.key
