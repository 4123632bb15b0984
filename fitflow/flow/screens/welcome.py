"""
FitFlow Welcome Screen.

Displays:
- ASCII art banner
- Three-slide intro carousel with dot indicators
- Next / Skip / Get Started actions
"""

from dataclasses import dataclass
from typing import Optional

from rich.console import Console
from rich.panel import Panel

from fitflow._version import __version__
from fitflow.flow.components.menu import Menu, MenuItem
from fitflow.flow.theme import BANNER, BANNER_COMPACT, Colors, Icons


@dataclass(frozen=True)
class Slide:
    key: str
    title: str
    description: str


SLIDES = (
    Slide(
        key="1",
        title="Welcome to AI Fitness",
        description="Your personal AI-powered fitness companion to help you achieve your goals",
    ),
    Slide(
        key="2",
        title="Personalized Workouts",
        description="Get customized workout plans based on your fitness level and goals",
    ),
    Slide(
        key="3",
        title="Track Your Progress",
        description="Monitor your improvements and stay motivated with detailed analytics",
    ),
)


def render_dots(index: int, total: int) -> str:
    """Carousel position markup, the active slide drawn wider."""
    dots = []
    for i in range(total):
        if i == index:
            dots.append(f"[{Colors.PRIMARY}]{Icons.DOT_ACTIVE}[/]")
        else:
            dots.append(f"[{Colors.DIM}]{Icons.DOT_INACTIVE}[/]")
    return " ".join(dots)


def welcome_actions(index: int, total: int = len(SLIDES)) -> list[MenuItem]:
    """Menu items for the slide at index."""
    if index < total - 1:
        items = [
            MenuItem(key="next", label="Next", icon=Icons.ARROW_RIGHT),
            MenuItem(key="skip", label="Skip", description="Go straight to setup"),
        ]
    else:
        items = [
            MenuItem(
                key="get_started",
                label="Get Started",
                description="Set up your profile",
                icon=Icons.ARROW_RIGHT,
            ),
        ]
    items.append(MenuItem(key="quit", label="Quit"))
    return items


def show_welcome(
    console: Console,
    index: int = 0,
    compact: bool = False,
    error: Optional[str] = None,
) -> None:
    """
    Display the welcome screen for one slide.

    Args:
        console: Rich console
        index: Slide to show
        compact: Use compact banner for small terminals
        error: Message from a failed attempt to leave the screen
    """
    banner = BANNER_COMPACT if (compact or console.width < 75) else BANNER
    slide = SLIDES[index]

    console.clear()
    console.print(f"[{Colors.PRIMARY}]{banner}[/]", end="")
    console.print(f"  [{Colors.DIM}]v{__version__}[/]")
    console.print()
    console.print(
        Panel(
            f"[{Colors.NEUTRAL}]{slide.description}[/]",
            title=f"[bold {Colors.INFO}]{slide.title}[/]",
            border_style=Colors.PRIMARY,
            padding=(1, 2),
        )
    )
    console.print(f"  {render_dots(index, len(SLIDES))}")

    if error:
        console.print()
        console.print(f"  [{Colors.ERROR}]{Icons.ERROR} {error}[/]")


async def wait_for_action(
    console: Optional[Console] = None,
    compact: bool = False,
    show_hints: bool = True,
    error: Optional[str] = None,
) -> str:
    """
    Run the welcome carousel until the user leaves it.

    Returns:
        Action key: 'skip', 'get_started', or 'quit'
    """
    console = console or Console()
    index = 0

    while True:
        show_welcome(console, index=index, compact=compact, error=error)
        error = None

        menu = Menu(title="", items=welcome_actions(index), show_hints=show_hints)
        result = await menu.run_async()

        if result is None or result.key == "quit":
            return "quit"
        if result.key == "next":
            index = min(index + 1, len(SLIDES) - 1)
            continue
        return result.key
