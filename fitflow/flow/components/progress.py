"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
FitFlow, a product of Garudex Labs

FitFlow Step Progress Component.

Header shown above each onboarding step:
- Step indicators (done / current / pending)
- Progress bar
- Current step panel
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from rich.console import Console
from rich.panel import Panel

from fitflow.flow.theme import Colors, Icons


class StepStatus(Enum):
    """Status of an onboarding step relative to the current one."""
    PENDING = "pending"
    CURRENT = "current"
    COMPLETED = "completed"


@dataclass
class ProgressStep:
    """A single step shown in the progress header."""

    key: str                                    # Unique identifier (route name)
    title: str                                  # Step title
    description: str                            # Step description


class StepProgress:
    """Renders progress through an ordered list of steps."""

    def __init__(
        self,
        title: str,
        steps: list[ProgressStep],
        console: Optional[Console] = None,
    ):
        self.title = title
        self.steps = steps
        self.console = console or Console()

    def index_of(self, key: str) -> int:
        for i, step in enumerate(self.steps):
            if step.key == key:
                return i
        raise KeyError(key)

    def status_of(self, index: int, current_index: int) -> StepStatus:
        if index < current_index:
            return StepStatus.COMPLETED
        if index == current_index:
            return StepStatus.CURRENT
        return StepStatus.PENDING

    def render(self, current_key: str) -> None:
        """Render indicators, progress bar and the current step panel."""
        current_index = self.index_of(current_key)

        self.console.print()
        self.console.print(f"  [bold {Colors.INFO}]{self.title}[/]")
        self.console.print()

        for i, step in enumerate(self.steps):
            status = self.status_of(i, current_index)
            if status == StepStatus.COMPLETED:
                icon = f"[{Colors.SUCCESS}]{Icons.COMPLETE}[/]"
                style = Colors.SUCCESS
            elif status == StepStatus.CURRENT:
                icon = f"[{Colors.PRIMARY}]{Icons.ARROW_SELECT}[/]"
                style = Colors.PRIMARY
            else:
                icon = f"[{Colors.DIM}]{Icons.PENDING}[/]"
                style = Colors.DIM

            self.console.print(f"  {icon} [{style}]{i + 1}. {step.title}[/]")

        self.console.print()

        total = len(self.steps)
        bar_width = 40
        filled = int(bar_width * current_index / total) if total else 0
        bar = f"[{Colors.SUCCESS}]{'━' * filled}[/][{Colors.DIM}]{'─' * (bar_width - filled)}[/]"
        self.console.print(f"  {bar} {current_index}/{total}")
        self.console.print()

        step = self.steps[current_index]
        self.console.print(
            Panel(
                f"[{Colors.NEUTRAL}]{step.description}[/]",
                title=f"[bold {Colors.INFO}]Step {current_index + 1}/{total}: {step.title}[/]",
                border_style=Colors.PRIMARY,
                padding=(1, 2),
            )
        )
        self.console.print()
