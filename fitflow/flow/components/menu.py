"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
FitFlow, a product of Garudex Labs

FitFlow Menu Component.

Interactive menu with arrow-key navigation:
- Vertical menu layouts
- Selection highlighting
- Keyboard navigation (↑/↓ to navigate, Enter to select, q to quit)

Menus run on the application's event loop (``run_async``) so screens can
await them between session intents.
"""

from dataclasses import dataclass
from typing import Any, Optional

from prompt_toolkit import Application
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl

from fitflow.flow.theme import Colors, Icons


@dataclass
class MenuItem:
    """A single menu item."""

    key: str                              # Unique identifier
    label: str                            # Display text
    description: str = ""                 # Optional description
    icon: str = ""                        # Optional icon
    disabled: bool = False                # Whether item is selectable
    data: Any = None                      # Optional associated data

    def display_text(self, selected: bool = False) -> str:
        """Get formatted display text."""
        icon_part = f"{self.icon} " if self.icon else ""
        prefix = f"{Icons.ARROW_SELECT} " if selected else "  "
        return f"{prefix}{icon_part}{self.label}"


class Menu:
    """Interactive menu with arrow-key navigation."""

    def __init__(
        self,
        title: str,
        items: list[MenuItem],
        subtitle: str = "",
        show_hints: bool = True,
    ):
        self.title = title
        self.subtitle = subtitle
        self.items = items
        self.show_hints = show_hints
        self.selected_index = 0
        self._result: Optional[MenuItem] = None
        self._cancelled = False

        # Skip to first non-disabled item
        self._move_to_next_enabled()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def _get_selectable_items(self) -> list[tuple[int, MenuItem]]:
        """Get list of (index, item) for selectable items."""
        return [(i, item) for i, item in enumerate(self.items) if not item.disabled]

    def _move_to_next_enabled(self) -> None:
        """Move selection to next enabled item."""
        selectable = self._get_selectable_items()
        if not selectable:
            return

        for idx, _ in selectable:
            if idx >= self.selected_index:
                self.selected_index = idx
                return

        # Wrap to first
        self.selected_index = selectable[0][0]

    def _move_up(self) -> None:
        """Move selection up."""
        selectable = self._get_selectable_items()
        if not selectable:
            return

        for idx, _ in reversed(selectable):
            if idx < self.selected_index:
                self.selected_index = idx
                return

        # Wrap to last
        self.selected_index = selectable[-1][0]

    def _move_down(self) -> None:
        """Move selection down."""
        selectable = self._get_selectable_items()
        if not selectable:
            return

        for idx, _ in selectable:
            if idx > self.selected_index:
                self.selected_index = idx
                return

        # Wrap to first
        self.selected_index = selectable[0][0]

    def _get_menu_text(self) -> FormattedText:
        """Generate formatted menu text."""
        lines = []

        if self.title:
            lines.append((f"bold {Colors.INFO}", f"\n  {self.title}\n"))

        if self.subtitle:
            lines.append((Colors.DIM, f"  {self.subtitle}\n"))

        if self.title or self.subtitle:
            lines.append(("", "\n"))

        for i, item in enumerate(self.items):
            is_selected = i == self.selected_index

            if item.disabled:
                style = Colors.DIM
                prefix = "    "
            elif is_selected:
                style = f"bold {Colors.PRIMARY}"
                prefix = f"  {Icons.ARROW_SELECT} "
            else:
                style = Colors.NEUTRAL
                prefix = "    "

            icon_part = f"{item.icon} " if item.icon else ""
            lines.append((style, f"{prefix}{icon_part}{item.label}"))

            if is_selected and item.description:
                lines.append((Colors.DIM, f"  - {item.description}"))

            lines.append(("", "\n"))

        if self.show_hints:
            lines.append(("", "\n"))
            lines.append((Colors.HINT, f"  {Icons.ARROW_UP}{Icons.ARROW_DOWN} navigate  "))
            lines.append((Colors.HINT, "Enter select  "))
            lines.append((Colors.HINT, "q quit\n"))

        return FormattedText(lines)

    def _build_application(self) -> Application:
        kb = KeyBindings()

        @kb.add('up')
        @kb.add('k')  # vim style
        def _up(event):
            self._move_up()

        @kb.add('down')
        @kb.add('j')  # vim style
        def _down(event):
            self._move_down()

        @kb.add('enter')
        def _select(event):
            item = self.items[self.selected_index]
            if not item.disabled:
                self._result = item
                event.app.exit()

        @kb.add('q')
        @kb.add('escape')
        @kb.add('c-c')
        def _quit(event):
            self._cancelled = True
            event.app.exit()

        layout = Layout(
            Window(
                content=FormattedTextControl(
                    text=self._get_menu_text,
                ),
            )
        )

        return Application(
            layout=layout,
            key_bindings=kb,
            full_screen=False,
            mouse_support=True,
        )

    async def run_async(self) -> Optional[MenuItem]:
        """Run the menu and return selected item, or None if cancelled."""
        self._result = None
        self._cancelled = False
        await self._build_application().run_async()
        return self._result

