"""
FitFlow Theme - Color semantics and styling definitions.

Color System:
- Green (#00d787): Success, completed steps
- Blue (#007aff): Primary, interactive, selectable
- Yellow (#ffd700): Warning, attention, pending
- Red (#ff5f5f): Error, failures
- Coral (#ff6b6b): Workout accents
- Teal (#4ecdc4): Progress accents
- White (#ffffff): Neutral text
- Dim (#808080): Disabled, secondary, optional
"""

from rich.style import Style
from rich.theme import Theme


# Color constants with semantic meaning
class Colors:
    """Semantic color definitions."""

    # Core semantic colors
    SUCCESS = "#00d787"      # Green - completed, healthy
    PRIMARY = "#007aff"      # Blue - interactive, selectable
    WARNING = "#ffd700"      # Yellow - attention needed
    ERROR = "#ff5f5f"        # Red - failures
    NEUTRAL = "#ffffff"      # White - regular content
    INFO = "#d787ff"         # Magenta - headers, decorative
    HINT = "#5fd7ff"         # Cyan - shortcuts, tips
    DIM = "#808080"          # Gray - disabled, secondary

    # Quick action accents
    WORKOUT = "#ff6b6b"
    PROGRESS = "#4ecdc4"


class Styles:
    """Rich style definitions using semantic colors."""

    # Text styles
    TITLE = Style(color=Colors.INFO, bold=True)
    SUBTITLE = Style(color=Colors.HINT)
    BODY = Style(color=Colors.NEUTRAL)
    MUTED = Style(color=Colors.DIM)

    # Status indicators
    STATUS_SUCCESS = Style(color=Colors.SUCCESS, bold=True)
    STATUS_WARNING = Style(color=Colors.WARNING, bold=True)
    STATUS_ERROR = Style(color=Colors.ERROR, bold=True)
    STATUS_INFO = Style(color=Colors.INFO)

    # Input elements
    PROMPT = Style(color=Colors.HINT, bold=True)

    # Hints and shortcuts
    SHORTCUT = Style(color=Colors.HINT, bold=True)
    HINT_TEXT = Style(color=Colors.DIM, italic=True)


# Rich theme for console
FLOW_THEME = Theme({
    "title": str(Styles.TITLE),
    "subtitle": str(Styles.SUBTITLE),
    "body": str(Styles.BODY),
    "muted": str(Styles.MUTED),

    "success": str(Styles.STATUS_SUCCESS),
    "warning": str(Styles.STATUS_WARNING),
    "error": str(Styles.STATUS_ERROR),
    "info": str(Styles.STATUS_INFO),

    "prompt": str(Styles.PROMPT),
    "shortcut": str(Styles.SHORTCUT),
    "hint": str(Styles.HINT_TEXT),
})


# ASCII Art Banner
BANNER = r"""
    ███████╗██╗████████╗███████╗██╗      ██████╗ ██╗    ██╗
    ██╔════╝██║╚══██╔══╝██╔════╝██║     ██╔═══██╗██║    ██║
    █████╗  ██║   ██║   █████╗  ██║     ██║   ██║██║ █╗ ██║
    ██╔══╝  ██║   ██║   ██╔══╝  ██║     ██║   ██║██║███╗██║
    ██║     ██║   ██║   ██║     ███████╗╚██████╔╝╚███╔███╔╝
    ╚═╝     ╚═╝   ╚═╝   ╚═╝     ╚══════╝ ╚═════╝  ╚══╝╚══╝

              Your AI-powered fitness companion
"""

# Compact banner for smaller terminals
BANNER_COMPACT = r"""
┌───────────────────────────────────────────┐
│  FITFLOW                                  │
│  Your AI-powered fitness companion        │
└───────────────────────────────────────────┘
"""


# Status icons
class Icons:
    """Unicode icons for status and navigation."""

    # Status
    SUCCESS = "✓"
    ERROR = "✗"
    WARNING = "⚠"
    INFO = "ℹ"
    PENDING = "○"
    COMPLETE = "●"

    # Navigation
    ARROW_RIGHT = "→"
    ARROW_LEFT = "←"
    ARROW_UP = "↑"
    ARROW_DOWN = "↓"
    ARROW_SELECT = "▶"

    # Carousel
    DOT_ACTIVE = "━━"
    DOT_INACTIVE = "•"

    # Content
    HOME = "🏠"
    WORKOUT = "🏋"
    PROGRESS = "📈"
    PROFILE = "👤"
    GOAL = "🎯"
    LOGOUT = "⎋"
    WAVE = "👋"
