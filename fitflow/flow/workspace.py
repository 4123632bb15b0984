"""
Workspace management for FitFlow.

Provides centralized path resolution so every module resolves files
relative to the active workspace root instead of hardcoding ``~/.fitflow/``.

Usage::

    from fitflow.flow.workspace import get_workspace

    ws = get_workspace()                    # default (~/.fitflow/)
    ws = get_workspace("/opt/fitflow")      # custom path

    ws.config_path   # -> /opt/fitflow/config.yaml
    ws.store_path    # -> /opt/fitflow/session_store.json
    ws.log_path      # -> /opt/fitflow/fitflow.log
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


_DEFAULT_ROOT = Path.home() / ".fitflow"


class WorkspaceManager:
    """Resolve all FitFlow paths relative to a workspace root.

    Parameters
    ----------
    root:
        Workspace root directory.  Defaults to ``~/.fitflow/``.
    """

    def __init__(self, root: Optional[Path] = None) -> None:
        self._root = Path(root).expanduser() if root else _DEFAULT_ROOT

    # ------------------------------------------------------------------
    # Path properties
    # ------------------------------------------------------------------

    @property
    def root(self) -> Path:
        """Workspace root directory."""
        return self._root

    @property
    def config_path(self) -> Path:
        """Path to ``config.yaml``."""
        return self._root / "config.yaml"

    @property
    def store_path(self) -> Path:
        """Path to ``session_store.json``."""
        return self._root / "session_store.json"

    @property
    def log_path(self) -> Path:
        """Path to ``fitflow.log``."""
        return self._root / "fitflow.log"

    # ------------------------------------------------------------------
    # Directory management
    # ------------------------------------------------------------------

    def ensure_dirs(self) -> None:
        """Create workspace directory if it does not exist."""
        self._root.mkdir(parents=True, exist_ok=True)

    def __repr__(self) -> str:
        return f"WorkspaceManager(root={self._root!r})"


# ------------------------------------------------------------------
# Module-level convenience
# ------------------------------------------------------------------

_current_workspace: Optional[WorkspaceManager] = None


def get_workspace(root: Optional[str | Path] = None) -> WorkspaceManager:
    """Return a ``WorkspaceManager`` for the given root.

    When called without arguments the first time, creates the default
    workspace (``~/.fitflow/``).  Subsequent calls without arguments
    return the same instance.  Passing *root* always creates a fresh
    manager.
    """
    global _current_workspace

    if root is not None:
        return WorkspaceManager(Path(root))

    if _current_workspace is None:
        _current_workspace = WorkspaceManager()

    return _current_workspace


def set_workspace(root: str | Path) -> WorkspaceManager:
    """Set the global workspace root and return the manager.

    This is called once at startup, before any other module reads paths.
    """
    global _current_workspace
    _current_workspace = WorkspaceManager(Path(root))
    return _current_workspace
