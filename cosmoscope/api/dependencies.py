"""
Shared session access for the API routers.
"""

from typing import Optional

from cosmoscope.config import load_config
from cosmoscope.session import ExplorerSession


# Single in-process session (one explorer per server)
_session: Optional[ExplorerSession] = None


def get_session() -> ExplorerSession:
    """Get or create the shared session instance."""
    global _session
    if _session is None:
        _session = ExplorerSession.from_config(load_config())
    return _session


def set_session(session: Optional[ExplorerSession]) -> None:
    """Install a session (or clear it so the next request builds a fresh one)."""
    global _session
    _session = session
