"""
Cosmoscope: a conversational Earth and Mars explorer.

This package contains:
- store/: Observable transcript and settings stores
- directives/: Map commands embedded in assistant replies
- lookup/: Debounced lookups, geocoding and routing clients
- map/: Map view state and the coordinator that owns it
- conversation/: Earth and Mars orchestrators, input suggestions
- imagery/: NASA rover photos and upload encoding
- bootstrap: One-shot device position resolution
- api/: FastAPI routers over a single session
"""

from cosmoscope.directives import extract_directive
from cosmoscope.session import ExplorerSession

__all__ = ["extract_directive", "ExplorerSession"]
