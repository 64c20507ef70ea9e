from __future__ import annotations

from .loop import TextProtocol, run_loop

__all__ = ["TextProtocol", "run_loop"]
