"""
Top‑level package for the Idea Board API.

All functionality lives in submodules under ``app``; import the ASGI
application as ``idea_board_api.app.main:app``.
"""

__all__ = []
