"""
Pydantic schema definitions for API payloads.

Schemas are separated from storage so the API representation stays
the same whichever store backs it.
"""
