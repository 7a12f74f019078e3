"""
Service layer.

``idea_store`` defines the store interface and the in‑memory store,
``sql_store`` the SQLite and PostgreSQL stores, and ``idea_service``
the validation and logging around them.  Handlers depend on the
interface only, so stores can be swapped without touching the API.
"""
