"""
HTTP layer.

``router`` aggregates the endpoint routers that ``main`` mounts under
``/api``.
"""
