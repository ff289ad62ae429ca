"""HTTP routes, grouped by resource.

Routers are assembled in create_api_router() rather than at import time so
importing a route module never forces settings to load.
"""

from fastapi import APIRouter

from soloboss.api.routes import activity, chat, dashboard, documents, health, me, tasks

# (module, OpenAPI tag) in the order the docs list them
_ROUTE_GROUPS = (
    (health, "health"),
    (dashboard, "dashboard"),
    (tasks, "tasks"),
    (documents, "documents"),
    (chat, "chat"),
    (me, "user"),
    (activity, "activity"),
)


def create_api_router() -> APIRouter:
    api_router = APIRouter()
    for module, tag in _ROUTE_GROUPS:
        api_router.include_router(module.router, tags=[tag])
    return api_router


__all__ = ["create_api_router"]
