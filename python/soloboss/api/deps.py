"""FastAPI dependencies for route handlers.

Common dependencies like database sessions and the chat response strategy.
"""

from fastapi import Request

from soloboss.db.session import get_db
from soloboss.services.responders import ResponseStrategy

__all__ = ["get_db", "get_response_strategy"]


def get_response_strategy(request: Request) -> ResponseStrategy:
    """Get the shared chat response strategy from app state.

    The strategy is built once in create_app; tests can swap it by passing
    their own to create_app.
    """
    return request.app.state.response_strategy
