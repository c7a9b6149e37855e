from fastapi import Request

from .storage import CompatibilityStore


def get_store(request: Request) -> CompatibilityStore:
    """Result store created at startup; tests swap it via dependency_overrides."""
    return request.app.state.store
