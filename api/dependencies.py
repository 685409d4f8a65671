"""Shared FastAPI dependencies."""

from fastapi import Request

from aoryx import AsyncAoryxClient


def get_aoryx_client(request: Request) -> AsyncAoryxClient:
    """Aoryx client created by the application factory."""
    return request.app.state.aoryx_client
