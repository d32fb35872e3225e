from fastapi import FastAPI

from . import account, applications, health, profile


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the FastAPI application."""
    app.include_router(health.router)
    app.include_router(account.router)
    app.include_router(profile.router)
    app.include_router(applications.router)
