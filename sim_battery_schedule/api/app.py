from __future__ import annotations

from fastapi import FastAPI

from ..config import configure_logging
from .routes import catalog_router, simulation_router


def create_app() -> FastAPI:
    """
    Instantiate the FastAPI application and register routers.

    Registers two routers:
    - simulation: daily analysis from a JSON body or query-string settings
    - catalog: available pricing structures and scenarios

    Returns:
        FastAPI: Configured FastAPI application instance ready to serve.

    Example:
        ```python
        app = create_app()
        uvicorn.run(app, host="0.0.0.0", port=8000)
        ```
    """
    configure_logging()
    app = FastAPI(
        title="Battery Schedule Simulator API",
        version="0.1.0",
        description="Simulate and optimize one day of household battery operation.",
    )

    from fastapi.middleware.cors import CORSMiddleware

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(simulation_router)
    app.include_router(catalog_router)

    return app


app = create_app()
