from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from graphcompose.errors import (
    CompositionError,
    LabelNotFoundError,
    UnknownNodeError,
)

from backend.app.config import AppConfig
from backend.app.api.routes_compose import router as compose_router
from backend.app.api.routes_graph import router as graph_router


async def composition_error_handler(request: Request, exc: CompositionError):
    """
    Composition failures are caller errors: missing references map to
    404, everything else to 422.
    """
    status = 404 if isinstance(exc, (UnknownNodeError, LabelNotFoundError)) else 422
    return JSONResponse(
        status_code=status,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


def create_app(config: AppConfig) -> FastAPI:
    app = FastAPI(title=config.app_name)

    app.add_exception_handler(CompositionError, composition_error_handler)

    app.include_router(
        compose_router,
        prefix=f"{config.api_prefix}/compose",
        tags=["compose"],
    )

    app.include_router(
        graph_router,
        prefix=f"{config.api_prefix}/graph",
        tags=["graph"],
    )

    return app


config = AppConfig()
app = create_app(config)
