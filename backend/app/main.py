from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from backend.app.config import AppConfig
from backend.app.api.routes_graph import router as graph_router
from backend.app.api.schemas import ErrorResponse
from backend.app.dependencies import get_graph_store
from dagbuilder.graph.errors import DagError

ERROR_STATUS = {
    "empty_label": 400,
    "invalid_position": 400,
    "not_found": 404,
    "unknown_node": 422,
    "self_loop": 409,
    "duplicate_edge": 409,
    "would_create_cycle": 409,
    "malformed": 422,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifecycle hooks.

    Builds the graph store (and loads the startup snapshot, if any)
    before the first request is served.
    """
    get_graph_store()

    yield


async def dag_error_handler(request: Request, exc: DagError) -> JSONResponse:
    return JSONResponse(
        status_code=ERROR_STATUS.get(exc.code, 400),
        content=ErrorResponse(error=exc.code, detail=exc.message).model_dump(),
    )


def create_app(config: AppConfig) -> FastAPI:
    app = FastAPI(
        title=config.app_name,
        lifespan=lifespan,
    )

    app.add_exception_handler(DagError, dag_error_handler)

    app.include_router(
        graph_router,
        prefix=f"{config.api_prefix}/graph",
        tags=["graph"],
    )

    return app


config = AppConfig()
app = create_app(config)
