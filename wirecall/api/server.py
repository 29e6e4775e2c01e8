"""FastAPI binding for the RPC dispatcher.

Mount the procedures of a router under one dynamic route::

    app = create_app(router=app_router, ctx=create_context)

or include :func:`create_rpc_router` into an existing application.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from wirecall import __version__
from wirecall.api.dispatcher import PATH_PARAM, ContextFactory, create_rpc_api
from wirecall.api.envelope import RpcResponse
from wirecall.config.schema import Config
from wirecall.core import Router


def render_response(response: RpcResponse) -> JSONResponse:
    return JSONResponse(content=response.body, status_code=response.status_code)


def create_rpc_router(
    *,
    router: Router,
    ctx: ContextFactory | None = None,
    prefix: str = "/api/trpc",
) -> APIRouter:
    """Expose ``router`` at ``GET|POST <prefix>/{trpc}``."""
    handler = create_rpc_api(router=router, ctx=ctx)
    api_router = APIRouter(prefix=prefix.rstrip("/"))

    @api_router.api_route("/", methods=["GET", "POST"], include_in_schema=False)
    async def rpc_root(request: Request) -> JSONResponse:
        return render_response(await handler(request, {PATH_PARAM: ""}))

    @api_router.api_route(f"/{{{PATH_PARAM}}}", methods=["GET", "POST"])
    async def rpc_call(request: Request) -> JSONResponse:
        return render_response(await handler(request, dict(request.path_params)))

    return api_router


def create_app(
    *,
    router: Router,
    ctx: ContextFactory | None = None,
    config: Config | None = None,
) -> FastAPI:
    """Standalone application serving ``router`` with the configured prefix."""
    cfg = config or Config()
    app = FastAPI(title="wirecall", version=__version__)
    app.include_router(create_rpc_router(router=router, ctx=ctx, prefix=cfg.server.prefix))

    if cfg.server.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cfg.server.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/health")
    async def health() -> dict[str, Any]:
        return {"ok": True, "procedures": sorted(router)}

    logger.info("wirecall app ready prefix={} procedures={}", cfg.server.prefix, len(router))
    return app
