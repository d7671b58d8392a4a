#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
FastAPI Web Server - exposes translate-shell over HTTP with a Redis cache.

Thin orchestration shell: app creation, lifespan wiring of the engine
catalog and cache client, exception handlers, router includes, CLI.

Usage:
    uvicorn api.main:app --host 127.0.0.1 --port 8000
    python -m api.main --bin /usr/bin/trans --redis redis://127.0.0.1/ --address 127.0.0.1:8000
"""

import argparse
import sys
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.routes.health import router as health_router
from api.routes.translate import router as translate_router
from config.logging_config import get_logger, setup_logging
from config.settings import Settings, settings as default_settings
from core.cache.redis_client import RedisClient
from core.translation import (
    CachedLookup,
    EngineCatalog,
    EngineInvoker,
    FallbackTranslator,
    MalformedRequest,
    TransShellInvoker,
    TranslationNotFound,
)

logger = get_logger(__name__)


def create_app(
    config: Optional[Settings] = None,
    invoker: Optional[EngineInvoker] = None,
    cache: Optional[RedisClient] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        config: Settings to use (defaults to the global settings)
        invoker: Engine invoker (defaults to translate-shell at ``config.trans_binary``)
        cache: Cache client (defaults to Redis at ``config.redis_url``)
    """
    config = config or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Discover engines once, connect the cache, wire the lookup"""
        setup_logging(config.log_level)
        engine_invoker = invoker or TransShellInvoker(config.trans_binary, timeout=config.engine_timeout)
        catalog = await EngineCatalog.discover(engine_invoker)
        cache_client = cache or await RedisClient.create(config.redis_url, timeout=config.cache_timeout)

        app.state.catalog = catalog
        app.state.cache = cache_client
        app.state.lookup = CachedLookup(FallbackTranslator(catalog, engine_invoker), cache_client)

        logger.info("%s v%s ready with %d engines, cache: %s",
                    config.app_name, config.app_version, len(catalog), cache_client.backend_name)
        try:
            yield
        finally:
            if cache is None:
                await cache_client.close()
            logger.info("Shutting down...")

    app = FastAPI(
        title=config.app_name,
        description="Translates single words with translate-shell engines, cached in Redis",
        version=config.app_version,
        lifespan=lifespan,
    )

    @app.exception_handler(TranslationNotFound)
    async def translation_not_found_handler(request: Request, exc: TranslationNotFound):
        return JSONResponse(
            status_code=404,
            content={"detail": "no translation available", "word": exc.word, "language": exc.language},
        )

    @app.exception_handler(MalformedRequest)
    async def malformed_request_handler(request: Request, exc: MalformedRequest):
        return JSONResponse(status_code=422, content={"detail": "bad request"})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Unmatched paths are malformed requests, kept apart from translation misses
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=422, content={"detail": "bad request"})
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail},
                            headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": str(exc),
                "type": type(exc).__name__,
                "path": str(request.url.path),
            },
        )

    app.include_router(translate_router)
    app.include_router(health_router)
    return app


app = create_app()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Translate API: exposes translate-shell to Web")
    parser.add_argument("-b", "--bin", dest="binary", default=default_settings.trans_binary,
                        help="path to binary for translate-shell")
    parser.add_argument("-r", "--redis", default=default_settings.redis_url,
                        help="redis URL")
    parser.add_argument("-a", "--address", default=default_settings.address,
                        help="binding address (HOST:PORT)")
    parser.add_argument("--log-level", default=default_settings.log_level,
                        help="logging level")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    import uvicorn

    args = parse_args(argv)
    try:
        config = default_settings.model_copy(
            update={"trans_binary": args.binary, "redis_url": args.redis, "log_level": args.log_level}
        ).with_address(args.address)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    setup_logging(config.log_level)
    logger.info("started server on %s", config.address)
    uvicorn.run(create_app(config), host=config.host, port=config.port, log_config=None)
    return 0


# For running with python -m
if __name__ == "__main__":
    sys.exit(main())
