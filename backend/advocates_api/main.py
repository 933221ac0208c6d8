"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from advocates_api.api import advocates, ops
from advocates_api.api.errors import install_error_handlers
from advocates_api.api.middleware_request_id import RequestIdMiddleware
from advocates_api.infra import postgres
from advocates_api.obs import init as obs_init
from advocates_api.settings import settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
	if not settings.uses_memory_store():
		await postgres.init_pool()
	logger.info("advocates_api.startup backend=%s env=%s", settings.search_backend, settings.environment)
	try:
		yield
	finally:
		await postgres.close_pool()


app = FastAPI(title="Advocate Directory", lifespan=lifespan)
install_error_handlers(app)

allow_origins = list(getattr(settings, "cors_allow_origins", []))
if not allow_origins:
	allow_origins = ["http://localhost:3000"] if settings.is_dev() else []
# Starlette disallows wildcard '*' with allow_credentials=True.
allow_credentials = "*" not in allow_origins

app.add_middleware(
	CORSMiddleware,
	allow_origins=allow_origins,
	allow_credentials=allow_credentials,
	allow_methods=["GET"],
	allow_headers=["*"],
	expose_headers=["X-Request-Id"],
)

obs_init(app)

# Ensure every request carries an X-Request-Id and make it available on request.state
app.add_middleware(RequestIdMiddleware)

app.include_router(advocates.router, tags=["advocates"])
app.include_router(ops.router, tags=["ops"])
