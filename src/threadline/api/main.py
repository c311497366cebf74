from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from threadline.core.config import get_settings
from threadline.core.logging import configure_logging
from threadline.api.errors import register_error_handlers
from threadline.api.routers import health, threads

settings = get_settings()
configure_logging(settings.log_level, service=settings.app_name)

app = FastAPI(title=settings.app_name)

if settings.enable_cors:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_error_handlers(app)

def _include(router):
    app.include_router(router, prefix=settings.api_prefix)

_include(health.router)
_include(threads.router)

@app.get("/")
async def root():
    return {"service": settings.app_name, "status": "ok"}
