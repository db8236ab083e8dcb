from fastapi import FastAPI

from .pages import router as pages_router
from .render import router as render_router


def register_routes(app: FastAPI):
    app.include_router(pages_router)
    app.include_router(render_router, prefix="/v1")
