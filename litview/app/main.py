"""FastAPI demo application.

Serves a few pages from ``litview/app/views`` through the litview view
engine, plus an endpoint that renders template text posted by the client.

Run with:
    uvicorn litview.app.main:app --reload
"""

from __future__ import annotations

from fastapi import FastAPI

from litview.api.routes import register_routes

tags_metadata = [
    {
        "name": "Pages",
        "description": "HTML pages rendered from view files"
    },
    {
        "name": "Render",
        "description": "Render template text supplied by the client"
    }
]

app = FastAPI(
    title='litview demo',
    version='1.0.0',
    description='Template views rendered with ${...} placeholders',
    openapi_tags=tags_metadata
)

# Register all API routes
register_routes(app)
