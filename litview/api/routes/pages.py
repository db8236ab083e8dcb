from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, PlainTextResponse

from litview.api.core.container import get_container
from litview.core.errors import EvaluationError
from litview.engine import render

router = APIRouter(tags=["Pages"])

# Precompiled once at import; each request only evaluates it
greeting = render("Hello ${name}, welcome to ${engine}!", "name, engine")


@router.get("/", response_class=HTMLResponse, summary="Home page")
async def home(container=Depends(get_container)):
    return await container.views.render(
        "home",
        {
            "title": "Welcome!",
            "features": ["precompilation", "partials", "async rendering"],
        },
        partials={"main": "partials/main.html"},
    )


@router.get("/about", response_class=HTMLResponse, summary="About page")
async def about(maintained_by: str = "", container=Depends(get_container)):
    return await container.views.render("about", {"maintainedBy": maintained_by})


@router.get("/greet/{name}", response_class=PlainTextResponse, summary="Precompiled greeting")
async def greet(name: str):
    output = greeting(name, "litview")
    if isinstance(output, EvaluationError):
        return PlainTextResponse(str(output), status_code=500)
    return output
