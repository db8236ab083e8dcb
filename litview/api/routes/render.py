from fastapi import APIRouter, Depends

from litview.api.core.container import get_container
from litview.api.schemas import InlineRenderRequest, InlineRenderResponse
from litview.runtime.renderer import RenderOptions

router = APIRouter(prefix="/render", tags=["Render"])


@router.post("", response_model=InlineRenderResponse, summary="Render inline template text")
async def render_inline(
    payload: InlineRenderRequest,
    container=Depends(get_container),
) -> InlineRenderResponse:
    options = RenderOptions(
        locals=payload.locals,
        partials=payload.partials,
        template=True,
        namespaced=payload.namespaced,
    )
    result = await container.renderer.render(payload.template, options)
    if not result.ok:
        return InlineRenderResponse(
            ok=False,
            error_type=type(result.error).__name__,
            error=str(result.error),
        )
    return InlineRenderResponse(ok=True, output=result.output)
