from typing import Any, Optional

from pydantic import BaseModel, Field


class InlineRenderRequest(BaseModel):
    """
    Render template text supplied in the request body.

    Partials, when given, are paths relative to the views directory; paths
    that resolve outside it are rejected with a FileReadError.
    """

    template: str = Field(
        description="Template text containing ${...} placeholders"
    )

    locals: dict[str, Any] = Field(
        default_factory=dict,
        description="Named values available to the template"
    )

    partials: dict[str, str] = Field(
        default_factory=dict,
        description="Placeholder name to partial path"
    )

    namespaced: bool = Field(
        default=False,
        description="Expose locals under the default key ($) only"
    )


class InlineRenderResponse(BaseModel):
    ok: bool
    output: Optional[str] = None
    error_type: Optional[str] = None
    error: Optional[str] = None
