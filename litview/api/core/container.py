# --------------------------------
# DI container
# --------------------------------
from functools import lru_cache

from litview.api.views import Views
from litview.config import settings
from litview.domain.template_store import FilesystemTemplateStore
from litview.runtime.renderer import Renderer


class Container:
    def __init__(self):
        self._store = FilesystemTemplateStore(
            base_dir=settings.views_dir,
            encoding=settings.encoding,
            confined=True
        )
        self._renderer = Renderer(self._store)
        self._views = Views(
            directory=settings.views_dir,
            extension=settings.view_extension
        )

    @property
    def renderer(self):
        return self._renderer

    @property
    def views(self):
        return self._views


@lru_cache
def get_container():
    return Container()
