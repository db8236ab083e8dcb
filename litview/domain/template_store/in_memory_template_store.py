from pathlib import Path

from litview.core.errors import FileReadError


class InMemoryTemplateStore:
    def __init__(self, templates: dict[str, str]):
        self._templates = templates

    async def read(self, path: str | Path) -> str:
        key = Path(path).as_posix()
        if key not in self._templates:
            raise FileReadError(key, 'no such template')
        return self._templates[key]
