from pathlib import Path
from typing import Protocol


class TemplateStore(Protocol):
    async def read(self, path: str | Path) -> str:
        ...
