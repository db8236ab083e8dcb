import asyncio
from pathlib import Path

from litview.core.errors import FileReadError


class FilesystemTemplateStore:
    """
    TemplateStore backed by a local filesystem.

    Relative paths resolve against ``base_dir``; absolute paths are used
    as-is. A ``confined`` store refuses any path that resolves outside
    ``base_dir`` (absolute paths, ``..`` segments, symlinks pointing out).
    Reads run in a worker thread so concurrent renders on the event loop are
    not blocked by disk I/O.
    """

    def __init__(self, *, base_dir: Path, encoding: str = "utf-8", confined: bool = False) -> None:
        self._base_dir = Path(base_dir)
        self._encoding = encoding
        self._confined = confined

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    @property
    def confined(self) -> bool:
        return self._confined

    def resolve(self, path: str | Path) -> Path:
        resolved = self._base_dir / Path(path)
        if self._confined and not resolved.resolve().is_relative_to(self._base_dir.resolve()):
            raise FileReadError(path, "path is outside the template directory")
        return resolved

    async def read(self, path: str | Path) -> str:
        resolved = self.resolve(path)
        try:
            return await asyncio.to_thread(resolved.read_text, encoding=self._encoding)
        except (OSError, UnicodeDecodeError) as exc:
            reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
            raise FileReadError(resolved, reason) from exc
