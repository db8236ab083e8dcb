from __future__ import annotations

import pytest

from litview.core.errors import FileReadError
from litview.domain.template_store import FilesystemTemplateStore, InMemoryTemplateStore


@pytest.mark.anyio
async def test_filesystem_store_reads_relative_and_absolute_paths(tmp_path) -> None:
    # Arrange
    (tmp_path / 'views').mkdir()
    (tmp_path / 'views' / 'page.html').write_text('héllo', encoding='utf-8')
    store = FilesystemTemplateStore(base_dir=tmp_path)

    # Act / Assert
    assert await store.read('views/page.html') == 'héllo'
    assert await store.read(tmp_path / 'views' / 'page.html') == 'héllo'


@pytest.mark.anyio
async def test_filesystem_store_missing_file(tmp_path) -> None:
    store = FilesystemTemplateStore(base_dir=tmp_path)

    with pytest.raises(FileReadError) as exc:
        await store.read('nope.html')

    assert exc.value.path == str(tmp_path / 'nope.html')
    assert isinstance(exc.value.__cause__, FileNotFoundError)


@pytest.mark.anyio
async def test_filesystem_store_directory_is_not_readable(tmp_path) -> None:
    store = FilesystemTemplateStore(base_dir=tmp_path)

    with pytest.raises(FileReadError):
        await store.read('.')


@pytest.mark.anyio
async def test_filesystem_store_decode_failure(tmp_path) -> None:
    (tmp_path / 'latin.html').write_bytes('café'.encode('latin-1'))
    store = FilesystemTemplateStore(base_dir=tmp_path, encoding='utf-8')

    with pytest.raises(FileReadError):
        await store.read('latin.html')


@pytest.mark.anyio
async def test_in_memory_store() -> None:
    store = InMemoryTemplateStore({'a/b.html': 'B'})

    assert await store.read('a/b.html') == 'B'
    with pytest.raises(FileReadError):
        await store.read('a/c.html')


@pytest.mark.anyio
async def test_confined_store_reads_nested_paths(tmp_path) -> None:
    (tmp_path / 'partials').mkdir()
    (tmp_path / 'partials' / 'main.html').write_text('<p>hi</p>', encoding='utf-8')
    store = FilesystemTemplateStore(base_dir=tmp_path, confined=True)

    assert await store.read('partials/main.html') == '<p>hi</p>'
    assert await store.read(tmp_path / 'partials' / 'main.html') == '<p>hi</p>'


@pytest.mark.anyio
@pytest.mark.parametrize('path', ['/etc/hostname', '../secret.txt', 'partials/../../secret.txt'])
async def test_confined_store_rejects_paths_outside_base_dir(tmp_path, path) -> None:
    # Arrange
    (tmp_path / 'secret.txt').write_text('top secret', encoding='utf-8')
    (tmp_path / 'views').mkdir()
    store = FilesystemTemplateStore(base_dir=tmp_path / 'views', confined=True)

    # Act / Assert
    with pytest.raises(FileReadError, match='outside the template directory'):
        await store.read(path)
