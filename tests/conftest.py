import pytest


@pytest.fixture
def anyio_backend():
    # Tests use asyncio primitives directly (Event, Task)
    return 'asyncio'
