from __future__ import annotations

from collections.abc import Iterator

import pytest

from sqlchain.core import _pool
from sqlchain.core.config import reset_global_config


@pytest.fixture(autouse=True)
def isolated_render_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Give every test the default configuration and a fresh buffer pool."""
    for key in ("SQLCHAIN_ENABLE_BUFFER_POOL", "SQLCHAIN_BUFFER_POOL_SIZE", "SQLCHAIN_LOG_RENDERS"):
        monkeypatch.delenv(key, raising=False)
    reset_global_config()
    monkeypatch.setattr(_pool, "_thread_local", _pool.threading.local())
    yield
    reset_global_config()
