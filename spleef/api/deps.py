from __future__ import annotations

from spleef.runtime import Runtime
from spleef.runtime import get_runtime as _get_runtime


def get_runtime() -> Runtime:
    return _get_runtime()
