"""
fdb_core.result
---------------
Uniform outcome shape handed back to the host: ``{"ok": value}`` or
``{"error": message}``.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Callable, Dict
from fdb_core.errors import FdbError


@dataclass
class DhtEntry:
    owner_public_key: str = ""
    cid: str = ""
    key: str = ""

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass
class FdbResult:
    success: bool
    value: Any = None
    err_msg: str = ""

    @classmethod
    def ok(cls, value: Any = None) -> "FdbResult":
        return cls(success=True, value=value)

    @classmethod
    def error(cls, msg: str) -> "FdbResult":
        return cls(success=False, err_msg=msg)

    @classmethod
    def from_exc(cls, exc: BaseException) -> "FdbResult":
        return cls.error(str(exc) or type(exc).__name__)

    @classmethod
    def capture(cls, fn: Callable[..., Any], *args, **kwargs) -> "FdbResult":
        """Run ``fn`` and fold any FdbError into an error result."""
        try:
            return cls.ok(fn(*args, **kwargs))
        except FdbError as e:
            return cls.from_exc(e)

    def to_dict(self) -> Dict[str, Any]:
        if not self.success:
            return {"error": self.err_msg}
        return {"ok": _plain(self.value)}


def _plain(value: Any) -> Any:
    if isinstance(value, DhtEntry):
        return value.to_dict()
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value
