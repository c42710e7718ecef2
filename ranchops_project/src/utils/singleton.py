from __future__ import annotations

"""singleton.py
Tiny *Singleton* base‑class for services that need exactly one instance per
process (currently only :class:`SettingsService`).

Subclasses **must** keep their ``__init__`` idempotent, because ``__init__``
still runs on every ``Cls()`` call.  Tests can drop the cached instance with
:meth:`Singleton.reset_instance`.
"""

from typing import Any


class Singleton:  # noqa: D101 – trivial helper
    _instance: Singleton | None = None

    def __new__(cls, *args: Any, **kwargs: Any):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Forget the cached instance so the next call builds a fresh one."""
        cls._instance = None
