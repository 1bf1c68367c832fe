"""Named configuration lookup.

Values come from the process environment, with an optional ``.env`` file
underneath it (process variables win, as with ``load_dotenv``).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import ClassVar

from dotenv import dotenv_values, find_dotenv


class Environment:
    """Read-only variable lookup shared by the whole process.

    Args:
        values: Explicit variables. When given, neither ``os.environ`` nor a
            ``.env`` file is consulted.
        env_file: ``.env`` file to read. Defaults to the nearest one found
            from the working directory, if any.
    """

    _shared: ClassVar[Environment | None] = None

    def __init__(
        self,
        values: Mapping[str, str | None] | None = None,
        env_file: Path | str | None = None,
    ) -> None:
        if values is not None:
            self._vars = dict(values)
            return

        path = env_file if env_file is not None else find_dotenv(usecwd=True)
        file_vars = dotenv_values(path) if path else {}
        self._vars = {**file_vars, **os.environ}

    @classmethod
    def get(cls) -> Environment:
        """Return the process-wide instance, loading it on first use."""
        if cls._shared is None:
            cls._shared = cls()
        return cls._shared

    @classmethod
    def reset(cls) -> None:
        """Forget the process-wide instance so the next get() reloads it."""
        cls._shared = None

    def find_var(self, name: str, default: str | None = None) -> str | None:
        """Look up *name*, returning *default* when it is unset."""
        value = self._vars.get(name)
        return default if value is None else value

    def __contains__(self, name: object) -> bool:
        return name in self._vars
