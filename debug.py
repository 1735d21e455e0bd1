# debug.py
from __future__ import annotations
import logging
from typing import Dict

# what the engine actually reports on
COMPONENTS = ("config", "stepping", "convert")
FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"
DATEFMT = "%Y-%m-%d %H:%M:%S"


class Debug:
    """Per-component trace switches in front of the ``ENIGMA`` logger.

    The console handler is installed on the root logger once per process.
    A `log_to` file is attached to this instance's logger and detached
    again by :meth:`close`.
    """

    _root_configured: bool = False          # class-level guard

    def __init__(self, *, log_to: str | None = None, name: str = "ENIGMA") -> None:
        if not Debug._root_configured:
            logging.basicConfig(level=logging.DEBUG, format=FORMAT, datefmt=DATEFMT)
            Debug._root_configured = True

        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)

        self._file_handler: logging.FileHandler | None = None
        if log_to:
            self._file_handler = logging.FileHandler(log_to, encoding="utf-8")
            self._file_handler.setFormatter(logging.Formatter(FORMAT, DATEFMT))
            self.logger.addHandler(self._file_handler)

        self.components: Dict[str, bool] = {c: False for c in COMPONENTS}

    # ── logging API ──────────────────────────────────────────────
    def active(self, component: str) -> bool:
        return self.components.get(component, False)

    def log(self, component: str, message: str) -> None:
        if self.active(component):
            self.logger.debug("[%s] %s", component.upper(), message)

    # ── component toggles ────────────────────────────────────────
    def enable(self, *components: str) -> None:
        for c in components:
            if c not in self.components:
                raise ValueError(f"No such component: {c!r}")
            self.components[c] = True

    def close(self) -> None:
        """Detach and close the log file, if any."""
        if self._file_handler is not None:
            self.logger.removeHandler(self._file_handler)
            self._file_handler.close()
            self._file_handler = None

    def __repr__(self) -> str:
        active = [k for k, v in self.components.items() if v]
        return f"<Debug active={active}>"
