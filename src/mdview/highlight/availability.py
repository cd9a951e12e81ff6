#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdview/highlight/availability.py
"""Lazy, memoized check for the optional highlighting backend."""

from __future__ import annotations

import importlib
import logging
import threading
from types import ModuleType
from typing import Callable, Optional

from mdview.constants import DEPS_HIGHLIGHT

logger = logging.getLogger(__name__)

_, HIGHLIGHT_IMPORT_NAME, _ = DEPS_HIGHLIGHT[0]


class HighlighterProbe:
    """Import the highlighting backend once and remember whether it worked.

    The answer is never recomputed: installing the backend later in the same
    process does not turn highlighting on.

    Parameters
    ----------
    import_name : str, default "pygments"
        Module to import
    importer : callable, default importlib.import_module
        Import function; replaceable in tests

    """

    def __init__(
        self,
        import_name: str = HIGHLIGHT_IMPORT_NAME,
        importer: Optional[Callable[[str], ModuleType]] = None,
    ):
        self.import_name = import_name
        self._importer = importer or importlib.import_module
        self._lock = threading.Lock()
        self._checked = False
        self._module: Optional[ModuleType] = None
        self.probe_count = 0

    @property
    def checked(self) -> bool:
        return self._checked

    @property
    def module(self) -> Optional[ModuleType]:
        """The imported backend module, or None when unavailable."""
        self._probe()
        return self._module

    def is_available(self) -> bool:
        self._probe()
        return self._module is not None

    def _probe(self) -> None:
        if self._checked:
            return
        with self._lock:
            if self._checked:
                return
            self.probe_count += 1
            try:
                # nosemgrep: python.lang.security.audit.non-literal-import.non-literal-import
                self._module = self._importer(self.import_name)
            except ImportError as e:
                logger.debug(f"Syntax highlighting unavailable ({self.import_name}): {e}")
                self._module = None
            self._checked = True
