"""
bw Router Selection

    [router]
    name = "python"

        [router.python]
        script = "python/example_router.py"

`dumb` is the built-in router and needs nothing else. `python` hands
routing decisions to a script and requires the `[router.python]`
payload. A payload next to `name = "dumb"` is kept (so the document
survives a dump unchanged) but never used.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .document import expect_table, get_field, join_path, reject_unknown
from .errors import MalformedDocumentError, UnknownVariantError


logger = logging.getLogger(__name__)


class RouterChoice(str, Enum):
    """Routing strategy."""
    DUMB = "dumb"      # built-in
    PYTHON = "python"  # externally scripted


@dataclass
class PythonRouterConfig:
    """Payload of the scripted router."""
    script: str

    @classmethod
    def from_document(cls, data: Any, path: str) -> 'PythonRouterConfig':
        table = expect_table(data, path)
        reject_unknown(table, ("script",), path)
        return cls(script=get_field(table, "script", str, path))

    def to_document(self) -> Dict[str, Any]:
        return {"script": self.script}


@dataclass
class RouterConfig:
    """Router selection."""
    name: RouterChoice = RouterChoice.DUMB
    python: Optional[PythonRouterConfig] = None

    @classmethod
    def from_document(cls, data: Any, path: str = "router") -> 'RouterConfig':
        """
        Build the router selection from the `[router]` table.

        Raises:
            UnknownVariantError: If `name` is not a known router
            MalformedDocumentError: If the scripted router has no payload
        """
        table = expect_table(data, path)
        reject_unknown(table, ("name", "python"), path)

        raw_name = get_field(table, "name", str, path, default=RouterChoice.DUMB.value)
        try:
            name = RouterChoice(raw_name)
        except ValueError:
            raise UnknownVariantError(raw_name, join_path(path, "name")) from None

        python = None
        if "python" in table:
            python = PythonRouterConfig.from_document(
                table["python"], join_path(path, "python")
            )

        if name is RouterChoice.PYTHON and python is None:
            raise MalformedDocumentError(
                "python router requires a [router.python] section",
                join_path(path, "python"),
            )

        if name is RouterChoice.DUMB and python is not None:
            logger.warning(
                f"Ignoring {join_path(path, 'python')}: router {name.value!r} "
                f"takes no script"
            )

        return cls(name=name, python=python)

    def active_script(self) -> Optional[str]:
        """Script the router factory should run, if any."""
        if self.name is RouterChoice.PYTHON and self.python is not None:
            return self.python.script
        return None

    def to_document(self) -> Dict[str, Any]:
        document: Dict[str, Any] = {"name": self.name.value}
        if self.python is not None:
            document["python"] = self.python.to_document()
        return document
