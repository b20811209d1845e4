# debug.py
from __future__ import annotations
import logging
from typing import Dict

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(*, log_to: str | None = None) -> None:
    """Install the root handlers used by the command line tools.

    If `log_to` is given, messages also stream to that file.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_to:
        handlers.append(logging.FileHandler(log_to, encoding="utf-8"))

    logging.basicConfig(
        level=logging.DEBUG,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
    )


class Debug:
    """Trace sink handed to a Machine; one switch per pipeline component."""

    def __init__(self, *, name: str = "ENIGMA", enabled: bool = True) -> None:
        self.logger = logging.getLogger(name)
        self.enabled = enabled     # global switch

        # default component map
        self.components: Dict[str, bool] = {
            "plugboard":  False,
            "rotor":      False,
            "stepping":   False,
            "machine":    False,
            "config":     False,
        }

    @classmethod
    def verbose(cls, *, name: str = "ENIGMA") -> "Debug":
        """A sink with every component switched on."""
        dbg = cls(name=name)
        dbg.enable(*dbg.components)
        return dbg

    # ── logging API ──────────────────────────────────────────────
    def active(self, component: str) -> bool:
        return self.enabled and self.components.get(component, False)

    def log(self, component: str, message: str) -> None:
        if self.active(component):
            self.logger.debug("[%s] %s", component.upper(), message)

    # ── component toggles ────────────────────────────────────────
    def enable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            self.components[c] = True

    def disable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            self.components[c] = False

    def toggle(self, component: str) -> None:
        self._require(component)
        self.components[component] = not self.components[component]

    def toggle_global(self, state: bool) -> None:
        """Switch every component on/off at once."""
        self.enabled = state

    def status(self) -> Dict[str, bool]:
        """Return a *copy* of the current component map."""
        return self.components.copy()

    # ── helpers ──────────────────────────────────────────────────
    def _require(self, component: str) -> None:
        if component not in self.components:
            raise ValueError(f"No such component: {component!r}")

    # nicety for `print(dbg)`
    def __repr__(self) -> str:
        active = [k for k, v in self.components.items() if v]
        return f"<Debug enabled={self.enabled} active={active}>"
