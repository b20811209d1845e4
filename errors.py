# errors.py
from __future__ import annotations


class ConfigurationError(ValueError):
    """A machine, rotor or settings description that cannot be honoured.

    Every failure of the simulator is a caller or configuration defect;
    there is no transient error class.
    """
