"""Application orchestration layer.

Holds the ``Strata`` context that sequences start-up, together with the
configuration loader, the namespace binder and the bootstrap errors.
"""

from . import config
from .context import DEFAULT_TIMEZONE, LifecycleState, Strata
from .errors import ConfigurationError, StrataError, SubsystemInitializationError

__all__ = [
    "ConfigurationError",
    "DEFAULT_TIMEZONE",
    "LifecycleState",
    "Strata",
    "StrataError",
    "SubsystemInitializationError",
    "config",
]
