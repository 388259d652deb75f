"""Controllers group actions that share one configuration.

The module-level helpers operate on a process-wide default controller, which
is what actions defined without an explicit controller fall back to.
"""

import logging
from typing import Any, Optional

from .core.configuration import Configuration


logger = logging.getLogger(__name__)


class Controller:
    def __init__(self, configuration: Optional[Configuration] = None):
        self.configuration = configuration if configuration is not None else Configuration()

    def configure(self, **settings: Any) -> "Controller":
        self.configuration.configure(**settings)
        return self

    def duplicate(self) -> "Controller":
        """Return a controller with an independent copy of this configuration."""
        return Controller(self.configuration.duplicate())

    def action(self, cls: type) -> type:
        """Class decorator turning ``cls`` into an action of this controller.

        The class is combined with the configured action module, bound to this
        controller's configuration, and then passed through every module block.
        """
        namespace = {
            "__module__": cls.__module__,
            "__qualname__": cls.__qualname__,
            "__doc__": cls.__doc__,
            "configuration": self.configuration,
            "_composed": True,
        }
        module = self.configuration.action_module
        bases = (cls,) if cls is module else (cls, module)
        action = type(cls.__name__, bases, namespace)
        logger.debug(f"Defined action {action.__qualname__} extending {self.configuration.action_module.__name__}")
        return self.configuration.apply_modules(action)


default = Controller()
configuration = default.configuration


def configure(**settings: Any) -> Configuration:
    return default.configuration.configure(**settings)


def duplicate() -> Configuration:
    return default.configuration.duplicate()


def reset() -> None:
    default.configuration.reset()
