from .action import Action
from .controller import Controller, configure, duplicate, reset
from .core.configuration import DEFAULT_ERROR_CODE, DEFAULT_FORMATS, Configuration, include

__all__ = [
    "Action",
    "Configuration",
    "Controller",
    "DEFAULT_ERROR_CODE",
    "DEFAULT_FORMATS",
    "configure",
    "duplicate",
    "include",
    "reset",
]
