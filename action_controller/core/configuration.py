"""Per-application settings for actions.

A :class:`Configuration` is created with defaults, mutated through attribute
assignment or the :meth:`Configuration.configure` DSL, cloned with
:meth:`Configuration.duplicate` for multi-app setups and restored with
:meth:`Configuration.reset` between tests.
"""

import copy
import logging
from dataclasses import MISSING, dataclass, field, fields
from typing import Any, Callable, Dict, List, Mapping, Optional, Type, Union

from .validation import (
    validate_exception,
    validate_format,
    validate_mime_type,
    validate_status_code,
)


logger = logging.getLogger(__name__)

DEFAULT_ERROR_CODE = 500

DEFAULT_FORMATS: Dict[str, str] = {
    "application/octet-stream": "all",
    "*/*": "all",
    "text/html": "html",
}

ModuleBlock = Callable[[type], Optional[type]]
ExceptionKind = Type[BaseException]


def _default_action_module() -> type:
    from ..action import Action

    return Action


def include(*mixins: type) -> ModuleBlock:
    """Build a module block that mixes ``mixins`` into an action class.

    Each mixin is placed right after the action's own class in the MRO and
    ahead of the mixins included before it, so the action's own methods still
    win while the base classes lose. Mixins the class already inherits from
    are skipped.
    """
    def block(action: type) -> type:
        for mixin in mixins:
            if mixin in action.__mro__:
                continue
            if vars(action).get("_composed"):
                own, tail = action.__bases__[0], action.__bases__[1:]
                namespace = {k: v for k, v in vars(action).items() if k not in ("__dict__", "__weakref__")}
            else:
                own, tail = action, action.__bases__
                namespace = {
                    "__module__": action.__module__,
                    "__qualname__": action.__qualname__,
                    "__doc__": action.__doc__,
                    "_composed": True,
                }
            action = type(action.__name__, (own, mixin, *tail), namespace)
        return action

    return block


@dataclass
class Configuration:
    """Settings shared by every action of an application.

    Assigning ``None`` to any field is ignored, so optional values coming
    from the environment or from keyword arguments can be written blindly.
    """

    handle_exceptions: bool = field(default=True, init=False)
    handled_exceptions: Dict[ExceptionKind, int] = field(default_factory=dict, init=False)
    action_module: type = field(default_factory=_default_action_module, init=False)
    modules: List[ModuleBlock] = field(default_factory=list, init=False)
    formats: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_FORMATS), init=False)

    _SETTINGS = ("handle_exceptions", "action_module", "handle_exception", "modules", "formats")

    def __setattr__(self, name: str, value: Any) -> None:
        if value is None:
            logger.debug(f"Ignoring None written to configuration field '{name}'")
            return
        super().__setattr__(name, value)

    def configure(self, **settings: Any) -> "Configuration":
        """Apply several settings at once.

        ``formats`` is a mapping of format names to MIME types or an iterable
        of ``(name, mime_type)`` pairs, the latter allowing several MIME types
        per format. ``handle_exception`` maps exception kinds to status codes.
        ``None`` values are ignored.
        """
        unknown = sorted(set(settings) - set(self._SETTINGS))
        if unknown:
            raise TypeError(f"Unknown configuration setting(s): {', '.join(unknown)}")

        self.handle_exceptions = settings.get("handle_exceptions")
        self.action_module = settings.get("action_module")
        self.handle_exception(settings.get("handle_exception"))
        for block in settings.get("modules") or ():
            self.module(block)
        formats = settings.get("formats") or ()
        if isinstance(formats, Mapping):
            formats = formats.items()
        for name, mime_type in formats:
            self.register_format(name, mime_type)
        return self

    def handle_exception(
        self,
        exception: Union[None, ExceptionKind, Mapping[ExceptionKind, int]],
        code: Optional[int] = None,
    ) -> "Configuration":
        """Register the status code returned when ``exception`` is raised.

        Accepts either a single kind and its code or a mapping of kinds to
        codes. Entries whose code is ``None`` are ignored.
        """
        if exception is None:
            return self

        if isinstance(exception, Mapping):
            if code is not None:
                raise TypeError("Pass either a mapping of exceptions or a single exception with its code, not both")
            mapping = dict(exception)
        else:
            mapping = {exception: code}

        mapping = {kind: status for kind, status in mapping.items() if status is not None}
        for kind, status in mapping.items():
            validate_exception(kind)
            validate_status_code(status)

        self.handled_exceptions.update(mapping)
        return self

    def exception_code(self, exception: Union[BaseException, ExceptionKind]) -> int:
        """Status code for ``exception``, found through its closest registered ancestor."""
        kind = exception if isinstance(exception, type) else type(exception)
        for ancestor in kind.__mro__:
            if ancestor in self.handled_exceptions:
                return self.handled_exceptions[ancestor]
        return DEFAULT_ERROR_CODE

    def module(self, block: Optional[ModuleBlock]) -> Optional[ModuleBlock]:
        """Append a block applied to every action class; usable as a decorator."""
        if block is None:
            return None
        if not callable(block):
            raise TypeError(f"Module block must be callable, got {block!r}")
        self.modules.append(block)
        return block

    def apply_modules(self, action: type) -> type:
        for block in self.modules:
            result = block(action)
            if result is not None:
                action = result
        return action

    def register_format(self, name: Optional[str], mime_type: Optional[str]) -> "Configuration":
        if name is None or mime_type is None:
            return self

        validate_format(name)
        validate_mime_type(mime_type)

        previous = self.formats.get(mime_type)
        if previous is not None and previous != name:
            logger.warning(f"MIME type '{mime_type}' remapped from format '{previous}' to '{name}'")
        self.formats[mime_type] = name
        return self

    def format_for(self, mime_type: str) -> Optional[str]:
        return self.formats.get(mime_type)

    def mime_type_for(self, name: str) -> Optional[str]:
        for mime_type, format_name in self.formats.items():
            if format_name == name:
                return mime_type
        return None

    def duplicate(self) -> "Configuration":
        """Return an equal configuration whose collections can change independently."""
        duplicate = copy.copy(self)
        duplicate.handled_exceptions = dict(self.handled_exceptions)
        duplicate.modules = list(self.modules)
        duplicate.formats = dict(self.formats)
        return duplicate

    def reset(self) -> None:
        for item in fields(self):
            if item.default is not MISSING:
                value = item.default
            else:
                value = item.default_factory()
            setattr(self, item.name, value)

