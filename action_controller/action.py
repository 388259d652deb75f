import logging
from http import HTTPStatus
from typing import Any, Dict, List, Optional

from .core.configuration import Configuration


logger = logging.getLogger(__name__)


def status_phrase(code: int) -> str:
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return str(code)


class Action:
    """Default base module for actions.

    Subclasses implement ``call(params)`` and return a ``[status, headers, body]``
    triple. The configuration is bound when the subclass is defined: either
    explicitly through a ``configuration`` class attribute or, failing that,
    the process-wide controller configuration. ``Action`` itself stays unbound
    and reads the process-wide configuration on use.
    """

    configuration: Optional[Configuration] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.configuration is None:
            cls.configuration = cls.current_configuration()

    @classmethod
    def current_configuration(cls) -> Configuration:
        if cls.configuration is not None:
            return cls.configuration

        from . import controller

        return controller.configuration

    def call(self, params: Dict[str, Any]) -> List[Any]:
        raise NotImplementedError(f"{type(self).__name__} must implement call(params)")

    def __call__(self, params: Optional[Dict[str, Any]] = None) -> List[Any]:
        try:
            return self.call(params if params is not None else {})
        except Exception as e:
            configuration = self.current_configuration()
            if not configuration.handle_exceptions:
                raise
            code = configuration.exception_code(e)
            logger.error(f"{type(self).__name__} failed ({code}): {str(e)} ({type(e).__name__})", exc_info=True)
            return [code, {}, [status_phrase(code)]]

    @classmethod
    def format_for(cls, mime_type: str) -> Optional[str]:
        return cls.current_configuration().format_for(mime_type)
