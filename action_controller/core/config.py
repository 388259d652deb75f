import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from .configuration import Configuration
from .validation import validate_format, validate_mime_type


load_dotenv()

logger = logging.getLogger(__name__)

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


def _env(name: str, default: str = ""):
    return field(default_factory=lambda: os.getenv(name, default))


@dataclass(frozen=True)
class Settings:
    """Action settings loaded from environment variables.

    Values are read when the instance is created, so tests can patch the
    environment and build a fresh ``Settings()``.
    """

    ENVIRONMENT: str = _env("ENVIRONMENT", "production")
    HANDLE_EXCEPTIONS: str = _env("ACTION_HANDLE_EXCEPTIONS")
    FORMATS: str = _env("ACTION_FORMATS")

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    def handle_exceptions(self) -> Optional[bool]:
        value = self.HANDLE_EXCEPTIONS.strip().lower()
        if not value:
            return None
        if value in TRUE_VALUES:
            return True
        if value in FALSE_VALUES:
            return False
        raise ValueError(f"ACTION_HANDLE_EXCEPTIONS must be a boolean, got '{self.HANDLE_EXCEPTIONS}'")

    def formats(self) -> List[Tuple[str, str]]:
        """Parse ``name=mime/type`` pairs separated by commas.

        A name may appear more than once to map several MIME types to it.
        """
        formats: List[Tuple[str, str]] = []
        for entry in [e.strip() for e in self.FORMATS.split(",") if e.strip()]:
            name, sep, mime_type = entry.partition("=")
            if not sep:
                raise ValueError(f"ACTION_FORMATS entry '{entry}' must look like name=mime/type")
            name, mime_type = name.strip(), mime_type.strip()
            validate_format(name)
            validate_mime_type(mime_type)
            formats.append((name, mime_type))
        return formats

    def validate(self) -> None:
        self.handle_exceptions()
        self.formats()


def apply_settings(configuration: Configuration, settings: Optional[Settings] = None) -> Configuration:
    settings = settings or Settings()
    settings.validate()
    configuration.configure(
        handle_exceptions=settings.handle_exceptions(),
        formats=settings.formats(),
    )
    logger.debug(f"Applied {settings.ENVIRONMENT} settings to configuration")
    return configuration
