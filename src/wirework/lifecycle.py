"""Post-configuration initialization and validation of built instances.

Components that need to do work once all their parameters are set (open a
client, compile a pattern) or that must reject incomplete configuration
implement :class:`Initializable`:

    class S3Fetcher:
        def initialize(self, params: dict[str, Any]) -> None:
            self._client = make_client(self._region)

        def check_initialization(self, problem_handler: InitializableProblemHandler) -> None:
            must_not_be_empty("bucket", self._bucket)
"""

import logging
from typing import Any, Optional, Protocol, runtime_checkable

from wirework.errors import LifecycleError

__all__ = [
    "Initializable",
    "InitializableProblemHandler",
    "run_lifecycle",
    "must_not_be_empty",
]

logger = logging.getLogger(__name__)


class InitializableProblemHandler:
    """Policy for reporting a problem found while checking initialization.

    Use one of the module-level policies: ``IGNORE``, ``INFO``, ``WARN`` or
    ``THROW``. ``DEFAULT`` is ``WARN``. Built instances are always checked with
    ``THROW``.
    """

    IGNORE: "InitializableProblemHandler"
    INFO: "InitializableProblemHandler"
    WARN: "InitializableProblemHandler"
    THROW: "InitializableProblemHandler"
    DEFAULT: "InitializableProblemHandler"

    def __init__(self, name: str, level: Optional[int] = None, raises: bool = False):
        self.name = name
        self._level = level
        self._raises = raises

    def handle_initializable_problem(self, class_name: str, message: str):
        """Report ``message`` about an instance of ``class_name`` according to this policy.

        Raises:
            LifecycleError: Under the ``THROW`` policy.
        """
        if self._raises:
            raise LifecycleError(f"{class_name}: {message}", class_name)
        if self._level is not None:
            logger.log(self._level, "%s: %s", class_name, message)

    def __repr__(self) -> str:
        return f"InitializableProblemHandler.{self.name}"


InitializableProblemHandler.IGNORE = InitializableProblemHandler("IGNORE")
InitializableProblemHandler.INFO = InitializableProblemHandler("INFO", logging.INFO)
InitializableProblemHandler.WARN = InitializableProblemHandler("WARN", logging.WARNING)
InitializableProblemHandler.THROW = InitializableProblemHandler("THROW", raises=True)
InitializableProblemHandler.DEFAULT = InitializableProblemHandler.WARN


@runtime_checkable
class Initializable(Protocol):
    """Capability of components that initialize and validate themselves after configuration."""

    def initialize(self, params: dict[str, Any]) -> None:
        ...

    def check_initialization(self, problem_handler: InitializableProblemHandler) -> None:
        ...


def run_lifecycle(instance: Any):
    """Initialize then validate ``instance`` if it is :class:`Initializable`.

    Other instances are left untouched.

    Raises:
        LifecycleError: If either step fails.
    """
    if not isinstance(instance, Initializable):
        return

    class_name = type(instance).__name__
    logger.debug("Initializing %s", class_name)
    try:
        instance.initialize({})
        instance.check_initialization(InitializableProblemHandler.THROW)
    except LifecycleError:
        raise
    except Exception as e:
        raise LifecycleError(f"problem initializing {class_name}: {e}", class_name) from e


def must_not_be_empty(name: str, value: Any):
    """Raise if a required setting is missing or blank.

    Raises:
        ValueError: If ``value`` is None or blank text.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"parameter '{name}' must be set in the config file")
