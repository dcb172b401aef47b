import logging
from typing import Any

import pytest

from tests.components import FileSystemFetcher, RejectingFetcher, S3Fetcher
from wirework.errors import LifecycleError
from wirework.lifecycle import (
    Initializable,
    InitializableProblemHandler,
    must_not_be_empty,
    run_lifecycle,
)


def configured_s3_fetcher() -> S3Fetcher:
    fetcher = S3Fetcher()
    fetcher.set_bucket("docs")
    fetcher.set_region("eu-west-1")
    fetcher.set_profile("default")
    return fetcher


def test_initializes_with_empty_params_then_checks_with_throw_policy():
    fetcher = configured_s3_fetcher()

    run_lifecycle(fetcher)

    assert fetcher.initialized_with == {}
    assert fetcher.problem_handler is InitializableProblemHandler.THROW


def test_instance_without_capability_is_left_untouched():
    fetcher = FileSystemFetcher()

    run_lifecycle(fetcher)

    assert not isinstance(fetcher, Initializable)


def test_failed_check_is_a_lifecycle_error():
    fetcher = configured_s3_fetcher()
    fetcher.set_profile("")

    with pytest.raises(LifecycleError, match="parameter 'profile' must be set") as e:
        run_lifecycle(fetcher)

    assert e.value.identifier == "S3Fetcher"
    assert isinstance(e.value.__cause__, ValueError)


def test_failed_initialize_is_a_lifecycle_error():
    class Unreachable:
        def initialize(self, params: dict[str, Any]) -> None:
            raise ConnectionError("no route to host")

        def check_initialization(self, problem_handler: InitializableProblemHandler) -> None:
            pytest.fail("check must not run after a failed initialize")

    with pytest.raises(LifecycleError, match="no route to host"):
        run_lifecycle(Unreachable())


def test_problem_reported_through_throw_policy_propagates_unchanged():
    with pytest.raises(LifecycleError, match="RejectingFetcher: always rejected"):
        run_lifecycle(RejectingFetcher())


def test_ignore_policy_does_nothing(caplog):
    with caplog.at_level(logging.DEBUG, logger="wirework.lifecycle"):
        InitializableProblemHandler.IGNORE.handle_initializable_problem("Thing", "odd")

    assert caplog.records == []


@pytest.mark.parametrize(
    "handler,level",
    [
        (InitializableProblemHandler.INFO, logging.INFO),
        (InitializableProblemHandler.WARN, logging.WARNING),
        (InitializableProblemHandler.DEFAULT, logging.WARNING),
    ],
)
def test_logging_policies(caplog, handler, level):
    with caplog.at_level(logging.DEBUG, logger="wirework.lifecycle"):
        handler.handle_initializable_problem("Thing", "odd")

    assert [(r.levelno, r.getMessage()) for r in caplog.records] == [(level, "Thing: odd")]


@pytest.mark.parametrize("value", [None, "", "   "])
def test_must_not_be_empty_rejects_missing_values(value):
    with pytest.raises(ValueError, match="'bucket'"):
        must_not_be_empty("bucket", value)


def test_must_not_be_empty_accepts_values():
    must_not_be_empty("bucket", "docs")
    must_not_be_empty("count", 0)
