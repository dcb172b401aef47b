from typing import Any

import pytest

from tests.components import PipelineConfig
from wirework.config_base import ConfigBase
from wirework.errors import CoercionError, LifecycleError
from wirework.lifecycle import InitializableProblemHandler

CONFIG = b"""
<properties>
  <pipeline>
    <params>
      <numClients>4</numClients>
    </params>
  </pipeline>
  <other>
    <params><numClients>99</numClients></params>
  </other>
  <pipeline>
    <params>
      <forked>true</forked>
    </params>
  </pipeline>
</properties>
"""


def test_configure_applies_every_matching_section():
    config = PipelineConfig()

    settings = config.configure("pipeline", CONFIG)

    assert config.num_clients == 4
    assert config.forked is True
    assert list(settings) == ["numClients", "forked"]


def test_configure_passes_settings_to_hook():
    config = PipelineConfig()

    settings = config.configure("pipeline", CONFIG)

    assert config.handled is settings


def test_configure_without_matching_section_applies_nothing():
    config = PipelineConfig()

    settings = config.configure("missing", CONFIG)

    assert len(settings) == 0
    assert config.num_clients == 1


def test_configure_reports_bad_values():
    with pytest.raises(CoercionError):
        PipelineConfig().configure("pipeline", CONFIG.replace(b">4<", b">four<"))


def test_default_hook_does_nothing():
    class Plain(ConfigBase):
        def set_name(self, name: str):
            self.name = name

    plain = Plain()

    assert plain.configure("plain", b"<properties><plain><params><name>x</name></params></plain></properties>").as_set() == {"name"}
    assert plain.name == "x"


def test_configure_runs_lifecycle():
    class Validated(ConfigBase):
        def __init__(self):
            self.path = None

        def set_path(self, path: str):
            self.path = path

        def initialize(self, params: dict[str, Any]) -> None:
            pass

        def check_initialization(self, problem_handler: InitializableProblemHandler) -> None:
            if not self.path:
                problem_handler.handle_initializable_problem("Validated", "path is required")

    with pytest.raises(LifecycleError, match="path is required"):
        Validated().configure("validated", b"<properties><validated><params><path/></params></validated></properties>")
