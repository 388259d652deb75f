import pytest

from action_controller import controller
from action_controller.core.configuration import Configuration


@pytest.fixture(autouse=True)
def reset_controller():
    controller.reset()
    yield
    controller.reset()


@pytest.fixture
def configuration():
    return Configuration()
