"""
Pytest configuration and shared fixtures.
"""

import pytest
from nal_engine import (
    ExperienceBase,
    InferenceEngine,
    Session,
    set_config,
)


@pytest.fixture(autouse=True)
def reset_config():
    """Give every test a fresh global configuration."""
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def empty_base():
    """Create an empty experience base."""
    return ExperienceBase(name="TestBase")


@pytest.fixture
def animal_base():
    """Create the animal taxonomy base."""
    return ExperienceBase.from_statements(
        [
            "robin is bird",
            "bird is animal",
            "penguin is bird",
            "chicken is bird",
            "human is animal",
            "saul is human",
        ],
        name="AnimalBase",
    )


@pytest.fixture
def chain_base():
    """Create a base holding a -> b and b -> c."""
    return ExperienceBase.from_statements(["a is b", "b is c"], name="ChainBase")


@pytest.fixture
def engine(chain_base):
    """Create an inference engine over the chain base."""
    return InferenceEngine(chain_base)


@pytest.fixture
def session():
    """Create a session with an empty base."""
    return Session()


# Markers
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Fast unit tests"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that drive whole sessions or scripts"
    )
    config.addinivalue_line(
        "markers", "slow: Slow tests"
    )
