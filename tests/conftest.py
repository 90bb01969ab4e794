import pytest
import simpy

from models.state import SimulationState
from simulation.engine import SimulationEngine


@pytest.fixture
def env():
    return simpy.Environment()


@pytest.fixture
def engine(env):
    return SimulationEngine(env, echo=False)


@pytest.fixture
def make_engine(env):
    """Builds an engine over a custom starting state."""
    def _make(**state_fields):
        return SimulationEngine(env, echo=False, state=SimulationState(**state_fields))
    return _make
