import pytest

from verticals.operations.service import OperationsDashboard

from fakes import FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def dashboard(clock):
    return OperationsDashboard(clock=clock, seed=False)
