import pytest
from fastapi.testclient import TestClient

from tourroute.main import create_app
from tourroute.models.schemas import Waypoint


@pytest.fixture
def square():
    """Four corners of a 1x1 degree cell around Vladimir oblast."""
    return {
        "A": Waypoint(id="A", latitude=55.0, longitude=41.0, title="A"),
        "B": Waypoint(id="B", latitude=55.0, longitude=42.0, title="B"),
        "C": Waypoint(id="C", latitude=56.0, longitude=41.0, title="C"),
        "D": Waypoint(id="D", latitude=56.0, longitude=42.0, title="D"),
    }


@pytest.fixture
def client():
    return TestClient(create_app())
