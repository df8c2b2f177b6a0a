import pytest
from fastapi.testclient import TestClient #gives you a fake http client that can call your FastAPI routes without running a real server.

from app.core.config import get_settings
from app.main import app
from app.schemas.schedule import ScheduleBlock


@pytest.fixture() #test client
def client(): #fake http client
    with TestClient(app) as test_client:
        yield test_client



@pytest.fixture(autouse=True)
def reset_settings_cache():
    get_settings.cache_clear() #settings are cached, so env changes in one test would leak into the next
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_block():
    def _make(day="Monday", start="08:00", end="10:00", room="A-101"):
        return ScheduleBlock(day=day, startTime=start, endTime=end, room=room)

    return _make
