import pytest

from landscape_estimator.config import settings


@pytest.fixture(autouse=True)
def fast_geocoding(monkeypatch):
    monkeypatch.setattr(settings, "geocode_delay_seconds", 0.0)
    monkeypatch.setattr(settings, "geocode_pause_seconds", 0.0)
    monkeypatch.setattr(settings, "maps_backoff_seconds", 0.0)
