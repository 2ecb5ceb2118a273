import pytest

from landscape_estimator.errors import InvalidArgumentError, UpstreamUnavailableError
from landscape_estimator.models.domain import Coordinate
from landscape_estimator.services.estimates import estimate_drive_time, suggest_branch
from landscape_estimator.services.maps import BranchMatch, GeocodeResult

from factories import PHX_SW, cluster, make_property

PROPERTY_ADDRESS = "2700 S 19th Ave, Phoenix, AZ"


class FakeMaps:
    def __init__(self, location=PHX_SW, hours=0.44, found=True):
        self.location = location
        self.hours = hours
        self.found = found

    def geocode(self, address):
        if not self.found:
            return None
        return GeocodeResult(location=self.location, formatted_address=f"{address}, USA")

    def drive_time_hours(self, origin, destination):
        return self.hours

    def closest_branch(self, origin, branches):
        return BranchMatch(branch=branches[2], distance_meters=1200.0, duration_hours=0.1)


def test_estimate_applies_route_density():
    requested = []

    def lookup(branch):
        requested.append(branch)
        return cluster(6)

    estimate = estimate_drive_time(PROPERTY_ADDRESS, "PHX-SW", maps=FakeMaps(hours=10.04), lookup=lookup)

    assert requested == [None]
    assert estimate.branch.code == "phx-sw"
    assert estimate.baseline_hours == 10.0
    assert estimate.adjusted_hours == 5.0
    assert estimate.proximity_applied is True
    assert estimate.proximity.description == "Good route density"


def test_estimate_uses_custom_radius():
    candidates = [make_property("A", 1.5), make_property("B", 1.8)]

    narrow = estimate_drive_time(PROPERTY_ADDRESS, "phx-sw", maps=FakeMaps(hours=2.0), lookup=lambda b: candidates)
    wide = estimate_drive_time(
        PROPERTY_ADDRESS, "phx-sw", maps=FakeMaps(hours=2.0), radius_miles=2, lookup=lambda b: candidates
    )

    assert narrow.proximity.count == 0
    assert narrow.adjusted_hours == 2.0
    assert wide.proximity.count == 2
    assert wide.adjusted_hours == 1.7


def test_estimate_falls_back_to_baseline_when_store_unavailable():
    def lookup(branch):
        raise UpstreamUnavailableError("database down")

    estimate = estimate_drive_time(PROPERTY_ADDRESS, "phx-sw", maps=FakeMaps(hours=1.26), lookup=lookup)

    assert estimate.baseline_hours == 1.3
    assert estimate.adjusted_hours == 1.3
    assert estimate.proximity_applied is False
    assert estimate.proximity is None


def test_estimate_skips_density_when_no_active_properties():
    estimate = estimate_drive_time(PROPERTY_ADDRESS, "phx-sw", maps=FakeMaps(), lookup=lambda b: ())

    assert estimate.proximity_applied is False
    assert estimate.adjusted_hours == estimate.baseline_hours == 0.4


def test_estimate_uses_isolated_tier_when_branch_has_no_properties():
    others = cluster(4, branch="phx-se")

    estimate = estimate_drive_time(PROPERTY_ADDRESS, "phx-sw", maps=FakeMaps(hours=0.96), lookup=lambda b: others)

    assert estimate.proximity_applied is True
    assert estimate.proximity.count == 0
    assert estimate.proximity.description == "Isolated property"
    assert estimate.adjusted_hours == estimate.baseline_hours == 1.0


def test_unknown_address_is_invalid():
    with pytest.raises(InvalidArgumentError, match="Could not find property address"):
        estimate_drive_time(PROPERTY_ADDRESS, "phx-sw", maps=FakeMaps(found=False), lookup=lambda b: ())


def test_unknown_branch_is_invalid():
    with pytest.raises(InvalidArgumentError):
        estimate_drive_time(PROPERTY_ADDRESS, "tucson", maps=FakeMaps(), lookup=lambda b: ())


def test_missing_route_is_upstream_failure():
    with pytest.raises(UpstreamUnavailableError):
        estimate_drive_time(PROPERTY_ADDRESS, "phx-sw", maps=FakeMaps(hours=None), lookup=lambda b: ())


def test_suggest_branch_returns_geocode_and_match():
    geocoded, match = suggest_branch("23000 N 23rd Ave, Phoenix, AZ", maps=FakeMaps(location=Coordinate(33.69, -112.1)))

    assert geocoded.location == Coordinate(33.69, -112.1)
    assert match.branch.code == "phx-n"
