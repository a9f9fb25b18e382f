from datetime import date, datetime, timezone

import pytest

from travel_guardian.integrations.exceptions import UpstreamAPIError
from travel_guardian.models.entities import CategoryLookup, SearchResponse, SearchResult
from travel_guardian.models.trip_request import TripRequest
from travel_guardian.pipeline.budget import evaluate_budget


def category_of(query: str) -> str:
    if query.startswith("Find the cheapest flight prices"):
        return "flight"
    if query.startswith("Find the cheapest hotel rates"):
        return "hotel"
    if query.startswith("Find the cheapest car rental rates"):
        return "car"
    raise AssertionError(f"Unexpected query: {query[:60]}")


class StubGateway:
    """Search gateway double answering per category; unknown categories fail."""

    def __init__(self, responses=None):
        self.responses = responses or {}
        self.calls = []

    def search(self, query, include_domains, timeout=8.0):
        category = category_of(query)
        self.calls.append((category, query, list(include_domains)))
        outcome = self.responses.get(category, UpstreamAPIError("no results"))
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def trip_request():
    return TripRequest(
        origin="NYC",
        destination="LAX",
        start_date=date(2024, 12, 1),
        end_date=date(2024, 12, 4),
        total_budget=2000,
        flight_budget=600,
        hotel_budget_per_night=200,
        car_budget_per_day=60,
    )


@pytest.fixture
def flight_answer():
    return SearchResponse(
        answer="Flights from $312 on Delta via kayak.com, or $290 on Southwest",
        results=[
            SearchResult(title="Kayak NYC-LAX", url="https://www.kayak.com/flights/NYC-LAX/2024-12-01", snippet="Cheap flights NYC to LAX"),
            SearchResult(title="Expedia", url="https://www.expedia.com/Cheap-Flights-To-Los-Angeles.d178280.Travel-Guide-Flights", snippet=""),
            SearchResult(title="Delta", url="https://www.delta.com/", snippet="Book with Delta"),
            SearchResult(title="Skyscanner", url="https://www.skyscanner.com/routes/nyca/lax", snippet="From $305"),
        ],
    )


@pytest.fixture
def sample_report(trip_request):
    flight = CategoryLookup(category="flight", unit_price=450, label="Delta", source="search",
                            booking_urls=["https://www.kayak.com/flights/NYC-LAX"], search_excerpt="$450 on Delta")
    hotel = CategoryLookup(category="hotel", unit_price=180, label="Hilton", source="fallback",
                           booking_urls=["https://www.hilton.com/hotels/lax"])
    car = CategoryLookup(category="car", unit_price=45, label="Compact", source="fallback",
                         booking_urls=["https://www.avis.com/en/locations/us/lax"])
    return evaluate_budget(trip_request, flight, hotel, car,
                           now=datetime(2024, 11, 20, 12, 0, tzinfo=timezone.utc))
