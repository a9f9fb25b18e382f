"""
Per-category lookup configuration: booking domains, plausible price bands,
label vocabularies and the booking URL templates used by simulated quotes.
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict

from travel_guardian.models.entities import Category


class CategoryProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Category
    search_type: str
    domains: List[str]
    price_low: int
    price_high: int
    jitter: int
    vocabulary: List[str]
    fallback_vocabulary: List[str]
    url_templates: List[str]


FLIGHT_PROFILE = CategoryProfile(
    name="flight",
    search_type="flights",
    domains=[
        "expedia.com", "kayak.com", "skyscanner.com", "google.com/flights",
        "united.com", "delta.com", "american.com", "southwest.com",
        "jetblue.com", "alaskaair.com", "spirit.com", "frontier.com",
        "priceline.com", "orbitz.com", "cheapoair.com", "momondo.com",
        "hipmunk.com", "booking.com/flights",
    ],
    price_low=400,
    price_high=900,
    jitter=100,
    vocabulary=["United", "Delta", "American", "Southwest", "JetBlue", "Alaska", "Spirit", "Frontier"],
    fallback_vocabulary=["United", "Delta", "American", "Southwest", "JetBlue"],
    url_templates=[
        "https://www.{label}.com/flights/{origin}-{destination}",
        "https://www.expedia.com/flights/{origin}-{destination}",
        "https://www.kayak.com/flights/{origin}-{destination}",
    ],
)

HOTEL_PROFILE = CategoryProfile(
    name="hotel",
    search_type="hotels",
    domains=[
        "booking.com", "expedia.com", "hotels.com", "priceline.com",
        "orbitz.com", "kayak.com", "trivago.com", "agoda.com",
        "marriott.com", "hilton.com", "ihg.com", "hyatt.com",
        "accor.com", "choicehotels.com", "wyndhamhotels.com", "bestwestern.com",
        "sheraton.com", "westin.com", "ritzcarlton.com", "fourseasons.com",
    ],
    price_low=80,
    price_high=280,
    jitter=40,
    vocabulary=[
        "Marriott", "Hilton", "Hyatt", "Holiday Inn", "Best Western",
        "Sheraton", "DoubleTree", "Courtyard", "Hampton Inn", "Fairfield Inn",
    ],
    fallback_vocabulary=["Marriott", "Hilton", "Hyatt", "Holiday Inn", "Best Western", "Sheraton"],
    url_templates=[
        "https://www.{label}.com/hotels/{destination}",
        "https://www.booking.com/searchresults.html?ss={destination}",
        "https://www.hotels.com/search.do?destination={destination}",
    ],
)

CAR_PROFILE = CategoryProfile(
    name="car",
    search_type="cars",
    domains=[
        "enterprise.com", "hertz.com", "avis.com", "budget.com",
        "nationalcar.com", "alamo.com", "thrifty.com", "dollar.com",
        "expedia.com", "kayak.com", "priceline.com", "orbitz.com",
        "rentalcars.com", "autoeurope.com", "carrentals.com", "hotwire.com",
        "costcotravel.com", "aaa.com",
    ],
    price_low=30,
    price_high=100,
    jitter=20,
    vocabulary=["Economy", "Compact", "Mid-size", "Midsize", "Full-size", "SUV", "Standard", "Intermediate"],
    fallback_vocabulary=["Economy", "Compact", "Mid-size", "Full-size", "SUV"],
    url_templates=[
        "https://www.enterprise.com/en/car-rental/locations/us/{destination}.html",
        "https://www.hertz.com/rentacar/location/us/{destination}",
        "https://www.avis.com/en/locations/us/{destination}",
    ],
)

DEFAULT_PROFILES: Dict[str, CategoryProfile] = {
    p.name: p for p in (FLIGHT_PROFILE, HOTEL_PROFILE, CAR_PROFILE)
}
