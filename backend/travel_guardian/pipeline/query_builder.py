from datetime import date
from typing import List, NamedTuple, Optional, Union

from travel_guardian.models.trip_request import (
    CarRentalPreferences,
    FlightPreferences,
    HotelPreferences,
)
from travel_guardian.pipeline.categories import CategoryProfile

AMENITY_LABELS = {
    "wifi": "free WiFi",
    "breakfast": "breakfast included",
    "gym": "fitness center",
    "pool": "swimming pool",
    "parking": "free parking",
}

CAR_FEATURE_LABELS = {
    "gps": "GPS navigation",
    "bluetooth": "Bluetooth",
    "backup-camera": "backup camera",
    "usb": "USB ports",
    "carplay": "Apple CarPlay",
}

Preferences = Union[FlightPreferences, HotelPreferences, CarRentalPreferences]


class SearchQuery(NamedTuple):
    text: str
    domains: List[str]


def flight_preference_clauses(prefs: Optional[FlightPreferences]) -> List[str]:
    if not prefs:
        return []
    parts = []
    if prefs.stops != "any":
        parts.append(f"{prefs.stops} flights only")
    if prefs.preferred_airlines:
        parts.append(f"Prefer airlines: {', '.join(prefs.preferred_airlines)}")
    if prefs.extra_legroom:
        parts.append("with extra legroom seats")
    if prefs.seat_preference != "any":
        parts.append(f"{prefs.seat_preference} seat")
    if prefs.time_of_day != "any":
        parts.append(f"{prefs.time_of_day} departure time")
    if prefs.baggage_count:
        parts.append(f"including {prefs.baggage_count} checked bag(s)")
    return parts


def hotel_preference_clauses(prefs: Optional[HotelPreferences]) -> List[str]:
    if not prefs:
        return []
    parts = []
    if prefs.star_rating:
        parts.append(f"{prefs.star_rating}-star rating or better")
    if prefs.room_type != "any":
        parts.append(f"{prefs.room_type} room")
    if prefs.amenities:
        amenities = ", ".join(AMENITY_LABELS.get(a, a) for a in prefs.amenities)
        parts.append(f"with {amenities}")
    if prefs.cancellation_policy != "any":
        parts.append(f"{prefs.cancellation_policy} cancellation policy")
    return parts


def car_preference_clauses(prefs: Optional[CarRentalPreferences]) -> List[str]:
    if not prefs:
        return []
    parts = []
    if prefs.vehicle_type != "any":
        parts.append(f"{prefs.vehicle_type} vehicle")
    if prefs.transmission != "any":
        parts.append(f"{prefs.transmission} transmission")
    if prefs.mileage:
        parts.append(f"{prefs.mileage} mileage")
    if prefs.features:
        features = ", ".join(CAR_FEATURE_LABELS.get(f, f) for f in prefs.features)
        parts.append(f"with {features}")
    return parts


def _base_query(category: str, origin: str, destination: str, travel_date: str) -> str:
    if category == "flight":
        return (
            f"Find the cheapest flight prices from {origin} to {destination} departing on {travel_date}.\n"
            "Search only travel booking sites (Kayak, Expedia, Google Flights, Skyscanner).\n"
            "Provide specific dollar amounts, airline names, and direct booking links."
        )
    if category == "hotel":
        return (
            f"Find the cheapest hotel rates per night in {destination} for check-in date {travel_date}.\n"
            "Search only hotel booking sites (Booking.com, Hotels.com, Expedia, Kayak, Trivago).\n"
            "Provide specific nightly rates (price per night), hotel names, star ratings, and direct booking URLs."
        )
    if category == "car":
        return (
            f"Find the cheapest car rental rates per day in {destination} for pickup date {travel_date}.\n"
            "Search only car rental booking sites (Enterprise, Hertz, Avis, Budget, Kayak, Expedia).\n"
            "Provide specific daily rates (price per day), rental company names, car types "
            "(economy, compact, etc.), and direct booking URLs."
        )
    raise ValueError(f"Unknown category: {category}")


FORMAT_HINTS = {
    "flight": 'Format: "$XXX on [Airline] via [booking site URL]"',
    "hotel": 'Format: "$XXX/night at [Hotel Name] ([X] stars) - [booking URL]"',
    "car": 'Format: "$XX/day for [Car Type] from [Company] - [booking URL]"',
}


def preference_clauses(category: str, prefs: Optional[Preferences]) -> List[str]:
    if category == "flight":
        return flight_preference_clauses(prefs)
    if category == "hotel":
        return hotel_preference_clauses(prefs)
    return car_preference_clauses(prefs)


def build_query(
    profile: CategoryProfile,
    origin: str,
    destination: str,
    travel_date: Union[date, str],
    prefs: Optional[Preferences] = None,
) -> SearchQuery:
    """
    Build the natural-language search query and domain allow-list for one
    category. Pure: identical inputs always give identical output.
    """
    when = travel_date.isoformat() if isinstance(travel_date, date) else str(travel_date)
    lines = [_base_query(profile.name, origin, destination, when)]

    clauses = preference_clauses(profile.name, prefs)
    if clauses:
        lines.append(f"Preferences: {', '.join(clauses)}.")

    lines.append(FORMAT_HINTS[profile.name])
    return SearchQuery(text="\n".join(lines), domains=list(profile.domains))
