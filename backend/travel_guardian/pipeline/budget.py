import logging
from datetime import datetime, timezone
from typing import Optional

from travel_guardian.models.entities import (
    CarQuote,
    CategoryLookup,
    FlightQuote,
    HotelQuote,
    PriceReport,
)
from travel_guardian.models.trip_request import TripRequest
from travel_guardian.pipeline.utils import trip_days

logger = logging.getLogger(__name__)


def evaluate_budget(
    request: TripRequest,
    flight: CategoryLookup,
    hotel: CategoryLookup,
    car: CategoryLookup,
    now: Optional[datetime] = None,
) -> PriceReport:
    """
    Combine the three category lookups into a price report.

    Hotel and car prices are multiplied by the same number of days; every
    budget flag is a plain ``price <= budget`` comparison.
    """
    days = trip_days(request.start_date, request.end_date)

    total_cost = flight.unit_price + hotel.unit_price * days + car.unit_price * days

    flight_quote = FlightQuote(
        price=flight.unit_price,
        carrier=flight.label,
        source=flight.source,
        booking_urls=flight.booking_urls,
        search_excerpt=flight.search_excerpt,
        within_budget=flight.unit_price <= request.flight_budget,
    )
    hotel_quote = HotelQuote(
        price_per_night=hotel.unit_price,
        name=hotel.label,
        source=hotel.source,
        booking_urls=hotel.booking_urls,
        search_excerpt=hotel.search_excerpt,
        within_budget=hotel.unit_price <= request.hotel_budget_per_night,
    )
    car_quote = CarQuote(
        price_per_day=car.unit_price,
        vehicle_type=car.label,
        source=car.source,
        booking_urls=car.booking_urls,
        search_excerpt=car.search_excerpt,
        within_budget=car.unit_price <= request.car_budget_per_day,
    )

    within_total = total_cost <= request.total_budget
    logger.info(f"Total cost: ${total_cost} for {days} days (budget ${request.total_budget:g}, within={within_total})")
    logger.info(
        f"Flight ${flight_quote.price} ({flight_quote.within_budget}), "
        f"hotel ${hotel_quote.price_per_night}/night ({hotel_quote.within_budget}), "
        f"car ${car_quote.price_per_day}/day ({car_quote.within_budget})"
    )

    stamp = (now or datetime.now(timezone.utc)).isoformat()
    return PriceReport(
        flight=flight_quote,
        hotel=hotel_quote,
        car=car_quote,
        days=days,
        total_cost=total_cost,
        within_total_budget=within_total,
        timestamp=stamp,
    )
