import asyncio
import logging
import random
from typing import List, Optional, Protocol
from urllib.parse import quote

from travel_guardian.integrations.exceptions import IntegrationError, UpstreamAPIError
from travel_guardian.models.entities import CategoryLookup, SearchResponse
from travel_guardian.models.trip_request import TripRequest
from travel_guardian.pipeline.categories import CategoryProfile
from travel_guardian.pipeline.query_builder import Preferences, build_query
from travel_guardian.pipeline.utils import (
    extract_entity,
    extract_price,
    find_prices,
    round_half_up,
    truncate,
)

logger = logging.getLogger(__name__)


class SearchGateway(Protocol):
    def search(self, query: str, include_domains: List[str], timeout: float = ...) -> SearchResponse:
        ...


def preferences_for(category: str, request: TripRequest) -> Optional[Preferences]:
    if category == "flight":
        return request.flight_preferences
    if category == "hotel":
        return request.hotel_preferences
    return request.car_rental_preferences


def synthetic_booking_urls(profile: CategoryProfile, request: TripRequest, label: str) -> List[str]:
    """Fill the profile's URL templates for a simulated quote."""
    values = {
        "origin": quote(request.origin.lower(), safe=""),
        "destination": quote(request.destination.lower(), safe=""),
        "label": quote(label.lower().replace(" ", ""), safe=""),
    }
    return [t.format(**values) for t in profile.url_templates][:3]


def simulate_category(profile: CategoryProfile, request: TripRequest, rng: random.Random) -> CategoryLookup:
    """Plausible random quote used whenever live search gives nothing usable."""
    base = profile.price_low + rng.random() * (profile.price_high - profile.price_low)
    variance = rng.uniform(-profile.jitter, profile.jitter)
    label = rng.choice(profile.fallback_vocabulary)
    return CategoryLookup(
        category=profile.name,
        unit_price=round_half_up(base + variance),
        label=label,
        source="fallback",
        booking_urls=synthetic_booking_urls(profile, request, label),
    )


def parse_search_response(
    profile: CategoryProfile, response: SearchResponse, rng: random.Random
) -> CategoryLookup:
    text = response.text()
    found = find_prices(text, profile.price_low, profile.price_high)
    price = extract_price(text, profile.price_low, profile.price_high, rng)
    if not found:
        logger.warning(f"No in-band {profile.search_type} price in search text; using simulated price ${price}")

    return CategoryLookup(
        category=profile.name,
        unit_price=price,
        label=extract_entity(text, profile.vocabulary, rng),
        source="search" if found else "fallback",
        booking_urls=response.urls(limit=3),
        search_excerpt=truncate(text, 300),
    )


async def lookup_category(
    gateway: SearchGateway,
    profile: CategoryProfile,
    request: TripRequest,
    rng: random.Random,
    timeout: float = 8.0,
) -> CategoryLookup:
    """
    Price one category. Never raises for gateway problems: errors, empty
    responses and timeouts all turn into a simulated quote.
    """
    query = build_query(
        profile,
        request.origin,
        request.destination,
        request.start_date,
        preferences_for(profile.name, request),
    )
    logger.info(f"Searching {profile.search_type}: {query.text[:80]}... ({len(query.domains)} domains)")

    try:
        response = await asyncio.wait_for(
            asyncio.to_thread(gateway.search, query.text, query.domains, timeout),
            timeout=timeout,
        )
    except (IntegrationError, UpstreamAPIError) as e:
        logger.warning(f"Using fallback {profile.search_type} pricing: {e}")
        return simulate_category(profile, request, rng)
    except asyncio.TimeoutError:
        logger.warning(f"Using fallback {profile.search_type} pricing: search timed out after {timeout}s")
        return simulate_category(profile, request, rng)
    except Exception:
        logger.exception(f"Unexpected {profile.search_type} search failure; using fallback pricing")
        return simulate_category(profile, request, rng)

    if response is None or response.is_empty():
        logger.warning(f"Using fallback {profile.search_type} pricing: empty search response")
        return simulate_category(profile, request, rng)

    lookup = parse_search_response(profile, response, rng)
    logger.info(f"{profile.search_type}: ${lookup.unit_price} ({lookup.label}, source={lookup.source})")
    return lookup
