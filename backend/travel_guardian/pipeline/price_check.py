"""
Price-check pipeline: flight, hotel and car lookups run concurrently, then
the budget evaluator turns them into one report.

Each leg gets its own random.Random derived from the pipeline's generator, so
a seeded pipeline is fully reproducible and legs share no mutable state.
"""

from __future__ import annotations

import asyncio
import logging
import random
import time
import uuid
from typing import Dict, Optional

from travel_guardian.config import Settings, get_settings
from travel_guardian.integrations.mongo_client import PriceHistoryStore
from travel_guardian.integrations.tavily_client import TavilySearchGateway
from travel_guardian.models.entities import PriceCheckOutcome, PriceReport
from travel_guardian.models.trip_request import TripRequest
from travel_guardian.pipeline.agents import SearchGateway, lookup_category
from travel_guardian.pipeline.budget import evaluate_budget
from travel_guardian.pipeline.categories import DEFAULT_PROFILES, CategoryProfile
from travel_guardian.pipeline.utils import trip_days

logger = logging.getLogger(__name__)


class PriceCheckPipeline:
    def __init__(
        self,
        gateway: SearchGateway,
        *,
        profiles: Optional[Dict[str, CategoryProfile]] = None,
        timeout: float = 8.0,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        store: Optional[PriceHistoryStore] = None,
    ):
        self.gateway = gateway
        self.profiles = profiles or DEFAULT_PROFILES
        self.timeout = timeout
        self._rng = rng or random.Random(seed)
        self.store = store

    @property
    def persistence_enabled(self) -> bool:
        return self.store is not None and self.store.enabled

    def _leg_rng(self) -> random.Random:
        return random.Random(self._rng.getrandbits(64))

    async def check_all_prices(self, request: TripRequest) -> PriceReport:
        """Run the three category lookups concurrently and evaluate budgets."""
        days = trip_days(request.start_date, request.end_date)
        logger.info(f"Checking prices for {days}-day trip from {request.origin} to {request.destination}")

        # seeds are drawn before the legs start so results don't depend on scheduling
        legs = [
            lookup_category(self.gateway, self.profiles[name], request, self._leg_rng(), self.timeout)
            for name in ("flight", "hotel", "car")
        ]
        flight, hotel, car = await asyncio.gather(*legs)
        return evaluate_budget(request, flight, hotel, car)

    async def check_prices(self, request: TripRequest, user_id: Optional[str] = None) -> PriceCheckOutcome:
        """
        One monitoring cycle: price the trip and, when a store is attached,
        record the trip, the budgets and the resulting report.

        Storage problems are logged and reported through
        ``persistence_enabled``; they never fail the price check.
        """
        user_id = user_id or str(uuid.uuid4())
        timestamp_ms = int(time.time() * 1000)
        session_id = f"session-{user_id}-{timestamp_ms}"

        persisted = self.persistence_enabled
        if persisted:
            try:
                await asyncio.to_thread(self.store.save_trip_config, user_id, session_id, request, timestamp_ms)
                await asyncio.to_thread(self.store.save_budget_preferences, user_id, request, timestamp_ms)
                logger.info(f"Saved trip config and budget preferences for user {user_id}")
            except Exception:
                logger.exception("Failed to save trip config; continuing without price history")
                persisted = False

        report = await self.check_all_prices(request)

        if persisted:
            try:
                await asyncio.to_thread(self.store.save_price_report, user_id, report, request, timestamp_ms)
                logger.info(f"Saved price report for user {user_id}")
            except Exception:
                logger.exception("Failed to save price report")

        return PriceCheckOutcome(
            report=report,
            user_id=user_id,
            session_id=session_id,
            persistence_enabled=persisted,
        )

    def run(self, request: TripRequest) -> PriceReport:
        """Synchronous wrapper around check_all_prices."""
        return asyncio.run(self.check_all_prices(request))


def build_pipeline(settings: Optional[Settings] = None) -> PriceCheckPipeline:
    settings = settings or get_settings()
    gateway = TavilySearchGateway(
        settings.tavily_api_key,
        max_results=settings.search_max_results,
    )
    return PriceCheckPipeline(
        gateway,
        timeout=settings.search_timeout_seconds,
        seed=settings.price_check_seed,
        store=PriceHistoryStore.from_settings(settings),
    )
