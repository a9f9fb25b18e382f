"""MongoDB-backed price history.

Stores each trip configuration, the traveller's latest budget preferences and
every price report. Every write is a no-op when MONGODB_URI is not configured,
so local runs and CI never need a database.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pymongo import DESCENDING, MongoClient

from travel_guardian.config import Settings
from travel_guardian.models.entities import PriceReport
from travel_guardian.models.trip_request import TripRequest

logger = logging.getLogger(__name__)

TRIP_CONFIGS = "trip_configs"
USER_PREFERENCES = "user_preferences"
PRICE_REPORTS = "price_reports"


def _iso(timestamp_ms: int) -> str:
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc).isoformat()


class PriceHistoryStore:
    def __init__(self, client: Optional[MongoClient] = None, db_name: str = "travel_guardian"):
        self._client = client
        self.db_name = db_name

    @classmethod
    def from_settings(cls, settings: Settings) -> "PriceHistoryStore":
        if not settings.mongodb_uri:
            logger.warning("MONGODB_URI not set; price history disabled")
            return cls(client=None, db_name=settings.mongodb_db)
        client = MongoClient(settings.mongodb_uri, serverSelectionTimeoutMS=3000)
        return cls(client=client, db_name=settings.mongodb_db)

    @property
    def enabled(self) -> bool:
        return self._client is not None

    def _collection(self, name: str):
        return self._client[self.db_name][name]

    def save_trip_config(self, user_id: str, session_id: str, request: TripRequest, timestamp_ms: int) -> Optional[str]:
        """Insert the submitted trip. Returns the document key, or None when disabled."""
        if not self.enabled:
            return None
        key = f"trip-{user_id}-{timestamp_ms}"
        self._collection(TRIP_CONFIGS).insert_one({
            "key": key,
            **request.model_dump(mode="json"),
            "user_id": user_id,
            "session_id": session_id,
            "timestamp": _iso(timestamp_ms),
            "created_at": timestamp_ms,
        })
        return key

    def save_budget_preferences(self, user_id: str, request: TripRequest, timestamp_ms: int) -> Optional[str]:
        if not self.enabled:
            return None
        key = f"preferences-{user_id}"
        self._collection(USER_PREFERENCES).update_one(
            {"key": key},
            {"$set": {
                "key": key,
                "user_id": user_id,
                "total_budget": request.total_budget,
                "flight_budget": request.flight_budget,
                "hotel_budget_per_night": request.hotel_budget_per_night,
                "car_budget_per_day": request.car_budget_per_day,
                "last_updated": _iso(timestamp_ms),
            }},
            upsert=True,
        )
        return key

    def save_price_report(self, user_id: str, report: PriceReport, request: TripRequest, timestamp_ms: int) -> Optional[str]:
        if not self.enabled:
            return None
        key = f"price-{user_id}-{timestamp_ms}"
        self._collection(PRICE_REPORTS).insert_one({
            "key": key,
            "user_id": user_id,
            **report.model_dump(mode="json"),
            "trip_details": {
                "origin": request.origin,
                "destination": request.destination,
                "start_date": request.start_date.isoformat(),
                "end_date": request.end_date.isoformat(),
            },
            "created_at": timestamp_ms,
        })
        return key

    def list_price_history(self, user_id: str, limit: int = 20) -> List[Dict[str, Any]]:
        """Newest-first price reports saved for a user."""
        if not self.enabled:
            return []
        cursor = (
            self._collection(PRICE_REPORTS)
            .find({"user_id": user_id}, {"_id": 0})
            .sort("created_at", DESCENDING)
            .limit(max(1, limit))
        )
        return list(cursor)
