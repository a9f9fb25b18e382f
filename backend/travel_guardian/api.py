
import asyncio
import logging
from datetime import date
from typing import Optional

from fastapi import FastAPI, Header, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from travel_guardian.main import format_report
from travel_guardian.models.trip_request import (
    CarRentalPreferences,
    FlightPreferences,
    HotelPreferences,
    TripRequest,
)
from travel_guardian.pipeline.price_check import build_pipeline

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Travel Guardian API",
    description="Trip price monitoring against flight, hotel and car rental budgets",
    version="1.0.0",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure this properly for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["x-user-id"],
)

# Shared pipeline (Tavily gateway + optional Mongo price history)
pipeline = build_pipeline()


class PriceCheckRequest(BaseModel):
    origin: str
    destination: str
    start_date: str  # ISO date string (YYYY-MM-DD)
    end_date: str    # ISO date string (YYYY-MM-DD)
    total_budget: float
    flight_budget: float
    hotel_budget_per_night: float
    car_budget_per_day: float
    flight_preferences: Optional[FlightPreferences] = None
    hotel_preferences: Optional[HotelPreferences] = None
    car_rental_preferences: Optional[CarRentalPreferences] = None


def _validation_detail(e: ValidationError) -> str:
    messages = []
    for err in e.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        messages.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(messages)


def to_trip_request(request: PriceCheckRequest) -> TripRequest:
    """Parse and validate the API payload; raises HTTPException(400) on bad input."""
    if not request.origin.strip() or not request.destination.strip():
        raise HTTPException(status_code=400, detail="Missing required trip details")
    try:
        start_date = date.fromisoformat(request.start_date)
        end_date = date.fromisoformat(request.end_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid date format: {e}")

    try:
        return TripRequest(
            origin=request.origin.strip(),
            destination=request.destination.strip(),
            start_date=start_date,
            end_date=end_date,
            total_budget=request.total_budget,
            flight_budget=request.flight_budget,
            hotel_budget_per_night=request.hotel_budget_per_night,
            car_budget_per_day=request.car_budget_per_day,
            flight_preferences=request.flight_preferences,
            hotel_preferences=request.hotel_preferences,
            car_rental_preferences=request.car_rental_preferences,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=_validation_detail(e))


@app.get("/")
def root():
    return {
        "message": "Travel Guardian API",
        "version": "1.0.0",
        "endpoints": {
            "health": "/health",
            "check_prices": "/check-prices",
            "price_history": "/price-history",
            "docs": "/docs",
        },
    }


@app.get("/health")
def health():
    return {
        "status": "healthy",
        "service": "Travel Guardian",
        "persistence_enabled": pipeline.persistence_enabled,
    }


@app.post("/check-prices")
async def check_prices(request: PriceCheckRequest, x_user_id: Optional[str] = Header(default=None)):
    """
    Check current flight, hotel and car rental prices for a trip and compare
    them with the traveller's budgets.

    - **origin** / **destination**: airport code or city name
    - **start_date** / **end_date**: YYYY-MM-DD, end after start
    - **total_budget**, **flight_budget**, **hotel_budget_per_night**, **car_budget_per_day**: positive amounts
    - **x-user-id** header: reuse an existing user id (one is generated otherwise)
    """
    trip = to_trip_request(request)

    try:
        outcome = await pipeline.check_prices(trip, user_id=x_user_id)
    except Exception as e:
        logger.exception("Error checking prices")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to check prices", "details": str(e)},
        )

    logger.info(
        f"Price check for {trip.origin} -> {trip.destination}: "
        f"${outcome.report.total_cost} (within budget: {outcome.report.within_total_budget})"
    )
    content = {
        **format_report(outcome.report),
        "user_id": outcome.user_id,
        "session_id": outcome.session_id,
        "persistence_enabled": outcome.persistence_enabled,
    }
    return JSONResponse(content=content, headers={"x-user-id": outcome.user_id})


@app.get("/price-history")
async def price_history(user_id: str = Query(..., min_length=1), limit: int = Query(20, ge=1, le=100)):
    """Saved price reports for a user, newest first."""
    store = pipeline.store
    if store is None or not store.enabled:
        return {
            "success": False,
            "user_id": user_id,
            "count": 0,
            "history": [],
            "error": "Price history is not configured",
        }

    try:
        history = await asyncio.to_thread(store.list_price_history, user_id, limit)
    except Exception as e:
        logger.exception(f"Failed to fetch price history for user {user_id}")
        # empty history rather than an error status
        return {
            "success": False,
            "user_id": user_id,
            "count": 0,
            "history": [],
            "error": str(e),
        }

    logger.info(f"Retrieved {len(history)} price snapshots for user {user_id}")
    return {"success": True, "user_id": user_id, "count": len(history), "history": history}
