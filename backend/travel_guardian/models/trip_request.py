from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FlightPreferences(BaseModel):
    model_config = ConfigDict(frozen=True)

    stops: Literal["direct", "one-stop", "multi-stop", "any"] = "any"
    preferred_airlines: List[str] = []
    seat_preference: Literal["aisle", "window", "any"] = "any"
    extra_legroom: bool = False
    time_of_day: Literal["morning", "afternoon", "evening", "red-eye", "any"] = "any"
    baggage_count: Optional[int] = Field(default=None, ge=0)


class HotelPreferences(BaseModel):
    model_config = ConfigDict(frozen=True)

    star_rating: Optional[int] = Field(default=None, ge=1, le=5)
    room_type: Literal["single", "double", "suite", "any"] = "any"
    amenities: List[str] = []  # wifi, breakfast, gym, pool, parking
    cancellation_policy: Literal["flexible", "moderate", "strict", "any"] = "any"


class CarRentalPreferences(BaseModel):
    model_config = ConfigDict(frozen=True)

    vehicle_type: Literal[
        "economy", "compact", "midsize", "fullsize", "suv", "luxury", "any"
    ] = "any"
    transmission: Literal["automatic", "manual", "any"] = "any"
    mileage: Optional[Literal["unlimited", "limited"]] = None
    features: List[str] = []  # gps, bluetooth, backup-camera, usb, carplay


class TripRequest(BaseModel):
    """One monitoring cycle: where, when and how much the traveller wants to spend."""

    model_config = ConfigDict(frozen=True)

    origin: str = Field(min_length=1)
    destination: str = Field(min_length=1)
    start_date: date
    end_date: date
    total_budget: float = Field(gt=0)
    flight_budget: float = Field(gt=0)
    hotel_budget_per_night: float = Field(gt=0)
    car_budget_per_day: float = Field(gt=0)

    flight_preferences: Optional[FlightPreferences] = None
    hotel_preferences: Optional[HotelPreferences] = None
    car_rental_preferences: Optional[CarRentalPreferences] = None

    @model_validator(mode="after")
    def _check_dates(self) -> "TripRequest":
        # same-day and inverted ranges are rejected rather than clamped
        if self.end_date <= self.start_date:
            raise ValueError("End date must be after start date")
        return self
