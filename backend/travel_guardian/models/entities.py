# travel_guardian/models/entities.py
from pydantic import BaseModel, Field
from typing import List, Literal, Optional

Category = Literal["flight", "hotel", "car"]
Source = Literal["search", "fallback"]


class SearchResult(BaseModel):
    title: str = ""
    url: str = ""
    snippet: str = ""


class SearchResponse(BaseModel):
    answer: Optional[str] = None
    results: List[SearchResult] = []

    def is_empty(self) -> bool:
        return not (self.answer or "").strip() and not self.results

    def text(self) -> str:
        """Answer followed by every snippet (or title when the snippet is empty)."""
        parts = [self.answer] if self.answer else []
        parts.extend(r.snippet or r.title for r in self.results)
        return " ".join(p for p in parts if p)

    def urls(self, limit: int = 3) -> List[str]:
        return [r.url for r in self.results if r.url][:limit]


class CategoryLookup(BaseModel):
    """Raw result of one category leg, before budgets are applied."""

    category: Category
    unit_price: int  # absolute for flights, per night for hotels, per day for cars
    label: str
    source: Source
    booking_urls: List[str] = Field(default_factory=list, max_length=3)
    search_excerpt: Optional[str] = None


class CategoryQuote(BaseModel):
    source: Source
    booking_urls: List[str] = []
    search_excerpt: Optional[str] = None
    within_budget: bool = False


class FlightQuote(CategoryQuote):
    price: int
    carrier: str


class HotelQuote(CategoryQuote):
    price_per_night: int
    name: str


class CarQuote(CategoryQuote):
    price_per_day: int
    vehicle_type: str


class PriceReport(BaseModel):
    flight: FlightQuote
    hotel: HotelQuote
    car: CarQuote
    days: int
    total_cost: int
    within_total_budget: bool
    timestamp: str  # ISO-8601, UTC


class PriceCheckOutcome(BaseModel):
    report: PriceReport
    user_id: str
    session_id: str
    persistence_enabled: bool = False
