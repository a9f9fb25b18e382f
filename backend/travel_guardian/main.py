
import json
from datetime import date
from travel_guardian.models.trip_request import TripRequest
from travel_guardian.models.entities import PriceReport
from travel_guardian.pipeline.price_check import build_pipeline


def _prune(d: dict, keys: list):
    return {k: d.get(k) for k in keys if d.get(k) is not None}


QUOTE_KEYS = ["source", "booking_urls", "search_excerpt", "within_budget"]


def format_report(report: PriceReport) -> dict:
    rd = report.model_dump(mode="json")
    return {
        "flight": _prune(rd["flight"], ["price", "carrier"] + QUOTE_KEYS),
        "hotel": _prune(rd["hotel"], ["price_per_night", "name"] + QUOTE_KEYS),
        "car": _prune(rd["car"], ["price_per_day", "vehicle_type"] + QUOTE_KEYS),
        "days": rd["days"],
        "total_cost": rd["total_cost"],
        "within_total_budget": rd["within_total_budget"],
        "timestamp": rd["timestamp"],
    }


if __name__ == "__main__":
    request = TripRequest(
        origin="NYC",
        destination="LAX",
        start_date=date(2024, 12, 1),
        end_date=date(2024, 12, 4),
        total_budget=2000,
        flight_budget=600,
        hotel_budget_per_night=200,
        car_budget_per_day=60,
    )
    pipeline = build_pipeline()
    report = pipeline.run(request)
    print(json.dumps(format_report(report), indent=2, default=str))
