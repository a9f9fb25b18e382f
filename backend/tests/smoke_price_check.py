"""Minimal smoke run of the live price-check pipeline.

Run locally: `python backend/tests/smoke_price_check.py`
"""

from datetime import date

from travel_guardian.main import format_report
from travel_guardian.models.trip_request import TripRequest
from travel_guardian.pipeline.price_check import build_pipeline


def main():
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
    report = build_pipeline().run(request)
    out = format_report(report)
    print("Flight:", out["flight"].get("price"), out["flight"].get("source"))
    print("Hotel:", out["hotel"].get("price_per_night"), out["hotel"].get("source"))
    print("Car:", out["car"].get("price_per_day"), out["car"].get("source"))
    print("Total:", out["total_cost"], "within budget:", out["within_total_budget"])


if __name__ == "__main__":
    main()
