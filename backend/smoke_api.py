#!/usr/bin/env python3
"""
Manual smoke check for a running Travel Guardian API (python run_server.py)
"""

import json

import requests

# API base URL
BASE_URL = "http://localhost:8000"


def check_health():
    """Hit the health endpoint"""
    print("Checking health endpoint...")
    response = requests.get(f"{BASE_URL}/health", timeout=10)
    print(f"Status: {response.status_code}")
    print(f"Response: {response.json()}")
    print()


def check_prices():
    """Run one price check and print the report"""
    print("Checking trip prices...")

    trip_request = {
        "origin": "NYC",
        "destination": "LAX",
        "start_date": "2024-12-01",
        "end_date": "2024-12-04",
        "total_budget": 2000,
        "flight_budget": 600,
        "hotel_budget_per_night": 200,
        "car_budget_per_day": 60,
        "flight_preferences": {"stops": "direct", "preferred_airlines": ["Delta"]},
        "hotel_preferences": {"star_rating": 3, "amenities": ["wifi", "breakfast"]},
    }
    print(f"Request: {json.dumps(trip_request, indent=2)}")

    response = requests.post(f"{BASE_URL}/check-prices", json=trip_request, timeout=60)
    print(f"Status: {response.status_code}")
    if response.status_code != 200:
        print(f"Response: {response.text}")
        return None

    report = response.json()
    print(f"  Flight: ${report['flight']['price']} on {report['flight']['carrier']} ({report['flight']['source']})")
    print(f"  Hotel:  ${report['hotel']['price_per_night']}/night at {report['hotel']['name']} ({report['hotel']['source']})")
    print(f"  Car:    ${report['car']['price_per_day']}/day {report['car']['vehicle_type']} ({report['car']['source']})")
    print(f"  Total:  ${report['total_cost']} for {report['days']} days, within budget: {report['within_total_budget']}")
    print()
    return report["user_id"]


def check_history(user_id):
    print(f"Fetching price history for {user_id}...")
    response = requests.get(f"{BASE_URL}/price-history", params={"user_id": user_id, "limit": 5}, timeout=10)
    print(f"Status: {response.status_code}")
    print(f"Response: {json.dumps(response.json(), indent=2)[:1000]}")


if __name__ == "__main__":
    try:
        check_health()
        user_id = check_prices()
        if user_id:
            check_history(user_id)
    except requests.exceptions.ConnectionError:
        print("Could not connect to the API server")
        print("Make sure the server is running: python run_server.py")
