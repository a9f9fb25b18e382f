from travel_guardian.main import format_report


def test_format_report_prunes_empty_fields(sample_report):
    out = format_report(sample_report)

    assert out["flight"] == {
        "price": 450,
        "carrier": "Delta",
        "source": "search",
        "booking_urls": ["https://www.kayak.com/flights/NYC-LAX"],
        "search_excerpt": "$450 on Delta",
        "within_budget": True,
    }
    assert "search_excerpt" not in out["hotel"]
    assert out["car"]["vehicle_type"] == "Compact"
    assert out["days"] == 3
    assert out["total_cost"] == 450 + 180 * 3 + 45 * 3
    assert out["within_total_budget"] is True
    assert out["timestamp"] == "2024-11-20T12:00:00+00:00"
