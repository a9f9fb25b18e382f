"""
Price-check pipeline for Travel Guardian.

Query building, price/label extraction, per-category lookups and budget evaluation.
"""

from .price_check import PriceCheckPipeline, build_pipeline
from .utils import extract_entity, extract_price, find_prices, match_entity, trip_days

__all__ = [
    'PriceCheckPipeline',
    'build_pipeline',
    'extract_entity',
    'extract_price',
    'find_prices',
    'match_entity',
    'trip_days',
]
