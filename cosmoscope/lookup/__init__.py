"""
Auxiliary lookups: debounce primitive, geocoding, routing, search bar.
"""

from cosmoscope.lookup.debounce import DebouncedLookup
from cosmoscope.lookup.geocoding import GeocodingClient
from cosmoscope.lookup.routing import RoutingClient
from cosmoscope.lookup.search_bar import MapSearchSuggester

__all__ = ["DebouncedLookup", "GeocodingClient", "RoutingClient", "MapSearchSuggester"]
