"""
Engine configuration.

Centralizes every tunable (endpoints, timeouts, debounce policy, map
defaults) so behavior can be adjusted without touching the wiring.
"""

import os
from dataclasses import dataclass, field, replace
from typing import Optional

from dotenv import load_dotenv

from cosmoscope.shared.schemas import Location


# Rome, used whenever the device position cannot be resolved
DEFAULT_LOCATION = Location(lat=41.9028, lng=12.4964)
WORLD_ZOOM = 5
CITY_ZOOM = 12
LANGUAGE_PREFERENCE_KEY = "cosmoscope-lang"


@dataclass
class AppConfig:
    """
    Configuration for an explorer session.

    Attributes:
        model: Chat model used for conversational answers
        search_model: Model used for grounded Earth answers
        api_key_env: Environment variable holding the OpenAI key
        max_retries: Attempts per AI call, applied by OpenAIAssistant
        geolocation_timeout: Seconds before the bootstrap gives up
        debounce_delay: Quiet period in seconds before a lookup fires
        min_query_length: Shortest input that triggers a lookup
    """

    # LLM configuration
    model: str = "gpt-4.1-mini"
    search_model: str = "gpt-4o-mini-search-preview"
    api_key_env: str = "OPENAI_API_KEY"

    # Retry policy OpenAIAssistant applies to its tenacity-wrapped calls
    max_retries: int = 3
    retry_min_wait: int = 2  # seconds
    retry_max_wait: int = 10  # seconds

    # Third-party HTTP services
    nominatim_url: str = "https://nominatim.openstreetmap.org"
    osrm_url: str = "https://router.project-osrm.org"
    nasa_api_url: str = "https://api.nasa.gov/mars-photos/api/v1/rovers/curiosity/photos"
    nasa_api_key: str = "DEMO_KEY"
    user_agent: str = "cosmoscope/0.1"
    http_timeout: float = 10.0  # seconds

    # Lookup policy
    debounce_delay: float = 0.4  # seconds
    min_query_length: int = 3
    search_result_limit: int = 5
    suggestion_count: int = 3
    suggestion_history: int = 4

    # Map bootstrap
    geolocation_timeout: float = 10.0  # seconds
    default_location: Location = field(default_factory=lambda: DEFAULT_LOCATION)
    world_zoom: int = WORLD_ZOOM
    city_zoom: int = CITY_ZOOM

    # Mars imagery
    default_sol: int = 3000


# Default configuration instance
DEFAULT_CONFIG = AppConfig()


def get_config(
    model: Optional[str] = None,
    debounce_delay: Optional[float] = None,
    geolocation_timeout: Optional[float] = None,
    min_query_length: Optional[int] = None,
) -> AppConfig:
    """
    Create a configuration with optional overrides.

    Args:
        model: Override for the chat model
        debounce_delay: Override for the lookup quiet period
        geolocation_timeout: Override for the bootstrap timeout
        min_query_length: Override for the lookup length gate

    Returns:
        AppConfig with specified overrides applied
    """
    return replace(
        DEFAULT_CONFIG,
        model=model or DEFAULT_CONFIG.model,
        debounce_delay=debounce_delay
        if debounce_delay is not None
        else DEFAULT_CONFIG.debounce_delay,
        geolocation_timeout=geolocation_timeout
        if geolocation_timeout is not None
        else DEFAULT_CONFIG.geolocation_timeout,
        min_query_length=min_query_length
        if min_query_length is not None
        else DEFAULT_CONFIG.min_query_length,
    )


def load_config() -> AppConfig:
    """Build a configuration from environment variables (and a .env file)."""
    load_dotenv()
    return replace(
        DEFAULT_CONFIG,
        model=os.environ.get("COSMOSCOPE_MODEL", DEFAULT_CONFIG.model),
        search_model=os.environ.get(
            "COSMOSCOPE_SEARCH_MODEL", DEFAULT_CONFIG.search_model
        ),
        nominatim_url=os.environ.get("NOMINATIM_URL", DEFAULT_CONFIG.nominatim_url),
        osrm_url=os.environ.get("OSRM_URL", DEFAULT_CONFIG.osrm_url),
        nasa_api_key=os.environ.get("NASA_API_KEY", DEFAULT_CONFIG.nasa_api_key),
    )
