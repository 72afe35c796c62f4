"""Resolve coordinates to lower-case ISO 3166-1 alpha-2 country codes.

Resolvers expose ``resolve(latitude, longitude) -> str`` and raise
:class:`~countrydistance.errors.ResolutionError` on any failure; callers decide
whether that is fatal.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

from geopy.exc import GeopyError
from geopy.extra.rate_limiter import RateLimiter
from geopy.geocoders import Nominatim

from .constants import (
    COUNTRY_ZOOM,
    DEFAULT_CACHE_PRECISION,
    DEFAULT_MIN_DELAY_SECONDS,
    DEFAULT_TIMEOUT,
    NOMINATIM_USER_AGENT,
)
from .errors import CountryDistanceError, ResolutionError
from .models import RunConfig


class CountryResolver(Protocol):
    def resolve(self, latitude: float, longitude: float) -> str:
        ...


def country_code_from_address(raw: Any) -> str:
    if not isinstance(raw, dict) or not isinstance(raw.get("address"), dict):
        raise ResolutionError("malformed response: no address in reverse geocoding result")
    code = raw["address"].get("country_code")
    if not isinstance(code, str) or not code.strip():
        raise ResolutionError("no country_code in reverse geocoding result")
    return code.strip().lower()


class NominatimResolver:
    """One Nominatim ``reverse`` call per lookup at country zoom, no retries."""

    def __init__(
        self,
        geolocator: Optional[Any] = None,
        *,
        user_agent: str = NOMINATIM_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
        min_delay_seconds: float = DEFAULT_MIN_DELAY_SECONDS,
    ) -> None:
        self.timeout = timeout
        self.geolocator = geolocator or Nominatim(user_agent=user_agent, timeout=timeout)
        self._reverse: Callable[..., Any] = RateLimiter(
            self.geolocator.reverse,
            min_delay_seconds=min_delay_seconds,
            max_retries=0,
            swallow_exceptions=False,
        )

    def resolve(self, latitude: float, longitude: float) -> str:
        try:
            location = self._reverse(
                (latitude, longitude),
                exactly_one=True,
                addressdetails=True,
                zoom=COUNTRY_ZOOM,
                timeout=self.timeout,
            )
        except (GeopyError, ValueError) as exc:
            raise ResolutionError(f"reverse geocoding request failed: {exc}") from exc
        if location is None:
            raise ResolutionError("malformed response: empty reverse geocoding result")
        return country_code_from_address(getattr(location, "raw", None))


class OfflineResolver:
    """Nearest-populated-place lookup through the optional ``reverse_geocoder`` package."""

    def __init__(self) -> None:
        try:
            import reverse_geocoder  # type: ignore
        except ImportError as exc:
            raise CountryDistanceError(
                "Offline resolution needs the optional dependency 'reverse_geocoder' "
                "(pip install 'countrydistance[offline]')."
            ) from exc
        self._search = reverse_geocoder.search
        self._lock = threading.Lock()

    def resolve(self, latitude: float, longitude: float) -> str:
        with self._lock:
            lookup = self._search([(latitude, longitude)], mode=1, verbose=False)
        if not lookup:
            raise ResolutionError("offline lookup returned no place")
        code = lookup[0].get("cc", "").strip()
        if not code:
            raise ResolutionError("offline lookup returned no country code")
        return code.lower()


class CachingResolver:
    """Memoise successful lookups on a grid of ``precision`` decimal places."""

    def __init__(self, resolver: CountryResolver, precision: int = DEFAULT_CACHE_PRECISION) -> None:
        self.resolver = resolver
        self.precision = precision
        self.cache: Dict[Tuple[float, float], str] = {}
        self._lock = threading.Lock()

    def key(self, latitude: float, longitude: float) -> Tuple[float, float]:
        return (round(latitude, self.precision), round(longitude, self.precision))

    def resolve(self, latitude: float, longitude: float) -> str:
        key = self.key(latitude, longitude)
        with self._lock:
            cached = self.cache.get(key)
        if cached is not None:
            return cached
        code = self.resolver.resolve(latitude, longitude)
        with self._lock:
            self.cache[key] = code
        return code


def build_resolver(config: RunConfig) -> CountryResolver:
    resolver: CountryResolver
    if config.offline:
        resolver = OfflineResolver()
    else:
        resolver = NominatimResolver(
            user_agent=config.user_agent,
            timeout=config.timeout,
            min_delay_seconds=config.min_delay_seconds,
        )
    if config.cache_precision is not None:
        resolver = CachingResolver(resolver, precision=config.cache_precision)
    return resolver
