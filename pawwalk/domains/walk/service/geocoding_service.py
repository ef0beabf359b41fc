import logging
import threading
import time
from collections import OrderedDict
from typing import Callable, Optional

import httpx
from fastapi import Request

logger = logging.getLogger(__name__)


class GeocodingService:
    """
    좌표 → 주소 문자열.
    API 키가 없거나 외부 호출이 실패하면 좌표 문자열을 돌려줍니다 (예외 없음).
    앱당 1개를 여러 요청 스레드가 공유하므로 캐시는 lock 안에서만 만집니다.
    """

    base_url = "https://maps.googleapis.com/maps/api/geocode/json"

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: float = 5.0,
        cache_size: int = 1024,
        client: Optional[httpx.Client] = None,
        language: str = "es",
        failure_cooldown: float = 30.0,
        monotonic: Callable[[], float] = time.monotonic,
    ):
        self.api_key = api_key or ""
        self.timeout = timeout
        self.cache_size = cache_size
        self.language = language
        self.failure_cooldown = failure_cooldown
        self._monotonic = monotonic

        # 주입받은 client 는 호출한 쪽이 닫음
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

        self._cache: "OrderedDict[str, str]" = OrderedDict()
        self._lock = threading.Lock()
        # 외부 호출 실패 후 이 시각까지는 바로 좌표 문자열 반환
        self._skip_until = 0.0

    @staticmethod
    def coordinate_label(lat: float, lng: float) -> str:
        return f"Lat: {lat:.6f}, Lng: {lng:.6f}"

    @staticmethod
    def _cache_key(lat: float, lng: float) -> str:
        # 소수점 4자리 ≈ 11m
        return f"{lat:.4f}_{lng:.4f}"

    # ============================================
    # 캐시 (LRU)
    # ============================================
    def _cache_get(self, key: str) -> Optional[str]:
        with self._lock:
            value = self._cache.pop(key, None)
            if value is not None:
                self._cache[key] = value
            return value

    def _cache_put(self, key: str, value: str) -> None:
        with self._lock:
            self._cache.pop(key, None)
            self._cache[key] = value
            while len(self._cache) > self.cache_size:
                self._cache.popitem(last=False)

    def _in_cooldown(self) -> bool:
        with self._lock:
            return self._monotonic() < self._skip_until

    def _start_cooldown(self) -> None:
        with self._lock:
            self._skip_until = self._monotonic() + self.failure_cooldown

    # ============================================
    # 외부 호출
    # ============================================
    def _fetch_address(self, lat: float, lng: float) -> Optional[str]:
        params = {
            "latlng": f"{lat},{lng}",
            "key": self.api_key,
            "language": self.language,
        }

        response = self._client.get(self.base_url, params=params, timeout=self.timeout)
        response.raise_for_status()
        data = response.json()

        results = data.get("results") or []
        if not results:
            return None
        return results[0].get("formatted_address")

    def resolve(self, lat, lng) -> str:
        try:
            lat_num = float(lat)
            lng_num = float(lng)
        except (TypeError, ValueError):
            return f"Lat: {lat}, Lng: {lng}"

        if not self.api_key:
            return self.coordinate_label(lat_num, lng_num)

        key = self._cache_key(lat_num, lng_num)
        cached = self._cache_get(key)
        if cached is not None:
            logger.debug("Geocoding cache hit: %s", key)
            return cached

        if self._in_cooldown():
            return self.coordinate_label(lat_num, lng_num)

        try:
            address = self._fetch_address(lat_num, lng_num)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(
                "Geocoding failed for (%s, %s), skipping lookups for %ss: %s",
                lat_num, lng_num, self.failure_cooldown, e,
            )
            self._start_cooldown()
            return self.coordinate_label(lat_num, lng_num)

        if not address:
            return self.coordinate_label(lat_num, lng_num)

        self._cache_put(key, address)
        return address

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


def build_geocoder(settings) -> GeocodingService:
    return GeocodingService(
        api_key=settings.GOOGLE_MAPS_API_KEY,
        timeout=settings.GEOCODING_TIMEOUT,
        cache_size=settings.GEOCODING_CACHE_SIZE,
        failure_cooldown=settings.GEOCODING_FAILURE_COOLDOWN,
    )


def get_geocoder(request: Request) -> GeocodingService:
    """create_app 에서 만든 인스턴스 (app.state.geocoder) 를 주입"""
    return request.app.state.geocoder
