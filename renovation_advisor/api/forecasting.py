"""
Forecasting service client.

Thin wrapper over ``requests.Session`` for the building-simulation
endpoints of the service gateway:

- GET  {prefix}/building/available       archetype catalogue
- POST {prefix}/building?archetype=true  archetype BUI/system payloads
- POST {prefix}/simulate                 hourly simulation (archetype or custom)
- POST {prefix}/ecm_application          hourly simulation with U-value changes

Transport failures and error statuses raise ``APIConnectionError``;
bodies that are not JSON or fail schema validation raise
``APIResponseError``. Requests are never retried here.

Usage:
    client = ForecastingClient()
    archetypes = client.list_archetypes()
    response = client.simulate_archetype(archetypes[0])
"""

import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError as SchemaError
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..core.config import settings
from ..core.errors import APIConnectionError, APIResponseError
from ..core.models import ArchetypeInfo
from .schemas import (
    ArchetypeDetailsResponse,
    ArchetypeRecord,
    ECMApplicationResponse,
    SimulateResponse,
)

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class ForecastingClient:
    """
    Client for the building-simulation service.

    Args:
        base_url: Service URL including the forecasting prefix
            (default: settings.forecasting_url)
        auth_token: Bearer token (default: settings.auth_token)
        timeout: Per-request timeout in seconds
        weather_source: Default weather selector ("pvgis" or "epw")
        session: Pre-built session (tests inject a mock here)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        auth_token: Optional[str] = None,
        timeout: Optional[float] = None,
        weather_source: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.forecasting_url).rstrip("/")
        self.timeout = timeout or settings.request_timeout_s
        self.weather_source = weather_source or settings.weather_source

        if session is None:
            session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=4,
                pool_maxsize=8,
                max_retries=Retry(total=0),
            )
            session.mount("https://", adapter)
            session.mount("http://", adapter)
        self._session = session

        token = auth_token if auth_token is not None else settings.auth_token
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"
        else:
            logger.debug("No auth token configured for forecasting service")

    # =========================================================================
    # Transport
    # =========================================================================

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        data: Optional[Mapping[str, Any]] = None,
        json_body: Optional[Any] = None,
    ) -> Any:
        """Send one request and return the decoded JSON body."""
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url} params={dict(params or {})}")

        try:
            response = self._session.request(
                method,
                url,
                params=params,
                data=data,
                json=json_body,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            logger.error(f"Timeout after {self.timeout}s calling {path}: {e}")
            raise APIConnectionError(
                f"The energy service did not respond within {self.timeout:.0f} seconds."
            ) from e
        except requests.RequestException as e:
            logger.error(f"Connection error calling {path}: {e}")
            raise APIConnectionError() from e

        if not response.ok:
            logger.error(f"API error {response.status_code} for {path}: {response.text[:200]}")
            raise APIConnectionError(
                f"The energy service returned an error ({response.status_code}).",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Non-JSON body from {path}: {e}")
            raise APIResponseError() from e

    @staticmethod
    def _parse(schema: Type[SchemaT], payload: Any, path: str) -> SchemaT:
        try:
            return schema.model_validate(payload)
        except SchemaError as e:
            logger.error(f"Unexpected response shape from {path}: {e.error_count()} errors")
            raise APIResponseError() from e

    @staticmethod
    def _archetype_params(archetype: ArchetypeInfo) -> Dict[str, str]:
        return {
            "category": archetype.category,
            "country": archetype.country,
            "name": archetype.name,
        }

    # =========================================================================
    # Endpoints
    # =========================================================================

    def list_archetypes(self) -> List[ArchetypeInfo]:
        """Return every archetype the simulator knows."""
        path = "/building/available"
        payload = self._request("GET", path)
        if not isinstance(payload, list):
            logger.error(f"Expected a list from {path}, got {type(payload).__name__}")
            raise APIResponseError()

        archetypes = [
            ArchetypeInfo(category=r.category, country=r.country, name=r.name)
            for r in (self._parse(ArchetypeRecord, item, path) for item in payload)
        ]
        logger.info(f"Fetched {len(archetypes)} archetypes")
        return archetypes

    def get_archetype_details(self, archetype: ArchetypeInfo) -> ArchetypeDetailsResponse:
        """Fetch the BUI and system payloads of an archetype."""
        path = "/building"
        params = {"archetype": "true", **self._archetype_params(archetype)}
        payload = self._request("POST", path, params=params)
        return self._parse(ArchetypeDetailsResponse, payload, path)

    def simulate_archetype(
        self,
        archetype: ArchetypeInfo,
        weather_source: Optional[str] = None,
    ) -> SimulateResponse:
        """Run the hourly simulation of an unmodified archetype."""
        path = "/simulate"
        params = {
            "archetype": "true",
            **self._archetype_params(archetype),
            "weather_source": weather_source or self.weather_source,
        }
        logger.info(f"Simulating archetype {archetype.name}", extra={"archetype_name": archetype.name})
        payload = self._request("POST", path, params=params)
        return self._parse(SimulateResponse, payload, path)

    def simulate_custom(
        self,
        bui: Dict[str, Any],
        system: Dict[str, Any],
        weather_source: Optional[str] = None,
    ) -> SimulateResponse:
        """Run the hourly simulation of a custom BUI/system payload."""
        path = "/simulate"
        params = {
            "archetype": "false",
            "weather_source": weather_source or self.weather_source,
        }
        form = {"bui_json": json.dumps(bui), "system_json": json.dumps(system)}
        logger.info("Simulating custom building")
        payload = self._request("POST", path, params=params, data=form)
        return self._parse(SimulateResponse, payload, path)

    def apply_ecm(
        self,
        archetype: ArchetypeInfo,
        elements: Sequence[str],
        u_values: Mapping[str, float],
        weather_source: Optional[str] = None,
    ) -> ECMApplicationResponse:
        """
        Simulate the archetype with new U-values on the given elements.

        Runs in single-scenario mode: one scenario carrying every element.

        Args:
            archetype: Reference building
            elements: Envelope elements ("wall", "roof", "window")
            u_values: Target U-value per element (W/m²K)
            weather_source: Weather selector (default: client default)
        """
        path = "/ecm_application"
        params: Dict[str, Any] = {
            "archetype": "true",
            **self._archetype_params(archetype),
            "weather_source": weather_source or self.weather_source,
            "scenario_elements": ",".join(elements),
        }
        for element in elements:
            if element in u_values:
                params[f"u_{element}"] = u_values[element]

        logger.info(
            f"Applying ECM elements {params['scenario_elements']}",
            extra={"archetype_name": archetype.name},
        )
        payload = self._request("POST", path, params=params)
        return self._parse(ECMApplicationResponse, payload, path)
