# weather/nws.py
# Fetches active alerts for a US state from the NWS API and renders them as text.

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Union

import httpx
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

logger = logging.getLogger(__name__)

NWS_API_BASE = "https://api.weather.gov"
USER_AGENT = "weather-app/1.0"
ACCEPT = "application/geo+json"

FAILED_TEXT = "Failed to retrieve alerts. Please try again later."
NO_ALERTS_TEXT = "No alerts found for the given state."


class AlertProperties(BaseModel):
    model_config = ConfigDict(extra="ignore")

    event: Optional[str] = None
    areaDesc: Optional[str] = None
    severity: Optional[str] = None
    status: Optional[str] = None
    headline: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> Optional[str]:
        # Falsy values fall back to the per-field default when formatting.
        if not value:
            return None
        if isinstance(value, str):
            return value
        return str(value)


class AlertFeature(BaseModel):
    model_config = ConfigDict(extra="ignore")

    properties: AlertProperties = Field(default_factory=AlertProperties)

    @model_validator(mode="before")
    @classmethod
    def _best_effort(cls, value: Any) -> Any:
        # Non-object entries render as a block of "Unknown" lines.
        if not isinstance(value, dict):
            return {}
        if not isinstance(value.get("properties"), dict):
            return {**value, "properties": {}}
        return value


class AlertsResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    features: List[AlertFeature] = Field(default_factory=list)

    @field_validator("features", mode="before")
    @classmethod
    def _null_features(cls, value: Any) -> Any:
        return [] if value is None else value


@dataclass(frozen=True)
class FetchSuccess:
    payload: AlertsResponse


@dataclass(frozen=True)
class FetchFailure:
    reason: str


FetchResult = Union[FetchSuccess, FetchFailure]

# (label, property name, fallback) in display order
_ALERT_FIELDS = (
    ("event", "event", "Unknown Event"),
    ("area", "areaDesc", "Unknown Area"),
    ("severity", "severity", "Unknown Severity"),
    ("status", "status", "Unknown Status"),
    ("headline", "headline", "Unknown Headline"),
)


def alerts_url(state_code: str) -> str:
    return f"{NWS_API_BASE}/alerts?area={state_code}"


async def fetch_alerts(
    state_code: str,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FetchResult:
    """Issue a single GET for the state's alerts.

    Any failure (transport error, non-2xx status, undecodable or unexpected
    body) is logged and returned as a ``FetchFailure``; nothing is raised.
    """
    headers = {
        "User-Agent": USER_AGENT,
        "Accept": ACCEPT,
    }
    url = alerts_url(state_code)
    async with httpx.AsyncClient(transport=transport, timeout=None) as client:
        try:
            r = await client.get(url, headers=headers)
            r.raise_for_status()
            payload = AlertsResponse.model_validate(r.json())
        except httpx.HTTPStatusError as e:
            reason = f"HTTP error! status: {e.response.status_code}"
        except ValidationError as e:
            reason = f"unexpected response shape: {e.error_count()} error(s)"
        except ValueError as e:
            reason = f"invalid JSON body: {e}"
        except Exception as e:
            reason = f"{type(e).__name__}: {e}"
        else:
            return FetchSuccess(payload)

    logger.error("Error making NWS request to %s: %s", url, reason)
    return FetchFailure(reason)


def format_alert(feature: AlertFeature) -> str:
    props = feature.properties
    return "\n".join(
        f"{label}: {getattr(props, name) or fallback}"
        for label, name, fallback in _ALERT_FIELDS
    )


def render_alerts(state_code: str, result: FetchResult) -> str:
    if isinstance(result, FetchFailure):
        return FAILED_TEXT
    features = result.payload.features
    if not features:
        return NO_ALERTS_TEXT
    body = "\n\n".join(format_alert(f) for f in features)
    return f"Active Alerts in {state_code}:\n{body}"


async def get_alerts(
    state: str,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """Fetch and render active alerts for a two-letter state code."""
    state_code = state.upper()
    result = await fetch_alerts(state_code, transport=transport)
    return render_alerts(state_code, result)
