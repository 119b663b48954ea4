"""
Normalization of raw provider records into typed samples.

NOAA CO-OPS returns station-local civil timestamps without an offset
(``time_zone=lst_ldt``) and every numeric field as a string. USGS NWIS
returns ISO-8601 timestamps with an offset. Both are parsed here, at the
boundary, so the derivation code only ever sees aware datetimes and floats.

A missing or empty record list is a valid "no data" signal and yields an
empty list. A single malformed record is rejected with a warning and the
remaining records are kept.
"""
import logging
import math
from datetime import datetime, tzinfo
from typing import Any, Dict, Iterable, List, Optional

from core.config import settings
from features.common.exceptions.provider_exceptions import MalformedRecordError
from features.common.utils.conversions import UnitConversions
from features.currents.models.current_types import CurrentKind, CurrentPrediction
from features.river.models.river_types import (
    USGS_PARAMETERS,
    MeasurementType,
    RiverMeasurement,
    RiverSample,
    RiverSite,
    SiteLocation
)
from features.tides.models.tide_types import TideKind, TidePrediction

logger = logging.getLogger(__name__)

def parse_instant(text: Any, tz: tzinfo) -> datetime:
    """Parse an ISO-8601 timestamp, reading naive values as civil time in ``tz``."""
    if not isinstance(text, str) or not text.strip():
        raise MalformedRecordError(f"Missing timestamp: {text!r}")
    try:
        parsed = datetime.fromisoformat(text.strip())
    except ValueError as e:
        raise MalformedRecordError(f"Unparseable timestamp {text!r}: {str(e)}")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=tz)
    return parsed

def _parse_float(value: Any, field: str) -> float:
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise MalformedRecordError(f"Invalid numeric value for {field}: {value!r}")
    if not math.isfinite(parsed):
        raise MalformedRecordError(f"Non-finite value for {field}: {value!r}")
    return parsed

def _parse_optional_float(value: Any) -> Optional[float]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    return parsed if math.isfinite(parsed) else None

def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}

def parse_tide_record(record: Dict[str, Any], tz: tzinfo) -> TidePrediction:
    """Parse a NOAA hilo prediction ``{t, v, type}``."""
    if not isinstance(record, dict):
        raise MalformedRecordError("Tide record is not an object", record)
    try:
        kind = TideKind.from_code(record.get("type"))
    except ValueError as e:
        raise MalformedRecordError(str(e), record)

    return TidePrediction(
        time=parse_instant(record.get("t"), tz),
        height=_parse_float(record.get("v"), "v"),
        kind=kind
    )

def parse_current_record(record: Dict[str, Any], tz: tzinfo) -> CurrentPrediction:
    """Parse a NOAA MAX_SLACK current prediction."""
    if not isinstance(record, dict):
        raise MalformedRecordError("Current record is not an object", record)
    try:
        kind = CurrentKind.from_label(record.get("Type"))
    except ValueError as e:
        raise MalformedRecordError(str(e), record)

    return CurrentPrediction(
        time=parse_instant(record.get("Time"), tz),
        kind=kind,
        velocity_major=_parse_float(record.get("Velocity_Major"), "Velocity_Major"),
        mean_flood_direction=_parse_optional_float(record.get("meanFloodDir")),
        mean_ebb_direction=_parse_optional_float(record.get("meanEbbDir"))
    )

def _parse_records(records: Optional[Iterable[Dict[str, Any]]], parser, tz: tzinfo, label: str) -> List:
    if not records:
        return []

    parsed = []
    for record in records:
        try:
            parsed.append(parser(record, tz))
        except MalformedRecordError as e:
            logger.warning(f"Rejected malformed {label} record {record!r}: {str(e)}")
    return parsed

def parse_tide_records(records: Optional[Iterable[Dict[str, Any]]], tz: tzinfo) -> List[TidePrediction]:
    return _parse_records(records, parse_tide_record, tz, "tide")

def parse_current_records(records: Optional[Iterable[Dict[str, Any]]], tz: tzinfo) -> List[CurrentPrediction]:
    return _parse_records(records, parse_current_record, tz, "current")

def parse_usgs_site(payload: Dict[str, Any]) -> RiverSite:
    """Site name and location from the first USGS time series."""
    time_series = _as_dict(payload.get("value")).get("timeSeries") or []
    source_info = _as_dict(_as_dict(time_series[0]).get("sourceInfo")) if time_series else {}
    geog = _as_dict(_as_dict(source_info.get("geoLocation")).get("geogLocation")) or settings.default_site_location

    return RiverSite(
        name=source_info.get("siteName") or "Hudson River",
        location=SiteLocation(
            latitude=geog.get("latitude", settings.default_site_location["latitude"]),
            longitude=geog.get("longitude", settings.default_site_location["longitude"])
        )
    )

def _format_measurement(measurement_type: MeasurementType, value: float) -> str:
    if measurement_type == MeasurementType.DISCHARGE:
        return UnitConversions.format_discharge(value)
    return UnitConversions.format_feet(value)

def parse_usgs_series(
    payload: Dict[str, Any],
    tz: tzinfo,
    history_length: int = settings.usgs_history_length
) -> List[RiverMeasurement]:
    """Parse discharge and gage height series from a USGS instantaneous-values payload."""
    time_series = _as_dict(payload.get("value")).get("timeSeries") or []
    measurements = []

    for series in time_series:
        if not isinstance(series, dict):
            logger.warning(f"Skipping malformed USGS series {series!r}")
            continue
        variable = _as_dict(series.get("variable"))
        codes = variable.get("variableCode") or [{}]
        parameter = USGS_PARAMETERS.get(_as_dict(codes[0]).get("value"))
        if not parameter:
            continue

        no_data_value = _parse_optional_float(variable.get("noDataValue"))
        blocks = series.get("values") or [{}]
        raw_values = _as_dict(blocks[0]).get("value") or []

        samples = []
        for raw in raw_values:
            if not isinstance(raw, dict):
                logger.warning(f"Rejected malformed USGS sample {raw!r}")
                continue
            try:
                value = _parse_float(raw.get("value"), "value")
                if no_data_value is not None and value == no_data_value:
                    continue
                samples.append(RiverSample(time=parse_instant(raw.get("dateTime"), tz), value=value))
            except MalformedRecordError as e:
                logger.warning(f"Rejected malformed USGS sample {raw!r}: {str(e)}")

        if not samples:
            continue

        measurement_type, name, unit, unit_code = parameter
        current = samples[-1].value
        measurements.append(RiverMeasurement(
            type=measurement_type,
            name=name,
            unit=unit,
            unit_code=unit_code,
            current=current,
            display=_format_measurement(measurement_type, current),
            history=samples[-history_length:]
        ))

    return measurements
