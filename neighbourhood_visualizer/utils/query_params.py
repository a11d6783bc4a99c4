import math
from typing import Any, Dict, Mapping

from neighbourhood_visualizer.constraints import DEFAULT_PARAMETERS, NeighbourhoodParameters

# Same data as NeighbourhoodParameters but with much shorter names, for use in query strings
QUERY_KEYS = {
    "fyp": "front_yard_percent",
    "syp": "side_yard_percent",
    "byp": "back_yard_percent",
    "lod": "lot_depth_in_m",
    "low": "lot_width_in_m",
    "st": "storeys",
    "rw": "road_width_in_m",
    "law": "laneway_width_in_m",
    "sw": "sidewalk_width_in_m",
    "mbl": "max_block_length_in_m",
    "ip": "include_parks",
    "pphb": "one_park_per_this_many_housing_blocks",
}

INTEGER_FIELDS = {"storeys", "one_park_per_this_many_housing_blocks"}


def try_parse_number(raw: Any, fallback, integer: bool = False):
    """
    Parse a query value as a number, falling back when it is missing or junk.
    Zero is a real value here, not a missing one.
    """
    if raw is None:
        return fallback
    try:
        parsed = float(str(raw).strip())
    except ValueError:
        return fallback
    if not math.isfinite(parsed):
        return fallback
    if integer:
        return int(parsed) if parsed.is_integer() else fallback
    return parsed


def parse_query_params(query: Mapping[str, Any], defaults: NeighbourhoodParameters = DEFAULT_PARAMETERS) -> NeighbourhoodParameters:
    values: Dict[str, Any] = defaults.model_dump()

    for key, field in QUERY_KEYS.items():
        if field == "include_parks":
            continue
        values[field] = try_parse_number(query.get(key), values[field], integer=field in INTEGER_FIELDS)

    if query.get("ip") is not None:
        values["include_parks"] = str(query["ip"]).lower() == "true"

    # raises pydantic.ValidationError on out-of-range or inconsistent values
    return NeighbourhoodParameters(**values)


def to_query_params(params: NeighbourhoodParameters) -> Dict[str, Any]:
    return {key: getattr(params, field) for key, field in QUERY_KEYS.items()}
