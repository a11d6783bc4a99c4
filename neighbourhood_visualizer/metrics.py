import logging
import math

from pydantic import BaseModel

from neighbourhood_visualizer.errors import AreaReconciliationError, InvalidParametersError

logger = logging.getLogger(__name__)

SQM_PER_SQ_KM = 1_000_000
AREA_TOLERANCE_SQM = 0.01


class BlockLandUseAreas(BaseModel):
    road_area_in_sqm: float
    sidewalk_area_in_sqm: float
    yard_area_in_sqm: float
    built_land_area_in_sqm: float
    private_land_area_in_sqm: float


class NeighbourhoodStatistics(BaseModel):
    yard_ratio: float
    road_ratio: float
    park_ratio: float
    sidewalk_ratio: float
    building_ratio: float
    floor_space_in_1_sq_km: float
    lots_in_1_sq_km: float
    building_footprint_area_in_sqm: float


# ------------------------------------------------------------
# BUILDING FOOTPRINT
# ------------------------------------------------------------
def calculate_building_depth(lot_depth, front_yard_percent, back_yard_percent):
    # Over-constrained setbacks leave no buildable depth rather than a negative one
    return max(0, lot_depth * (100 - front_yard_percent - back_yard_percent) / 100)


def calculate_building_width(lot_width, side_yard_percent):
    # Side yard applies on both sides of the building
    return max(0, lot_width * (100 - 2 * side_yard_percent) / 100)


def calculate_building_footprint_in_sqm(params):
    depth = calculate_building_depth(params.lot_depth_in_m, params.front_yard_percent, params.back_yard_percent)
    width = calculate_building_width(params.lot_width_in_m, params.side_yard_percent)
    return depth * width


# ------------------------------------------------------------
# BLOCK GEOMETRY
# ------------------------------------------------------------
def max_adjacent_lots(params):
    """
    Number of lots in one row of a block. One more lot would push the row
    past max_block_length_in_m, so it is not built.
    """
    if params.lot_width_in_m <= 0:
        raise InvalidParametersError(f"lot_width_in_m must be positive, got {params.lot_width_in_m}")
    if params.max_block_length_in_m < params.lot_width_in_m:
        raise InvalidParametersError(
            f"max_block_length_in_m ({params.max_block_length_in_m}) must be at least "
            f"lot_width_in_m ({params.lot_width_in_m})"
        )
    return math.floor(params.max_block_length_in_m / params.lot_width_in_m)


def lots_per_block(params):
    # a row of houses on each side of the laneway
    return 2 * max_adjacent_lots(params)


def calculate_block_width_in_m(params):
    return (
        params.road_width_in_m
        + max_adjacent_lots(params) * params.lot_width_in_m
        + 2 * params.sidewalk_width_in_m
    )


def calculate_block_depth_in_m(params):
    return (
        params.road_width_in_m
        + 2 * params.lot_depth_in_m
        + params.laneway_width_in_m
        + 2 * params.sidewalk_width_in_m
    )


def _block_road_area_in_sqm(params):
    # Road along the left edge and the top edge, plus the laneway pavement.
    # The sidewalk is assumed to surround the entire block, even at the laneway entrance.
    row_length = max_adjacent_lots(params) * params.lot_width_in_m
    return (
        calculate_block_depth_in_m(params) * params.road_width_in_m
        + (row_length + 2 * params.sidewalk_width_in_m) * params.road_width_in_m
        + row_length * params.laneway_width_in_m
    )


def _block_sidewalk_area_in_sqm(params, private_land_area_in_sqm):
    row_length = max_adjacent_lots(params) * params.lot_width_in_m
    width = 2 * params.sidewalk_width_in_m + row_length
    height = 2 * params.sidewalk_width_in_m + 2 * params.lot_depth_in_m + params.laneway_width_in_m
    laneway_area = row_length * params.laneway_width_in_m
    return width * height - private_land_area_in_sqm - laneway_area


def calculate_block_land_use_areas(params):
    """
    Area by land use for a single representative block: road on the top and
    left, then two rows of lots with a laneway in between, all bordered by
    sidewalk. Tiling this block covers a whole neighbourhood.
    """
    lots = lots_per_block(params)
    private_land = lots * params.lot_depth_in_m * params.lot_width_in_m
    built_land = lots * calculate_building_footprint_in_sqm(params)

    return BlockLandUseAreas(
        road_area_in_sqm=_block_road_area_in_sqm(params),
        sidewalk_area_in_sqm=_block_sidewalk_area_in_sqm(params, private_land),
        yard_area_in_sqm=private_land - built_land,
        built_land_area_in_sqm=built_land,
        private_land_area_in_sqm=private_land,
    )


# ------------------------------------------------------------
# NEIGHBOURHOOD STATISTICS
# ------------------------------------------------------------
def compute_statistics(params):
    """
    Land-use shares, floor space and lot count normalized to 1 km².

    Looks at a repeating group of `one_park_per_this_many_housing_blocks`
    blocks, one of which is a park when parks are included, and checks that
    the land uses add up to the group's tiled area.
    """
    row_length = max_adjacent_lots(params) * params.lot_width_in_m
    block = calculate_block_land_use_areas(params)
    block_width = calculate_block_width_in_m(params)
    block_depth = calculate_block_depth_in_m(params)

    num_of_blocks = params.one_park_per_this_many_housing_blocks
    num_of_park_blocks = 1 if params.include_parks else 0
    num_of_housing_blocks = num_of_blocks - num_of_park_blocks

    road_area = block.road_area_in_sqm * num_of_housing_blocks
    yard_area = block.yard_area_in_sqm * num_of_housing_blocks
    building_area = block.built_land_area_in_sqm * num_of_housing_blocks
    # every block, park or not, is bordered by sidewalk
    sidewalk_area = block.sidewalk_area_in_sqm * num_of_blocks

    park_width = row_length
    park_depth = 2 * params.lot_depth_in_m + params.laneway_width_in_m
    park_area = park_width * park_depth * num_of_park_blocks
    # roads next to the park; the park itself covers the laneway strip
    road_area += num_of_park_blocks * (
        block_depth * params.road_width_in_m
        + (2 * params.sidewalk_width_in_m + row_length) * params.road_width_in_m
    )

    expected_total_area = num_of_blocks * block_depth * block_width
    calculated_total_area = road_area + yard_area + building_area + park_area + sidewalk_area

    if not abs(expected_total_area - calculated_total_area) <= AREA_TOLERANCE_SQM:
        logger.error(
            "Area reconciliation failed: expected=%s calculated=%s params=%s",
            expected_total_area, calculated_total_area, params.model_dump(),
        )
        raise AreaReconciliationError(expected_total_area, calculated_total_area)

    scale_to_sq_km = SQM_PER_SQ_KM / calculated_total_area
    floor_space = block.built_land_area_in_sqm * num_of_housing_blocks * params.storeys

    logger.debug(
        "Computed %s blocks (%s parks) covering %.2f sqm",
        num_of_blocks, num_of_park_blocks, calculated_total_area,
    )

    return NeighbourhoodStatistics(
        yard_ratio=yard_area / calculated_total_area,
        road_ratio=road_area / calculated_total_area,
        park_ratio=park_area / calculated_total_area,
        sidewalk_ratio=sidewalk_area / calculated_total_area,
        building_ratio=building_area / calculated_total_area,
        floor_space_in_1_sq_km=scale_to_sq_km * floor_space,
        lots_in_1_sq_km=scale_to_sq_km * lots_per_block(params) * num_of_housing_blocks,
        building_footprint_area_in_sqm=calculate_building_footprint_in_sqm(params),
    )


def land_use_budget(statistics):
    """
    Rounded summary of the statistics, for display
    """
    def share(ratio):
        return {
            "sqm_per_sq_km": round(ratio * SQM_PER_SQ_KM, 2),
            "percent": round(ratio * 100, 2),
        }

    return {
        "land_use_budget": {
            "road_area": share(statistics.road_ratio),
            "sidewalk_area": share(statistics.sidewalk_ratio),
            "yard_area": share(statistics.yard_ratio),
            "building_area": share(statistics.building_ratio),
            "park_area": share(statistics.park_ratio),
        },
        "per_sq_km": {
            "floor_space_sqm": round(statistics.floor_space_in_1_sq_km, 2),
            "lots": round(statistics.lots_in_1_sq_km, 1),
        },
        "building_footprint_sqm": round(statistics.building_footprint_area_in_sqm, 2),
    }
