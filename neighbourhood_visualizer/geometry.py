import logging
import math
import os

from pydantic import BaseModel

from neighbourhood_visualizer.errors import InvalidParametersError, PrimitiveBudgetExceeded
from neighbourhood_visualizer.metrics import max_adjacent_lots

logger = logging.getLogger(__name__)

# Drawing units per metre. Chosen so the defaults look good on an 800px surface;
# not derived from the surface size.
DRAW_SCALE = float(os.environ.get("NEIGHBOURHOOD_DRAW_SCALE", 2.07))
MAX_BUILDINGS_TO_DRAW = 10000


class TiledLayoutPlan(BaseModel):
    surface_width: float
    surface_height: float
    scale: float
    max_adjacent_lots: int
    lot_draw_width: float
    lot_draw_depth: float
    road_draw_width: float
    laneway_draw_width: float
    sidewalk_draw_width: float
    block_draw_length: float
    block_draw_height: float
    rows: int
    columns: int

    @property
    def building_count(self):
        # two rows of buildings per block
        return self.rows * self.columns * self.max_adjacent_lots * 2

    @property
    def block_footprint_width(self):
        return self.block_draw_length + 2 * self.sidewalk_draw_width

    @property
    def block_footprint_height(self):
        return self.block_draw_height + 2 * self.sidewalk_draw_width


def plan_layout(params, surface_width, surface_height, scale=None):
    """
    Work out how many blocks fit on a drawing surface and the size of the
    repeating block in drawing units.

    Row and column counts are loose upper bounds: they ignore the sidewalk and
    road at the far edge, so the surface is always fully covered.
    """
    scale = DRAW_SCALE if scale is None else scale
    if surface_width <= 0 or surface_height <= 0:
        raise InvalidParametersError(f"Surface size must be positive, got {surface_width}x{surface_height}")
    if scale <= 0:
        raise InvalidParametersError(f"Draw scale must be positive, got {scale}")

    lots_in_row = max_adjacent_lots(params)

    lot_draw_depth = params.lot_depth_in_m * scale
    lot_draw_width = params.lot_width_in_m * scale
    road_draw_width = params.road_width_in_m * scale
    laneway_draw_width = params.laneway_width_in_m * scale
    sidewalk_draw_width = params.sidewalk_width_in_m * scale
    block_draw_length = lots_in_row * params.lot_width_in_m * scale
    block_draw_height = 2 * lot_draw_depth + laneway_draw_width

    rows = math.ceil(surface_height / (block_draw_height + road_draw_width))
    columns = math.ceil(surface_width / block_draw_length)

    plan = TiledLayoutPlan(
        surface_width=surface_width,
        surface_height=surface_height,
        scale=scale,
        max_adjacent_lots=lots_in_row,
        lot_draw_width=lot_draw_width,
        lot_draw_depth=lot_draw_depth,
        road_draw_width=road_draw_width,
        laneway_draw_width=laneway_draw_width,
        sidewalk_draw_width=sidewalk_draw_width,
        block_draw_length=block_draw_length,
        block_draw_height=block_draw_height,
        rows=rows,
        columns=columns,
    )
    logger.debug("Planned %sx%s blocks (%s buildings) for %sx%s surface",
                 rows, columns, plan.building_count, surface_width, surface_height)
    return plan


def check_building_budget(plan, maximum=MAX_BUILDINGS_TO_DRAW):
    if plan.building_count > maximum:
        logger.warning("Refusing to draw %s buildings (max %s)", plan.building_count, maximum)
        raise PrimitiveBudgetExceeded(plan.building_count, maximum)
