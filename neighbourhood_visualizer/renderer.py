import logging
import math

from neighbourhood_visualizer.geometry import check_building_budget
from neighbourhood_visualizer.metrics import calculate_building_depth, calculate_building_width
from neighbourhood_visualizer.subdivision import iter_block_cells, lot_offsets
from neighbourhood_visualizer.surfaces import saved_state

logger = logging.getLogger(__name__)

# RGB colour per drawing layer
COLOR_MAP = {
    "ROAD": (84, 84, 84),
    "SIDEWALK": (209, 209, 209),
    "PARK": (57, 178, 30),
    "YARD": (240, 240, 240),
    "BUILDING": (0, 82, 110),
    "LOT_OUTLINE": (0, 0, 0),
}


def render(surface, params, plan):
    """
    Paint the tiled neighbourhood onto `surface`.

    The background is road. If the plan needs more buildings than the budget
    allows, nothing past the background is drawn and PrimitiveBudgetExceeded
    propagates with the surface's transform stack untouched.
    """
    surface.clear(plan.surface_width, plan.surface_height)
    surface.fill_rect(0, 0, plan.surface_width, plan.surface_height, "ROAD")

    check_building_budget(plan)

    with saved_state(surface):
        for cell in iter_block_cells(params, plan):
            with saved_state(surface):
                surface.translate(cell.x, cell.y)
                _draw_block(surface, params, plan, cell.is_park)

    logger.debug("Rendered %sx%s blocks", plan.rows, plan.columns)


def _draw_block(surface, params, plan, is_park):
    surface.fill_rect(0, 0, plan.block_footprint_width, plan.block_footprint_height, "SIDEWALK")
    surface.translate(plan.sidewalk_draw_width, plan.sidewalk_draw_width)

    if is_park:
        surface.fill_rect(0, 0, plan.block_draw_length, plan.block_draw_height, "PARK")
        return

    # front row faces the street
    _draw_row_of_buildings(surface, params, plan, flip=False)

    with saved_state(surface):
        surface.translate(0, plan.lot_draw_depth)
        surface.fill_rect(0, 0, plan.block_draw_length, plan.laneway_draw_width, "ROAD")

    # back row is turned around so its fronts face the far street
    with saved_state(surface):
        surface.translate(0, plan.lot_draw_depth + plan.laneway_draw_width)
        _draw_row_of_buildings(surface, params, plan, flip=True)


def _draw_row_of_buildings(surface, params, plan, flip):
    for offset in lot_offsets(plan):
        with saved_state(surface):
            surface.translate(offset, 0)
            draw_building(surface, params, plan.lot_draw_width, plan.lot_draw_depth, flip)


def draw_building(surface, params, lot_draw_width, lot_draw_depth, flip_vertically):
    with saved_state(surface):
        if flip_vertically:
            surface.translate(lot_draw_width, lot_draw_depth)
            surface.rotate(math.radians(180))

        surface.stroke_rect(0, 0, lot_draw_width, lot_draw_depth, "LOT_OUTLINE")
        surface.fill_rect(1, 1, lot_draw_width - 2, lot_draw_depth - 2, "YARD")

        bldg_draw_depth = calculate_building_depth(lot_draw_depth, params.front_yard_percent, params.back_yard_percent)
        bldg_draw_width = calculate_building_width(lot_draw_width, params.side_yard_percent)
        front_yard_draw_depth = lot_draw_depth * params.front_yard_percent / 100
        side_yard_draw_width = lot_draw_width * params.side_yard_percent / 100

        surface.fill_rect(side_yard_draw_width, front_yard_draw_depth, bldg_draw_width, bldg_draw_depth, "BUILDING")
