import math

import pytest

from neighbourhood_visualizer.constraints import NeighbourhoodParameters
from neighbourhood_visualizer.errors import InvalidParametersError, PrimitiveBudgetExceeded
from neighbourhood_visualizer.geometry import MAX_BUILDINGS_TO_DRAW, check_building_budget, plan_layout
from neighbourhood_visualizer.subdivision import block_origin, is_park_block, iter_block_cells, lot_offsets


def test_plan_for_defaults(params):
    plan = plan_layout(params, 800, 600, scale=2)

    assert plan.max_adjacent_lots == 9
    assert plan.lot_draw_width == pytest.approx(20.2)
    assert plan.lot_draw_depth == pytest.approx(74.4)
    assert plan.block_draw_length == pytest.approx(9 * 20.2)
    assert plan.block_draw_height == pytest.approx(2 * 74.4 + 12)
    assert plan.rows == math.ceil(600 / (2 * 74.4 + 12 + 22))
    assert plan.columns == math.ceil(800 / (9 * 20.2))
    assert plan.building_count == plan.rows * plan.columns * 9 * 2


def test_plan_uses_configured_scale_by_default(params):
    from neighbourhood_visualizer import geometry

    plan = plan_layout(params, 800, 600)
    assert plan.scale == geometry.DRAW_SCALE
    assert plan.road_draw_width == pytest.approx(11 * geometry.DRAW_SCALE)


def test_plan_covers_surface(params):
    plan = plan_layout(params, 1000, 700, scale=2.42)
    assert plan.rows * (plan.block_draw_height + plan.road_draw_width) >= 700
    assert plan.columns * plan.block_draw_length >= 1000


@pytest.mark.parametrize("width, height, scale", [(0, 600, 2), (800, -1, 2), (800, 600, 0)])
def test_plan_rejects_bad_surface(params, width, height, scale):
    with pytest.raises(InvalidParametersError):
        plan_layout(params, width, height, scale=scale)


def test_budget_allows_defaults(params):
    check_building_budget(plan_layout(params, 800, 600))


def test_budget_rejects_narrow_lots_on_huge_surface():
    params = NeighbourhoodParameters(lot_width_in_m=1, max_block_length_in_m=300, lot_depth_in_m=5,
                                     road_width_in_m=0, laneway_width_in_m=0, sidewalk_width_in_m=0)
    plan = plan_layout(params, 5000, 5000, scale=1)
    assert plan.building_count > MAX_BUILDINGS_TO_DRAW

    with pytest.raises(PrimitiveBudgetExceeded) as excinfo:
        check_building_budget(plan)
    assert excinfo.value.requested == plan.building_count
    assert excinfo.value.maximum == MAX_BUILDINGS_TO_DRAW


def test_park_pattern(park_params):
    assert is_park_block(park_params, column=4, row=0)
    assert not is_park_block(park_params, column=3, row=0)
    assert is_park_block(park_params, column=3, row=1)
    assert is_park_block(park_params, column=0, row=8)


def test_no_parks_when_disabled(params):
    assert not any(is_park_block(params, c, r) for c in range(10) for r in range(10))


def test_block_cells_are_row_major_and_spaced_by_road(park_params):
    plan = plan_layout(park_params, 800, 600, scale=2)
    cells = list(iter_block_cells(park_params, plan))

    assert len(cells) == plan.rows * plan.columns
    assert [(c.row, c.column) for c in cells[:2]] == [(0, 0), (0, 1)]
    first, second = cells[0], cells[1]
    assert (first.x, first.y) == (plan.road_draw_width, plan.road_draw_width)
    assert second.x - first.x == pytest.approx(plan.block_footprint_width + plan.road_draw_width)
    assert all(c.is_park == is_park_block(park_params, c.column + 1, c.row) for c in cells)

    x, y = block_origin(plan, 0, 1)
    assert y - first.y == pytest.approx(plan.block_footprint_height + plan.road_draw_width)


def test_lot_offsets(params):
    plan = plan_layout(params, 800, 600, scale=2)
    offsets = lot_offsets(plan)
    assert len(offsets) == 9
    assert offsets[0] == 0
    assert offsets[-1] == pytest.approx(8 * plan.lot_draw_width)


def test_first_park_in_top_row_is_fourth_block(park_params):
    plan = plan_layout(park_params, 800, 600, scale=2.07)
    top_row = [c.is_park for c in iter_block_cells(park_params, plan) if c.row == 0]
    assert top_row[:5] == [False, False, False, True, False]

    second_row = [c.is_park for c in iter_block_cells(park_params, plan) if c.row == 1]
    assert second_row[:3] == [False, False, True]
