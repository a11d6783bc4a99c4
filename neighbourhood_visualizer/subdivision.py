from typing import Iterator, List, NamedTuple

from neighbourhood_visualizer.constraints import NeighbourhoodParameters
from neighbourhood_visualizer.geometry import TiledLayoutPlan


class BlockCell(NamedTuple):
    row: int
    column: int
    x: float  # origin of the block's sidewalk footprint, in drawing units
    y: float
    is_park: bool


def is_park_block(params: NeighbourhoodParameters, column: int, row: int) -> bool:
    """
    Parks repeat along diagonals of the block grid. `column` counts blocks
    along a row from 1, `row` counts rows from 0. Depends only on the
    block's grid coordinates, never on drawing order.
    """
    if not params.include_parks:
        return False
    return (column + row) % params.one_park_per_this_many_housing_blocks == 0


def block_origin(plan: TiledLayoutPlan, column: int, row: int) -> tuple:
    # every block has road on its top and left
    x = (column + 1) * plan.road_draw_width + column * plan.block_footprint_width
    y = (row + 1) * plan.road_draw_width + row * plan.block_footprint_height
    return x, y


def iter_block_cells(params: NeighbourhoodParameters, plan: TiledLayoutPlan) -> Iterator[BlockCell]:
    for row in range(plan.rows):
        for column in range(plan.columns):
            x, y = block_origin(plan, column, row)
            yield BlockCell(row, column, x, y, is_park_block(params, column + 1, row))


def lot_offsets(plan: TiledLayoutPlan) -> List[float]:
    return [i * plan.lot_draw_width for i in range(plan.max_adjacent_lots)]
