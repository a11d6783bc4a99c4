from typing import NamedTuple

from neighbourhood_visualizer.geometry import TiledLayoutPlan, plan_layout
from neighbourhood_visualizer.metrics import NeighbourhoodStatistics, compute_statistics
from neighbourhood_visualizer.renderer import render


class RecomputeResult(NamedTuple):
    statistics: NeighbourhoodStatistics
    plan: TiledLayoutPlan


def recompute(params, surface, surface_width, surface_height, scale=None):
    """
    Single entry point for a parameter snapshot: statistics, layout plan and
    drawing, all from the same record. Callers decide when a snapshot is
    ready (after any debouncing); nothing is cached between calls.
    """
    statistics = compute_statistics(params)
    plan = plan_layout(params, surface_width, surface_height, scale=scale)
    render(surface, params, plan)
    return RecomputeResult(statistics, plan)
