from neighbourhood_visualizer.constraints import DEFAULT_PARAMETERS, NeighbourhoodParameters
from neighbourhood_visualizer.geometry import TiledLayoutPlan, plan_layout
from neighbourhood_visualizer.metrics import NeighbourhoodStatistics, compute_statistics
from neighbourhood_visualizer.pipeline import recompute
from neighbourhood_visualizer.renderer import render
