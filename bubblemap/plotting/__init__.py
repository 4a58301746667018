"""Plotting utilities for the bubble map."""

from .bubble_map_plots import iter_land_polygons, land_path, plot_bubble_map, plot_bubble_map_static


__all__ = [
    "iter_land_polygons",
    "land_path",
    "plot_bubble_map",
    "plot_bubble_map_static",
]
