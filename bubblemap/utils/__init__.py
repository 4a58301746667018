from .paths import WORLD_GEOJSON_URL, get_data_dir, get_dataset_path
from .plotting_config import DEFAULT_MAP_CFG, DEFAULT_PLOT_CFG, LARGE_BUBBLE_MAP_CFG, MapConfig, PlottingConfig


__all__ = [
    "DEFAULT_MAP_CFG",
    "DEFAULT_PLOT_CFG",
    "LARGE_BUBBLE_MAP_CFG",
    "WORLD_GEOJSON_URL",
    "MapConfig",
    "PlottingConfig",
    "get_data_dir",
    "get_dataset_path",
]
