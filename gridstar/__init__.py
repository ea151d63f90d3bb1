# gridstar/__init__.py
from .types import Coord, Index, Mask, SearchStatus, StepResult
from .grid import Grid
from .heuristics import manhattan
from .rng import SeededRandom
from .reachability import path_exists, shortest_path_length
from .generator import generate_obstacles, Generation
from .astar import AStarEngine, EngineView
from .config import Settings
from .viz import draw_search_png

__all__ = [
    "Coord", "Index", "Mask", "SearchStatus", "StepResult",
    "Grid", "manhattan", "SeededRandom",
    "path_exists", "shortest_path_length",
    "generate_obstacles", "Generation",
    "AStarEngine", "EngineView",
    "Settings", "draw_search_png",
]
