from .types import Conversion, Formula, Rate, with_inverses
from .planner import PathFinder, SearchExhausted, find_path
from .evaluator import evaluate

__version__ = "0.1.0"
