from .dataset import Dataset, ShapeMismatch, dataset_from_frame, default_dataset
from .diff import differentiate, differentiate_all
from .baseline import (
    BaselineSelector,
    MODES,
    resolve_mode,
    zero_baseline,
    theme_river_baseline,
    wiggle_baseline,
    weighted_wiggle_baseline,
)
from .stack import accumulate, normalize, build_target, baseline_curve, to_coordinate_set

__all__ = [
    "Dataset", "ShapeMismatch", "dataset_from_frame", "default_dataset",
    "differentiate", "differentiate_all",
    "BaselineSelector", "MODES", "resolve_mode",
    "zero_baseline", "theme_river_baseline", "wiggle_baseline", "weighted_wiggle_baseline",
    "accumulate", "normalize", "build_target", "baseline_curve", "to_coordinate_set",
]
