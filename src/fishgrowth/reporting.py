"""
Tabular views of a model report.
"""

from typing import Mapping

import numpy as np
import pandas as pd

OTOLITH_COLUMNS = ("Aoto", "Loto", "Loto_hat", "sigma_Loto", "nll_Loto")
TAG_COLUMNS = ("age", "liberty", "Lrel", "Lrec", "Lrel_hat", "Lrec_hat",
               "sigma_Lrel", "sigma_Lrec", "nll_Lrel", "nll_Lrec")
PARAMETER_NAMES = ("L1", "L2", "Linf", "k", "tau", "b", "sigma_1", "sigma_2",
                   "t1", "t2", "Lshort", "Llong")


def _frame(report: Mapping, columns, subset: str) -> pd.DataFrame:
    missing = [name for name in columns if name not in report]
    if missing:
        raise KeyError(f"report has no {subset} data (missing {', '.join(missing)})")
    return pd.DataFrame({name: np.asarray(report[name]) for name in columns})


def otolith_frame(report: Mapping) -> pd.DataFrame:
    """One row per otolith: observed, predicted, sd and nll contribution."""
    return _frame(report, OTOLITH_COLUMNS, "otolith")


def tag_frame(report: Mapping) -> pd.DataFrame:
    """One row per tagged fish: estimated age at release, lengths and fit."""
    frame = _frame(report, TAG_COLUMNS, "tag")
    frame.insert(1, "age_rec", frame["age"] + frame["liberty"])
    return frame


def parameter_frame(report: Mapping) -> pd.Series:
    """Scalar parameters and reference constants present in the report."""
    values = {name: report[name] for name in PARAMETER_NAMES
              if report.get(name) is not None}
    return pd.Series(values, name="value", dtype=float)
