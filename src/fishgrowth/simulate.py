"""
Synthetic otolith and tagging datasets, useful for validation.
"""

from typing import Optional

import numpy as np

from .curves import gompertz_curve, richards_curve, vonbert_curve
from .models import GompertzParameters, GrowthData, RichardsParameters, VonBertParameters


def predict_length(curve, t, t1: Optional[float] = None,
                   t2: Optional[float] = None) -> np.ndarray:
    """
    Length at age t for natural-scale curve parameters.

    Args:
        curve: VonBertParameters, GompertzParameters or RichardsParameters
        t: Age (scalar or vector)
        t1, t2: Reference ages (Schnute-parametrized curves only)
    """
    t = np.asarray(t, dtype=float)
    if isinstance(curve, VonBertParameters):
        L = vonbert_curve(t, curve.L1, curve.L2, curve.k, t1, t2)
    elif isinstance(curve, GompertzParameters):
        L = gompertz_curve(t, curve.Linf, curve.k, curve.tau)
    elif isinstance(curve, RichardsParameters):
        L = richards_curve(t, curve.L1, curve.L2, curve.k, curve.b, t1, t2)
    else:
        raise TypeError(f"unsupported curve parameters: {type(curve).__name__}")
    return np.asarray(L)


def create_synthetic_otoliths(curve, ages: np.ndarray, sigma: float = 0.0,
                              t1: Optional[float] = None, t2: Optional[float] = None,
                              seed: int = 42) -> GrowthData:
    """
    Otolith readings: length at age from the curve plus Gaussian error.

    With sigma = 0 the lengths lie exactly on the curve.
    """
    np.random.seed(seed)

    ages = np.asarray(ages, dtype=float)
    lengths = predict_length(curve, ages, t1, t2)
    lengths = lengths + np.random.normal(0, sigma, len(ages))

    return GrowthData(Aoto=ages, Loto=lengths, t1=t1, t2=t2)


def create_synthetic_tags(curve, age_release: np.ndarray, liberty: np.ndarray,
                          sigma: float = 0.0, t1: Optional[float] = None,
                          t2: Optional[float] = None, seed: int = 42) -> GrowthData:
    """
    Tag-recapture records for fish of known (true) age at release.

    The true ages are not part of the returned data; they are what a model
    estimates through 'log_age'.
    """
    np.random.seed(seed)

    age_release = np.asarray(age_release, dtype=float)
    liberty = np.asarray(liberty, dtype=float)
    Lrel = predict_length(curve, age_release, t1, t2)
    Lrec = predict_length(curve, age_release + liberty, t1, t2)
    Lrel = Lrel + np.random.normal(0, sigma, len(age_release))
    Lrec = Lrec + np.random.normal(0, sigma, len(age_release))

    return GrowthData(Lrel=Lrel, Lrec=Lrec, liberty=liberty, t1=t1, t2=t2)
