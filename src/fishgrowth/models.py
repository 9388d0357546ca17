"""
Data structures for growth models.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Dict, Mapping, Optional

import numpy as np


class DataProfile(Enum):
    """Which observation subsets a model is fitted to"""
    OTOLITH_ONLY = "otoliths"
    TAG_ONLY = "tags"
    COMBINED = "otoliths+tags"

    @property
    def has_otoliths(self) -> bool:
        return self is not DataProfile.TAG_ONLY

    @property
    def has_tags(self) -> bool:
        return self is not DataProfile.OTOLITH_ONLY

    @classmethod
    def from_subsets(cls, otoliths: bool, tags: bool) -> Optional['DataProfile']:
        """Profile for the given subsets, or None when neither is present."""
        if otoliths and tags:
            return cls.COMBINED
        if otoliths:
            return cls.OTOLITH_ONLY
        if tags:
            return cls.TAG_ONLY
        return None


class NoiseProfile(Enum):
    """Whether sd(length) is constant or varies linearly with length"""
    CONSTANT = "constant"
    LENGTH_VARYING = "length-varying"


def _as_vector(value) -> Optional[np.ndarray]:
    if value is None:
        return None
    # Private read-only copy, so later changes to the caller's array are not seen
    vector = np.array(value, dtype=float, ndmin=1)
    vector.flags.writeable = False
    return vector


def _as_scalar(value) -> Optional[float]:
    if value is None:
        return None
    return float(value)


@dataclass(frozen=True)
class GrowthData:
    """
    Otolith and tagging observations plus reference constants.

    Every field is optional. Otoliths are usable when both Aoto and Loto are
    given; tags when Lrel, Lrec and liberty are all given. t1 and t2 are
    required by the Schnute-parametrized curves, Lshort and Llong by
    length-varying noise.

    Instances are immutable: vectors are copied on creation and made read-only.
    Use dataclasses.replace to derive a modified dataset.
    """
    Aoto: Optional[np.ndarray] = None     # Age from otoliths (years)
    Loto: Optional[np.ndarray] = None     # Length from otoliths
    Lrel: Optional[np.ndarray] = None     # Length at release of tagged fish
    Lrec: Optional[np.ndarray] = None     # Length at recapture of tagged fish
    liberty: Optional[np.ndarray] = None  # Time at liberty (years)
    t1: Optional[float] = None            # Age where predicted length is L1
    t2: Optional[float] = None            # Age where predicted length is L2
    Lshort: Optional[float] = None        # Length where sd(length) is sigma_1
    Llong: Optional[float] = None         # Length where sd(length) is sigma_2

    VECTORS = ("Aoto", "Loto", "Lrel", "Lrec", "liberty")
    SCALARS = ("t1", "t2", "Lshort", "Llong")

    def __post_init__(self):
        for name in self.VECTORS:
            object.__setattr__(self, name, _as_vector(getattr(self, name)))
        for name in self.SCALARS:
            object.__setattr__(self, name, _as_scalar(getattr(self, name)))

    @classmethod
    def from_mapping(cls, data: Mapping) -> 'GrowthData':
        """
        Create GrowthData from a dict-like object.

        Keys that are not GrowthData fields are ignored.
        """
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    def present(self, name: str) -> bool:
        """True if the field is supplied and, for vectors, not empty."""
        value = getattr(self, name)
        if value is None:
            return False
        if name in self.VECTORS:
            return value.size > 0
        return True

    @property
    def n_otoliths(self) -> int:
        return len(self.Aoto) if self.present("Aoto") else 0

    @property
    def n_tags(self) -> int:
        return len(self.Lrel) if self.present("Lrel") else 0


# =============================================================================
# NATURAL-SCALE PARAMETERS
# =============================================================================

@dataclass
class VonBertParameters:
    """von Bertalanffy curve, Schnute parametrization"""
    L1: float  # Predicted length at age t1
    L2: float  # Predicted length at age t2
    k: float   # Growth coefficient

    def to_par(self) -> Dict[str, float]:
        return {"log_L1": np.log(self.L1), "log_L2": np.log(self.L2),
                "log_k": np.log(self.k)}


@dataclass
class GompertzParameters:
    """Gompertz curve, traditional parametrization"""
    Linf: float  # Asymptotic maximum length
    k: float     # Growth coefficient
    tau: float   # Location parameter (inflection age)

    def to_par(self) -> Dict[str, float]:
        return {"log_Linf": np.log(self.Linf), "log_k": np.log(self.k),
                "tau": float(self.tau)}


@dataclass
class RichardsParameters:
    """
    Richards curve, Schnute parametrization.

    b is the shape exponent. b = 1 gives von Bertalanffy and b -> 0 tends to
    Gompertz, but b = 0 itself is undefined here; use the Gompertz family.
    """
    L1: float
    L2: float
    k: float
    b: float

    def to_par(self) -> Dict[str, float]:
        return {"log_L1": np.log(self.L1), "log_L2": np.log(self.L2),
                "log_k": np.log(self.k), "b": float(self.b)}


@dataclass
class NoiseParameters:
    """sd(length) at Lshort (sigma_1) and, optionally, at Llong (sigma_2)"""
    sigma_1: float
    sigma_2: Optional[float] = None

    @property
    def profile(self) -> NoiseProfile:
        if self.sigma_2 is None:
            return NoiseProfile.CONSTANT
        return NoiseProfile.LENGTH_VARYING

    def to_par(self) -> Dict[str, float]:
        par = {"log_sigma_1": np.log(self.sigma_1)}
        if self.sigma_2 is not None:
            par["log_sigma_2"] = np.log(self.sigma_2)
        return par


def initial_parameters(curve, noise: NoiseParameters,
                       age: Optional[np.ndarray] = None) -> Dict[str, np.ndarray]:
    """
    Assemble a 'par' mapping from natural-scale parameters.

    Args:
        curve: VonBertParameters, GompertzParameters or RichardsParameters
        noise: NoiseParameters
        age: Initial guess of age at release for each tagged fish (optional)

    Returns:
        Dict of log-scale (or unconstrained) initial values
    """
    par = dict(curve.to_par())
    par.update(noise.to_par())
    if age is not None:
        par["log_age"] = np.log(np.asarray(age, dtype=float))
    return par
