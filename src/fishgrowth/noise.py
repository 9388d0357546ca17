"""
Observation noise: standard deviation of length as a function of length.
"""

from dataclasses import dataclass
from typing import Optional

from .models import NoiseProfile


@dataclass(frozen=True)
class NoiseModel:
    """
    sd(length) = intercept + slope * length

    With two anchors the line passes through (Lshort, sigma_1) and
    (Llong, sigma_2). With one anchor the slope is 0 and sd is sigma_1.
    """
    intercept: object
    slope: object

    @classmethod
    def from_anchors(cls, sigma_1, sigma_2=None, Lshort: Optional[float] = None,
                     Llong: Optional[float] = None) -> 'NoiseModel':
        if sigma_2 is None:
            return cls(intercept=sigma_1, slope=0.0)
        slope = (sigma_2 - sigma_1) / (Llong - Lshort)
        return cls(intercept=sigma_1 - Lshort * slope, slope=slope)

    @classmethod
    def for_profile(cls, profile: NoiseProfile, sigma_1, sigma_2=None,
                    Lshort: Optional[float] = None,
                    Llong: Optional[float] = None) -> 'NoiseModel':
        """Build the noise model selected at build time, ignoring unused anchors."""
        if profile is NoiseProfile.CONSTANT:
            return cls.from_anchors(sigma_1)
        return cls.from_anchors(sigma_1, sigma_2, Lshort, Llong)

    def __call__(self, length):
        return self.intercept + self.slope * length
