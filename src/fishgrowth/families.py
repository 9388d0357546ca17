"""
Growth curve families.

Each family pairs a curve function with its parameter-transform table: the
name of each natural-scale parameter, the key holding it in the 'par'
mapping, and whether it is estimated on the log scale. Family-specific code
lives here and in curves.py; the likelihood is shared.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Tuple

import jax.numpy as jnp

from .curves import gompertz_curve, richards_curve, vonbert_curve


@dataclass(frozen=True)
class CurveParameter:
    """One row of a family's parameter-transform table"""
    name: str   # Natural-scale name, as passed to the curve function
    key: str    # Key in the 'par' mapping
    log: bool   # Estimated as log(value)

    def transform(self, value):
        return jnp.exp(value) if self.log else value


@dataclass(frozen=True)
class CurveFamily:
    """A growth model family: curve function plus parameter table"""
    name: str
    title: str
    curve: Callable
    parameters: Tuple[CurveParameter, ...]
    schnute: bool         # Needs reference ages t1 and t2
    report_curve: bool    # Report predicted curve (and its sd) by default

    @property
    def keys(self) -> Tuple[str, ...]:
        return tuple(p.key for p in self.parameters)

    def natural(self, par: Dict) -> Dict:
        """Transform 'par' entries to natural-scale curve parameters."""
        return {p.name: p.transform(par[p.key]) for p in self.parameters}

    def predict(self, t, natural: Dict, t1=None, t2=None):
        """Predicted length at age t."""
        if self.schnute:
            return self.curve(t, t1=t1, t2=t2, **natural)
        return self.curve(t, **natural)


VONBERT = CurveFamily(
    name="vonbert",
    title="von Bertalanffy",
    curve=vonbert_curve,
    parameters=(
        CurveParameter("L1", "log_L1", True),
        CurveParameter("L2", "log_L2", True),
        CurveParameter("k", "log_k", True),
    ),
    schnute=True,
    report_curve=True,
)

GOMPERTZ = CurveFamily(
    name="gompertz",
    title="Gompertz",
    curve=gompertz_curve,
    parameters=(
        CurveParameter("Linf", "log_Linf", True),
        CurveParameter("k", "log_k", True),
        CurveParameter("tau", "tau", False),
    ),
    schnute=False,
    report_curve=False,
)

RICHARDS = CurveFamily(
    name="richards",
    title="Richards",
    curve=richards_curve,
    parameters=(
        CurveParameter("L1", "log_L1", True),
        CurveParameter("L2", "log_L2", True),
        CurveParameter("k", "log_k", True),
        CurveParameter("b", "b", False),
    ),
    schnute=True,
    report_curve=False,
)

FAMILIES = {family.name: family for family in (VONBERT, GOMPERTZ, RICHARDS)}


def get_family(family) -> CurveFamily:
    """Look up a family by name, or pass a CurveFamily through."""
    if isinstance(family, CurveFamily):
        return family
    try:
        return FAMILIES[family]
    except KeyError:
        raise ValueError(
            f"unknown growth model {family!r}; choose from {', '.join(FAMILIES)}"
        ) from None
