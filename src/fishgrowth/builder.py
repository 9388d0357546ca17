"""
Model construction
==================

build() checks that the parameters and data form a complete combination for
the requested family, decides once which data subsets and noise model apply,
and returns a GrowthModel: an immutable object bound to the data, exposing
the objective, its gradient and Hessian (via JAX), and the reporting
contract.

Typical use with an external optimizer:

    model = build(par, data, "vonbert")
    fit = scipy.optimize.minimize(model.value, model.par, jac=model.gradient)
    report = model.report(fit.x)
"""

import logging
import warnings
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import jax
import jax.numpy as jnp
import numpy as np

from .errors import (
    LatentAgeLengthError,
    MissingCurveParameterError,
    MissingNoiseParameterError,
    MissingReferenceAgesError,
    MissingReferenceLengthsError,
    NoUsableDataError,
    ObservationLengthError,
    UnknownParameterError,
)
from .families import CurveFamily, get_family
from .likelihood import CURVE_AGES, data_quantities, negative_log_likelihood
from .models import DataProfile, GrowthData, NoiseProfile

logger = logging.getLogger(__name__)

OTOLITH_FIELDS = ("Aoto", "Loto")
TAG_FIELDS = ("Lrel", "Lrec", "liberty")


# =============================================================================
# VALIDATION
# =============================================================================

def _par_present(par: Mapping, key: str) -> bool:
    return par.get(key) is not None and np.size(par[key]) > 0


def validate(par: Mapping, data: GrowthData, family: CurveFamily,
             stacklevel: int = 2) -> Tuple[DataProfile, NoiseProfile]:
    """
    Check a parameter/data combination and classify it.

    Checks run in a fixed order and the first failure raises:
    noise intercept, reference lengths, reference ages, usable data, latent
    age length, curve parameters, observation lengths.

    Incomplete subsets are dropped with a UserWarning; stacklevel is passed
    to warnings.warn and should point at the caller's frame.

    Returns:
        data_profile, noise_profile

    Raises:
        GrowthModelError subclass describing the first problem found
    """
    if not _par_present(par, "log_sigma_1"):
        raise MissingNoiseParameterError()

    noise_profile = NoiseProfile.CONSTANT
    if _par_present(par, "log_sigma_2"):
        missing = [name for name in ("Lshort", "Llong") if not data.present(name)]
        if missing:
            raise MissingReferenceLengthsError(missing)
        noise_profile = NoiseProfile.LENGTH_VARYING

    if family.schnute:
        missing = [name for name in ("t1", "t2") if not data.present(name)]
        if missing:
            raise MissingReferenceAgesError(family.title, missing)

    otoliths_given = [name for name in OTOLITH_FIELDS if data.present(name)]
    has_otoliths = len(otoliths_given) == len(OTOLITH_FIELDS)
    if otoliths_given and not has_otoliths:
        warnings.warn(
            f"otolith data ignored: only {', '.join(otoliths_given)} supplied, "
            "need both Aoto and Loto",
            UserWarning, stacklevel=stacklevel
        )

    tags_given = [name for name in TAG_FIELDS if data.present(name)]
    tag_data_given = bool(tags_given)
    if _par_present(par, "log_age"):
        tags_given.append("log_age")
    has_tags = len(tags_given) == len(TAG_FIELDS) + 1
    # log_age alone is reported by build as an unused parameter
    if tag_data_given and not has_tags:
        warnings.warn(
            f"tagging data ignored: only {', '.join(tags_given)} supplied, "
            "need Lrel, Lrec, liberty and 'log_age' in 'par'",
            UserWarning, stacklevel=stacklevel
        )

    data_profile = DataProfile.from_subsets(has_otoliths, has_tags)
    if data_profile is None:
        raise NoUsableDataError()

    if has_tags and np.size(par["log_age"]) != data.n_tags:
        raise LatentAgeLengthError(np.size(par["log_age"]), data.n_tags)

    missing = [key for key in family.keys if not _par_present(par, key)]
    if missing:
        raise MissingCurveParameterError(family.title, missing)

    if has_otoliths and len(data.Aoto) != len(data.Loto):
        raise ObservationLengthError(
            "otolith", {name: len(getattr(data, name)) for name in OTOLITH_FIELDS})
    if has_tags and len({len(getattr(data, name)) for name in TAG_FIELDS}) > 1:
        raise ObservationLengthError(
            "tag", {name: len(getattr(data, name)) for name in TAG_FIELDS})

    return data_profile, noise_profile


# =============================================================================
# PARAMETER VECTOR
# =============================================================================

@dataclass(frozen=True)
class ParameterLayout:
    """
    Mapping between the named parameters and the flat vector seen by the
    optimizer. Fixed parameters stay at their initial values and are left
    out of the vector.
    """
    initial: Dict[str, np.ndarray]
    fixed: Tuple[str, ...] = ()

    @classmethod
    def from_par(cls, par: Mapping, keys: Iterable[str],
                 fixed: Iterable[str] = ()) -> 'ParameterLayout':
        initial = {key: np.asarray(par[key], dtype=float) for key in keys}
        fixed = tuple(fixed)
        unknown = [name for name in fixed if name not in initial]
        if unknown:
            raise UnknownParameterError(unknown)
        return cls(initial=initial, fixed=fixed)

    @property
    def free(self) -> List[str]:
        return [key for key in self.initial if key not in self.fixed]

    @property
    def par(self) -> np.ndarray:
        """Initial values of the free parameters, as one vector."""
        return np.concatenate(
            [np.ravel(self.initial[key]) for key in self.free] + [np.zeros(0)]
        )

    @property
    def names(self) -> List[str]:
        """Name of each element of the parameter vector."""
        names = []
        for key in self.free:
            names.extend([key] * self.initial[key].size)
        return names

    def unpack(self, x) -> Dict:
        """Split a parameter vector into named (JAX) arrays."""
        x = jnp.asarray(x)
        par = {}
        offset = 0
        for key, value in self.initial.items():
            if key in self.fixed:
                par[key] = jnp.asarray(value)
                continue
            par[key] = x[offset:offset + value.size].reshape(value.shape)
            offset += value.size
        return par


# =============================================================================
# BOUND MODEL
# =============================================================================

def _to_numpy(value):
    if value is None:
        return None
    value = np.asarray(value)
    return float(value) if value.ndim == 0 else value


@dataclass(frozen=True)
class GrowthModel:
    """
    A growth model bound to its data, ready for optimization.

    All methods take a free-parameter vector x (see par and
    parameter_names) and are pure: results never depend on earlier calls.
    """
    family: CurveFamily
    data: GrowthData
    layout: ParameterLayout
    data_profile: DataProfile
    noise_profile: NoiseProfile
    curve_ages: Optional[np.ndarray]
    objective: Callable = field(repr=False)       # x -> nll, traceable by JAX
    ad_function: Callable = field(repr=False)     # x -> ADREPORT vector
    _value: Callable = field(repr=False)
    _gradient: Callable = field(repr=False)
    _hessian: Callable = field(repr=False)
    _quantities: Callable = field(repr=False)

    @property
    def par(self) -> np.ndarray:
        """Initial free-parameter vector."""
        return self.layout.par

    @property
    def parameter_names(self) -> List[str]:
        return self.layout.names

    @property
    def ad_report_names(self) -> List[str]:
        """Name of each element of the ADREPORT vector."""
        if self.curve_ages is None:
            return []
        return ["curve"] * len(self.curve_ages)

    def _vector(self, x):
        x = jnp.asarray(x, dtype=float)
        if x.shape != (len(self.layout.names),):
            raise ValueError(
                f"parameter vector has shape {x.shape}, expected "
                f"({len(self.layout.names)},): {', '.join(self.layout.names)}"
            )
        return x

    def unpack(self, x) -> Dict[str, np.ndarray]:
        """Named parameters (fixed ones included) on the estimation scale."""
        par = self.layout.unpack(self._vector(x))
        return {key: _to_numpy(value) for key, value in par.items()}

    def value(self, x) -> float:
        """Negative log-likelihood at x."""
        return float(self._value(self._vector(x)))

    def gradient(self, x) -> np.ndarray:
        """Gradient of the negative log-likelihood at x (reverse mode)."""
        return np.asarray(self._gradient(self._vector(x)))

    def hessian(self, x) -> np.ndarray:
        return np.asarray(self._hessian(self._vector(x)))

    def report(self, x=None) -> Dict[str, object]:
        """
        Named quantities at x (initial values if x is None).

        Always: natural-scale curve parameters, sigma_1, sigma_2 (None for
        constant noise), Lshort, Llong and, for Schnute curves, t1 and t2.
        Otoliths: Aoto, Loto, Loto_hat, sigma_Loto, nll_Loto.
        Tags: age, liberty, Lrel, Lrec, Lrel_hat, Lrec_hat, sigma_Lrel,
        sigma_Lrec, nll_Lrel, nll_Lrec.
        Curve reporting on: curve.
        """
        x = self.par if x is None else x
        quantities = self._quantities(self._vector(x))
        report = {"sigma_2": None}
        report.update(data_quantities(self.family, self.data, self.data_profile))
        report.update({name: _to_numpy(value) for name, value in quantities.items()})
        return report

    def ad_report(self, x=None) -> Dict[str, np.ndarray]:
        """Quantities eligible for delta-method standard errors."""
        if self.curve_ages is None:
            return {}
        x = self.par if x is None else x
        return {"curve": np.asarray(self.ad_function(self._vector(x)))}


# =============================================================================
# BUILDERS
# =============================================================================

def build(par: Mapping, data: Union[GrowthData, Mapping], family="vonbert",
          fixed: Iterable[str] = (), report_curve: Optional[bool] = None,
          curve_ages: Optional[np.ndarray] = None) -> GrowthModel:
    """
    Validate parameters and data and bind them into a GrowthModel.

    Args:
        par: Initial values, e.g. log_L1, log_L2, log_k, log_sigma_1,
            optional log_sigma_2 and log_age
        data: GrowthData or a mapping with the same keys
        family: 'vonbert', 'gompertz', 'richards' or a CurveFamily
        fixed: Parameters held at their initial values
        report_curve: Report the predicted curve and make it available for
            sdreport; None uses the family default (on for von Bertalanffy)
        curve_ages: Ages for the reported curve (default 0-10 years, daily)

    Returns:
        GrowthModel

    Raises:
        GrowthModelError: parameters and data do not form a usable model
    """
    return _build(par, data, family, fixed, report_curve, curve_ages, stacklevel=3)


def _build(par, data, family, fixed=(), report_curve=None, curve_ages=None,
           stacklevel=3):
    # stacklevel: frame of the user code calling build or a family constructor
    family = get_family(family)
    if not isinstance(data, GrowthData):
        data = GrowthData.from_mapping(data)

    data_profile, noise_profile = validate(par, data, family, stacklevel=stacklevel + 1)

    keys = list(family.keys) + ["log_sigma_1"]
    if noise_profile is NoiseProfile.LENGTH_VARYING:
        keys.append("log_sigma_2")
    if data_profile.has_tags:
        keys.append("log_age")
    unused = [key for key in par if key not in keys]
    if unused:
        warnings.warn(
            f"parameters not used by the {family.title} model: {', '.join(unused)}",
            UserWarning, stacklevel=stacklevel
        )
    layout = ParameterLayout.from_par(par, keys, fixed)

    if report_curve is None:
        report_curve = family.report_curve
    if report_curve:
        curve_ages = CURVE_AGES if curve_ages is None else np.asarray(curve_ages, dtype=float)
    else:
        curve_ages = None

    def evaluate(x):
        return negative_log_likelihood(family, layout.unpack(x), data,
                                       data_profile, noise_profile, curve_ages)

    def objective(x):
        return evaluate(x)[0]

    def quantities(x):
        return evaluate(x)[1]

    def ad_function(x):
        return quantities(x)["curve"]

    logger.debug("Built %s model (%s, %s noise) with %d free parameters",
                 family.title, data_profile.value, noise_profile.value,
                 len(layout.names))

    return GrowthModel(
        family=family,
        data=data,
        layout=layout,
        data_profile=data_profile,
        noise_profile=noise_profile,
        curve_ages=curve_ages,
        objective=objective,
        ad_function=ad_function,
        _value=jax.jit(objective),
        _gradient=jax.jit(jax.grad(objective)),
        _hessian=jax.jit(jax.hessian(objective)),
        _quantities=jax.jit(quantities),
    )


def vonbert(par: Mapping, data, **kwargs) -> GrowthModel:
    """von Bertalanffy model (Schnute parametrization); needs t1, t2."""
    return _build(par, data, "vonbert", stacklevel=3, **kwargs)


def gompertz(par: Mapping, data, **kwargs) -> GrowthModel:
    """Gompertz model (traditional parametrization)."""
    return _build(par, data, "gompertz", stacklevel=3, **kwargs)


def richards(par: Mapping, data, **kwargs) -> GrowthModel:
    """Richards model (Schnute parametrization); needs t1, t2."""
    return _build(par, data, "richards", stacklevel=3, **kwargs)
