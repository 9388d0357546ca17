"""
fishgrowth - Fish Growth Models for Otoliths and Tags
=====================================================

This package fits growth curves to fish length data by maximum likelihood,
combining two kinds of observations:

    otoliths    (age, length) pairs read from hard parts
    tags        length at release and at recapture after a known time at
                liberty; the age at release is estimated (log_age)

Growth curves:
    vonbert     von Bertalanffy, Schnute parametrization (L1, L2, k)
    gompertz    Gompertz, traditional parametrization (Linf, k, tau)
    richards    Richards, Schnute parametrization (L1, L2, k, b)

The standard deviation of length is either constant (sigma_1) or varies
linearly with length, passing through sigma_1 at Lshort and sigma_2 at Llong.

WORKFLOW:
=========
1. Build a model from initial parameters and data (validated once)
2. Minimize model.value with any optimizer, using model.gradient
3. Retrieve model.report(x) and, for uncertainty, sdreport(model, x)

Gradients and Hessians come from JAX; float64 is enabled on import.
"""

import jax

jax.config.update("jax_enable_x64", True)

__version__ = "0.1.0"

# Errors
from .errors import (
    GrowthModelError,
    MissingNoiseParameterError,
    MissingReferenceLengthsError,
    MissingReferenceAgesError,
    NoUsableDataError,
    LatentAgeLengthError,
    MissingCurveParameterError,
    ObservationLengthError,
    UnknownParameterError,
)

# Data structures
from .models import (
    DataProfile,
    NoiseProfile,
    GrowthData,
    VonBertParameters,
    GompertzParameters,
    RichardsParameters,
    NoiseParameters,
    initial_parameters,
)

# Curves and noise
from .curves import vonbert_curve, gompertz_curve, richards_curve
from .noise import NoiseModel
from .families import CurveFamily, FAMILIES, get_family

# Likelihood and model construction
from .likelihood import CURVE_AGES, negative_log_likelihood
from .builder import GrowthModel, build, validate, vonbert, gompertz, richards

# Uncertainty and reporting
from .uncertainty import SDReport, sdreport
from .reporting import otolith_frame, tag_frame, parameter_frame

# Synthetic data
from .simulate import predict_length, create_synthetic_otoliths, create_synthetic_tags

__all__ = [
    "__version__",
    # Errors
    "GrowthModelError",
    "MissingNoiseParameterError",
    "MissingReferenceLengthsError",
    "MissingReferenceAgesError",
    "NoUsableDataError",
    "LatentAgeLengthError",
    "MissingCurveParameterError",
    "ObservationLengthError",
    "UnknownParameterError",
    # Data structures
    "DataProfile",
    "NoiseProfile",
    "GrowthData",
    "VonBertParameters",
    "GompertzParameters",
    "RichardsParameters",
    "NoiseParameters",
    "initial_parameters",
    # Curves and noise
    "vonbert_curve",
    "gompertz_curve",
    "richards_curve",
    "NoiseModel",
    "CurveFamily",
    "FAMILIES",
    "get_family",
    # Model
    "CURVE_AGES",
    "negative_log_likelihood",
    "GrowthModel",
    "build",
    "validate",
    "vonbert",
    "gompertz",
    "richards",
    # Uncertainty and reporting
    "SDReport",
    "sdreport",
    "otolith_frame",
    "tag_frame",
    "parameter_frame",
    # Synthetic data
    "predict_length",
    "create_synthetic_otoliths",
    "create_synthetic_tags",
]
