"""
Negative log-likelihood of growth models
========================================

One aggregator serves every curve family. Given log-scale parameters it

1. transforms them to natural scale using the family's parameter table,
2. builds the noise model sd(L) = intercept + slope * L,
3. compares observed and predicted lengths for each subset present:

       nll_Loto <- -log N(Loto; Loto_hat, sigma_Loto)
       nll_Lrel <- -log N(Lrel; Lrel_hat, sigma_Lrel)
       nll_Lrec <- -log N(Lrec; Lrec_hat, sigma_Lrec)
       nll      <- sum(nll_Loto) + sum(nll_Lrel) + sum(nll_Lrec)

Which subsets are present and which noise model applies are decided once at
build time (DataProfile, NoiseProfile); nothing here branches on parameter
values, so the whole function is differentiable with JAX.
"""

from typing import Dict, Optional, Tuple

import jax.numpy as jnp
import numpy as np
from jax.scipy.stats import norm

from .families import CurveFamily
from .models import DataProfile, GrowthData, NoiseProfile
from .noise import NoiseModel

# Age 0-10 years, day by day
CURVE_AGES = np.linspace(0.0, 10.0, 10 * 365 + 1)


def gaussian_nll(observed, predicted, sigma):
    """Per-observation negative log density of N(predicted, sigma)."""
    return -norm.logpdf(observed, loc=predicted, scale=sigma)


def negative_log_likelihood(family: CurveFamily, par: Dict, data: GrowthData,
                            data_profile: DataProfile,
                            noise_profile: NoiseProfile,
                            curve_ages: Optional[np.ndarray] = None) -> Tuple[object, Dict]:
    """
    Evaluate the objective and the quantities derived from it.

    Args:
        family: Growth curve family
        par: Mapping of parameter names to (log-scale) values
        data: Validated observations and reference constants
        data_profile: Subsets to include
        noise_profile: Constant or length-varying sd
        curve_ages: Ages at which to report the predicted curve (optional)

    Returns:
        nll: Total negative log-likelihood (scalar)
        quantities: Natural-scale parameters, predictions, sd and
            per-observation nll for every included subset, plus 'curve'
            when curve_ages is given
    """
    natural = family.natural(par)
    sigma_1 = jnp.exp(par["log_sigma_1"])
    sigma_2 = None
    if noise_profile is NoiseProfile.LENGTH_VARYING:
        sigma_2 = jnp.exp(par["log_sigma_2"])
    noise = NoiseModel.for_profile(noise_profile, sigma_1, sigma_2,
                                   data.Lshort, data.Llong)

    def predict(t):
        return family.predict(t, natural, data.t1, data.t2)

    quantities = dict(natural)
    quantities["sigma_1"] = sigma_1
    if sigma_2 is not None:
        quantities["sigma_2"] = sigma_2

    nll = 0.0

    # Otoliths
    if data_profile.has_otoliths:
        Loto_hat = predict(data.Aoto)
        sigma_Loto = noise(Loto_hat)
        nll_Loto = gaussian_nll(data.Loto, Loto_hat, sigma_Loto)
        nll = nll + jnp.sum(nll_Loto)
        quantities.update(Loto_hat=Loto_hat, sigma_Loto=sigma_Loto,
                          nll_Loto=nll_Loto)

    # Tags
    if data_profile.has_tags:
        age = jnp.exp(par["log_age"])
        Lrel_hat = predict(age)
        Lrec_hat = predict(age + data.liberty)
        sigma_Lrel = noise(Lrel_hat)
        sigma_Lrec = noise(Lrec_hat)
        nll_Lrel = gaussian_nll(data.Lrel, Lrel_hat, sigma_Lrel)
        nll_Lrec = gaussian_nll(data.Lrec, Lrec_hat, sigma_Lrec)
        nll = nll + jnp.sum(nll_Lrel) + jnp.sum(nll_Lrec)
        quantities.update(age=age, Lrel_hat=Lrel_hat, Lrec_hat=Lrec_hat,
                          sigma_Lrel=sigma_Lrel, sigma_Lrec=sigma_Lrec,
                          nll_Lrel=nll_Lrel, nll_Lrec=nll_Lrec)

    if curve_ages is not None:
        quantities["curve"] = predict(curve_ages)

    return nll, quantities


def data_quantities(family: CurveFamily, data: GrowthData,
                    data_profile: DataProfile) -> Dict:
    """Observed inputs and reference constants to report alongside estimates."""
    quantities = {"Lshort": data.Lshort, "Llong": data.Llong}
    if family.schnute:
        quantities.update(t1=data.t1, t2=data.t2)
    if data_profile.has_otoliths:
        quantities.update(Aoto=data.Aoto, Loto=data.Loto)
    if data_profile.has_tags:
        quantities.update(Lrel=data.Lrel, Lrec=data.Lrec, liberty=data.liberty)
    return quantities
