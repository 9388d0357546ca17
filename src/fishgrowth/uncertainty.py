"""
Standard errors of estimates and derived quantities.

The covariance of the free parameters is the inverse Hessian of the negative
log-likelihood at the estimate. Derived (ADREPORT) quantities such as the
predicted curve get standard errors by the delta method:

    Cov(g) = J Cov(x) J^T,    J = dg/dx

with J computed by forward-mode automatic differentiation.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import jax
import jax.numpy as jnp
import numpy as np
import pandas as pd
from scipy import stats

from .builder import GrowthModel

logger = logging.getLogger(__name__)


@dataclass
class SDReport:
    """Estimates, standard errors and covariances after a fit"""
    names: List[str]                     # Name of each free parameter
    estimate: np.ndarray                 # Free parameters at the optimum
    cov: np.ndarray                      # Covariance of free parameters
    sd: np.ndarray                       # Standard errors of free parameters
    gradient: np.ndarray                 # Gradient at the optimum
    pd_hessian: bool                     # Hessian positive definite?
    ad_names: List[str]                  # Name of each ADREPORT element
    ad_value: np.ndarray                 # ADREPORT values
    ad_sd: np.ndarray                    # ADREPORT standard errors
    ad_cov: Optional[np.ndarray] = None  # ADREPORT covariance (if requested)

    @property
    def max_gradient(self) -> float:
        """Largest absolute gradient component (convergence check)"""
        return float(np.max(np.abs(self.gradient))) if self.gradient.size else 0.0

    def summary(self, level: float = 0.95, select: str = "all") -> pd.DataFrame:
        """
        Table of estimates with normal confidence limits.

        Args:
            level: Confidence level
            select: 'fixed' (free parameters), 'report' (ADREPORT) or 'all'

        Returns:
            DataFrame with columns estimate, std_error, lower, upper
        """
        if select not in ("fixed", "report", "all"):
            raise ValueError("select must be 'fixed', 'report' or 'all'")
        names, estimate, sd = [], [], []
        if select in ("fixed", "all"):
            names += self.names
            estimate.append(self.estimate)
            sd.append(self.sd)
        if select in ("report", "all"):
            names += self.ad_names
            estimate.append(self.ad_value)
            sd.append(self.ad_sd)
        estimate = np.concatenate(estimate + [np.zeros(0)])
        sd = np.concatenate(sd + [np.zeros(0)])

        z = stats.norm.ppf(0.5 + level / 2)
        return pd.DataFrame({
            "name": names,
            "estimate": estimate,
            "std_error": sd,
            "lower": estimate - z * sd,
            "upper": estimate + z * sd,
        })


def sdreport(model: GrowthModel, x, report_covariance: bool = False) -> SDReport:
    """
    Compute standard errors at a fitted parameter vector.

    Args:
        model: GrowthModel
        x: Free parameters at the optimum
        report_covariance: Also return the full ADREPORT covariance, which
            for the daily curve is a 3651 x 3651 matrix

    Returns:
        SDReport

    Raises:
        numpy.linalg.LinAlgError: if the Hessian is singular
    """
    x = np.asarray(x, dtype=float)
    hessian = model.hessian(x)
    gradient = model.gradient(x)

    pd_hessian = bool(np.all(np.linalg.eigvalsh(hessian) > 0))
    if not pd_hessian:
        logger.warning("Hessian of the %s model is not positive definite; "
                       "standard errors are unreliable", model.family.title)
    cov = np.linalg.inv(hessian)
    sd = np.sqrt(np.diag(cov))

    ad_cov = None
    if model.curve_ages is not None:
        ad_value = np.asarray(model.ad_function(jnp.asarray(x)))
        jacobian = np.asarray(jax.jacfwd(model.ad_function)(jnp.asarray(x)))
        if report_covariance:
            ad_cov = jacobian @ cov @ jacobian.T
            ad_sd = np.sqrt(np.diag(ad_cov))
        else:
            # diag(J C J^T) without forming the full matrix
            ad_sd = np.sqrt(np.einsum("ij,jk,ik->i", jacobian, cov, jacobian))
    else:
        ad_value = np.zeros(0)
        ad_sd = np.zeros(0)

    logger.debug("sdreport: %d parameters, %d derived quantities, max |gradient| %.3g",
                 len(x), len(ad_value), np.max(np.abs(gradient)) if gradient.size else 0.0)

    return SDReport(
        names=model.parameter_names,
        estimate=x,
        cov=cov,
        sd=sd,
        gradient=gradient,
        pd_hessian=pd_hessian,
        ad_names=model.ad_report_names,
        ad_value=ad_value,
        ad_sd=ad_sd,
        ad_cov=ad_cov,
    )
