"""
Shared pytest fixtures for the fishgrowth test suite.

The reference fish grows along a von Bertalanffy curve with L1=25 at t1=0,
L2=75 at t2=4 and k=0.8.
"""

import numpy as np
import pytest

from fishgrowth.models import GrowthData, NoiseParameters, VonBertParameters, initial_parameters
from fishgrowth.simulate import create_synthetic_otoliths, create_synthetic_tags


@pytest.fixture
def true_vonbert():
    """True von Bertalanffy parameters."""
    return VonBertParameters(L1=25.0, L2=75.0, k=0.8)


@pytest.fixture
def otolith_ages():
    """Otolith ages spanning 0.25-6 years."""
    return np.linspace(0.25, 6.0, 24)


@pytest.fixture
def release_ages():
    """True ages at release of tagged fish."""
    return np.array([0.6, 0.9, 1.2, 1.5, 1.8, 2.1, 2.6, 3.0])


@pytest.fixture
def liberty():
    """Time at liberty (years) of tagged fish."""
    return np.array([0.3, 0.5, 0.8, 0.4, 1.0, 0.6, 0.9, 1.5])


@pytest.fixture
def exact_otoliths(true_vonbert, otolith_ages):
    """Otoliths lying exactly on the true curve."""
    return create_synthetic_otoliths(true_vonbert, otolith_ages, sigma=0.0, t1=0.0, t2=4.0)


@pytest.fixture
def exact_tags(true_vonbert, release_ages, liberty):
    """Tag records generated without observation error."""
    return create_synthetic_tags(true_vonbert, release_ages, liberty, sigma=0.0, t1=0.0, t2=4.0)


@pytest.fixture
def combined_data(exact_otoliths, exact_tags):
    """Exact otoliths and tags, with reference lengths for sd(length)."""
    return GrowthData(
        Aoto=exact_otoliths.Aoto, Loto=exact_otoliths.Loto,
        Lrel=exact_tags.Lrel, Lrec=exact_tags.Lrec, liberty=exact_tags.liberty,
        t1=0.0, t2=4.0, Lshort=30.0, Llong=60.0
    )


@pytest.fixture
def noisy_otoliths(true_vonbert):
    """Otoliths with sd(length) = 2."""
    ages = np.linspace(0.25, 6.0, 120)
    return create_synthetic_otoliths(true_vonbert, ages, sigma=2.0, t1=0.0, t2=4.0, seed=7)


@pytest.fixture
def vonbert_par():
    """Initial values near the truth, constant sd."""
    return initial_parameters(VonBertParameters(L1=20.0, L2=70.0, k=0.5),
                              NoiseParameters(sigma_1=1.0))


@pytest.fixture
def vonbert_par_tags(vonbert_par, release_ages):
    """Initial values including (perturbed) ages at release."""
    par = dict(vonbert_par)
    par["log_age"] = np.log(release_ages * 1.2)
    return par
