"""
Growth curves: predicted length at age.

All curves are elementwise in t and written with jax.numpy so that
gradients flow through every parameter. They accept numpy arrays, JAX
arrays, or Python scalars.

Singular points are not guarded: k = 0 (removable singularity in the
Schnute ratio) and b = 0 (Richards) return non-finite values.
"""

import jax.numpy as jnp


def schnute_ratio(t, k, t1, t2):
    """
    Fraction of growth between t1 and t2 reached at age t.

        (1 - exp(-k(t-t1))) / (1 - exp(-k(t2-t1)))

    Equal to 0 at t1 and 1 at t2.
    """
    return (1 - jnp.exp(-k * (t - t1))) / (1 - jnp.exp(-k * (t2 - t1)))


def vonbert_curve(t, L1, L2, k, t1, t2):
    """
    von Bertalanffy (1938) growth, Schnute and Fournier (1980) form.

    L(t) = L1 + (L2-L1) (1 - exp(-k(t-t1))) / (1 - exp(-k(t2-t1)))

    Args:
        t: Age (scalar or vector)
        L1: Predicted length at age t1
        L2: Predicted length at age t2
        k: Growth coefficient
        t1, t2: Reference ages

    Returns:
        Predicted length, same shape as t
    """
    return L1 + (L2 - L1) * schnute_ratio(t, k, t1, t2)


def gompertz_curve(t, Linf, k, tau):
    """
    Gompertz (1825) growth, traditional form (Ricker 1979, Eq. 23).

    L(t) = Linf exp(-exp(-k(t-tau)))
    """
    return Linf * jnp.exp(-jnp.exp(-k * (t - tau)))


def richards_curve(t, L1, L2, k, b, t1, t2):
    """
    Richards (1959) growth, Schnute (1981) form.

    L(t) = (L1^b + (L2^b - L1^b) (1 - exp(-k(t-t1))) / (1 - exp(-k(t2-t1))))^(1/b)

    b = 1 reduces to von Bertalanffy; the b -> 0 limit is Gompertz.
    """
    return (L1 ** b + (L2 ** b - L1 ** b) * schnute_ratio(t, k, t1, t2)) ** (1 / b)
