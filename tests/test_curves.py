"""
Tests for fishgrowth.curves module.
"""

import jax
import numpy as np
import pytest

from fishgrowth.curves import gompertz_curve, richards_curve, schnute_ratio, vonbert_curve


class TestVonBertCurve:
    """Tests for the von Bertalanffy curve."""

    def test_reference_points(self):
        """Test curve passes through (t1, L1) and (t2, L2)."""
        assert float(vonbert_curve(0.0, 25, 75, 0.8, 0.0, 4.0)) == pytest.approx(25)
        assert float(vonbert_curve(4.0, 25, 75, 0.8, 0.0, 4.0)) == pytest.approx(75)

    def test_nonzero_t1(self):
        """Test reference points when t1 is not zero."""
        assert float(vonbert_curve(1.0, 30, 60, 0.5, 1.0, 3.0)) == pytest.approx(30)
        assert float(vonbert_curve(3.0, 30, 60, 0.5, 1.0, 3.0)) == pytest.approx(60)

    def test_vectorized(self):
        """Test elementwise evaluation keeps the shape of t."""
        t = np.linspace(0, 10, 11)
        L = np.asarray(vonbert_curve(t, 25, 75, 0.8, 0.0, 4.0))
        assert L.shape == t.shape
        assert np.all(np.diff(L) > 0)

    def test_asymptote(self):
        """Test L(inf) = L1 + (L2-L1) / (1 - exp(-k(t2-t1)))."""
        Linf = 25 + 50 / (1 - np.exp(-0.8 * 4))
        assert float(vonbert_curve(200.0, 25, 75, 0.8, 0.0, 4.0)) == pytest.approx(Linf)

    def test_extrapolates_below_t1(self):
        """Test negative ages give lengths below L1."""
        assert float(vonbert_curve(-0.5, 25, 75, 0.8, 0.0, 4.0)) < 25

    def test_k_zero_not_guarded(self):
        """Test k = 0 propagates a non-finite value instead of raising."""
        assert np.isnan(float(vonbert_curve(1.0, 25.0, 75.0, 0.0, 0.0, 4.0)))

    def test_gradient_finite(self):
        """Test JAX gradient with respect to k is finite."""
        dk = jax.grad(lambda k: vonbert_curve(2.0, 25.0, 75.0, k, 0.0, 4.0))(0.8)
        assert np.isfinite(float(dk))


class TestSchnuteRatio:
    """Tests for the Schnute growth fraction."""

    def test_endpoints(self):
        """Test ratio is 0 at t1 and 1 at t2."""
        assert float(schnute_ratio(1.0, 0.3, 1.0, 5.0)) == pytest.approx(0)
        assert float(schnute_ratio(5.0, 0.3, 1.0, 5.0)) == 1.0


class TestGompertzCurve:
    """Tests for the traditional Gompertz curve."""

    def test_at_age_zero(self):
        """Test L(0) = Linf exp(-exp(k tau))."""
        Linf, k, tau = 80.0, 1.2, 1.0
        expected = Linf * np.exp(-np.exp(k * tau))
        assert float(gompertz_curve(0.0, Linf, k, tau)) == pytest.approx(expected)

    def test_inflection(self):
        """Test L(tau) = Linf / e."""
        assert float(gompertz_curve(1.0, 80.0, 1.2, 1.0)) == pytest.approx(80 / np.e)

    def test_asymptote(self):
        """Test curve approaches Linf."""
        assert float(gompertz_curve(50.0, 80.0, 1.2, 1.0)) == pytest.approx(80.0)

    def test_negative_tau(self):
        """Test tau is unconstrained."""
        L = np.asarray(gompertz_curve(np.array([0.0, 1.0]), 80.0, 1.2, -0.5))
        assert np.all(np.isfinite(L))
        assert L[1] > L[0]


class TestRichardsCurve:
    """Tests for the Richards curve."""

    def test_reference_points(self):
        """Test curve passes through (t1, L1) and (t2, L2)."""
        assert float(richards_curve(0.5, 30, 70, 0.9, 0.4, 0.5, 3.0)) == pytest.approx(30)
        assert float(richards_curve(3.0, 30, 70, 0.9, 0.4, 0.5, 3.0)) == pytest.approx(70)

    def test_b_one_is_vonbert(self):
        """Test b = 1 reduces to von Bertalanffy."""
        t = np.linspace(0, 8, 17)
        np.testing.assert_allclose(
            np.asarray(richards_curve(t, 25, 75, 0.8, 1.0, 0.0, 4.0)),
            np.asarray(vonbert_curve(t, 25, 75, 0.8, 0.0, 4.0)),
            rtol=1e-12
        )

    @pytest.mark.parametrize("b", [1e-4, 1e-6])
    def test_small_b_approaches_gompertz(self, b):
        """Test b -> 0 converges to the Gompertz curve with matched parameters."""
        Linf, k, tau = 80.0, 1.2, 1.0
        t1, t2 = 0.5, 3.0
        L1 = float(gompertz_curve(t1, Linf, k, tau))
        L2 = float(gompertz_curve(t2, Linf, k, tau))
        t = np.linspace(0, 6, 25)

        np.testing.assert_allclose(
            np.asarray(richards_curve(t, L1, L2, k, b, t1, t2)),
            np.asarray(gompertz_curve(t, Linf, k, tau)),
            rtol=1e-3
        )

