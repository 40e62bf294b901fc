#!/usr/bin/env python3
"""
Validation tests for hls module (activity correlation, equilibrium shift, X inversion).
"""

import sys
import os
import numpy as np

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))
import pyhlsdesal.hls as hls
from pyhlsdesal.library import custom_gas

def test_lnaw_zero_at_pure_water():
    assert hls.lnaw_from_x(0.0) == 0.0

def test_lnaw_strictly_decreasing():
    """ln(aw) strictly decreasing on [0, 0.3]"""
    x = np.linspace(0, 0.3, 3001)
    assert np.all(np.diff(hls.lnaw_from_x(x)) < 0)

def test_lnaw_value():
    x = 0.05
    expected = -1.06152 * x + 3.25726 * x ** 2 - 37.2263 * x ** 3
    assert abs(hls.lnaw_from_x(x) - expected) < 1e-15

def test_x_from_lnaw_roundtrip():
    """Bisection inverse recovers X on (0, 0.3)"""
    for x in np.linspace(0.001, 0.299, 150):
        x_back = hls.x_from_lnaw(hls.lnaw_from_x(x))
        assert abs(x_back - x) < 1e-6, f"X={x} -> {x_back}"

def test_x_from_lnaw_expands_bracket():
    """Targets below ln(aw)(0.2) require bracket expansion"""
    x = 0.27
    assert abs(hls.x_from_lnaw(hls.lnaw_from_x(x)) - x) < 1e-9

def test_delta_t_inverse():
    """lnaw_from_delta_t inverts delta_t"""
    beta = -0.9115e-3
    for t0 in [273.4, 282.3, 286.4]:
        for lnaw in [-0.001, -0.02, -0.05, -0.12]:
            dT = hls.delta_t(beta, lnaw, t0)
            assert dT > 0
            assert abs(hls.lnaw_from_delta_t(beta, dT, t0) - lnaw) < 1e-9

def test_lnaw_from_delta_t_singular():
    """dT equal to T0 gives a non-finite result rather than an exception"""
    val = hls.lnaw_from_delta_t(-0.9e-3, 280.0, 280.0)
    assert not np.isfinite(val)

def test_t_hls_equals_t_minus_dt():
    assert abs(hls.t_hls(5.0, 282.3) - 277.3) < 1e-9

def test_beta_structure_one():
    """sI gases are never corrected"""
    assert abs(hls.beta_effective('CH4', True) - -0.9115e-3) < 1e-15
    assert hls.beta_effective('CH4', True) == hls.beta_effective('CH4', False)

def test_beta_structure_two_alpha():
    """sII beta scaled by 0.927 only when enabled"""
    assert abs(hls.beta_effective('C3H8', False) - -1.0582e-3) < 1e-15
    assert abs(hls.beta_effective('C3H8', True) - -1.0582e-3 * 0.927) < 1e-15
    assert hls.alpha('CP', True) == 0.927
    assert hls.alpha('CP', False) == 1.0

def test_beta_custom_gas():
    g = custom_gas('SII', -1.1, [[274, 0.3], [276, 0.4]])
    assert abs(hls.beta_effective(g, True) - -1.1e-3 * 0.927) < 1e-15
