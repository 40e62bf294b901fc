#!/usr/bin/env python3
"""
Validation tests for electrolyte module.
"""

import sys
import os
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))
import pyhlsdesal.electrolyte as electrolyte
from pyhlsdesal.classes import UnknownSpecies

SALTS = ['NaCl', 'KCl', 'MgCl2']

def test_roundtrip_all_salts():
    """Salinity -> X -> salinity reproduces input across (0, 100)"""
    for salt in SALTS:
        for s in np.linspace(0.01, 99.99, 400):
            x = electrolyte.x_from_salinity(s, salt)
            s_back = electrolyte.salinity_from_x(x, salt)
            assert abs(s_back - s) / s < 1e-9, f"{salt}: {s} -> {x} -> {s_back}"

def test_roundtrip_vectorised():
    """Array inputs round trip and return arrays"""
    s = np.array([1.0, 3.5, 8.0, 20.0])
    x = electrolyte.x_from_salinity(s, 'KCl')
    assert isinstance(x, np.ndarray) and x.shape == s.shape
    assert np.allclose(electrolyte.salinity_from_x(x, 'KCl'), s, rtol=1e-9)

def test_nacl_x_value():
    """8 wt% NaCl by hand: 2*(8/58.44) / ((92/18.01528) + 2*(8/58.44))"""
    ms = 8 / 58.44
    mw = 92 / 18.01528
    expected = 2 * ms / (mw + 2 * ms)
    assert abs(electrolyte.x_from_salinity(8, 'NaCl') - expected) < 1e-14

def test_mgcl2_weighting():
    """MgCl2 X uses 4 * moles salt over water + 3 * moles salt"""
    ms = 5 / 95.21
    mw = 95 / 18.01528
    expected = 4 * ms / (mw + 3 * ms)
    assert abs(electrolyte.x_from_salinity(5, 'MgCl2') - expected) < 1e-14

def test_x_increases_with_salinity():
    for salt in SALTS:
        x = electrolyte.x_from_salinity(np.linspace(0.1, 30, 50), salt)
        assert np.all(np.diff(x) > 0), f"X should increase with salinity for {salt}"

def test_zero_salinity():
    assert electrolyte.x_from_salinity(0, 'NaCl') == 0
    assert electrolyte.salinity_from_x(0, 'MgCl2') == 0

def test_salt_key_case_insensitive():
    assert electrolyte.x_from_salinity(3.5, 'nacl') == electrolyte.x_from_salinity(3.5, 'NaCl')

def test_mol_pct():
    """Ionic mol% for 8 wt% NaCl matches X x 100 for a 1:1 salt"""
    mol_pct = electrolyte.salinity_mol_pct(8, 'NaCl')
    assert abs(mol_pct - 100 * electrolyte.x_from_salinity(8, 'NaCl')) < 1e-12

def test_unknown_salt():
    with pytest.raises(UnknownSpecies):
        electrolyte.x_from_salinity(3.5, 'CaSO4')
    with pytest.raises(UnknownSpecies):
        electrolyte.salinity_from_x(0.01, 'LiBr')
