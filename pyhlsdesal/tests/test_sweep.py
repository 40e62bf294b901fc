#!/usr/bin/env python3
"""
Validation tests for sweep module (supercooling sweeps and salinity x temperature grids).
"""

import sys
import os
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))
import pyhlsdesal.sweep as sweep
from pyhlsdesal.library import custom_gas
from pyhlsdesal.classes import NoFeasiblePoints, InvalidRange, UnknownSpecies, NoReferenceData

P_CH4 = 6.65

# =============================================================================
# Supercooling sweep
# =============================================================================

def test_sweep_ch4_nacl():
    """CH4 / NaCl / 8 wt% over 0.5-5 K extra supercooling"""
    res = sweep.supercooling_sweep('CH4', 'NaCl', salinity=8, dt_min=0.5, dt_max=5, p=P_CH4)
    assert len(res.table) > 0
    assert res.mas > 8, f"MAS = {res.mas}"
    assert 0 < res.mwy < 100, f"MWY = {res.mwy}"
    assert 3 < res.dT_init < 4.5, f"Initial supercooling = {res.dT_init}"
    assert abs(res.dT_extra_max - 5) < 1e-12
    assert res.n_dropped == 0

def test_sweep_headline_is_last_row():
    res = sweep.supercooling_sweep('CH4', 'NaCl', salinity=8, dt_min=0.5, dt_max=5, p=P_CH4)
    assert res.mas == res.table['MAS'].iloc[-1]
    assert res.mwy == res.table['MWY'].iloc[-1]
    assert abs(res.t_mas - (res.t0 - res.dT_total)) < 1e-12
    assert abs(res.t_init - (res.t0 - res.dT_init)) < 1e-12

def test_sweep_wider_range_not_lower():
    """Extending the supercooling range does not reduce MAS"""
    r5 = sweep.supercooling_sweep('CH4', 'NaCl', salinity=8, dt_min=0.5, dt_max=5, p=P_CH4)
    r10 = sweep.supercooling_sweep('CH4', 'NaCl', salinity=8, dt_min=0.5, dt_max=10, p=P_CH4)
    assert r10.mas >= r5.mas
    assert r10.mwy >= r5.mwy

def test_sweep_monotone_and_ordered():
    res = sweep.supercooling_sweep('CH4', 'NaCl', salinity=8, dt_min=0.5, dt_max=5, p=P_CH4)
    t = res.table
    assert np.all(np.diff(t['dT_extra']) > 0)
    assert np.all(np.diff(t['MAS']) > 0)
    assert np.all(np.diff(t['MWY']) > 0)
    assert np.all(t['lnaw'] < 0)
    assert np.all(t['dT_total'] < res.t0)

def test_sweep_salt_conserved():
    """Every point carries the initial 8 g of salt and 92 g of water"""
    res = sweep.supercooling_sweep('CH4', 'NaCl', salinity=8, dt_min=0.5, dt_max=5, p=P_CH4)
    t = res.table
    assert np.all(t['salt_g'] == 8)
    assert np.all(t['water_g'] == 92)
    assert np.allclose(t['water_solution_g'] + t['water_hydrate_g'], 92)
    assert np.allclose(100 * 8 / (8 + t['water_solution_g']), t['MAS'])

def test_sweep_point_consistency():
    """Each row's MAS maps back to its own ln(aw) and total supercooling"""
    import pyhlsdesal.hls as hls
    import pyhlsdesal.electrolyte as electrolyte
    res = sweep.supercooling_sweep('CO2', 'KCl', salinity=3.5, dt_min=0, dt_max=6, p=2.5)
    for _, row in res.table.iterrows():
        x = electrolyte.x_from_salinity(row['MAS'], 'KCl')
        assert abs(hls.lnaw_from_x(x) - row['lnaw']) < 1e-9
        assert abs(hls.delta_t(res.beta, row['lnaw'], res.t0) - row['dT_total']) < 1e-6

def test_sweep_swaps_inverted_range():
    a = sweep.supercooling_sweep('CH4', 'NaCl', salinity=8, dt_min=5, dt_max=0.5, p=P_CH4)
    b = sweep.supercooling_sweep('CH4', 'NaCl', salinity=8, dt_min=0.5, dt_max=5, p=P_CH4)
    assert a.mas == b.mas

def test_sweep_drops_points_beyond_t0():
    """Steps with total supercooling at or above T0 never appear"""
    res = sweep.supercooling_sweep('CH4', 'NaCl', salinity=8, dt_min=0.5, dt_max=400, p=P_CH4)
    assert np.all(res.table['dT_total'] < res.t0)
    assert res.n_dropped > 0
    assert len(res.table) + res.n_dropped == 50

def test_sweep_no_feasible_points():
    with pytest.raises(NoFeasiblePoints):
        sweep.supercooling_sweep('CH4', 'NaCl', salinity=8, dt_min=300, dt_max=400, p=P_CH4)

def test_sweep_rejects_bad_inputs():
    with pytest.raises(InvalidRange):
        sweep.supercooling_sweep('CH4', 'NaCl', salinity=0, p=P_CH4)
    with pytest.raises(InvalidRange):
        sweep.supercooling_sweep('CH4', 'NaCl', salinity=100, p=P_CH4)
    with pytest.raises(InvalidRange):
        sweep.supercooling_sweep('CH4', 'NaCl', salinity=8, p=-1)
    with pytest.raises(InvalidRange):
        sweep.supercooling_sweep('CH4', 'NaCl', salinity=8, dt_max=float('nan'), p=P_CH4)
    with pytest.raises(UnknownSpecies):
        sweep.supercooling_sweep('Xe', 'NaCl', salinity=8, p=P_CH4)

def test_sweep_default_pressure():
    res = sweep.supercooling_sweep('CH4', 'NaCl', salinity=8)
    assert res.p == 5.77

def test_sweep_fixed_reference_gas():
    """CP T0 does not depend on requested pressure or fit method"""
    a = sweep.supercooling_sweep('CP', 'NaCl', salinity=3.5, p=5.0, method='POLY')
    b = sweep.supercooling_sweep('CP', 'NaCl', salinity=3.5, p=0.2, method='SPLINE')
    assert a.t0 == b.t0 == 280.15
    assert a.mas == b.mas
    assert len(a.curves) == 0

def test_sweep_alpha_toggle():
    on = sweep.supercooling_sweep('C3H8', 'NaCl', salinity=3.5, p=0.3, use_alpha=True)
    off = sweep.supercooling_sweep('C3H8', 'NaCl', salinity=3.5, p=0.3, use_alpha=False)
    assert on.alpha == 0.927 and off.alpha == 1.0
    assert on.mas != off.mas

def test_sweep_mgcl2():
    res = sweep.supercooling_sweep('CH4', 'MgCl2', salinity=5, dt_min=0.5, dt_max=5, p=P_CH4)
    assert res.mas > 5
    assert 0 < res.mwy < 100

def test_sweep_custom_gas():
    g = custom_gas('SI', -0.9115, [[273.4, 2.68], [279.6, 5.02], [286.4, 10.5]])
    res = sweep.supercooling_sweep(g, 'NaCl', salinity=3.5, p=5.02)
    assert abs(res.t0 - 279.6) < 1e-6
    assert res.mas > 3.5

def test_equilibrium_curves_shift():
    """Brine curves lie at lower temperature than pure water, MAS curve lowest"""
    res = sweep.supercooling_sweep('CH4', 'NaCl', salinity=8, dt_min=0.5, dt_max=5, p=P_CH4)
    c = res.curves
    assert len(c) == 11
    assert np.all(c['T_init'] < c['T_pure'])
    assert np.all(c['T_mas'] < c['T_init'])
    assert np.all(np.diff(c['T_pure']) > 0)

def test_sweep_summary():
    res = sweep.supercooling_sweep('CH4', 'NaCl', salinity=8, p=P_CH4)
    text = res.summary()
    assert 'MAS (wt%)' in text
    assert 'CH4' in text

def test_fixed_reference_comparison():
    """HLS prediction for cyclopentane tracks the measured NaCl data"""
    df = sweep.fixed_reference_comparison('CP', 'NaCl')
    assert len(df) == 19
    assert df['T_predicted'].iloc[0] == 280.15
    assert np.all(np.diff(df['T_predicted']) < 0)
    assert np.all(np.abs(df['T_predicted'] - df['T_measured']) < 3)
    with pytest.raises(NoReferenceData):
        sweep.fixed_reference_comparison('CH4', 'NaCl')

# =============================================================================
# Salinity x temperature grid
# =============================================================================

def _grid(**kwargs):
    args = dict(gas='CH4', salt='NaCl', p=P_CH4, t_min=271, t_max=285, t_step=0.3,
                s_min=0, s_max=15, s_step=0.3)
    args.update(kwargs)
    return sweep.salinity_temperature_grid(**args)

def test_grid_axes_inclusive():
    g = _grid()
    assert g.temperatures[0] == 271 and abs(g.temperatures[-1] - 284.8) < 1e-9
    assert g.salinities[0] == 0 and g.salinities[-1] == 15
    assert len(g.salinities) == 51
    assert len(g.mwy) == len(g.salinities) * len(g.temperatures)
    assert len(g.mas) == len(g.mwy)

def test_grid_iteration_order():
    """Salinity is the outer loop, temperature the inner"""
    g = _grid()
    nt = len(g.temperatures)
    assert np.all(g.mwy['salinity'].iloc[:nt] == 0)
    assert np.all(np.diff(g.mwy['temperature'].iloc[:nt]) > 0)

def test_grid_warm_cells_no_yield():
    g = _grid()
    warm = g.mwy[g.mwy['temperature'] >= g.t0]
    assert len(warm) > 0
    assert np.all(warm['MWY'] == 0)
    cells = g.mas[g.mas['temperature'] >= g.t0]
    assert np.all(cells['MAS'] == cells['salinity'])

def test_grid_yield_bounded():
    """Coldest cells approach but never exceed 100 % yield"""
    g = _grid()
    assert g.mwy['MWY'].min() >= 0
    assert g.mwy['MWY'].max() <= 100
    cold = g.mwy[(g.mwy['temperature'] == 271) & (g.mwy['salinity'] > 0)]
    assert cold['MWY'].max() > 50
    assert cold['MWY'].max() < 100
    assert g.mwy_range == (g.mwy['MWY'].min(), g.mwy['MWY'].max())

def test_grid_matches_sweep():
    """A grid cell equals the 1-D sweep at the same total supercooling"""
    g = _grid(s_min=3.0, s_max=3.0, t_min=275, t_max=275, t_step=1)
    res = sweep.supercooling_sweep('CH4', 'NaCl', salinity=3.0, p=P_CH4, dt_min=0, dt_max=1, n=2)
    dT_extra = (g.t0 - 275) - res.dT_init
    res2 = sweep.supercooling_sweep('CH4', 'NaCl', salinity=3.0, p=P_CH4, dt_min=dT_extra, dt_max=dT_extra + 1, n=2)
    assert abs(g.mas['MAS'].iloc[0] - res2.table['MAS'].iloc[0]) < 1e-9
    assert abs(g.mwy['MWY'].iloc[0] - res2.table['MWY'].iloc[0]) < 1e-9

def test_grid_normalization_window():
    g = _grid(norm_window=(0.05, 0.3))
    m = g.mas
    assert np.all((m['norm'] >= 0) & (m['norm'] <= 1))
    expected = np.clip((m['norm_raw'] - 0.05) / 0.25, 0, 1)
    assert np.allclose(m['norm'], expected)
    assert np.allclose(m['norm_raw'], np.clip(m['dMAS'] / (100 - m['salinity']), 0, 1))

def test_grid_hide_zero():
    g = _grid(hide_zero=True)
    m = g.mas
    zero = m['dMAS'] <= 1e-9
    assert zero.any()
    assert m.loc[zero, 'norm'].isna().all()
    assert m.loc[~zero, 'norm'].notna().all()

def test_grid_field_pivot():
    g = _grid()
    f = g.field('MWY')
    assert f.shape == (len(g.temperatures), len(g.salinities))
    assert g.field('MAS').shape == f.shape

def test_grid_rejects_bad_inputs():
    with pytest.raises(InvalidRange):
        _grid(t_step=0)
    with pytest.raises(InvalidRange):
        _grid(t_min=290, t_max=280)
    with pytest.raises(InvalidRange):
        _grid(s_max=100)

# =============================================================================
# Engine
# =============================================================================

def test_engine_cache_isolated():
    a = sweep.HLSEngine()
    b = sweep.HLSEngine(method='SPLINE')
    a.sweep('CH4', 'NaCl', salinity=8, p=P_CH4)
    assert len(a.cache) == 1
    assert len(b.cache) == 0
    assert abs(b.t0('CH4', P_CH4) - 282.3) < 1e-9
    assert ('CH4', 'SPLINE') in b.cache

def test_engine_grid_uses_defaults():
    eng = sweep.HLSEngine(use_alpha=False)
    g = eng.grid('C3H8', 'NaCl', p=0.3, t_min=270, t_max=276, t_step=1, s_min=0, s_max=5, s_step=1)
    assert abs(g.beta - -1.0582e-3) < 1e-15
