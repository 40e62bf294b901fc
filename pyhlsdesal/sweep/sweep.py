#!/usr/bin/python3
# -*- coding: utf-8 -*-

"""
    pyHLSdesal - Hydrate desalination limits from the Hu-Lee-Sum correlation
              Copyright (C) 2025, pyHLSdesal contributors

    This program is free software: you can redistribute it and/or modify
    it under the terms of the GNU General Public License as published by
    the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    This program is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
    GNU General Public License for more details.

    The GNU General Public License can be found in the LICENSE directory,
    and at  <https://www.gnu.org/licenses/>.
"""

import logging

import numpy as np
import pandas as pd
from tabulate import tabulate

from pyhlsdesal.classes import fit_method, NoFeasiblePoints, NoReferenceData, InvalidRange
from pyhlsdesal.constants import N_SWEEP, ZERO_DMAS, FIXED_REF_P
from pyhlsdesal.library import species
from pyhlsdesal.electrolyte import x_from_salinity, salinity_from_x, salinity_mol_pct
from pyhlsdesal.hls import lnaw_from_x, x_from_lnaw, delta_t, lnaw_from_delta_t, dt_over_t0t, t_hls, alpha, beta_effective
from pyhlsdesal.fitting import FitCache, t0_at_pressure, default_pressure
from pyhlsdesal.massbalance import water_partition
from pyhlsdesal.shared_fns import linspace_inclusive
from pyhlsdesal.validate import validate_methods, validate_finite, validate_positive, validate_salinity, validate_range

logger = logging.getLogger(__name__)

SWEEP_COLS = ['dT_extra', 'dT_total', 'X', 'lnaw', 'MAS', 'MWY', 'salinity_mol_pct', 'dT_T0T',
              'T_HLS', 'T_max', 'salt_g', 'water_g', 'water_solution_g', 'water_hydrate_g']


def _operating_pressure(g, p):
    if g.is_fixed_reference:
        return FIXED_REF_P
    if p is None:
        return default_pressure(g)
    return validate_positive("Pressure", p)


def _reference_t0(g, p, method, cache):
    t0 = t0_at_pressure(g, p, method, cache)
    if not np.isfinite(t0) or t0 <= 0:
        raise InvalidRange(f"T0 at {p} MPa evaluated to {t0} K for gas {g.key}. Check its reference data")
    return t0


def _mas_from_supercooling(beta, dT_total, t0, salt):
    """ Returns (lnaw, X, MAS) for a total supercooling, or None if the point is not usable """
    if dT_total >= t0:
        return None
    lnaw = lnaw_from_delta_t(beta, dT_total, t0)
    if not np.isfinite(lnaw) or lnaw >= 0:
        return None
    x = x_from_lnaw(float(lnaw))
    mas = salinity_from_x(x, salt)
    if not np.isfinite(mas) or mas <= 0:
        return None
    return float(lnaw), x, mas


def equilibrium_curves(gas, beta: float, lnaw_init: float, lnaw_mas: float) -> pd.DataFrame:
    """ Hydrate equilibrium temperatures along the gas reference curve for pure water,
        the initial brine, and brine at MAS. Returns DataFrame sorted by T_pure with columns
        P, T_pure, T_init, T_mas. Empty for fixed reference gases
    """
    g = species.gas(gas)
    rows = []
    for t0, p in g.points:
        rows.append([p, t0, t0 - delta_t(beta, lnaw_init, t0), t0 - delta_t(beta, lnaw_mas, t0)])
    df = pd.DataFrame(rows, columns=['P', 'T_pure', 'T_init', 'T_mas'])
    return df.sort_values('T_pure', ignore_index=True)


def fixed_reference_comparison(gas='CP', salt='NaCl', use_alpha: bool = True) -> pd.DataFrame:
    """ Predicted HLS dissociation temperature against measured (salinity, T) data
        Returns DataFrame with columns salinity, T_measured, T_predicted
    """
    g = species.gas(gas)
    if len(g.ts_data) == 0 or not g.is_fixed_reference:
        raise NoReferenceData(f"No measured salinity-temperature data for gas {g.key}")
    beta = beta_effective(g, use_alpha)
    t0 = float(g.t0_fixed)
    s = g.ts_data[:, 0]
    lnaw = lnaw_from_x(np.atleast_1d(x_from_salinity(s, salt)))
    return pd.DataFrame({'salinity': s,
                         'T_measured': g.ts_data[:, 1],
                         'T_predicted': t0 - delta_t(beta, lnaw, t0)})


class SweepResult():
    """ Outcome of a supercooling sweep

            .table     : DataFrame, one row per usable step (see SWEEP_COLS)
            .mas, .mwy : MAS (wt%) and MWY (%) at the last usable step, i.e. the top of the requested range
            .t0        : Pure water dissociation temperature at operating pressure (K)
            .beta      : Effective beta (1/K), .alpha the structure correction applied
            .dT_init   : Supercooling equivalent of the initial salinity (K)
            .dT_extra_max, .dT_total : Extra and total supercooling of the last usable step (K)
            .t_pure, .t_init, .t_mas : Equilibrium temperatures for pure water, initial brine and MAS brine (K)
            .n_dropped : Steps filtered out as unusable
            .curves    : Equilibrium curves DataFrame (see equilibrium_curves)
    """
    def __init__(self, gas, salt, p, salinity, method, beta, alpha, t0, lnaw_init, dT_init, table, n_dropped):
        self.gas = gas
        self.salt = salt
        self.p = p
        self.salinity = salinity
        self.method = method
        self.beta = beta
        self.alpha = alpha
        self.t0 = t0
        self.lnaw_init = lnaw_init
        self.dT_init = dT_init
        self.table = table
        self.n_dropped = n_dropped
        last = table.iloc[-1]
        self.mas = float(last['MAS'])
        self.mwy = float(last['MWY'])
        self.dT_extra_max = float(last['dT_extra'])
        self.dT_total = float(last['dT_total'])
        self.t_pure = t0
        self.t_init = t0 - dT_init
        self.t_mas = t0 - self.dT_total
        self.curves = equilibrium_curves(gas, beta, lnaw_init, float(last['lnaw']))

    def summary(self) -> str:
        table = [
            ['Gas', self.gas.key], ['Structure', self.gas.structure.name], ['Salt', self.salt],
            ['Pressure (MPa)', self.p], ['Initial salinity (wt%)', self.salinity],
            ['Beta eff (1/K)', f"{self.beta:.6e}"], ['Alpha', f"{self.alpha:.3f}"],
            ['T pure (K)', f"{self.t_pure:.2f}"], ['T initial (K)', f"{self.t_init:.2f}"],
            ['T MAS (K)', f"{self.t_mas:.2f}"], ['dT initial (K)', f"{self.dT_init:.2f}"],
            ['dT extra (K)', f"{self.dT_extra_max:.2f}"], ['dT total (K)', f"{self.dT_total:.2f}"],
            ['MAS (wt%)', f"{self.mas:.2f}"], ['MWY (%)', f"{self.mwy:.2f}"],
        ]
        return tabulate(table, headers=['Parameter', 'Value'])


def supercooling_sweep(
    gas='CH4',
    salt='NaCl',
    salinity: float = 8,
    dt_min: float = 0.5,
    dt_max: float = 5,
    p: float = None,
    n: int = N_SWEEP,
    method: fit_method = fit_method.POLY,
    use_alpha: bool = True,
    cache: FitCache = None,
    silent: bool = True,
) -> SweepResult:
    """ Steps extra supercooling beyond the initial brine equilibrium and returns MAS / MWY along the way
        gas: Gas key ('CH4', 'C2H6', 'C3H8', 'CO2', 'CP') or gas_species object (see library.custom_gas)
        salt: Salt key ('NaCl', 'KCl', 'MgCl2'). Default 'NaCl'
        salinity: Initial brine salinity, wt% (0-100). Default 8
        dt_min, dt_max: Extra supercooling range (K). Swapped if inverted. Defaults 0.5 and 5
        p: Operating pressure (MPa). Defaults to median reference pressure. Ignored (0.1 MPa) for fixed reference gases
        n: Number of steps across the range. Default 50
        method: T0(P) fit, 'POLY' or 'SPLINE' (or fit_method Enum). Default POLY
        use_alpha: Apply the structure II beta correction. Default True
        cache: Optional FitCache for reuse of fitted T0(P) models
        silent: False prints a summary table to the terminal. Default True
    """
    g = species.gas(gas)
    s = species.salt(salt)
    method = validate_methods(["fitmethod"], [method])
    salinity = validate_salinity(salinity)
    dt_min, dt_max = validate_range("Supercooling", dt_min, dt_max)
    if int(n) < 2:
        raise InvalidRange(f"Sweep requires at least 2 points, got {n}")
    n = int(n)
    p = _operating_pressure(g, p)

    beta = beta_effective(g, use_alpha)
    t0 = _reference_t0(g, p, method, cache)
    lnaw_init = lnaw_from_x(x_from_salinity(salinity, s))
    dT_init = delta_t(beta, lnaw_init, t0)
    mol_pct = salinity_mol_pct(salinity, s)

    step = (dt_max - dt_min) / (n - 1)
    rows = []
    for i in range(n):
        dT_extra = dt_min + step * i
        dT_total = dT_init + dT_extra
        point = _mas_from_supercooling(beta, dT_total, t0, s)
        if point is None:
            continue
        lnaw, x, mas = point
        wp = water_partition(salinity, mas)
        if not 0 <= wp['MWY'] <= 100:
            continue
        rows.append([dT_extra, dT_total, x, lnaw, mas, wp['MWY'], mol_pct, dt_over_t0t(dT_total, t0),
                     t_hls(dT_total, t0), t0 - dT_total, wp['salt_g'], wp['water_g'],
                     wp['water_solution_g'], wp['water_hydrate_g']])

    n_dropped = n - len(rows)
    if n_dropped:
        logger.debug("%d of %d supercooling steps dropped for %s / %s", n_dropped, n, g.key, s.key)
    if len(rows) == 0:
        raise NoFeasiblePoints(f"No usable points for {g.key} / {s.key} at {p} MPa, "
                               f"{salinity} wt% and {dt_min}-{dt_max} K extra supercooling")

    table = pd.DataFrame(rows, columns=SWEEP_COLS).astype(float)
    result = SweepResult(g, s.key, p, salinity, method, beta, alpha(g, use_alpha), t0, float(lnaw_init),
                         float(dT_init), table, n_dropped)
    if not silent:
        print(result.summary(), "\n")
    return result


class GridResult():
    """ Outcome of a salinity x formation temperature sweep

            .mwy : DataFrame of salinity, temperature, MWY (%, 0-100)
            .mas : DataFrame of salinity, temperature, MAS (wt%), dMAS (wt%), norm_raw (dMAS / (100 - salinity)),
                   norm (norm_raw mapped through the normalization window, NaN where hidden)
            .salinities, .temperatures : Grid axes
            .mwy_range, .mas_range : Observed (min, max) of MWY and MAS for legend scaling
    """
    def __init__(self, gas, salt, p, method, beta, t0, salinities, temperatures, mwy, mas, norm_window, hide_zero):
        self.gas = gas
        self.salt = salt
        self.p = p
        self.method = method
        self.beta = beta
        self.t0 = t0
        self.salinities = salinities
        self.temperatures = temperatures
        self.mwy = mwy
        self.mas = mas
        self.norm_window = norm_window
        self.hide_zero = hide_zero
        self.mwy_range = (float(mwy['MWY'].min()), float(mwy['MWY'].max()))
        self.mas_range = (float(mas['MAS'].min()), float(mas['MAS'].max()))

    def field(self, name: str = 'MWY') -> pd.DataFrame:
        """ 2-D view of a column, temperatures as rows and salinities as columns """
        df = self.mwy if name == 'MWY' else self.mas
        return df.pivot(index='temperature', columns='salinity', values=name)


def salinity_temperature_grid(
    gas='CH4',
    salt='NaCl',
    p: float = None,
    t_min: float = 271,
    t_max: float = 285,
    t_step: float = 0.3,
    s_min: float = 0,
    s_max: float = 15,
    s_step: float = 0.3,
    norm_window: tuple = (0.0, 1.0),
    hide_zero: bool = False,
    method: fit_method = fit_method.POLY,
    use_alpha: bool = True,
    cache: FitCache = None,
) -> GridResult:
    """ MWY and MAS over a grid of initial salinity and hydrate formation temperature
        Cells colder than the initial brine equilibrium (and above 0 K) form hydrate; all other cells
        report MWY = 0 and MAS = initial salinity

        gas, salt, p, method, use_alpha, cache: As for supercooling_sweep
        t_min, t_max, t_step: Formation temperature grid (K), inclusive. Defaults 271, 285, 0.3
        s_min, s_max, s_step: Initial salinity grid (wt%), inclusive, 0 <= s < 100. Defaults 0, 15, 0.3
        norm_window: (lo, hi) window within [0, 1] applied to dMAS / (100 - salinity). Default (0, 1)
        hide_zero: Set norm to NaN where dMAS is effectively zero. Default False
    """
    g = species.gas(gas)
    s = species.salt(salt)
    method = validate_methods(["fitmethod"], [method])
    t_min, t_max = validate_finite("Temperature min", t_min), validate_finite("Temperature max", t_max)
    s_min, s_max = validate_finite("Salinity min", s_min), validate_finite("Salinity max", s_max)
    t_step = validate_positive("Temperature step", t_step)
    s_step = validate_positive("Salinity step", s_step)
    if t_min > t_max or s_min > s_max:
        raise InvalidRange("Grid minimums must not exceed maximums")
    validate_salinity(s_min, allow_zero=True)
    validate_salinity(s_max, allow_zero=True)
    p = _operating_pressure(g, p)

    norm_lo, norm_hi = [min(1.0, max(0.0, validate_finite("Normalization window", v))) for v in norm_window]
    norm_span = max(1e-12, norm_hi - norm_lo)

    beta = beta_effective(g, use_alpha)
    t0 = _reference_t0(g, p, method, cache)
    temps = linspace_inclusive(t_min, t_max, t_step)
    salts = linspace_inclusive(s_min, s_max, s_step)

    # MAS depends on formation temperature only; resolve once per row of the grid
    mas_at_t = {}
    for t_form in temps:
        dT_total = max(0.0, t0 - t_form)
        mas_at_t[t_form] = (dT_total, _mas_from_supercooling(beta, dT_total, t0, s))

    mwy_rows, mas_rows = [], []
    for s_init in salts:
        dT_init = delta_t(beta, lnaw_from_x(x_from_salinity(s_init, s)), t0)
        for t_form in temps:
            mwy_val, mas_val, dmas = 0.0, s_init, 0.0
            dT_total, point = mas_at_t[t_form]
            if dT_init <= dT_total < t0 and point is not None:
                mas_val = point[2]
                dmas = max(0.0, mas_val - s_init)
                mwy_val = min(100.0, max(0.0, water_partition(s_init, mas_val)['MWY']))
            headroom = max(0.0, 100 - s_init)
            norm_raw = min(1.0, max(0.0, dmas / headroom)) if headroom > 0 else 0.0
            norm = min(1.0, max(0.0, (norm_raw - norm_lo) / norm_span))
            if hide_zero and dmas <= ZERO_DMAS:
                norm = np.nan
            mwy_rows.append([s_init, t_form, mwy_val])
            mas_rows.append([s_init, t_form, mas_val, dmas, norm_raw, norm])

    mwy = pd.DataFrame(mwy_rows, columns=['salinity', 'temperature', 'MWY']).astype(float)
    mas = pd.DataFrame(mas_rows, columns=['salinity', 'temperature', 'MAS', 'dMAS', 'norm_raw', 'norm']).astype(float)
    logger.debug("Grid of %d salinities x %d temperatures for %s / %s", len(salts), len(temps), g.key, s.key)
    return GridResult(g, s.key, p, method, beta, t0, salts, temps, mwy, mas, (norm_lo, norm_hi), hide_zero)


class HLSEngine():
    """ Calculation engine holding default options and its own cache of fitted T0(P) models

            Usage example:
                eng = HLSEngine(method='SPLINE')
                res = eng.sweep('CH4', 'NaCl', salinity=3.5, dt_min=0.5, dt_max=5)
                res.mas, res.mwy
    """
    def __init__(self, method=fit_method.POLY, use_alpha: bool = True, n: int = N_SWEEP):
        self.method = validate_methods(["fitmethod"], [method])
        self.use_alpha = use_alpha
        self.n = n
        self.cache = FitCache()

    def t0(self, gas, p: float = None, method=None) -> float:
        g = species.gas(gas)
        p = _operating_pressure(g, p)
        return t0_at_pressure(g, p, method or self.method, self.cache)

    def sweep(self, gas='CH4', salt='NaCl', salinity: float = 8, dt_min: float = 0.5, dt_max: float = 5,
              p: float = None, **kwargs) -> SweepResult:
        kwargs.setdefault('n', self.n)
        kwargs.setdefault('method', self.method)
        kwargs.setdefault('use_alpha', self.use_alpha)
        return supercooling_sweep(gas, salt, salinity, dt_min, dt_max, p, cache=self.cache, **kwargs)

    def grid(self, gas='CH4', salt='NaCl', p: float = None, **kwargs) -> GridResult:
        kwargs.setdefault('method', self.method)
        kwargs.setdefault('use_alpha', self.use_alpha)
        return salinity_temperature_grid(gas, salt, p, cache=self.cache, **kwargs)
