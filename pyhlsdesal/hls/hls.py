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

# Hu-Lee-Sum correlation
#   ln(aw) = B1.X + B2.X^2 + B3.X^3
#   dT = beta.ln(aw).T0^2 / (1 + beta.ln(aw).T0)
# Hu, Y., Lee, B.R., Sum, A.K. Universal correlation for gas hydrates suppression
# temperature of inhibited systems. AIChE J. (2017, 2018)

import numpy as np
import numpy.typing as npt

from pyhlsdesal.classes import hydrate_structure
from pyhlsdesal.constants import B1, B2, B3, ALPHA_SII, BETA_SCALE, N_BISECT, X_HI, X_HI_STEP
from pyhlsdesal.library import species
from pyhlsdesal.shared_fns import bisect_monotone

def lnaw_from_x(x: npt.ArrayLike) -> npt.ArrayLike:
    """ Natural log of water activity from effective ionic mole fraction X.
        Strictly decreasing on [0, ~0.3]; no bounds are enforced
    """
    return B1 * x + B2 * x * x + B3 * x * x * x

def x_from_lnaw(lnaw: float) -> float:
    """ Inverts lnaw_from_x by bisection. Always returns an approximate root;
        callers are responsible for sanity checking the resulting salinity
    """
    def f(x):
        return lnaw_from_x(x) - lnaw

    hi = X_HI
    while f(hi) > 0 and hi < 1:
        hi += X_HI_STEP
    return bisect_monotone(f, 0.0, hi, N_BISECT)

def delta_t(beta: float, lnaw: npt.ArrayLike, t0: float) -> npt.ArrayLike:
    """ Hydrate suppression temperature (K) relative to the pure water T0
        beta: Effective beta (1/K)
        lnaw: Natural log of water activity
        t0: Pure water dissociation temperature (K)
    """
    return (beta * lnaw * t0 * t0) / (1 + beta * lnaw * t0)

def lnaw_from_delta_t(beta: float, dT: npt.ArrayLike, t0: float) -> npt.ArrayLike:
    """ Algebraic inverse of delta_t. Returns nan / inf rather than raising where
        dT >= t0 or the denominator vanishes; check finiteness and sign before use
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        denominator = np.float64(beta) * t0 * (t0 - dT)
        return dT / denominator

def dt_over_t0t(dT: npt.ArrayLike, t0: float) -> npt.ArrayLike:
    """ dT / (T0 . T), with T = T0 - dT """
    with np.errstate(divide='ignore', invalid='ignore'):
        return dT / (np.float64(t0) * (t0 - dT))

def t_hls(dT: npt.ArrayLike, t0: float) -> npt.ArrayLike:
    """ Inhibited dissociation temperature T0 / (1 + T0 . dT/(T0.T)) """
    return t0 / (1 + dt_over_t0t(dT, t0) * t0)

def alpha(gas, use_alpha: bool = True) -> float:
    """ Structure correction factor applied to beta """
    g = species.gas(gas)
    if g.structure == hydrate_structure.SII and use_alpha:
        return ALPHA_SII
    return 1.0

def beta_effective(gas, use_alpha: bool = True) -> float:
    """ Effective HLS beta (1/K) for a gas
        gas: Gas key or gas_species object
        use_alpha: Apply the empirical 0.927 correction to structure II formers. Default True
    """
    g = species.gas(gas)
    return g.beta_x * BETA_SCALE * alpha(g, use_alpha)
