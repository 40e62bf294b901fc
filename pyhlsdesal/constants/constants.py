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


# Hu-Lee-Sum water activity correlation coefficients (Salts, Avg.)
B1 = -1.06152
B2 = 3.25726
B3 = -37.2263

MW_WATER = 18.01528  # Molar mass of pure water (g/mol)
ALPHA_SII = 0.927  # Structure II correction to beta
BETA_SCALE = 1e-3  # Tabulated beta values are x10^3 (1/K)

BASIS_G = 100  # Solution mass basis (g) for wt% bookkeeping
FIXED_REF_P = 0.10  # Pressure (MPa) of fixed reference gases
DEFAULT_P = 1.0  # Fallback pressure (MPa) when a gas has no reference points

N_SWEEP = 50  # Points in a supercooling sweep
N_BISECT = 50  # Bisection iterations in ln(aw) -> X inversion
X_HI = 0.2  # Initial upper bracket for X
X_HI_STEP = 0.1  # Upper bracket expansion step
LINSPACE_EPS = 1e-9
ZERO_DMAS = 1e-9  # dMAS at or below this is treated as no increment
