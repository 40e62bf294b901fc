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

import numpy as np
import numpy.typing as npt

from pyhlsdesal.constants import MW_WATER, BASIS_G
from pyhlsdesal.library import species
from pyhlsdesal.shared_fns import convert_to_numpy, process_input

def _ion_factors(salt) -> tuple:
    # (numerator, denominator) multipliers on moles of salt in X
    # A 1:2 salt yields 3 ions but is weighted 4 in the HLS composition variable
    if salt.ion_count == 3:
        return 4, 3
    return 2, 2

def x_from_salinity(salinity: npt.ArrayLike, salt: str = 'NaCl') -> npt.ArrayLike:
    """ Returns effective ionic mole fraction X from salt weight percent
        salinity: Salt wt% (0-100)
        salt: Salt key ('NaCl', 'KCl' or 'MgCl2'). Default 'NaCl'
    """
    s = species.salt(salt)
    wt = convert_to_numpy(salinity).astype(float)
    mol_salt = wt / s.molar_mass
    mol_water = (BASIS_G - wt) / MW_WATER
    num, den = _ion_factors(s)
    x = num * mol_salt / (mol_water + den * mol_salt)
    return process_input(x)

def salinity_from_x(x: npt.ArrayLike, salt: str = 'NaCl') -> npt.ArrayLike:
    """ Returns salt weight percent from effective ionic mole fraction X (inverse of x_from_salinity)
        x: Effective ionic mole fraction
        salt: Salt key ('NaCl', 'KCl' or 'MgCl2'). Default 'NaCl'
    """
    s = species.salt(salt)
    x = convert_to_numpy(x).astype(float)
    num, den = _ion_factors(s)
    wt = s.molar_mass * x * BASIS_G / ((num - den * x) * MW_WATER + s.molar_mass * x)
    return process_input(wt)

def salinity_mol_pct(salinity: npt.ArrayLike, salt: str = 'NaCl') -> npt.ArrayLike:
    """ Ionic mole percent, ions / (ions + water) x 100 """
    s = species.salt(salt)
    wt = convert_to_numpy(salinity).astype(float)
    mol_ions = s.ion_count * wt / s.molar_mass
    mol_water = (BASIS_G - wt) / MW_WATER
    return process_input(100 * mol_ions / (mol_ions + mol_water))
