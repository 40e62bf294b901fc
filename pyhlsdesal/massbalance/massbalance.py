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

import numpy.typing as npt

from pyhlsdesal.constants import BASIS_G
from pyhlsdesal.shared_fns import convert_to_numpy, process_input

def water_partition(initial_salinity: float, mas: npt.ArrayLike) -> dict:
    """ Splits the initial water of a 100 g solution between residual brine and hydrate,
        conserving salt mass. Returns dictionary of
            salt_g: Salt mass (g), equal to initial_salinity
            water_g: Initial water mass (g)
            water_solution_g: Water left in brine at salinity mas (g)
            water_hydrate_g: Water converted to hydrate (g)
            MWY: Water yield, water_hydrate_g / water_g x 100 (%)
        No clamping is applied; MWY outside [0, 100] flags an unphysical mas

        initial_salinity: Initial brine salt wt%
        mas: Residual brine salt wt% (scalar or array)
    """
    salt_g = float(initial_salinity)
    water_g = BASIS_G - salt_g
    m = convert_to_numpy(mas).astype(float)
    water_solution_g = salt_g * (BASIS_G / m - 1)
    water_hydrate_g = water_g - water_solution_g
    mwy = water_hydrate_g / water_g * 100
    return {
        'salt_g': salt_g,
        'water_g': water_g,
        'water_solution_g': process_input(water_solution_g),
        'water_hydrate_g': process_input(water_hydrate_g),
        'MWY': process_input(mwy),
    }

def water_yield(initial_salinity: float, mas: npt.ArrayLike) -> npt.ArrayLike:
    """ MWY (%) only, see water_partition """
    return water_partition(initial_salinity, mas)['MWY']
