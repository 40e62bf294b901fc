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

from pyhlsdesal.classes import class_dic, InvalidRange

def validate_methods(names, variables):
    variables = list(variables)
    for m, method in enumerate(names):
        if type(variables[m]) == str:
            try:
                variables[m] = class_dic[method][variables[m].upper()]
            except KeyError:
                choices = [e.name for e in class_dic[method]]
                raise InvalidRange(f"Unknown {method}: {variables[m]}. Choose from {choices}")
    if len(variables) == 1:
        return variables[0]
    else:
        return variables

def validate_finite(name: str, value: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidRange(f"{name} must be a number, got {value!r}")
    if not np.isfinite(value):
        raise InvalidRange(f"{name} must be finite, got {value}")
    return value

def validate_positive(name: str, value: float) -> float:
    value = validate_finite(name, value)
    if value <= 0:
        raise InvalidRange(f"{name} must be positive, got {value}")
    return value

def validate_salinity(value: float, allow_zero: bool = False) -> float:
    """ Salinity in wt%, open interval (0, 100), or [0, 100) with allow_zero """
    value = validate_finite("Salinity", value)
    lo_ok = value >= 0 if allow_zero else value > 0
    if not lo_ok or value >= 100:
        bound = "[0, 100)" if allow_zero else "(0, 100)"
        raise InvalidRange(f"Salinity must lie in {bound} wt%, got {value}")
    return value

def validate_range(name: str, lo: float, hi: float) -> tuple:
    """ Returns (lo, hi) as finite floats, swapped if supplied inverted """
    lo = validate_finite(name + " min", lo)
    hi = validate_finite(name + " max", hi)
    if lo > hi:
        lo, hi = hi, lo
    return lo, hi
