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

from pyhlsdesal.constants import LINSPACE_EPS

def bisect_monotone(f, xmin, xmax, iterations):
    """ Fixed-iteration bisection for f decreasing through zero on [xmin, xmax]
        Moves the lower bound while f(mid) > 0, otherwise the upper bound.
        Returns the midpoint of the final bracket
    """
    for _ in range(iterations):
        mid_val = (xmin + xmax) / 2
        if f(mid_val) > 0:  # Root lies above mid_val
            xmin = mid_val
        else:
            xmax = mid_val
    return (xmin + xmax) / 2

def linspace_inclusive(start: float, end: float, step: float) -> np.ndarray:
    # Stepped grid including end (to within LINSPACE_EPS), rounded to 6 dp
    out = []
    if step <= 0:
        return np.array(out)
    n = 0
    v = start
    while v <= end + LINSPACE_EPS:
        out.append(round(v, 6))
        n += 1
        v = start + n * step
    return np.array(out)

def median(values) -> float:
    a = np.asarray([v for v in values if np.isfinite(v)], dtype=float)
    if a.size == 0:
        return np.nan
    return float(np.median(a))

def convert_to_numpy(input_data):
    # Convert input data to a numpy array ensuring it is always sizeable
    if isinstance(input_data, np.ndarray):
        return input_data
    else:
        return np.atleast_1d(np.asarray(input_data, dtype=float))

def process_input(input_data):
    # Single element arrays are handed back as scalars
    if isinstance(input_data, np.ndarray):
        if input_data.size == 1:
            return input_data.item()
        else:
            return input_data
    elif isinstance(input_data, list):
        if len(input_data) == 1:
            return input_data[0]
        else:
            return np.array(input_data)
    else:
        return input_data
