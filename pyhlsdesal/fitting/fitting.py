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
import threading

import numpy as np

from pyhlsdesal.classes import fit_method, NoReferenceData, UnknownSpecies
from pyhlsdesal.constants import FIXED_REF_P, DEFAULT_P
from pyhlsdesal.library import species
from pyhlsdesal.shared_fns import median
from pyhlsdesal.validate import validate_methods

logger = logging.getLogger(__name__)

MAX_DEGREE = 3


class PolyFit():
    def __init__(self, coeffs):
        self.coeffs = list(coeffs)  # Ascending powers

    def __call__(self, x):
        return eval_polynomial(self.coeffs, x)

    @property
    def degree(self) -> int:
        return len(self.coeffs) - 1


class SplineFit():
    def __init__(self, x, y, h, d):
        self.x = x  # Knots
        self.y = y  # Values at knots
        self.h = h  # Knot spacing
        self.d = d  # Derivatives at knots

    def __call__(self, xp):
        return eval_monotone_spline(self, xp)


def fit_polynomial(xs, ys, degree: int = MAX_DEGREE) -> PolyFit:
    """ Least squares polynomial through (xs, ys)
        Degree is limited to len(xs) - 1. The normal equations are assembled from power sums
        of xs and solved by Gauss-Jordan elimination with partial pivoting
    """
    xs = [float(v) for v in xs]
    ys = [float(v) for v in ys]
    n = len(xs)
    d = min(degree, n - 1)

    S = [0.0] * (2 * d + 1)  # Power sums, sum(x^i)
    for k in range(n):
        xp = 1.0
        for i in range(2 * d + 1):
            S[i] += xp
            xp *= xs[k]
    A = [[S[i + j] for j in range(d + 1)] for i in range(d + 1)]
    c = [sum(ys[k] * xs[k] ** i for k in range(n)) for i in range(d + 1)]

    for i in range(d + 1):
        max_row = i
        for r in range(i + 1, d + 1):
            if abs(A[r][i]) > abs(A[max_row][i]):
                max_row = r
        if max_row != i:
            A[i], A[max_row] = A[max_row], A[i]
            c[i], c[max_row] = c[max_row], c[i]
        pivot = A[i][i] or 1e-12
        for j in range(i, d + 1):
            A[i][j] /= pivot
        c[i] /= pivot
        for r in range(d + 1):
            if r == i:
                continue
            f = A[r][i]
            for j in range(i, d + 1):
                A[r][j] -= f * A[i][j]
            c[r] -= f * c[i]
    return PolyFit(c)


def eval_polynomial(coeffs, x):
    y, xp = 0.0, 1.0
    for c in coeffs:
        y = y + c * xp
        xp = xp * x
    return y


def _end_slope(h0, h1, delta0, delta1):
    # One sided three point estimate, zeroed if inconsistent with the adjacent secant, capped at 3x
    d = ((2 * h0 + h1) * delta0 - h0 * delta1) / (h0 + h1)
    if d * delta0 <= 0:
        return 0.0
    if abs(d) > 3 * abs(delta0):
        return 3 * delta0
    return d


def build_monotone_spline(x, y) -> SplineFit:
    """ Shape preserving piecewise cubic Hermite interpolant (Fritsch-Carlson type, as in PCHIP)
        x must be strictly increasing, with at least 2 points
    """
    x = [float(v) for v in x]
    y = [float(v) for v in y]
    n = len(x)
    h = [x[i + 1] - x[i] for i in range(n - 1)]
    delta = [(y[i + 1] - y[i]) / h[i] for i in range(n - 1)]
    d = [0.0] * n
    if n == 2:
        d[0] = d[1] = delta[0]
    else:
        d[0] = _end_slope(h[0], h[1], delta[0], delta[1])
        d[n - 1] = _end_slope(h[n - 2], h[n - 3], delta[n - 2], delta[n - 3])
        for i in range(1, n - 1):
            if delta[i - 1] * delta[i] <= 0:
                d[i] = 0.0
            else:
                w1 = 2 * h[i] + h[i - 1]
                w2 = h[i] + 2 * h[i - 1]
                d[i] = (w1 + w2) / (w1 / delta[i - 1] + w2 / delta[i])
    return SplineFit(x, y, h, d)


def eval_monotone_spline(s: SplineFit, xp: float) -> float:
    """ Evaluates the spline, holding end values flat outside the knot range """
    x, y, h, d = s.x, s.y, s.h, s.d
    n = len(x)
    if xp <= x[0]:
        return y[0]
    if xp >= x[n - 1]:
        return y[n - 1]
    i = 0
    while i < n - 1 and xp > x[i + 1]:
        i += 1
    t = (xp - x[i]) / h[i]
    h00 = (1 + 2 * t) * (1 - t) * (1 - t)
    h10 = t * (1 - t) * (1 - t)
    h01 = t * t * (3 - 2 * t)
    h11 = t * t * (t - 1)
    return h00 * y[i] + h10 * h[i] * d[i] + h01 * y[i + 1] + h11 * h[i] * d[i + 1]


def fit_reference_curve(gas, method=fit_method.POLY):
    """ Returns a callable T0(P) model fitted to a gas's (T0, P) reference points """
    g = species.gas(gas)
    method = validate_methods(["fitmethod"], [method])
    if len(g.points) == 0:
        raise NoReferenceData(f"No (T0, P) reference points available for gas {g.key}")
    xs = g.pressures
    ys = g.temperatures
    if method == fit_method.SPLINE:
        if len(xs) < 2:
            return PolyFit([ys[0]])
        return build_monotone_spline(xs, ys)
    return fit_polynomial(xs, ys, min(MAX_DEGREE, len(xs) - 1))


def _is_catalog_gas(g) -> bool:
    return species.gases.get(str(g.key).upper()) is g


class FitCache():
    """ Fitted T0(P) models keyed by (gas key, fit method)

        Owned by an engine instance; separate instances never share fits.
        Only the catalog's own gas objects are cached. Any other gas_species, including
        user defined gases and caller built objects reusing a catalog key, is refitted every call
    """
    def __init__(self):
        self._fits = {}
        self._lock = threading.Lock()

    def get(self, gas, method=fit_method.POLY):
        g = species.gas(gas)
        method = validate_methods(["fitmethod"], [method])
        if not _is_catalog_gas(g):
            return fit_reference_curve(g, method)
        key = (g.key.upper(), method)
        with self._lock:
            if key not in self._fits:
                self._fits[key] = fit_reference_curve(g, method)
                logger.debug("Fitted %s T0(P) model for %s", method.name, g.key)
            return self._fits[key]

    def clear(self):
        with self._lock:
            self._fits.clear()

    def __contains__(self, key):
        gas, method = key
        try:
            g = species.gas(gas)
        except UnknownSpecies:
            return False
        if not _is_catalog_gas(g):
            return False
        return (g.key.upper(), validate_methods(["fitmethod"], [method])) in self._fits

    def __len__(self):
        return len(self._fits)


def t0_at_pressure(gas, p: float, method=fit_method.POLY, cache: FitCache = None) -> float:
    """ Pure water hydrate dissociation temperature (K) at pressure p (MPa)
        gas: Gas key or gas_species object
        p: Pressure (MPa)
        method: 'POLY' (least squares, up to cubic) or 'SPLINE' (monotone cubic Hermite), or fit_method Enum
        cache: Optional FitCache to reuse fitted models across calls
    """
    g = species.gas(gas)
    if g.is_fixed_reference:
        return float(g.t0_fixed)
    if cache is None:
        model = fit_reference_curve(g, method)
    else:
        model = cache.get(g, method)
    return float(model(p))


def default_pressure(gas) -> float:
    """ Median reference curve pressure (MPa), rounded to 3 dp """
    g = species.gas(gas)
    if g.is_fixed_reference:
        return FIXED_REF_P
    p_med = median(g.pressures)
    if not np.isfinite(p_med):
        return DEFAULT_P
    return round(p_med, 3)
