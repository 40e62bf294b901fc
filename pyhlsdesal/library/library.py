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
import pandas as pd

from pyhlsdesal.classes import UnknownSpecies
from pyhlsdesal.validate import validate_methods

# Salt, molar mass (g/mol), number of ionic species on dissociation
SALT_DATA = [
    ['NaCl', 58.44, 2],
    ['KCl', 74.55, 2],
    ['MgCl2', 95.21, 3],
]

# Pure water dissociation curves, (T0 K, P MPa)
CH4_PTS = [
    [273.4, 2.68], [274.6, 3.05], [276.7, 3.72], [278.3, 4.39],
    [279.6, 5.02], [280.9, 5.77], [282.3, 6.65], [283.6, 7.59],
    [284.7, 8.55], [285.7, 9.17], [286.4, 10.5]]
C2H6_PTS = [
    [273.7055556, 0.51021204], [274.8166667, 0.579159613],
    [275.9277778, 0.661896701], [277.5944444, 0.813581361],
    [278.7055556, 0.930792236], [279.2611111, 1.006634566],
    [279.8166667, 1.082476896], [280.3722222, 1.165213984],
    [280.9277778, 1.254845829], [281.4833333, 1.344477674],
    [282.0388889, 1.447899033], [282.5944444, 1.55821515],
    [283.15, 1.689215539], [284.2611111, 1.985690102],
    [285.3722222, 2.302848938], [286.4833333, 2.730323891]]
C3H8_PTS = [
    [273.6, 0.207], [274.6, 0.248], [276.2, 0.338], [277.2, 0.417], [278.0, 0.51]]
CO2_PTS = [
    [274.3, 1.42], [275.5, 1.63], [276.8, 1.9], [277.6, 2.11], [279.1, 2.55],
    [280.6, 3.12], [281.5, 3.51], [282.1, 3.81], [282.9, 4.37]]

# Cyclopentane measured dissociation temperature vs NaCl, (wt%, T K)
CP_TS = [
    [0, 280.15], [1, 279.45], [2, 278.85], [3.5, 278.05], [5, 277.15], [6, 276.55],
    [7, 275.75], [8, 274.95], [9, 274.45], [10, 273.55], [11, 272.85], [12, 272.05],
    [13, 271.35], [14, 270.45], [15, 269.75], [16, 268.85], [17, 267.75], [18, 266.65],
    [19, 265.25]]


class salt_species():
    def __init__(self, key: str, molar_mass: float, ion_count: int):
        self.key = key
        self.molar_mass = float(molar_mass)
        self.ion_count = int(ion_count)

    def __repr__(self):
        return f"salt_species({self.key!r}, molar_mass={self.molar_mass}, ion_count={self.ion_count})"


class gas_species():
    """ Hydrate former with its structure, HLS beta and pure water reference data

            key: Identifier (e.g. 'CH4')
            structure: 'SI' / 'SII' string or hydrate_structure Enum
            beta_x: Raw beta coefficient, x10^3 (1/K)
            points: Sequence of (T0 K, P MPa) pure water dissociation pairs.
                    Pairs sharing a pressure are merged to their mean T0
            t0_fixed: Constant reference T0 (K) for gases characterised at a single pressure.
                      When set, no curve fit is ever performed
            ts_data: Optional measured (salinity wt%, T K) pairs for model comparison
            custom: True for user defined gases, which are never cached
    """
    def __init__(self, key, structure, beta_x, points=(), t0_fixed=None, ts_data=(), custom=False):
        self.key = key
        self.structure = validate_methods(["structure"], [structure])
        self.beta_x = float(beta_x)
        pts = np.array(points, dtype=float).reshape(-1, 2)
        if len(pts) > 0:
            pts = pts[np.isfinite(pts).all(axis=1)]
            pts = pts[np.argsort(pts[:, 1], kind='stable')]  # Ascending pressure
            pressures, inv = np.unique(pts[:, 1], return_inverse=True)
            if len(pressures) < len(pts):  # Repeated pressures collapse to their mean T0
                temps = np.bincount(inv, weights=pts[:, 0]) / np.bincount(inv)
                pts = np.column_stack([temps, pressures])
        self.points = pts
        self.t0_fixed = t0_fixed
        self.ts_data = np.array(ts_data, dtype=float).reshape(-1, 2)
        self.custom = custom

    @property
    def temperatures(self) -> np.ndarray:
        return self.points[:, 0]

    @property
    def pressures(self) -> np.ndarray:
        return self.points[:, 1]

    @property
    def is_fixed_reference(self) -> bool:
        return self.t0_fixed is not None

    def __repr__(self):
        return f"gas_species({self.key!r}, {self.structure.name}, beta_x={self.beta_x}, points={len(self.points)})"


class species_library:
    def __init__(self):
        self.salt_df = pd.DataFrame(SALT_DATA, columns=['Salt', 'MW', 'Ions'])
        self.salts = {}
        for key, mw, ions in SALT_DATA:
            self.salts[key.upper()] = salt_species(key, mw, ions)
        gases = [
            gas_species('CH4', 'SI', -0.9115, CH4_PTS),
            gas_species('C2H6', 'SI', -0.8657, C2H6_PTS),
            gas_species('C3H8', 'SII', -1.0582, C3H8_PTS),
            gas_species('CO2', 'SI', -0.9143, CO2_PTS),
            # beta from dH_d ~ 113.7 kJ/mol-guest and n ~ 17 (nR/dH_d ~ 0.0012426)
            gas_species('CP', 'SII', -1.2426, t0_fixed=280.15, ts_data=CP_TS),
        ]
        self.gases = {g.key.upper(): g for g in gases}

    def salt(self, key) -> salt_species:
        if isinstance(key, salt_species):
            return key
        try:
            return self.salts[str(key).upper()]
        except KeyError:
            raise UnknownSpecies(f"Unknown salt: {key}. Supported: {self.salt_names()}")

    def gas(self, key) -> gas_species:
        if isinstance(key, gas_species):
            return key
        try:
            return self.gases[str(key).upper()]
        except KeyError:
            raise UnknownSpecies(f"Unknown gas: {key}. Supported: {self.gas_names()}")

    def salt_names(self) -> list:
        return [s.key for s in self.salts.values()]

    def gas_names(self) -> list:
        return [g.key for g in self.gases.values()]

    def gas_table(self) -> pd.DataFrame:
        rows = []
        for g in self.gases.values():
            rows.append([g.key, g.structure.name, g.beta_x, len(g.points), g.t0_fixed])
        return pd.DataFrame(rows, columns=['Gas', 'Structure', 'Beta_x1e3', 'Points', 'T0_fixed'])


def custom_gas(structure='SI', beta_x: float = -1.0, points=(), key: str = 'Custom') -> gas_species:
    """ Returns a user defined gas. Points failing to parse as finite (T0 K, P MPa) pairs are dropped
        structure: 'SI' or 'SII' (or hydrate_structure Enum). Default 'SI'
        beta_x: Raw beta coefficient, x10^3 (1/K). Default -1.0
        points: Sequence of (T0 K, P MPa) pairs
    """
    pts = []
    for p in points:
        try:
            t, pr = float(p[0]), float(p[1])
        except (TypeError, ValueError, IndexError):
            continue
        if np.isfinite(t) and np.isfinite(pr):
            pts.append([t, pr])
    return gas_species(key, structure, beta_x, pts, custom=True)


species = species_library()
