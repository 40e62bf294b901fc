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

from enum import Enum

class fit_method(Enum):  # T0(P) reference curve fitting method
    POLY = 0
    SPLINE = 1

class hydrate_structure(Enum):  # Hydrate crystal structure
    SI = 0
    SII = 1

class_dic = {
    "fitmethod": fit_method,
    "structure": hydrate_structure,
}


class HLSError(ValueError):
    """ Base class for all calculation errors raised by this package """


class UnknownSpecies(HLSError):
    """ Salt or gas key not present in the species library """


class NoReferenceData(HLSError):
    """ T0(P) requested for a gas with no reference curve points """


class InvalidRange(HLSError):
    """ Non-finite, non-positive or otherwise unusable numeric input """


class NoFeasiblePoints(HLSError):
    """ A sweep produced no usable points """
