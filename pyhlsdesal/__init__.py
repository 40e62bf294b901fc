"""
pyhlsdesal
===================================

-------------------------------------------------------------------
Hydrate based desalination limits from the Hu-Lee-Sum correlation
-------------------------------------------------------------------

Estimates the maximum achievable brine salinity (MAS) and maximum water yield (MWY)
of gas hydrate based desalination as a function of supercooling, salt species and
concentration, hydrate former and operating pressure.

Includes functions to;

- Convert salt wt% to and from the effective ionic mole fraction (NaCl, KCl, MgCl2)
- Evaluate the Hu-Lee-Sum water activity correlation and invert it
- Fit pure water hydrate dissociation curves T0(P) (least squares polynomial or monotone spline)
- Partition water between residual brine and hydrate under salt mass conservation
- Sweep supercooling for a single operating condition
- Sweep initial salinity x formation temperature grids


"""

submodules = [
    'classes',
    'constants',
    'electrolyte',
    'fitting',
    'hls',
    'library',
    'massbalance',
    'shared_fns',
    'sweep',
    'validate'
]

__all__ = submodules

import importlib

def __dir__():
    return __all__


def __getattr__(name):
    if name in submodules:
        return importlib.import_module(f'pyhlsdesal.{name}')
    else:
        try:
            return globals()[name]
        except KeyError:
            raise AttributeError(
                f"Module 'pyhlsdesal' has no attribute '{name}'"
            )
