from .fitting import PolyFit, SplineFit, fit_polynomial, eval_polynomial, build_monotone_spline, eval_monotone_spline, fit_reference_curve, FitCache, t0_at_pressure, default_pressure
