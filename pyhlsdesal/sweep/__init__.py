from .sweep import supercooling_sweep, salinity_temperature_grid, equilibrium_curves, fixed_reference_comparison, SweepResult, GridResult, HLSEngine, SWEEP_COLS
