from .electrolyte import x_from_salinity, salinity_from_x, salinity_mol_pct
