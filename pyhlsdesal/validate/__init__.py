from .validate import validate_methods, validate_finite, validate_positive, validate_salinity, validate_range
