from .shared_fns import bisect_monotone, linspace_inclusive, median, convert_to_numpy, process_input
