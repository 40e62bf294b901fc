from .massbalance import water_partition, water_yield
