from .library import salt_species, gas_species, species_library, custom_gas, species
