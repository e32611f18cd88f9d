"""Internal implementation modules of csgkit; import from ``csgkit`` instead."""
