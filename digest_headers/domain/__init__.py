"""Domain layer: digest values, hash variants and guard outcomes."""
