"""Domain layer: records read from the stores and derived views."""
