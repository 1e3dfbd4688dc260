"""Domain layer: error taxonomy, generic values, destination slots, and the value decoder."""
