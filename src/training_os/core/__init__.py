"""Pure training engine: rotation, plans, generator, journals."""
