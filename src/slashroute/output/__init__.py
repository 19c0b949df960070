"""Output layer: interaction envelopes, response formatters, CLI rendering."""
