"""Configuration layer: settings, logging, and callback resolution."""
