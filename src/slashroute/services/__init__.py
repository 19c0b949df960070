"""Service layer: pipeline stages returning ServiceResult.

Services may import from domain and config.
They must never import from output, commands, or the router.
"""
