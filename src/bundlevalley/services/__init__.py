"""Service layer — operations over the bundle store returning ServiceResult.

Services may import from domain, catalog and infrastructure layers.
They must never import from commands or output.
"""
