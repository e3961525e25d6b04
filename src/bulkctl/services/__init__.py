"""Service layer — normalization core plus the ServiceResult-facing service.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""
