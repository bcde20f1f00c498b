"""
API routes package for the Classi scoring service.
"""
from api.routes import scoring

__all__ = ["scoring"]
