"""
Routers HTTP por recurso (incluidos desde router.build_router).
Este paquete NO define endpoints propios.
"""

from .accounts import router as accounts_router

__all__ = ["accounts_router"]
