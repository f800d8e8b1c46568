"""JAX-friendly transit models.

>>> from exotransit.jax import TransitSystem
"""

from exotransit.jax.system import TransitSystem

__all__ = ["TransitSystem"]
