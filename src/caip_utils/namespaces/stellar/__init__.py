from .horizon import HorizonClient
from .resolver import StellarResolver

__all__ = ["HorizonClient", "StellarResolver"]
