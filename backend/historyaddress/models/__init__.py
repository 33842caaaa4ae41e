from .homes import Home
from .partners import Partner

__all__ = ["Home", "Partner"]
