from .display import CurrencyDisplay
from .preference import CurrencyPreference

__all__ = ["CurrencyDisplay", "CurrencyPreference"]
