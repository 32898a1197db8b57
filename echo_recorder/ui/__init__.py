"""Terminal front-ends for the lecture index."""

from .console import ConsoleUI
from .modern import ModernUI

__all__ = ["ConsoleUI", "ModernUI"]
