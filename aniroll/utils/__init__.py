"""Re-export things."""

from .formatter import *
from .logs import *
