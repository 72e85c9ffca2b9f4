"""Core components of the bot."""

from .bot import *
from .cache import *
from .metrics import *
from .orchestrator import *
