"""AniList API helpers."""

from .errors import *
from .rest import *
from .stats import *
from .typings import *
