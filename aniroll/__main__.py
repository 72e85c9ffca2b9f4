"""The main entry of the program."""
import os

from aniroll.core import AniRoll, constants
from aniroll.utils import setup_file_logging

if os.name != "nt":
    import uvloop  # pylint: disable=import-error

    uvloop.install()


bot = AniRoll()
setup_file_logging(constants.LOG_DIR, constants.LOG_LEVEL)
bot.run()
