"""The commands of the bot, each module is loaded as an extension."""
