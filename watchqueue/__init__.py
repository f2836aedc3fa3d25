"""
Moderated video queue bot.

Members of one Telegram group submit video links; the bot plays them one
after another in mpv and lets a single maintainer skip ahead.
"""

__version__ = "1.0.0"
