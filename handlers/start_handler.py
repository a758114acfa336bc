"""
handlers/start_handler.py
--------------------------
Handles /start, /help and /myid.
"""

from telegram import Update
from telegram.ext import ContextTypes

from repositories.user_repo import UserRepository
from security.auth import authorized_only
from utils.logger import get_logger

logger = get_logger(__name__)
user_repo = UserRepository()

HELP_TEXT = """
ExpenseLog keeps track of what you spend.

Record an expense by sending the amount and what it was for:
  • 4.50 on coffee
  • 12 for lunch
  • 30 groceries

Commands:
/recent - latest expenses grouped by date
/averages - spending per day, week and month
/search <text> - find past expenses
/myid - show your Telegram ID
/help - show this message
"""


@authorized_only
async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command - register the user and show the help text."""
    user = update.effective_user
    user_repo.ensure_user(user.id, user.first_name)
    logger.info(f"User {user.id} ({user.first_name}) started the bot.")

    await update.message.reply_text(f"Hi {user.first_name}!\n{HELP_TEXT}")


@authorized_only
async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await update.message.reply_text(HELP_TEXT)


@authorized_only
async def myid_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /myid command - show the user's Telegram ID for whitelisting."""
    user = update.effective_user
    await update.message.reply_text(
        f"Your Telegram ID: {user.id}\n"
        f"Add it to ALLOWED_USER_IDS in .env to restrict the bot to you."
    )
