"""
main.py
-------
Entry point for the ExpenseLog Telegram bot.

Responsibilities:
    - Initialize the database connection pool and schema.
    - Configure and start the Telegram bot with all handlers.
"""

from telegram import BotCommand
from telegram.ext import (
    Application,
    CommandHandler,
    MessageHandler,
    filters,
)

from config import TELEGRAM_BOT_TOKEN
from db.connection import init_pool, close_pool
from db.init_db import create_tables
from handlers.start_handler import start_command, help_command, myid_command
from handlers.expense_handler import (
    handle_text_message,
    recent_command,
    averages_command,
    search_command,
)
from utils.logger import get_logger

logger = get_logger(__name__)


async def set_bot_commands(application: Application) -> None:
    """Register bot commands menu in Telegram on startup."""
    commands = [
        BotCommand("recent", "Latest expenses"),
        BotCommand("averages", "Daily, weekly and monthly averages"),
        BotCommand("search", "Search past expenses"),
        BotCommand("help", "Show help"),
        BotCommand("myid", "Show your Telegram ID"),
    ]
    await application.bot.set_my_commands(commands)
    logger.info("Bot commands menu registered.")


def main() -> None:
    """Initialize and run the bot."""

    # ── 1. Database setup ─────────────────────────────────
    logger.info("Initializing database...")
    init_pool()
    create_tables()

    # ── 2. Build the Telegram application ─────────────────
    logger.info("Starting Telegram bot...")
    app = Application.builder().token(TELEGRAM_BOT_TOKEN).post_init(set_bot_commands).build()

    # ── 3. Register command handlers ──────────────────────
    app.add_handler(CommandHandler("start", start_command))
    app.add_handler(CommandHandler("help", help_command))
    app.add_handler(CommandHandler("myid", myid_command))
    app.add_handler(CommandHandler("recent", recent_command))
    app.add_handler(CommandHandler("averages", averages_command))
    app.add_handler(CommandHandler("search", search_command))

    # ── 4. Any other text is a new expense ────────────────
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_text_message))

    # ── 5. Start polling ──────────────────────────────────
    logger.info("ExpenseLog is running. Press Ctrl+C to stop.")
    try:
        app.run_polling(drop_pending_updates=True, allowed_updates=["message"])
    finally:
        close_pool()
        logger.info("ExpenseLog stopped.")


if __name__ == "__main__":
    main()
