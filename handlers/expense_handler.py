"""
handlers/expense_handler.py
----------------------------
Handles expense-related interactions.
Delegates all logic to ExpenseService.
"""

from telegram import Update
from telegram.ext import ContextTypes

from repositories.user_repo import UserRepository
from security.auth import authorized_only
from services.expense_service import ExpenseService
from utils.logger import get_logger

logger = get_logger(__name__)
expense_service = ExpenseService()
user_repo = UserRepository()


def _format_errors(errors: dict[str, list[str]]) -> str:
    lines = ["Couldn't save that expense:"]
    for field, messages in errors.items():
        for message in messages:
            lines.append(f"  • {field.replace('_', ' ')} {message}")
    lines.append('Try something like "12.50 on lunch".')
    return "\n".join(lines)


@authorized_only
async def handle_text_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle any plain text message (not a command).
    The text is treated as a new expense, e.g. "4.50 on coffee".
    """
    user = update.effective_user
    text = update.message.text.strip()

    if not text:
        return

    user_repo.ensure_user(user.id, user.first_name)

    result = expense_service.add_expense(user.id, text)
    if result["success"]:
        await update.message.reply_text(result["message"])
    else:
        await update.message.reply_text(_format_errors(result["errors"]))


@authorized_only
async def recent_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /recent - latest expenses grouped by relative date, plus averages."""
    user = update.effective_user
    await update.message.reply_text(expense_service.get_recent_summary(user.id))


@authorized_only
async def averages_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /averages - daily, weekly and monthly averages."""
    user = update.effective_user
    await update.message.reply_text(expense_service.get_averages_summary(user.id))


@authorized_only
async def search_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /search command - search expenses by item text.
    Usage: /search coffee
    """
    user = update.effective_user

    if not context.args:
        await update.message.reply_text("Usage: /search <text>\nExample: /search coffee")
        return

    query = " ".join(context.args)
    logger.info(f"User {user.id} searched for {query!r}")
    await update.message.reply_text(expense_service.get_search_summary(user.id, query))
