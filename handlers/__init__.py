"""
handlers/ - Presentation Layer
================================
Telegram handlers: read the update, call ExpenseService, reply with text.
"""
