"""
parsers/ - Input Parsing Layer
==============================
Turns raw user input into structured data ready for the Service layer.
No database or Telegram access happens here.
"""
