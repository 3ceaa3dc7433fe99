"""
fieldspread core.

Lexer, parser, IR, resolver and settings shared by every backend.
"""
