"""Entry point for `python -m fieldspread`."""

from fieldspread.cli import main

main()
