"""Library App - Utilities Package

- Input validation (validators.py)
- Console output helpers (ui_helpers.py)
- User preferences (cli_config.py)
"""
