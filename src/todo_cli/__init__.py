"""
todo-cli - command-line client for the todo API.

Authenticates against the remote service, keeps the session token in the
system keyring and manages todos from the terminal.

Usage:
    todo auth login -e me@example.com   # Authenticate
    todo list                           # Show todos
    todo create "buy milk"              # Add a todo
    todo done 3                         # Mark #3 completed
    todo config set-url https://...     # Point at another server
"""

__version__ = "0.1.0"
__author__ = "todo-cli contributors"
