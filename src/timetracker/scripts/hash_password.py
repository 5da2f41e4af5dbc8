# File: src/timetracker/scripts/hash_password.py
"""Print a password hash for ADMIN_PASSWORD_HASH / CLIENT_PASSWORD_HASH."""

import sys
from getpass import getpass

from timetracker.core.security import hash_password

MIN_PASSWORD_LENGTH = 8


def prompt_for_password() -> str:
    """Prompt for password with validation."""
    while True:
        password = getpass("Password: ")

        if len(password) < MIN_PASSWORD_LENGTH:
            print(f"Password must be at least {MIN_PASSWORD_LENGTH} characters", file=sys.stderr)
            continue

        password_confirm = getpass("Password (confirm): ")

        if password != password_confirm:
            print("Passwords don't match", file=sys.stderr)
            continue

        return password


def main() -> None:
    """Entry point for timetracker-hash-password."""
    try:
        password = prompt_for_password()
    except (KeyboardInterrupt, EOFError):
        print("\nCancelled", file=sys.stderr)
        sys.exit(1)

    print(hash_password(password))


if __name__ == "__main__":
    main()
