"""Entry point for 'python -m authority' command."""

from authority.cli import main

if __name__ == "__main__":
    main()
