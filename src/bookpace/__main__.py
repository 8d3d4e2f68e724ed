"""Main entry point for the bookpace package."""

from bookpace.cli import main

if __name__ == "__main__":
    main()
