"""Entry point for sway-window-daemon when run as a module."""

from .daemon import main

if __name__ == "__main__":
    main()
