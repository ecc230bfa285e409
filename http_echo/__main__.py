import sys

from http_echo.cli import main

if __name__ == "__main__":
    sys.exit(main())
