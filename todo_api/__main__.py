import sys

from todo_api.cli import main

if __name__ == "__main__":
    sys.exit(main())
