import argparse
from typing import Optional

import uvicorn

from todo_api.config import settings


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="todo-api", description="Task list HTTP API")
    parser.add_argument("--serve", action="store_true", help="Start a local HTTP listener")
    parser.add_argument("--host", default=settings.APP_HOST, help="Bind host")
    parser.add_argument("--port", type=int, default=settings.PORT, help="Bind port (PORT env var)")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    if not args.serve:
        print("Nothing to do: pass --serve to start a local server,")
        print("or mount todo_api.main:app in an ASGI host.")
        return 0

    print(f"🚀 Server running at http://localhost:{args.port}")
    print(f"📚 API available at http://localhost:{args.port}/api/todos")
    uvicorn.run("todo_api.main:app", host=args.host, port=args.port)
    return 0
