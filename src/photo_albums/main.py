"""Command-line entrypoint serving the local photo albums API."""

import argparse

import uvicorn


def main(argv: list[str] | None = None) -> None:
    """Run the API with uvicorn."""
    parser = argparse.ArgumentParser(description="Photo Albums local API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args(argv)
    uvicorn.run("photo_albums.api.asgi:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
