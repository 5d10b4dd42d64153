#!/usr/bin/env python3
"""Frontmatter lint server: REST API over the lint error store."""

import argparse

from flask import Flask

from config import PORT

app = Flask(__name__)

from routes.lint import bp as lint_bp  # noqa: E402

app.register_blueprint(lint_bp)


def main():
    """Entry point for `frontmatter-server` CLI command."""
    from config import config_path

    parser = argparse.ArgumentParser(description="Frontmatter lint server")
    parser.add_argument(
        "--port", type=int, default=PORT, help=f"Port to listen on (default: {PORT})"
    )
    cli_args = parser.parse_args()

    print("\n  Frontmatter lint server v1.0.0")
    print(f"  Port: {cli_args.port}")
    print(f"  Config: {config_path()}")
    print(f"  API: http://localhost:{cli_args.port}/api/errors\n")

    app.run(port=cli_args.port, threaded=True)


if __name__ == "__main__":
    main()
