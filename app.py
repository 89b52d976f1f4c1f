#!/usr/bin/env python3
"""Blog preview server: JSON API over the content collections + build-time check."""

import argparse
import logging
import sys

from flask import Flask

from config import CONTENT_DIR, LOAD_WORKERS, LOG_LEVEL, PORT
from services.site import get_site_config

log = logging.getLogger(__name__)

app = Flask(__name__)
app.config["SITE"] = get_site_config()
app.config["CONTENT_DIR"] = CONTENT_DIR
app.config["LOAD_WORKERS"] = LOAD_WORKERS

from routes.blog import bp as blog_bp  # noqa: E402
from routes.site import bp as site_bp  # noqa: E402

app.register_blueprint(blog_bp)
app.register_blueprint(site_bp)


def check(content_dir: str = None, workers: int = None) -> int:
    """Load every registered collection and report. Returns a process exit code."""
    from services.collection import load_all
    from services.errors import ContentError

    try:
        collections = load_all(content_dir=content_dir, workers=workers)
    except ContentError as e:
        log.error("Build failed (%s): %s", e.kind, e)
        return 2

    failed = 0
    for name, collection in collections.items():
        for err in collection.errors:
            for message in err.errors:
                log.error("%s/%s: %s", name, err.source, message)
        failed += len(collection.errors)
        log.info("%s: %d valid, %d rejected", name, len(collection), len(collection.errors))

    return 1 if failed else 0


def main():
    """Entry point for `blog-server` CLI command."""
    parser = argparse.ArgumentParser(description="Blog content preview server")
    parser.add_argument(
        "--port", type=int, default=PORT, help=f"Port to listen on (default: {PORT})"
    )
    parser.add_argument("--content-dir", default=None, help="Content root (default: settings)")
    parser.add_argument(
        "--workers", type=int, default=LOAD_WORKERS, help="Parallel file parsers (default: 1)"
    )
    parser.add_argument(
        "--check", action="store_true", help="Validate all collections and exit"
    )
    cli_args = parser.parse_args()

    logging.basicConfig(
        level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    if cli_args.check:
        sys.exit(check(cli_args.content_dir, cli_args.workers))

    if cli_args.content_dir:
        app.config["CONTENT_DIR"] = cli_args.content_dir
    app.config["LOAD_WORKERS"] = cli_args.workers

    site = app.config["SITE"]
    print(f"\n  {site.title} (preview)")
    print(f"  Content: {app.config['CONTENT_DIR']}")
    print(f"  API: http://localhost:{cli_args.port}/api/blog\n")

    app.run(port=cli_args.port, threaded=True)


if __name__ == "__main__":
    main()
