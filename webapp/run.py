"""Serve the editing API with Flask's built-in server, for local use."""

import argparse
import sys
from typing import List, Optional

from webapp import create_app


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    parser.add_argument("--port", type=int, default=5000, help="Port to listen on")
    args = parser.parse_args(argv)

    try:
        app = create_app()
    except Exception as e:
        # create_app has already logged the traceback where it could
        print(f"Cannot start the API: {e}", file=sys.stderr)
        return 1

    debug = bool(app.config.get("DEBUG", False))
    app.logger.info("Serving on %s:%d (debug=%s)", args.host, args.port, debug)
    app.run(host=args.host, port=args.port, debug=debug)
    return 0


if __name__ == "__main__":
    sys.exit(main())
