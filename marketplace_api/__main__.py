"""Run the API with uvicorn: ``python -m marketplace_api``."""
import argparse

import uvicorn

from marketplace_api.app import create_app
from marketplace_config import get_active_config


def main() -> None:
    parser = argparse.ArgumentParser(description="Marketplace ledger API")
    parser.add_argument("--config", default=None, help="YAML file overlaid on the defaults")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--create-tables", action="store_true", help="Create tables on startup")
    args = parser.parse_args()

    app = create_app(get_active_config(args.config))
    if args.create_tables:
        from marketplace_kernel.db.engine import create_tables

        create_tables()

    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
