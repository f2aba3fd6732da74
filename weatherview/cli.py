"""CLI entry point for the weather dashboard."""

import argparse
import logging

from weatherview.config.loader import dump_config, load_config
from weatherview.ingest.owm_client import OpenWeatherError
from weatherview.models.state import Phase
from weatherview.reporting.formatters import options_from_config, render_text


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weatherview",
        description="Current weather and 7 day forecast dashboard",
    )
    parser.add_argument("--config", default=None, help="Config YAML path")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # show
    show_p = sub.add_parser("show", help="Fetch and print weather for a city")
    show_p.add_argument("city", nargs="?", help="City name (default from config)")

    # serve
    serve_p = sub.add_parser("serve", help="Run the dashboard web server")
    serve_p.add_argument("--host", default=None, help="Bind address")
    serve_p.add_argument("--port", type=int, default=None, help="Bind port")

    # config show
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # httpx logs full request URLs, which carry the appid key.
    logging.getLogger("httpx").setLevel(logging.WARNING)

    config = load_config(args.config)

    if args.command == "show":
        return _cmd_show(config, args)
    elif args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_show(config, args) -> int:
    from weatherview.dashboard import build_orchestrator

    city = (args.city or config.display.default_city).strip()
    if not city:
        print("Error: city must not be blank")
        return 1
    try:
        orchestrator = build_orchestrator(config)
    except OpenWeatherError as e:
        print(f"Error: {e}")
        return 1
    snapshot = orchestrator.refresh(city)
    print(render_text(snapshot, options_from_config(config)))
    return 0 if snapshot.phase == Phase.READY else 1


def _cmd_serve(config, args) -> int:
    import uvicorn

    from weatherview.dashboard import create_app

    try:
        app = create_app(config)
    except OpenWeatherError as e:
        print(f"Error: {e}")
        return 1
    uvicorn.run(
        app,
        host=args.host or config.server.host,
        port=args.port or config.server.port,
    )
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(dump_config(config))
        return 0
    print("Use: config show")
    return 1
