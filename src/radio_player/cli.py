"""
Radio Player CLI - Entry point

Runs the HTTP backend, the terminal player, or one-shot station commands
against either the local store or a remote backend.
"""

import argparse
import sys
from typing import Optional

from radio_player.core.config import Config, load_config
from radio_player.core.output import log, setup_from_config


def _station_source(config: Config, api_url: Optional[str]):
    """Remote backend when a URL is configured, local store otherwise."""
    from radio_player.domain.stations import StationApiClient, StationCatalog, create_store

    api_url = api_url or config.client.api_url
    if api_url:
        return StationApiClient(api_url, timeout=config.client.timeout)
    return StationCatalog(create_store(config))


def run_serve(config: Config, host: Optional[str], port: Optional[int]) -> int:
    """Run the FastAPI backend under uvicorn."""
    import uvicorn

    setup_from_config(config.logging, console_output=True)
    uvicorn.run(
        "web.backend.main:app",
        host=host or config.server.host,
        port=port or config.server.port,
    )
    return 0


def run_ui(config: Config, api_url: Optional[str]) -> int:
    """Run the Textual player."""
    from radio_player.domain.playback import (
        PlaybackCoordinator,
        check_mpv_available,
        mpv_resource_factory,
    )
    from radio_player.ui import RadioPlayerApp

    setup_from_config(config.logging)

    if not check_mpv_available(config.player.mpv_path):
        log(f"Error: mpv not found ({config.player.mpv_path}). Install mpv to play streams.", level="error")
        return 1

    coordinator = PlaybackCoordinator(
        mpv_resource_factory(config.player), volume=config.player.volume
    )
    RadioPlayerApp(coordinator, _station_source(config, api_url)).run()
    return 0


def run_stations(config: Config, args: argparse.Namespace) -> int:
    """List, add or delete stations."""
    from radio_player.domain.stations import CatalogError, ValidationError

    setup_from_config(config.logging)
    source = _station_source(config, args.api_url)

    try:
        if args.action == "list":
            stations = source.list_stations()
            if not stations:
                print("No stations yet")
            for station in stations:
                extra = f" [{station.bitrate}]" if station.bitrate else ""
                print(f"{station.id}  {station.name}{extra}")
                print(f"    {station.url}")
            return 0

        if args.action == "add":
            data = {"name": args.name, "url": args.url}
            if args.description:
                data["description"] = args.description
            if args.bitrate:
                data["bitrate"] = args.bitrate
            station = source.create_station(data)
            log(f"✅ Added {station.name} ({station.id})")
            return 0

        if args.action == "delete":
            if not source.delete_station(args.id):
                log("Station not found", level="error")
                return 1
            log("✅ Station deleted successfully")
            return 0

    except ValidationError as e:
        log(f"❌ {e.message}", level="error")
        for error in e.errors:
            log(f"  {error.field}: {error.message}", level="error")
        return 1
    except CatalogError as e:
        log(f"❌ {e}", level="error")
        return 1

    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="radio-player",
        description="Radio Player - internet radio in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="subcommand", help="Available commands")

    serve_parser = subparsers.add_parser("serve", help="Run the station catalog HTTP API")
    serve_parser.add_argument("--host", help="Bind address (default from config)")
    serve_parser.add_argument("--port", type=int, help="Port (default from config)")

    ui_parser = subparsers.add_parser("ui", help="Run the terminal player (default)")
    ui_parser.add_argument("--api-url", help="Use a remote backend instead of the local store")

    stations_parser = subparsers.add_parser("stations", help="Manage stations")
    stations_parser.add_argument("--api-url", help="Use a remote backend instead of the local store")
    actions = stations_parser.add_subparsers(dest="action", required=True)

    actions.add_parser("list", help="List stations")

    add_parser = actions.add_parser("add", help="Add a station")
    add_parser.add_argument("name", help="Station name")
    add_parser.add_argument("url", help="Stream URL")
    add_parser.add_argument("--description", help="Genre or description")
    add_parser.add_argument("--bitrate", help="Bitrate label, e.g. '128 kbps'")

    delete_parser = actions.add_parser("delete", help="Delete a station")
    delete_parser.add_argument("id", help="Station ID")

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the radio-player command."""
    args = build_parser().parse_args(argv)
    config = load_config()

    if args.subcommand == "serve":
        sys.exit(run_serve(config, args.host, args.port))
    elif args.subcommand == "stations":
        sys.exit(run_stations(config, args))
    else:
        sys.exit(run_ui(config, getattr(args, "api_url", None)))


if __name__ == "__main__":
    main()
