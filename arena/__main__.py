"""Entry point: ``python -m arena``.

  - ``python -m arena``                        → serve with defaults on port 3000
  - ``python -m arena serve --port 8080``      → serve on another port
  - ``python -m arena serve --combat-mode proximity`` → instant-kill variant
"""

from __future__ import annotations

import argparse
import logging

from arena.core.enums import CombatMode

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Arena Game Server")
    sub = parser.add_subparsers(dest="command")

    srv = sub.add_parser("serve", help="Start the game server (default)")
    srv.add_argument("--host", type=str, default=DEFAULT_HOST)
    srv.add_argument("--port", type=int, default=DEFAULT_PORT)
    srv.add_argument(
        "--combat-mode", type=str, default=CombatMode.DAMAGE.value,
        choices=[m.value for m in CombatMode],
    )
    srv.add_argument("--seed", type=int, default=None, help="World seed (random if omitted)")
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from arena.api.app import create_app
    from arena.config import ArenaConfig

    config = ArenaConfig.preset(
        args.combat_mode,
        world_seed=args.seed,
        log_level=args.log_level,
    )
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None:
        args = parser.parse_args(["serve"])
    _run_server(args)


if __name__ == "__main__":
    main()
