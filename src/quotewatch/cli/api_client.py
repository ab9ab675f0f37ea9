"""CLI to exercise a running quotewatch API.

Usage:
  quotewatch-cli health
  quotewatch-cli --email me@example.com --password secret123 login
  quotewatch-cli --email me@example.com --password secret123 favorites add AAPL "Apple Inc."
  quotewatch-cli stocks quote AAPL
"""
import argparse
import json
import sys

import httpx

from quotewatch.client import ApiError, AuthClient


def print_json(data: object) -> None:
    print(json.dumps(data, indent=2, default=str))


def _require_credentials(args: argparse.Namespace) -> None:
    if not (args.email and args.password):
        raise SystemExit("--email and --password are required for this command")


def _sign_in(client: AuthClient, args: argparse.Namespace) -> None:
    _require_credentials(args)
    client.sign_in_with_password(args.email, args.password)


def cmd_health(client: AuthClient, _: argparse.Namespace) -> int:
    print_json(client.health())
    return 0


def cmd_register(client: AuthClient, args: argparse.Namespace) -> int:
    _require_credentials(args)
    print_json(client.sign_up(args.email, args.password, args.first_name, args.last_name))
    return 0


def cmd_login(client: AuthClient, args: argparse.Namespace) -> int:
    _sign_in(client, args)
    print_json(client.get_session().__dict__)
    return 0


def cmd_status(client: AuthClient, args: argparse.Namespace) -> int:
    if args.email and args.password:
        _sign_in(client, args)
    print_json(client.get_session().__dict__)
    return 0


def cmd_favorites_list(client: AuthClient, args: argparse.Namespace) -> int:
    _sign_in(client, args)
    data = client.list_favorites()
    print(f"Found {len(data)} favorites")
    print_json(data)
    return 0


def cmd_favorites_add(client: AuthClient, args: argparse.Namespace) -> int:
    _sign_in(client, args)
    print_json(client.add_favorite(args.symbol, args.company_name))
    return 0


def cmd_favorites_remove(client: AuthClient, args: argparse.Namespace) -> int:
    _sign_in(client, args)
    client.remove_favorite(args.symbol)
    print(f"Removed {args.symbol.upper()}")
    return 0


def cmd_premium(client: AuthClient, args: argparse.Namespace) -> int:
    _sign_in(client, args)
    if args.premium_cmd == "upgrade":
        print_json(client.upgrade_premium())
    else:
        print_json(client.downgrade_premium())
    return 0


def cmd_stocks_quote(client: AuthClient, args: argparse.Namespace) -> int:
    if args.email and args.password:
        _sign_in(client, args)
    print_json(client.get_quote(args.symbol))
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Exercise the quotewatch API.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--base-url",
        default="http://localhost:8000",
        help="API base URL (default: http://localhost:8000)",
    )
    parser.add_argument("--timeout", type=float, default=30.0, help="Request timeout in seconds")
    parser.add_argument("--email", default=None, help="Account email")
    parser.add_argument("--password", default=None, help="Account password")
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command")

    subparsers.add_parser("health", help="GET /api/health")

    p = subparsers.add_parser("register", help="POST /api/auth/register")
    p.add_argument("first_name")
    p.add_argument("last_name")
    subparsers.add_parser("login", help="POST /api/auth/login, then show the session")
    subparsers.add_parser("status", help="GET /api/auth/status")

    favorites = subparsers.add_parser("favorites", help="Favorites routes (/api/favorites)")
    fav_sub = favorites.add_subparsers(dest="favorites_cmd", required=True)
    fav_sub.add_parser("list", help="GET /api/favorites")
    p = fav_sub.add_parser("add", help="POST /api/favorites")
    p.add_argument("symbol", help="Ticker (e.g. AAPL)")
    p.add_argument("company_name", help="Company name (e.g. 'Apple Inc.')")
    p = fav_sub.add_parser("remove", help="DELETE /api/favorites/{symbol}")
    p.add_argument("symbol")

    premium = subparsers.add_parser("premium", help="Simulated premium upgrade/downgrade")
    premium.add_argument("premium_cmd", choices=["upgrade", "downgrade"])

    stocks = subparsers.add_parser("stocks", help="Stock routes (/api/stocks)")
    stocks_sub = stocks.add_subparsers(dest="stocks_cmd", required=True)
    p = stocks_sub.add_parser("quote", help="GET /api/stocks/{symbol}")
    p.add_argument("symbol", help="Ticker (e.g. AAPL, MSFT)")

    args = parser.parse_args()

    handlers = {
        "health": cmd_health,
        "register": cmd_register,
        "login": cmd_login,
        "status": cmd_status,
        "premium": cmd_premium,
        "favorites": {
            "list": cmd_favorites_list,
            "add": cmd_favorites_add,
            "remove": cmd_favorites_remove,
        },
        "stocks": {"quote": cmd_stocks_quote},
    }
    handler = handlers[args.command]
    if isinstance(handler, dict):
        handler = handler[getattr(args, f"{args.command}_cmd")]

    try:
        with AuthClient(args.base_url, timeout=args.timeout) as client:
            return handler(client, args)
    except ApiError as e:
        print(f"HTTP error: {e.status_code}", file=sys.stderr)
        print_json(e.body)
        return 1
    except httpx.RequestError as e:
        print(f"Request error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
