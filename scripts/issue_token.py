"""Print a bearer token for a caller identity.

Usage:
    python scripts/issue_token.py alice [--minutes 60]
"""
import argparse
import sys
from datetime import timedelta

sys.path.insert(0, ".")
from catalog.kernel.identity.jwt import create_access_token


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("principal", help="caller identity to embed as the token subject")
    parser.add_argument("--minutes", type=int, default=None, help="token lifetime")
    args = parser.parse_args()

    expires = timedelta(minutes=args.minutes) if args.minutes else None
    token, expire, _ = create_access_token(args.principal, expires)
    print(token)
    print(f"expires {expire.isoformat()}", file=sys.stderr)


if __name__ == "__main__":
    main()
