"""Utility script to issue a bearer token scoped to an organization."""

from __future__ import annotations

import argparse
from datetime import timedelta

from insights_api.infrastructure.database import initialize_database
from insights_api.infrastructure.security import create_access_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for token issuing."""

    parser = argparse.ArgumentParser(
        description="Issue an access token for the Activity & Insights API.",
    )
    parser.add_argument(
        "--org-id",
        required=True,
        help="Organization the token is scoped to",
    )
    parser.add_argument(
        "--user-id",
        default=None,
        help="User recorded as the actor of events sent with this token (optional)",
    )
    parser.add_argument(
        "--expires-minutes",
        type=int,
        default=None,
        help="Token lifetime in minutes (default: ACCESS_TOKEN_EXPIRE_MINUTES)",
    )
    parser.add_argument(
        "--init-db",
        action="store_true",
        help="Create the database tables before issuing the token.",
    )
    return parser.parse_args()


def main() -> None:
    """Print a signed token for the provided organization."""

    args = parse_args()
    if not args.org_id.strip():
        raise SystemExit("An organization id is required.")
    if args.expires_minutes is not None and args.expires_minutes <= 0:
        raise SystemExit("--expires-minutes must be a positive number.")

    if args.init_db:
        initialize_database()

    token = create_access_token(
        org_id=args.org_id.strip(),
        user_id=args.user_id,
        expires_delta=(
            timedelta(minutes=args.expires_minutes) if args.expires_minutes else None
        ),
    )
    print(token)


if __name__ == "__main__":
    main()
