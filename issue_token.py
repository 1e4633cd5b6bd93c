"""
Script to mint a bearer token for local development.

Users are managed outside this service, so there is no login endpoint.
Run this script from the project root:
    python issue_token.py alice
    python issue_token.py admin --admin --minutes 30
"""

import argparse
import os
import sys
from datetime import timedelta

# Add app to Python path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from app.core.security import create_access_token


def main(argv=None):
    parser = argparse.ArgumentParser(description="Issue a Jobly API access token")
    parser.add_argument("username")
    parser.add_argument("--admin", action="store_true", help="Set the admin flag")
    parser.add_argument("--minutes", type=int, default=None, help="Expiry in minutes")
    args = parser.parse_args(argv)

    expires = timedelta(minutes=args.minutes) if args.minutes else None
    token = create_access_token(args.username, is_admin=args.admin, expires_delta=expires)
    print(f"Authorization: Bearer {token}")


if __name__ == "__main__":
    main()
