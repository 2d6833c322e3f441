import argparse

from app.core.config import ADMIN_ROLE
from app.core.security import create_access_token


def main():
    parser = argparse.ArgumentParser(description="Print an admin access token")
    parser.add_argument("admin_id")
    parser.add_argument("--username", default=None)
    args = parser.parse_args()

    print(create_access_token(args.admin_id, ADMIN_ROLE, username=args.username))


if __name__ == "__main__":
    main()
