"""Print a bearer token for local calls against the API.

Usage:
    uv run python -m scripts.create_dev_token <role> [company]

role is admin, head_admin or visitor; company is required for visitors.
Signed with SECRET_KEY from the environment or .env, valid for
ACCESS_TOKEN_EXPIRE_MINUTES.
"""

import sys
from pathlib import Path

from dotenv import load_dotenv

from app.domain.enums import ActorRole
from app.infrastructure.security.jwt import create_access_token


def main() -> None:
    """Parse role/company from argv and print the token."""
    load_dotenv(Path(__file__).resolve().parent.parent / ".env", override=True)
    if len(sys.argv) < 2 or sys.argv[1] not in ActorRole.values():
        print(
            "Usage: uv run python -m scripts.create_dev_token <role> [company]",
            file=sys.stderr,
        )
        sys.exit(1)
    role = sys.argv[1]
    company = sys.argv[2] if len(sys.argv) > 2 else None
    if role == ActorRole.VISITOR.value and not company:
        print("Visitors need a company", file=sys.stderr)
        sys.exit(1)

    claims = {"sub": f"dev-{role}", "role": role, "firstname": "Dev", "lastname": role}
    if company:
        claims["company"] = company
    print(create_access_token(claims))


if __name__ == "__main__":
    main()
