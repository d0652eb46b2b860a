"""
Script to run database migrations.

Usage:
    python scripts/migrate.py                 # upgrade to head
    python scripts/migrate.py down <revision> # downgrade, e.g. "base"
    python scripts/migrate.py current         # show applied revision
"""

import sys

from alembic import command
from alembic.config import Config

ALEMBIC_INI = "alembic.ini"


def run_migrations(revision: str = "head") -> None:
    """Upgrade the schema to a revision."""
    alembic_cfg = Config(ALEMBIC_INI)

    try:
        print(f"Upgrading schema to {revision}...")
        command.upgrade(alembic_cfg, revision)
        print("✓ Migrations completed successfully!")
    except Exception as e:
        print(f"✗ Migration failed: {e}", file=sys.stderr)
        sys.exit(1)


def rollback(revision: str) -> None:
    """Downgrade the schema to a revision."""
    alembic_cfg = Config(ALEMBIC_INI)

    try:
        print(f"Downgrading schema to {revision}...")
        command.downgrade(alembic_cfg, revision)
        print("✓ Downgrade completed successfully!")
    except Exception as e:
        print(f"✗ Downgrade failed: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    args = sys.argv[1:]
    if not args:
        run_migrations()
    elif args[0] == "down" and len(args) == 2:
        rollback(args[1])
    elif args[0] == "current":
        command.current(Config(ALEMBIC_INI), verbose=True)
    else:
        print(__doc__)
        sys.exit(2)
