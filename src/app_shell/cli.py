import argparse
import logging
import sys

from src.adapters.clock import SystemClock
from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import (
    SQLiteDistributorRepo,
    SQLiteDistributorTermsRepo,
    SQLiteTermsTemplateRepo,
)
from src.api.deps import Settings
from src.app_shell.config import validate_ops_rules
from src.components.distributor_terms import DistributorTermsService
from src.components.terms_generation import TermsGenerationService
from src.rules.loader import load_rules
from src.rules.models import Rules

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")


def get_rules(settings: Settings) -> Rules:
    if not settings.rules_path.exists():
        logger.error(f"Rules file {settings.rules_path} not found.")
        sys.exit(1)

    rules = load_rules(settings.rules_path)
    validate_ops_rules(rules, settings.data_dir)
    return rules


def handle_migrate(settings: Settings, args: argparse.Namespace) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    migrator = SQLiteMigrator(settings.db_path, settings.migrations_dir)
    if args.list:
        pending = migrator.pending_migrations()
        print(f"{len(pending)} pending migration(s).")
        for filename in pending:
            print(f"  {filename}")
        return

    applied = migrator.run_migrations()
    print(f"Applied {len(applied)} migration(s).")


def handle_renew_due(settings: Settings, args: argparse.Namespace) -> None:
    rules = get_rules(settings)
    clock = SystemClock()
    terms = DistributorTermsService(
        SQLiteDistributorTermsRepo(settings.db_path),
        rules.terms,
        clock=clock,
        pagination=rules.pagination,
    )
    service = TermsGenerationService(
        SQLiteTermsTemplateRepo(settings.db_path),
        SQLiteDistributorRepo(settings.db_path),
        terms,
        clock,
        rules.terms,
    )

    report = service.renew_due()
    print(f"Renewed {len(report.renewed)} documents.")
    print(f"Skipped {len(report.skipped)} documents without auto-renewal.")
    if report.failed:
        print(f"Failed to renew {len(report.failed)} documents:")
        for terms_id, errors in report.failed.items():
            print(f"  {terms_id}: {', '.join(e.code for e in errors)}")
        sys.exit(1)


def main() -> None:
    parser = argparse.ArgumentParser(description="Distributor Management CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # migrate
    migrate_parser = subparsers.add_parser("migrate", help="Apply pending database migrations")
    migrate_parser.add_argument(
        "--list", action="store_true", help="List pending migrations without applying"
    )

    # renew_due
    subparsers.add_parser("renew_due", help="Renew signed terms inside the renewal window")

    args = parser.parse_args()

    settings = Settings()

    if args.command == "migrate":
        handle_migrate(settings, args)
    elif args.command == "renew_due":
        handle_renew_due(settings, args)


if __name__ == "__main__":
    main()
