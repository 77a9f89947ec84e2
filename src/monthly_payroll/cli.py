"""Payroll command line interface.

Usage:
    python -m monthly_payroll.cli init-db
    python -m monthly_payroll.cli generate --month 3 --year 2024
    python -m monthly_payroll.cli generate --month 3 --year 2024 --paid-policy reject
    python -m monthly_payroll.cli list --month 3 --year 2024 [--employee-id 7] [--json]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from monthly_payroll.config import PAID_RECORD_POLICIES
from monthly_payroll.database import create_schema, dispose_db, get_session
from monthly_payroll.exceptions import PayrollError, ValidationError
from monthly_payroll.logging_config import configure_logging
from monthly_payroll.services.payroll_generator import generate_payroll
from monthly_payroll.services.payroll_service import PayrollService

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID = 2


class PayrollCli:
    """Payroll Command Line Interface."""

    def __init__(self) -> None:
        self.parser = self._build_parser()

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="python -m monthly_payroll.cli",
            description="Monthly payroll tools",
        )
        parser.add_argument(
            "--log-level",
            default=None,
            help="Override LOG_LEVEL (DEBUG, INFO, WARNING, ...)",
        )
        subparsers = parser.add_subparsers(dest="command", help="Commands")

        subparsers.add_parser("init-db", help="Create database tables")

        generate = subparsers.add_parser(
            "generate",
            help="Generate payroll records for a period",
        )
        generate.add_argument("--month", type=int, required=True, help="Month, 1-12")
        generate.add_argument("--year", type=int, required=True, help="Year")
        generate.add_argument(
            "--paid-policy",
            choices=PAID_RECORD_POLICIES,
            default=None,
            help="How to treat records already marked paid (default: PAID_RECORD_POLICY)",
        )

        list_cmd = subparsers.add_parser(
            "list",
            help="List payroll records for a period",
        )
        list_cmd.add_argument("--month", type=int, required=True, help="Month, 1-12")
        list_cmd.add_argument("--year", type=int, required=True, help="Year")
        list_cmd.add_argument("--employee-id", type=int, default=None, help="Only this employee")
        list_cmd.add_argument("--json", action="store_true", help="Print JSON lines")

        return parser

    def run(self, argv: list[str] | None = None) -> int:
        """Parse arguments and run the selected command."""
        args = self.parser.parse_args(argv)
        if not args.command:
            self.parser.print_help()
            return EXIT_INVALID

        configure_logging(args.log_level)
        handler = {
            "init-db": self._cmd_init_db,
            "generate": self._cmd_generate,
            "list": self._cmd_list,
        }[args.command]

        try:
            return asyncio.run(self._run_and_dispose(handler, args))
        except ValidationError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return EXIT_INVALID
        except PayrollError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return EXIT_ERROR

    async def _run_and_dispose(self, handler: Any, args: argparse.Namespace) -> int:
        try:
            return await handler(args)
        finally:
            await dispose_db()

    async def _cmd_init_db(self, args: argparse.Namespace) -> int:
        await create_schema()
        print("Database tables created")
        return EXIT_OK

    async def _cmd_generate(self, args: argparse.Namespace) -> int:
        result = await generate_payroll(args.month, args.year, paid_policy=args.paid_policy)
        print(
            f"Generated payroll for {result.year}-{result.month:02d}: "
            f"{result.processed} processed, {result.created} created, "
            f"{result.updated} updated, {len(result.skipped_paid)} paid skipped"
        )
        return EXIT_OK

    async def _cmd_list(self, args: argparse.Namespace) -> int:
        async with get_session() as session:
            rows = await PayrollService(session).list_records(
                args.month, args.year, employee_id=args.employee_id
            )

        for row in rows:
            record = row.record
            if args.json:
                print(
                    json.dumps(
                        {**record.to_dict(), "employee_name": row.employee_name},
                        default=str,
                    )
                )
            else:
                print(
                    f"{record.employee_id:>6}  {row.employee_name:<24} "
                    f"{record.basic_salary:>12} {record.allowances:>12} "
                    f"{record.deductions:>12} {record.net_salary:>12}  {record.status}"
                )
        return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    return PayrollCli().run(argv)


if __name__ == "__main__":
    sys.exit(main())
