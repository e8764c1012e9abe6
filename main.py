"""
HR Admin Console - Entry Point.

Command line front end for the HR/payroll API. Each subcommand opens an
AppContext, loads the feature modules and runs one action.

Usage:
    python main.py menu
    python main.py employees --search rahim --sort-key branch --order desc
    python main.py salary --month March --page-size 50
    python main.py leaves
    python main.py grant <leave-id> [--dates 2025-03-02 2025-03-04]
    python main.py decline <leave-id>
    python main.py revoke <leave-id> [--yes]
    python main.py export-xlsx --month March
    python main.py export-pdf --month March
    python main.py new-shift --name Morning --start 09:00 --end 17:00 --weekend Friday

Exit status is 0 when the action succeeded and 1 otherwise.
"""

import argparse
import asyncio
import logging
import sys
from datetime import date
from typing import Any, Awaitable, Callable, Optional, Sequence

from pydantic import ValidationError

from core.app_context import AppContext, open_app_context
from core.config import PAGE_SIZE_OPTIONS, get_settings
from core.exceptions import ApiError, ConsoleValidationError, FilterRequiredError
from core.interface import IAppModule
from core.listing import ListState, SortOrder
from core.logging_config import setup_logging
from core.notifications import Notification
from core.registry import ModuleLoader
from modules.leave.schemas import GrantMode
from modules.salary.schemas import MONTH_NAMES
from modules.shifts.schemas import ShiftConfig, Weekday

FEATURE_PACKAGES = [
    "modules.employees",
    "modules.leave",
    "modules.salary",
    "modules.shifts",
]
NO_DATA = "No data"

logger = logging.getLogger(__name__)

CommandHandler = Callable[[AppContext, argparse.Namespace], Awaitable[bool]]


# -----------------------------------------------------------------------------
# Output helpers
# -----------------------------------------------------------------------------


def print_notification(notification: Notification) -> None:
    print(f"[{notification.level.value.upper()}] {notification.message}")


def print_table(headings: Sequence[str], rows: Sequence[Sequence[Any]]) -> None:
    """Print rows as aligned columns; an empty result prints a single "No data" row."""
    cells = [[str(value) for value in row] for row in rows]
    widths = [len(heading) for heading in headings]
    for row in cells:
        for i, value in enumerate(row):
            widths[i] = max(widths[i], len(value))

    print("  ".join(heading.ljust(widths[i]) for i, heading in enumerate(headings)))
    print("  ".join("-" * width for width in widths))
    if not cells:
        print(NO_DATA)
        return
    for row in cells:
        print("  ".join(value.ljust(widths[i]) for i, value in enumerate(row)))


def print_page_footer(state: ListState) -> None:
    query = state.query
    if query is None:
        return
    print(
        f"Showing {state.first_row_number}-{state.last_row_number} of {state.total_count}"
        f" (page {query.page} of {state.total_pages})"
    )


def _feature(context: AppContext, name: str) -> Optional[IAppModule]:
    """Registered module ``name`` if the operator's role may open it."""
    module = context.registry.get_module(name)
    if module is None:
        context.notifier.error(f"Module '{name}' is not available")
        return None
    if not module.is_visible_to(context.user.role):
        context.notifier.warning(f"{module.get_menu_config()['label']} is not available for role {context.user.role}")
        return None
    return module


# -----------------------------------------------------------------------------
# Commands
# -----------------------------------------------------------------------------


async def cmd_menu(context: AppContext, args: argparse.Namespace) -> bool:
    view = context.dashboard().render(context.user.role, context.registry)
    print(f"{view['title']} ({view['role']})")
    print_table(["Menu", "Route", "Command"], [
        [item["label"], item["route"], item.get("command") or ""] for item in view["menu"]
    ])
    return True


async def cmd_employees(context: AppContext, args: argparse.Namespace) -> bool:
    module = _feature(context, "employees")
    if module is None:
        return False
    directory = module.directory
    query_state = directory.new_query_state()
    query_state.set_sort_key(args.sort_key)
    query_state.set_sort_order(SortOrder(args.order))
    query_state.set_page_size(args.page_size)
    if args.search:
        query_state.set_search_text(args.search)
        query_state.flush()
    query_state.set_page(args.page)

    state = await directory.fetch_page(query_state.query)
    if state.error is not None:
        return False
    print_table(
        ["#", "EID", "Name", "Designation", "Branch", "Status", "Phone"],
        [
            [state.first_row_number + i, e.eid, e.full_name, e.designation, e.branch, e.status, e.phone_number]
            for i, e in enumerate(state.rows)
        ],
    )
    print_page_footer(state)
    return True


async def cmd_salary(context: AppContext, args: argparse.Namespace) -> bool:
    module = _feature(context, "salary")
    if module is None:
        return False
    sheet = module.sheet
    query_state = sheet.new_query_state(month=args.month or "")
    query_state.set_page_size(args.page_size)
    if args.search:
        query_state.set_search_text(args.search)
        query_state.flush()
    query_state.set_page(args.page)

    state = await sheet.fetch_page(query_state.query)
    if state.error is not None:
        return False
    print_table(
        ["#", "Name", "Email", "Account No.", "Salary", "Per Day", "Present", "Absent", "Total"],
        [
            [
                state.first_row_number + i,
                r.name,
                r.email,
                r.account_number,
                f"{r.salary:,.2f}",
                f"{r.per_day_salary:,.2f}",
                "-" if r.present is None else r.present,
                "-" if r.absent is None else r.absent,
                f"{r.total:,.2f}",
            ]
            for i, r in enumerate(state.rows)
        ],
    )
    print_page_footer(state)
    return True


async def cmd_leaves(context: AppContext, args: argparse.Namespace) -> bool:
    module = _feature(context, "leave")
    if module is None:
        return False
    workflow = module.workflow()
    leaves = await workflow.load()
    summary = workflow.summary()
    print(f"Total: {summary.total}  Approved: {summary.approved}  Pending: {summary.pending}")
    print_table(
        ["ID", "Employee", "Position", "Type", "From", "To", "Days", "Granted", "Status"],
        [
            [
                leave.id,
                leave.employee_name,
                leave.position,
                leave.leave_type,
                leave.start_date,
                leave.end_date,
                leave.total_days if leave.total_days is not None else len(leave.requested_dates),
                len(leave.granted_dates),
                leave.status,
            ]
            for leave in leaves
        ],
    )
    return True


async def _confirm_on_terminal(title: str, text: str) -> bool:
    answer = await asyncio.to_thread(input, f"{title}\n{text} [y/N] ")
    return answer.strip().lower() in ("y", "yes")


async def _always_confirm(title: str, text: str) -> bool:
    return True


async def _load_leave(context: AppContext, args: argparse.Namespace, confirm=None):
    module = _feature(context, "leave")
    if module is None:
        return None, None
    workflow = module.workflow(confirm=confirm)
    await workflow.load()
    leave = workflow.get(args.leave_id)
    if leave is None:
        context.notifier.error(f"Leave application {args.leave_id} not found")
    return workflow, leave


async def cmd_grant(context: AppContext, args: argparse.Namespace) -> bool:
    workflow, leave = await _load_leave(context, args)
    if leave is None:
        return False
    if args.dates:
        result = await workflow.accept(leave, GrantMode.PARTIAL, args.dates)
    else:
        result = await workflow.accept(leave, GrantMode.FULL)
    return result.ok


async def cmd_decline(context: AppContext, args: argparse.Namespace) -> bool:
    workflow, leave = await _load_leave(context, args)
    if leave is None:
        return False
    return (await workflow.decline(leave)).ok


async def cmd_revoke(context: AppContext, args: argparse.Namespace) -> bool:
    confirm = _always_confirm if args.yes else _confirm_on_terminal
    workflow, leave = await _load_leave(context, args, confirm=confirm)
    if leave is None:
        return False
    return (await workflow.revoke(leave)).ok


async def cmd_export_xlsx(context: AppContext, args: argparse.Namespace) -> bool:
    module = _feature(context, "salary")
    if module is None:
        return False
    path = await module.exporter.export_spreadsheet(args.month, args.search)
    if path is not None:
        print(path)
    return path is not None


async def cmd_export_pdf(context: AppContext, args: argparse.Namespace) -> bool:
    module = _feature(context, "salary")
    if module is None:
        return False
    path = await module.exporter.export_pdf(args.month, args.search)
    if path is not None:
        print(path)
    return path is not None


async def cmd_new_shift(context: AppContext, args: argparse.Namespace) -> bool:
    module = _feature(context, "shifts")
    if module is None:
        return False
    try:
        config = ShiftConfig(
            shift_name=args.name,
            branch=args.branch,
            start_time=args.start,
            end_time=args.end,
            late_after_minutes=args.late,
            absent_after_minutes=args.absent,
            allow_ot=not args.no_ot,
            weekends=args.weekend or (),
        )
    except ValidationError as e:
        context.notifier.warning(f"Invalid shift: {e.error_count()} field(s) rejected")
        logger.warning(f"Invalid shift: {e}")
        return False
    return await module.service.create_shift(config)


COMMANDS: dict[str, CommandHandler] = {
    "menu": cmd_menu,
    "employees": cmd_employees,
    "salary": cmd_salary,
    "leaves": cmd_leaves,
    "grant": cmd_grant,
    "decline": cmd_decline,
    "revoke": cmd_revoke,
    "export-xlsx": cmd_export_xlsx,
    "export-pdf": cmd_export_pdf,
    "new-shift": cmd_new_shift,
}


# -----------------------------------------------------------------------------
# Entry point
# -----------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="HR / payroll admin console")
    parser.add_argument("-v", "--verbose", action="store_true", help="Also print log records to stdout")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("menu", help="Show the dashboard menu for the signed-in role")

    employees = sub.add_parser("employees", help="List employees")
    employees.add_argument("--search", default="")
    employees.add_argument("--sort-key", default="fullName", choices=["fullName", "status", "branch"])
    employees.add_argument("--order", default="asc", choices=[o.value for o in SortOrder])
    employees.add_argument("--page", type=int, default=1)
    employees.add_argument("--page-size", type=int, default=20, choices=PAGE_SIZE_OPTIONS)

    salary = sub.add_parser("salary", help="Show the salary sheet of a month")
    salary.add_argument("--month", choices=MONTH_NAMES)
    salary.add_argument("--search", default="")
    salary.add_argument("--page", type=int, default=1)
    salary.add_argument("--page-size", type=int, default=20, choices=PAGE_SIZE_OPTIONS)

    sub.add_parser("leaves", help="List applied leave")

    grant = sub.add_parser("grant", help="Grant a leave application in full or for some dates")
    grant.add_argument("leave_id")
    grant.add_argument("--dates", nargs="+", type=date.fromisoformat, metavar="YYYY-MM-DD")

    decline = sub.add_parser("decline", help="Decline a leave application")
    decline.add_argument("leave_id")

    revoke = sub.add_parser("revoke", help="Revoke the granted days of a leave application")
    revoke.add_argument("leave_id")
    revoke.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")

    for name, help_text in (
        ("export-xlsx", "Export a month's salary sheet as .xlsx"),
        ("export-pdf", "Generate the bank transfer letter as .pdf"),
    ):
        export = sub.add_parser(name, help=help_text)
        export.add_argument("--month", choices=MONTH_NAMES)
        export.add_argument("--search", default="")

    shift = sub.add_parser("new-shift", help="Create a shift")
    shift.add_argument("--name", required=True)
    shift.add_argument("--branch", default="dhaka")
    shift.add_argument("--start", required=True, metavar="HH:MM")
    shift.add_argument("--end", required=True, metavar="HH:MM")
    shift.add_argument("--late", type=int, default=0, help="Minutes after start counted as late")
    shift.add_argument("--absent", type=int, default=5, help="Minutes after start counted as absent")
    shift.add_argument("--no-ot", action="store_true", help="Disallow overtime")
    shift.add_argument("--weekend", action="append", choices=[d.value for d in Weekday])

    return parser


async def run(args: argparse.Namespace) -> int:
    settings = get_settings()
    async with open_app_context(settings) as context:
        context.notifier.subscribe(print_notification)
        ModuleLoader(context.registry).load_packages(FEATURE_PACKAGES)

        handler = COMMANDS[args.command]
        try:
            ok = await handler(context, args)
        except FilterRequiredError:
            ok = False
        except ConsoleValidationError as e:
            context.notifier.warning(str(e))
            ok = False
        except ApiError as e:
            context.notifier.error(str(e))
            ok = False
    return 0 if ok else 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log_level, console_level=None if args.verbose else logging.CRITICAL)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
