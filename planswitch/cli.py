#!/usr/bin/env python3
"""
CLI interface for viewing and changing the account plan.

Usage:
    planswitch              # list plans and pick one interactively
    planswitch premium      # switch to a specific plan

    # Or using Python module:
    python -m planswitch.cli pro
"""

import argparse
import sys
import time
from pathlib import Path
from typing import Optional

import httpx

from planswitch.config import DASHBOARD_URL, GLOBAL_CONFIG_DIR, BILLING_COMMAND, logger, set_debug
from planswitch.core.errors import InvalidInputError, PlanSwitchError, PlanServiceError, classify
from planswitch.core.plan_client import PlanClient
from planswitch.core.plans.catalog import PlanCatalog
from planswitch.core.plans.models import OutcomeTag, TransitionOutcome
from planswitch.core.plans.service import TransitionDecisionEngine
from planswitch.credentials import Session, load_session
from planswitch.prompt import SelectionPrompter


NO_CHANGES_MESSAGE = "No changes made"


def error(message: str) -> None:
    print(f"Error! {message}", file=sys.stderr)


def success(message: str) -> None:
    print(f"Success! {message}")


def format_elapsed(seconds: float) -> str:
    """Format elapsed time like '120ms' or '2s'."""
    if seconds < 1:
        return f"{int(seconds * 1000)}ms"
    return f"{round(seconds)}s"


def outcome_message(outcome: TransitionOutcome) -> str:
    """Status line for a transition outcome."""
    if outcome.tag == OutcomeTag.NO_CHANGE:
        return NO_CHANGES_MESSAGE
    if outcome.tag == OutcomeTag.CANCELLATION_UNDONE:
        return f"The cancelation has been undone. You're back on the {outcome.plan_name} plan"
    if outcome.tag == OutcomeTag.DEFERRED:
        return (
            f"Your plan will be switched to {outcome.plan_name} in {outcome.until}. "
            "Your card will not be charged again"
        )
    return f"You're now on the {outcome.plan_name} plan"


def validate_plan_args(plans: list[str]) -> Optional[str]:
    """
    Check positional arguments before any network call.

    Raises:
        InvalidInputError: On more than one argument or an unknown plan id
    """
    if len(plans) > 1:
        raise InvalidInputError("Invalid number of arguments")

    plan_id = plans[0] if plans else None
    if not PlanCatalog.is_valid_id(plan_id):
        names = ", ".join(f"`{pid}`" for pid in PlanCatalog.ids())
        raise InvalidInputError(f"Invalid plan name - should be one of {names}")
    return plan_id


def selection_message(session: Session, elapsed: str) -> str:
    url = f"{DASHBOARD_URL}/{session.team_slug}/settings/plan" if session.team_slug else f"{DASHBOARD_URL}/account/plan"
    return (
        f"For more info, please head to {url}\n"
        f"> Select a plan for {session.display_name} [{elapsed}]"
    )


def run(
    plan_id: Optional[str],
    session: Session,
    prompter: Optional[SelectionPrompter] = None,
) -> int:
    """Fetch, decide, commit and report. Returns the process exit code."""
    start = time.monotonic()

    with PlanClient(token=session.token, team_id=session.team_id) as client:
        current = client.get_current()
        logger.debug("Current plan state: %s", current)

        if plan_id is None:
            prompter = prompter or SelectionPrompter()
            message = selection_message(session, format_elapsed(time.monotonic() - start))
            plan_id = prompter.select(message, current.active_id, current.effective_at)

        engine = TransitionDecisionEngine(client)
        try:
            outcome = engine.decide(current, plan_id)
        except (PlanServiceError, httpx.HTTPError) as e:
            error(classify(e).message)
            return 1

    if outcome is None or outcome.tag == OutcomeTag.NO_CHANGE:
        print(NO_CHANGES_MESSAGE)
        return 0

    success(outcome_message(outcome))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="planswitch",
        description="View and change the subscription plan of your account",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  # List available plans and pick one interactively
  %(prog)s

  NOTE: Make sure you have a payment method, or add one:
  {BILLING_COMMAND}

  # Pick a specific plan (e.g. "premium")
  %(prog)s premium
        """,
    )
    parser.add_argument(
        "plan",
        nargs="*",
        help=f"Plan to switch to ({', '.join(PlanCatalog.ids())})",
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Debug mode",
    )
    parser.add_argument(
        "--local-config", "-A",
        metavar="FILE",
        help="Path to the local `now.json` file",
    )
    parser.add_argument(
        "--global-config", "-Q",
        metavar="DIR",
        help="Path to the global `.now` directory",
    )
    parser.add_argument(
        "--token", "-t",
        metavar="TOKEN",
        help="Login token",
    )
    parser.add_argument(
        "--team", "-T",
        metavar="TEAM",
        help="Set a custom team scope",
    )
    return parser


def main(args: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    parsed = parser.parse_args(args)
    set_debug(parsed.debug)

    if parsed.plan and parsed.plan[0] == "help":
        parser.print_help()
        return 0

    try:
        plan_id = validate_plan_args(parsed.plan)
        session = load_session(
            global_dir=Path(parsed.global_config).expanduser() if parsed.global_config else GLOBAL_CONFIG_DIR,
            local_config=Path(parsed.local_config).expanduser() if parsed.local_config else None,
            token=parsed.token,
            team=parsed.team,
        )
        return run(plan_id, session)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except PlanSwitchError as e:
        error(str(e))
        return 1
    except Exception as e:
        logger.debug("Unhandled error", exc_info=True)
        error(f"Unknown error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
