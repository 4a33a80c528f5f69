# apps/rewards/management/commands/estimate_rewards.py
# ================================================================================
"""
Django management command to estimate project rewards for one or more handles.

This command provides a CLI interface to the RewardEstimator: one-off
estimates, head-to-head comparisons, and an interactive `--stdin` mode where
every new line supersedes the lookup still in flight.
"""

from __future__ import annotations

import asyncio
import json
import math
import sys
from typing import TYPE_CHECKING, Any

import structlog
from django.core.management.base import BaseCommand, CommandError, CommandParser

from apps.core.services import upstream_client
from apps.core.services.upstream_client import UpstreamError
from apps.rewards.conf import ESTIMATE_CMD_DEFAULT_FDV, get_project
from apps.rewards.serializers import EstimateSerializer
from apps.rewards.services.estimator import RewardEstimator
from apps.rewards.services.tracker import Failed, LatestEstimateTracker, Loaded
from common.parsers_utils import clean_handle

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import TextIO

    from apps.rewards.conf import ProjectConfig
    from apps.rewards.services.tracker import EstimateState

log = structlog.get_logger(__name__)


class Command(BaseCommand):
    """Prints reward estimates for handles on one project."""

    help = "Estimates project token rewards for the given handles from live leaderboard data."
    stealth_options = ("stdin_stream",)

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument("slug", help="Project slug, e.g. 'billions'.")
        parser.add_argument("handles", nargs="*", help="Handles to estimate; a leading '@' is ignored.")
        parser.add_argument(
            "--fdv",
            type=float,
            default=ESTIMATE_CMD_DEFAULT_FDV,
            help="Simulated fully diluted valuation in USD.",
        )
        parser.add_argument("--compare", metavar="FREN", help="Compare every handle against this one.")
        parser.add_argument(
            "--stdin",
            action="store_true",
            help="Read handles line by line; a new line supersedes the lookup in flight.",
        )
        parser.add_argument(
            "--json",
            action="store_true",
            help="Output the result as raw JSON instead of pretty-printing.",
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Synchronous entry point that orchestrates the async execution."""
        try:
            asyncio.run(self._handle_async(**options))
        except KeyboardInterrupt:
            self.stderr.write(self.style.WARNING("\nOperation cancelled by user."))
        except CommandError:
            raise
        except Exception as e:
            log.exception("estimate_rewards command failed unexpectedly.", exc_info=e)
            msg = f"Command failed with an unhandled exception: {e}"
            raise CommandError(msg) from e

    async def _handle_async(self, **options: Any) -> None:
        config = get_project(options["slug"])
        if config is None:
            msg = f"Unknown project '{options['slug']}'."
            raise CommandError(msg)

        fdv = options["fdv"]
        if not math.isfinite(fdv) or fdv < 0:
            msg = f"Invalid --fdv {fdv}: must be a finite, non-negative number."
            raise CommandError(msg)

        handles = [h for h in map(clean_handle, options["handles"]) if h]
        estimator = RewardEstimator(config)

        if options["stdin"]:
            stream = options.get("stdin_stream") or sys.stdin
            await self._run_interactive(estimator, config, fdv, stream, as_json=options["json"])
            return
        if not handles:
            msg = "At least one handle is required (or use --stdin)."
            raise CommandError(msg)

        fren = clean_handle(options["compare"]) if options["compare"] else ""
        failures = 0
        for handle in handles:
            try:
                if fren:
                    comparison = await estimator.compare(handle, fren, fdv)
                    payload = EstimateSerializer.serialize_comparison(comparison, config)
                else:
                    estimate = await estimator.estimate(handle, fdv)
                    payload = EstimateSerializer.serialize_estimate(estimate, config)
            except UpstreamError as e:
                failures += 1
                self.stderr.write(self.style.ERROR(f"✗ @{handle}: {e}"))
                continue
            self._emit(payload, as_json=options["json"], comparison=bool(fren))

        if failures:
            msg = f"{failures} of {len(handles)} lookups failed."
            raise CommandError(msg)

    async def _run_interactive(
        self,
        estimator: RewardEstimator,
        config: ProjectConfig,
        fdv: float,
        stream: TextIO,
        *,
        as_json: bool,
    ) -> None:
        """Every line read starts a lookup; only the latest one reports."""
        async with upstream_client.new_session() as session:
            tracker = LatestEstimateTracker(lambda h: estimator.estimate(h, fdv, session=session))

            async def _lookup(handle: str) -> None:
                state = await tracker.submit(handle)
                self._report(state, handle, config, as_json=as_json)

            async with asyncio.TaskGroup() as tg:
                while line := await asyncio.to_thread(stream.readline):
                    handle = clean_handle(line)
                    if handle:
                        tg.create_task(_lookup(handle))

    def _report(self, state: EstimateState, handle: str, config: ProjectConfig, *, as_json: bool) -> None:
        if isinstance(state, Loaded) and state.handle == handle:
            self._emit(EstimateSerializer.serialize_estimate(state.estimate, config), as_json=as_json)
        elif isinstance(state, Failed) and state.handle == handle:
            self.stderr.write(self.style.ERROR(f"✗ @{handle}: {state.reason}"))

    def _emit(self, payload: Mapping[str, Any], *, as_json: bool, comparison: bool = False) -> None:
        if as_json:
            self.stdout.write(json.dumps(payload, indent=2, default=str))
        elif comparison:
            self._pretty_print_comparison(payload)
        else:
            self._pretty_print(payload)

    def _pretty_print(self, result: Mapping[str, Any]) -> None:
        """Formats and prints a user-friendly summary of one estimate."""
        style = self.style
        self.stdout.write(style.MIGRATE_HEADING("\n" + "=" * 34))
        self.stdout.write(style.SUCCESS(f"  @{result['handle']} on {result['project']}"))
        self.stdout.write(style.MIGRATE_HEADING("=" * 34))
        self.stdout.write(f"  Score    : {result['weighted_score']:.4f}")
        self.stdout.write(f"  Signal   : {'mindshare' if result['used_mindshare'] else 'rank fallback'}")
        self.stdout.write(f"  Best rank: {result['best_rank'] if result['best_rank'] is not None else 'n/a'}")
        eligible = style.SUCCESS("yes") if result["eligible"] else style.WARNING("no")
        self.stdout.write(f"  Eligible : {eligible}")
        self.stdout.write(f"  Tokens   : {result['tokens_awarded']:,.2f} {result['ticker']}")
        self.stdout.write(f"  Worth    : ${result['worth_usd']:,.2f} at FDV ${result['fdv']:,.0f}")
        self.stdout.write(f"  Tagline  : {result['tagline']}")
        self.stdout.write(style.MIGRATE_HEADING("=" * 34))

    def _pretty_print_comparison(self, result: Mapping[str, Any]) -> None:
        you, fren = result["you"], result["fren"]
        self.stdout.write(self.style.MIGRATE_HEADING(f"\n@{you['handle']} vs @{fren['handle']} on {result['project']}"))
        self.stdout.write(f"  @{you['handle']:<16} ${you['worth_usd']:,.2f} ({result['you_share_pct']:.1f}%)")
        self.stdout.write(f"  @{fren['handle']:<16} ${fren['worth_usd']:,.2f} ({result['fren_share_pct']:.1f}%)")
        self.stdout.write(self.style.SUCCESS(f"  Leader: @{result['leader']}"))
