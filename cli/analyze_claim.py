"""
CLI tool for analyzing a claim before approval.
Usage: python -m cli.analyze_claim --type Flood --state Florida --amount 280000
"""

import sys
import json
import logging
import argparse
from typing import List, Optional

from claimsense.exceptions import StoreLoadError
from claimsense.pipeline.orchestrator import ClaimAnalysisPipeline
from claimsense.pipeline.models import AnalysisResult
from claimsense.utils.amounts import format_currency, parse_amount


# ANSI color codes for terminal output
class Colors:
    HEADER = '\033[95m'
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'


TIER_COLORS = {
    "CRITICAL": Colors.RED,
    "HIGH": Colors.YELLOW,
    "MODERATE": Colors.CYAN,
}


def print_header(text: str):
    """Print a header with formatting."""
    print(f"\n{Colors.BOLD}{Colors.BLUE}{text}{Colors.ENDC}")


def print_step(step_num: int, name: str, status: str):
    """Print step progress."""
    if status == "running":
        icon = "..."
        color = Colors.YELLOW
    elif status == "complete":
        icon = "done"
        color = Colors.GREEN
    else:
        icon = "!"
        color = Colors.RED

    print(f"  [{step_num}/3] {name:<25} {color}{icon}{Colors.ENDC}")


def print_result(result: AnalysisResult):
    """Print the analysis result in a formatted way."""
    if not result.success:
        print(f"\n{Colors.RED}Claim analysis failed!{Colors.ENDC}")
        for error in result.errors:
            print(f"  Error: {error}")
        return

    print("\n" + "=" * 70)
    print(f"{Colors.BOLD}  {result.claim_type} claim in {result.jurisdiction} "
          f"for {format_currency(parse_amount(result.amount))}{Colors.ENDC}")
    print("=" * 70)

    # Regret-aware risk
    risk = result.risk
    color = TIER_COLORS.get(risk.tier, Colors.ENDC)
    print_header("Regret-Aware Risk Assessment")
    print(f"  Score: {color}{Colors.BOLD}{risk.score}%{Colors.ENDC}  Tier: {color}{risk.tier}{Colors.ENDC}")
    for factor in risk.factors:
        print(f"  - {factor.description} (Impact: {factor.impact}, Probability: {factor.probability}%)")
    if risk.recommended_actions:
        print(f"\n  {Colors.BOLD}Recommended Actions:{Colors.ENDC}")
        for action in risk.recommended_actions:
            print(f"    * {action}")

    # Decision memory
    memory = result.memory
    print_header("Decision Memory Insights")
    print(f"  Similar cases: {memory.total_cases}   Failed: {memory.failed_cases}   "
          f"Failure rate: {memory.failure_rate}%   Avg resolution: {memory.avg_resolution_time:.1f}d")
    if memory.issue_frequency:
        print(f"\n  {Colors.BOLD}Common Issues in Similar Cases:{Colors.ENDC}")
        for item in memory.issue_frequency:
            noun = "case" if item.count == 1 else "cases"
            print(f"    - {item.issue}: {item.count} {noun}")

    # Knowledge
    print_header("Relevant Policy Rules")
    if not result.knowledge:
        print("  No matching policy rules")
    for excerpt in result.knowledge:
        print(f"  [{excerpt.category}] {excerpt.content}")
        print(f"    {Colors.CYAN}{excerpt.citation}{Colors.ENDC}")

    if result.metrics:
        print(f"\n{Colors.BOLD}Processing time:{Colors.ENDC} {result.metrics.total_duration_seconds * 1000:.1f} ms")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Analyze a claim: relevant policy rules, decision memory and regret risk",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m cli.analyze_claim --type Flood --state Florida --amount 280000
  python -m cli.analyze_claim -c Storm -s Texas -a 100000 --hour 17
  python -m cli.analyze_claim -c Flood -s Florida -a 245000 --json
        """
    )

    parser.add_argument("--type", "-c", dest="claim_type", help="Claim type (e.g. Flood, Fire, Storm)")
    parser.add_argument("--state", "-s", dest="jurisdiction", help="Jurisdiction (e.g. Florida)")
    parser.add_argument("--amount", "-a", help="Claim amount in dollars")
    parser.add_argument(
        "--hour",
        type=int,
        choices=range(24),
        metavar="0-23",
        help="Hour of the decision (defaults to the current local hour)"
    )
    parser.add_argument(
        "--json", "-j",
        action="store_true",
        help="Output result as JSON only"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress progress output"
    )
    return parser


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    missing = [
        flag for flag, value in (
            ("--type", args.claim_type),
            ("--state", args.jurisdiction),
            ("--amount", args.amount),
        )
        if not value or not value.strip()
    ]
    if missing:
        print(f"{Colors.RED}Error: Please fill in all fields (missing {', '.join(missing)}){Colors.ENDC}")
        sys.exit(1)

    # Setup progress callback
    def progress_callback(step: int, name: str, status: str):
        if not args.quiet and not args.json:
            print_step(step, name, status)

    if not args.quiet and not args.json:
        print(f"\n{Colors.BOLD}Claim Analysis{Colors.ENDC}")
        print("-" * 40)

    try:
        pipeline = ClaimAnalysisPipeline(progress_callback=progress_callback)
        result = pipeline.process(
            args.claim_type.strip(),
            args.jurisdiction.strip(),
            args.amount.strip(),
            clock_hour=args.hour,
        )
    except StoreLoadError as e:
        if args.json:
            print(json.dumps({"success": False, "error": str(e)}))
        else:
            print(f"\n{Colors.RED}Error: {e}{Colors.ENDC}")
        sys.exit(1)

    if args.json:
        print(json.dumps(result.model_dump(), indent=2, default=str))
    else:
        print_result(result)

    sys.exit(0 if result.success else 1)


if __name__ == "__main__":
    main()
