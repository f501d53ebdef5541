"""
Command-line view of a student's progress through an enrolled program.

Fetches the program structure for an enrollment, recomputes every proof
point and phase status from its exercises, and prints the tree with the
highlighted exercise of each proof point.

Run with: python main.py ENROLLMENT_ID [--continue] [--api-url URL]
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

project_root = Path(__file__).parent

# Load .env.local first (if exists), then .env as fallback
load_dotenv(project_root / ".env.local")
load_dotenv()

from xpertia.api import ApiClient, APIError, StudentApi
from xpertia.config import check_required_env_vars, init_sentry, session_from_env
from xpertia.enums import exercise_type_label
from xpertia.progress import (
    ProgramStructure,
    derive_phase,
    derive_status,
    display_progress,
    phase_progress,
    select_continuation,
    select_highlight,
)

logger = logging.getLogger(__name__)


def render_structure(structure: ProgramStructure) -> list[str]:
    """Render a recomputed program tree as indented text lines."""
    lines = [structure.program_name or structure.program_id]
    for phase in sorted(structure.phases, key=lambda p: p.position):
        phase = derive_phase(phase)
        lines.append(
            f"  Phase {phase.position}: {phase.name} "
            f"[{derive_status(phase.proof_points).value}] "
            f"{display_progress(phase_progress(phase))}%"
        )
        for proof_point in sorted(phase.proof_points, key=lambda pp: pp.position):
            lines.append(
                f"    {proof_point.name} [{proof_point.status.value}] "
                f"{display_progress(proof_point.progress)}%"
            )
            highlight = select_highlight(
                sorted(proof_point.exercises, key=lambda ex: ex.position)
            )
            if highlight is not None:
                lines.append(
                    f"      -> {highlight.name} "
                    f"({exercise_type_label(highlight.type)}, "
                    f"{highlight.estimated_minutes} min)"
                )
    return lines


async def show_progress(
    enrollment_id: str, api_url: str | None, show_continue: bool
) -> int:
    async with ApiClient(base_url=api_url, session=session_from_env()) as client:
        api = StudentApi(client)
        try:
            structure = await api.get_structure(enrollment_id)
        except APIError as e:
            print(f"Failed to fetch structure: {e.message} (HTTP {e.status_code})")
            return 1

    for line in render_structure(structure):
        print(line)

    if show_continue:
        continuation = select_continuation([derive_phase(p) for p in structure.phases])
        if continuation is None or continuation.exercise is None:
            print("\nNothing to continue.")
        else:
            print(
                f"\nContinue with: {continuation.exercise.name} "
                f"({continuation.proof_point.name}, {continuation.phase.name})"
            )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Xpertia student progress viewer")
    parser.add_argument("enrollment_id", help="Enrollment record id")
    parser.add_argument(
        "--continue",
        dest="show_continue",
        action="store_true",
        help="Also print the exercise to resume",
    )
    parser.add_argument(
        "--api-url",
        default=None,
        help="Student API base URL (default: XPERTIA_API_URL)",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    ok, warnings = check_required_env_vars()
    for warning in warnings:
        print(warning)
    if not ok:
        return 1

    init_sentry()
    return asyncio.run(show_progress(args.enrollment_id, args.api_url, args.show_continue))


if __name__ == "__main__":
    sys.exit(main())
