import asyncio
import logging
import argparse
import sys
from pathlib import Path

from core.app_context import AppContext
from core.config_loader import AppConfig, load_config
from core.exceptions import ScreeningError
from database.database import init_db, make_session_factory

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def run_init_db(config) -> None:
    init_db(make_session_factory(config.database.url))


def run_serve(config: AppConfig) -> None:
    from web.backend.app import main as serve
    serve(config)


async def run_ingest(config, job_id: str, paths) -> int:
    """Score resume files from disk against a job and print the ranked pipeline."""
    ctx = AppContext.build(config)
    files = [(Path(p).read_bytes(), Path(p).name) for p in paths]
    outcome = await ctx.screening.ingest_batch(job_id, files)

    for name, error in outcome.parse_failures.items():
        logger.error(f"{name}: {error}")
    for candidate_id, error in outcome.scoring.failures.items():
        logger.error(f"{candidate_id}: {error}")

    print_pipeline(ctx, job_id)
    return 0 if not outcome.parse_failures and outcome.scoring.success else 1


def print_pipeline(ctx: AppContext, job_id: str) -> None:
    summary = ctx.screening.pipeline(job_id)
    job = ctx.screening.get_job(job_id)
    print(f"{job.title} ({job.id}): {summary.size} candidates, average {summary.average_score:.1f}")
    for entry in summary.entries:
        flag = " *tailor" if entry.needs_tailoring else ""
        print(f"  {entry.rank:>3}. {entry.candidate.name:<30} {entry.overall_score:>5.1f}  {entry.score.status.value}{flag}")


def main():
    parser = argparse.ArgumentParser(description="SmartScreen applicant screening")
    parser.add_argument('--mode', type=str, choices=['serve', 'init-db', 'ingest', 'pipeline'], default='serve',
                        help='serve (default): run the web API; init-db: create tables; '
                             'ingest: score resume files against --job-id; pipeline: print the ranked pipeline')
    parser.add_argument('--config', type=str, default='config.yaml', help='Path to config.yaml')
    parser.add_argument('--job-id', type=str, help='Job to ingest into or print')
    parser.add_argument('files', nargs='*', help='Resume files for ingest mode')
    args = parser.parse_args()

    config = load_config(args.config)
    logger.info(f"SmartScreen starting in {args.mode.upper()} mode...")

    if args.mode in ('ingest', 'pipeline') and not args.job_id:
        parser.error(f"--job-id is required in {args.mode} mode")

    try:
        if args.mode == 'init-db':
            run_init_db(config)
        elif args.mode == 'serve':
            run_serve(config)
        elif args.mode == 'ingest':
            if not args.files:
                parser.error("ingest mode needs at least one resume file")
            sys.exit(asyncio.run(run_ingest(config, args.job_id, args.files)))
        elif args.mode == 'pipeline':
            print_pipeline(AppContext.build(config), args.job_id)
    except ScreeningError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
