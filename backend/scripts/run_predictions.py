#!/usr/bin/env python3
"""
Prediction Worker Script
Predicts every upcoming fixture of the configured competitions and logs
one summary line per fixture.
"""
import sys
import os
import argparse
import asyncio
import logging
from datetime import datetime

# Add parent directory to path to import from src
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from scripts.worker_config import API_FOOTBALL_KEY, COMPETITIONS_TO_PROCESS, LOG_LEVEL, LOG_FORMAT

# Configure logging
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format=LOG_FORMAT,
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


async def main(competition_ids: list[int]) -> int:
    """Main worker execution function. Returns the number of fixtures predicted."""
    from src.api.dependencies import (
        get_competition_predictions_use_case,
        get_competitions_use_case,
        get_stats_lookup,
    )

    start_time = datetime.now()
    logger.info("=" * 80)
    logger.info(f"Starting Prediction Worker at {start_time}")
    if not API_FOOTBALL_KEY:
        logger.warning("API_FOOTBALL_KEY is not set; every fixture will use default rates")

    competitions = get_competitions_use_case().execute()
    if competition_ids:
        competitions = [c for c in competitions if c.id in competition_ids]
    logger.info(f"Competitions to process: {len(competitions)}")
    logger.info("=" * 80)

    use_case = get_competition_predictions_use_case()
    total = 0

    for idx, competition in enumerate(competitions, 1):
        logger.info(f"[{idx}/{len(competitions)}] {competition.name} ({competition.season})")
        result = await use_case.execute(competition)

        for error in result.errors:
            logger.warning(f"   {competition.code}: {error}")

        for item in result.predictions:
            p = item.prediction
            logger.info(
                f"   {item.fixture.home_team_name} vs {item.fixture.away_team_name}: "
                f"1={p.prob_home:.1f}% X={p.prob_draw:.1f}% 2={p.prob_away:.1f}% | "
                f"O2.5={p.over25:.1f}% BTTS={p.btts_yes:.1f}% | "
                f"pick={p.main_pick.value} conf={p.confidence}% ({p.confidence_label.value}) | "
                f"{p.match_profile.value} {p.data_flag.value}"
            )
        total += len(result.predictions)

    elapsed = (datetime.now() - start_time).total_seconds()
    logger.info(f"Predicted {total} fixtures in {elapsed:.1f}s | cache {get_stats_lookup().get_stats()}")
    return total


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Predict upcoming fixtures")
    parser.add_argument(
        "--competition",
        type=int,
        action="append",
        default=None,
        help="Competition id to process (repeatable; default from COMPETITIONS_TO_PROCESS or all)",
    )
    args = parser.parse_args()

    asyncio.run(main(args.competition or COMPETITIONS_TO_PROCESS))
