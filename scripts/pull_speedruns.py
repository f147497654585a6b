"""
Speedrun Data Export

Pulls leaderboards and full run history for a fixed list of games from the
speedrun.com REST API, adds per-player statistics, and writes everything to
one flat CSV (speedrun_data_names.csv) for offline analysis.

Usage:
    python scripts/pull_speedruns.py [--output PATH] [--game ID ...] [--no-pause]

Environment variables:
    SPEEDRUN_API_BASE     override the API root (default https://www.speedrun.com/api/v1)
    SPEEDRUN_OUTPUT_CSV   default output path
"""

import sys

from speedrun_export.main import main


if __name__ == "__main__":
    sys.exit(main())
