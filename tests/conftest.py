"""
Pytest configuration for test discovery and imports.

Provides shared fixtures:
- 32-team league (2 conferences x 4 divisions x 4 teams) with small rosters
- Generated schedule (session scoped, generation is the slow part)
- Stub game engine
"""

import sys
from pathlib import Path

import pytest


# Determine paths
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
tests_path = project_root / "tests"


def pytest_configure(config):
    """Configure pytest - runs very early in startup.

    src/ packages are imported by name (``from scheduling import ...``) and
    test helpers live in tests/mocks (``from mocks.league import ...``).
    """
    seen = set()
    new_path = []
    for p in sys.path:
        if p not in seen:
            seen.add(p)
            new_path.append(p)

    for path in [str(src_path), str(project_root), str(tests_path)]:
        if path in new_path:
            new_path.remove(path)

    # Front of sys.path: src, project root, tests
    new_path.insert(0, str(tests_path))
    new_path.insert(0, str(project_root))
    new_path.insert(0, str(src_path))

    sys.path[:] = new_path


# ============================================================================
# LEAGUE FIXTURES
# ============================================================================

@pytest.fixture(scope="session")
def league_teams():
    from mocks.league import build_league
    return build_league()


@pytest.fixture(scope="session")
def league_schedule(league_teams):
    from scheduling import ScheduleConfig, generate_schedule
    return generate_schedule(league_teams, ScheduleConfig(season_year=2025, seed=7))


@pytest.fixture
def test_season():
    """Standard season year for testing."""
    return 2025


@pytest.fixture
def strength_engine():
    from mocks.engines import StrengthEngine
    return StrengthEngine()
