"""
Statistical Calculation Functions

Pure functions for derived football statistics.
All functions handle edge cases (division by zero) and never raise.
"""


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide and round to one decimal, returning ``default`` when denominator is 0."""
    if denominator == 0:
        return default
    return round(numerator / denominator, 1)


def percentage(part: int, whole: int) -> float:
    """Percentage (0-100) rounded to one decimal."""
    if whole == 0:
        return 0.0
    return round((part / whole) * 100, 1)


def calculate_passer_rating(
    completions: int, attempts: int, yards: int, touchdowns: int, interceptions: int
) -> float:
    """
    Calculate passer rating using the official formula.

    Formula:
    - Component A: ((completions/attempts) - 0.3) * 5
    - Component B: ((yards/attempts) - 3) * 0.25
    - Component C: (touchdowns/attempts) * 20
    - Component D: 2.375 - ((interceptions/attempts) * 25)

    Each component clamped to [0.0, 2.375]
    Rating = ((A + B + C + D) / 6) * 100

    Returns:
        Passer rating (0.0 - 158.3)
    """
    if attempts == 0:
        return 0.0

    components = (
        (completions / attempts - 0.3) * 5,
        (yards / attempts - 3) * 0.25,
        (touchdowns / attempts) * 20,
        2.375 - (interceptions / attempts) * 25,
    )
    total = sum(max(0.0, min(2.375, c)) for c in components)

    return round(max(0.0, min(158.3, total / 6 * 100)), 1)
