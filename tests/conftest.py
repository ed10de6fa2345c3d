"""
Pytest configuration and shared fixtures
"""

import pytest


@pytest.fixture
def countries_csv(tmp_path):
    """Two-row CSV of countries"""
    csv_file = tmp_path / "Countries.csv"
    csv_file.write_text("ID,Country\n1,Norway\n2,Tuvalu\n")
    return csv_file


@pytest.fixture
def scores_csv(tmp_path):
    """Scores per person, with repeated people"""
    csv_file = tmp_path / "scores.csv"
    csv_file.write_text(
        "Person,Score\n"
        "A,1\n"
        "A,8\n"
        "B,3\n"
        "B,4\n"
    )
    return csv_file


@pytest.fixture
def sample_rows():
    """Header row and data rows for in-memory pipelines"""
    return (
        ["name", "city", "amount"],
        [
            ["Alice", "NYC", "100"],
            ["Bob", "LA", "150"],
            ["Charlie", "NYC", "200"],
            ["Diana", "SF", "50"],
            ["Eve", "LA", "250"],
        ],
    )
