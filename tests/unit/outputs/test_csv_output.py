"""Unit tests for the CSV output strategy."""

import pandas as pd
import pytest

from irrigation_dss.orchestrator import DSSOrchestrator
from irrigation_dss.outputs import CsvOutput


@pytest.fixture
def result(loam_soil, tomato_crop, field_5ha, temperate_environment):
    return DSSOrchestrator().calculate_irrigation_recommendations(
        loam_soil, tomato_crop, field_5ha, temperate_environment
    )


def test_comparison_frame(result):
    """Test one row per system in ranking order."""
    df = CsvOutput().comparison_frame(result)

    assert list(df["system"]) == ["sprinkler", "drip", "surface"]
    assert list(df["ranking"]) == [1, 2, 3]
    assert list(df["score"]) == [80, 79, 73]
    assert df.loc[0, "pros"].startswith("Good water distribution uniformity; ")


def test_cash_flow_frame(result):
    """Test the cash-flow projection table."""
    df = CsvOutput().cash_flow_frame(result)

    assert len(df) == 10
    assert df.loc[0, "cumulative_cash_flow"] == -8075
    assert not df.loc[4, "break_even"]
    assert df.loc[5, "break_even"]


def test_write(result, tmp_path):
    """Test both CSV files are written and read back."""
    output_path = tmp_path / "reports" / "field.csv"

    written = CsvOutput().write(result, output_path)

    assert written == output_path
    comparison = pd.read_csv(output_path)
    cash_flow = pd.read_csv(tmp_path / "reports" / "field_cash_flow.csv")
    assert list(comparison.columns)[:3] == ["system", "ranking", "score"]
    assert len(comparison) == 3
    assert len(cash_flow) == 10
