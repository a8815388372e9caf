"""CSV output strategy for the tabular parts of a decision support result.

Two tables are written: the system comparison (one row per irrigation
system, in ranking order) and the cash-flow projection of the selected system.
"""

from pathlib import Path

import pandas as pd

from irrigation_dss.models.results import DSSResult

COMPARISON_COLUMNS = [
    "system",
    "ranking",
    "score",
    "recommendation",
    "efficiency",
    "cost_per_hectare",
    "total_cost",
    "suitability_score",
    "investment_level",
    "best_for",
    "pros",
    "cons",
]

CASH_FLOW_COLUMNS = ["year", "annual_savings", "cumulative_cash_flow", "break_even"]


class CsvOutput:
    """Writes the system comparison and cash-flow tables to CSV.

    ``write`` produces the comparison at ``output_path`` and the cash flow
    next to it as ``<stem>_cash_flow.csv``.
    """

    def comparison_frame(self, result: DSSResult) -> pd.DataFrame:
        entries = result.system_recommendations_detailed.system_comparison.detailed_comparison.values()
        rows = [
            {
                "system": entry.type.value,
                "ranking": entry.ranking,
                "score": entry.score,
                "recommendation": entry.recommendation,
                "efficiency": entry.efficiency,
                "cost_per_hectare": entry.cost_per_hectare,
                "total_cost": entry.total_cost,
                "suitability_score": entry.suitability_score,
                "investment_level": entry.investment_level,
                "best_for": entry.best_for,
                "pros": "; ".join(entry.pros),
                "cons": "; ".join(entry.cons),
            }
            for entry in entries
        ]
        df = pd.DataFrame(rows, columns=COMPARISON_COLUMNS)
        return df.sort_values("ranking", kind="stable").reset_index(drop=True)

    def cash_flow_frame(self, result: DSSResult) -> pd.DataFrame:
        rows = [point.model_dump() for point in result.payback_analysis.cash_flow_projection]
        return pd.DataFrame(rows, columns=CASH_FLOW_COLUMNS)

    def cash_flow_path(self, output_path: Path) -> Path:
        return output_path.with_name(f"{output_path.stem}_cash_flow.csv")

    def write(self, result: DSSResult, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.comparison_frame(result).to_csv(output_path, index=False)
        self.cash_flow_frame(result).to_csv(self.cash_flow_path(output_path), index=False)
        return output_path
