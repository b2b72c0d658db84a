"""Question supply per topic and difficulty tier.

Used to diagnose shortfalls: a quiz can only be as long as the unique
in-topic supply.
"""

from __future__ import annotations

from typing import Dict, Sequence

import pandas as pd

from ..data.schemas import DIFFICULTIES, Question
from ..selection.dedupe import dedupe_by_concept, dedupe_by_text, dedupe_exact
from ..selection.keys import DEFAULT_POLICY, ConceptKeyPolicy


def _frame(questions: Sequence[Question]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"topic": q.topic, "difficulty": q.difficulty} for q in questions],
        columns=["topic", "difficulty"],
    )


def supply_table(questions: Sequence[Question], margins: bool = True) -> pd.DataFrame:
    """Count questions by topic (rows) and difficulty (columns, easy -> expert)."""
    df = _frame(questions)
    if df.empty:
        return pd.DataFrame(0, index=pd.Index([], name="topic"), columns=list(DIFFICULTIES))
    table = pd.crosstab(df["topic"], df["difficulty"], margins=margins, margins_name="total")
    cols = [d for d in DIFFICULTIES if d in table.columns]
    if margins:
        cols.append("total")
    return table.reindex(columns=cols, fill_value=0)


def unique_supply(
    questions: Sequence[Question], policy: ConceptKeyPolicy = DEFAULT_POLICY
) -> Dict[str, int]:
    """Totals after each dedup level."""
    exact = dedupe_exact(questions)
    return {
        "raw": len(questions),
        "exact_unique": len(exact),
        "text_unique": len(dedupe_by_text(exact)),
        "concept_unique": len(dedupe_by_text(dedupe_by_concept(exact, policy))),
    }
