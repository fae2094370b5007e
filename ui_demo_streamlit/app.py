"""Streamlit demo dashboard for schedule-advisor."""

from __future__ import annotations

import tempfile
from collections import Counter
from pathlib import Path
from typing import Any

from schedule_advisor.adapters import csv_adapter, json_adapter
from schedule_advisor.advisor import analyze_snapshot, report_to_dict
from schedule_advisor.intervals import assign_overlap_columns
from schedule_advisor.simulation import preview_moves

DEMO_SNAPSHOT = "examples/sample_snapshot.csv"


def _parse_items_from_path(file_path: str) -> list:
    suffix = Path(file_path).suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(file_path)
    if suffix == ".json":
        return json_adapter.parse(file_path)
    raise ValueError("Unsupported file type. Please use .csv or .json")


def _parse_uploaded(uploaded_file) -> list:
    suffix = Path(uploaded_file.name).suffix.lower()
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as handle:
        handle.write(uploaded_file.getbuffer())
        temp_path = handle.name
    return _parse_items_from_path(temp_path)


def _build_summary(items: list) -> dict[str, Any]:
    statuses = Counter(item.status.value for item in items)
    return {
        "total_items": len(items),
        "timed_items": sum(1 for item in items if item.interval is not None),
        "assignees": len({item.assignee for item in items if item.assignee}),
        "status_counts": dict(sorted(statuses.items())),
    }


def run_engine(items: list, overrides: dict) -> dict[str, Any]:
    """Run all analyses and return a UI-friendly result payload."""

    report = analyze_snapshot(items, overrides)
    moves = report.redistribution + report.workforce
    columns = assign_overlap_columns(items)
    return {
        "summary": _build_summary(items),
        "report": report_to_dict(report),
        "overlap_columns": {item_id: slot._asdict() for item_id, slot in columns.items()},
        "preview": preview_moves(items, moves, overrides["conflicts"]["daily_hours_limit"]),
    }


def main() -> None:
    import streamlit as st

    st.set_page_config(page_title="Schedule Advisor Demo", layout="wide")
    st.title("Schedule Advisor — Streamlit Demo")

    with st.sidebar:
        st.header("Controls")
        uploaded = st.file_uploader("Upload snapshot", type=["csv", "json"])
        use_demo = st.checkbox("Load demo snapshot", value=True)
        work_start, work_end = st.slider("Working hours", min_value=0, max_value=24, value=(9, 18))
        daily_hours_limit = st.number_input("Daily hours limit", min_value=1.0, max_value=24.0, value=8.0, step=0.5)
        min_gap = st.number_input("Min gap between items (min)", min_value=0, max_value=120, value=0, step=5)
        tasks_per_day = st.number_input("Tasks per day overload", min_value=1, max_value=50, value=8, step=1)
        imbalance = st.number_input("Load imbalance threshold (min)", min_value=0, max_value=600, value=120, step=15)
        max_moves = st.number_input("Max redistribution moves", min_value=1, max_value=20, value=5, step=1)
        run = st.button("Analyze", type="primary")

    if not run:
        st.info("Configure inputs in the sidebar and click **Analyze**.")
        return

    try:
        if use_demo:
            items = csv_adapter.parse(DEMO_SNAPSHOT)
            data_source = f"demo snapshot ({DEMO_SNAPSHOT})"
        elif uploaded is not None:
            items = _parse_uploaded(uploaded)
            data_source = f"uploaded file ({uploaded.name})"
        else:
            st.error("Please upload a CSV/JSON file or enable 'Load demo snapshot'.")
            return

        if not items:
            st.error("No items were found in the selected input.")
            return

        overrides = {
            "conflicts": {
                "daily_hours_limit": float(daily_hours_limit),
                "working_hours_start": int(work_start),
                "working_hours_end": int(work_end),
                "min_gap_minutes": int(min_gap),
            },
            "workload": {"tasks_per_day_overload": int(tasks_per_day)},
            "suggestions": {
                "working_hours_start": int(work_start),
                "working_hours_end": int(work_end),
                "load_imbalance_threshold_minutes": int(imbalance),
            },
            "redistribution": {"max_suggestions": int(max_moves)},
        }
        result = run_engine(items, overrides)
        report = result["report"]

        st.success(f"Loaded {len(items)} items from {data_source}.")

        st.subheader("A) Snapshot Summary")
        summary = result["summary"]
        c1, c2, c3 = st.columns(3)
        c1.metric("Items", summary["total_items"])
        c2.metric("Timed items", summary["timed_items"])
        c3.metric("Assignees", summary["assignees"])
        st.table([summary["status_counts"]])

        st.subheader("B) Conflicts")
        if report["violations"]:
            st.dataframe(report["violations"], use_container_width=True)
        else:
            st.write("No conflicts detected.")

        st.subheader("C) Workload")
        w1, w2 = st.columns(2)
        w1.write("**Overloaded days**")
        w1.table(report["workload"]["overloaded_days"] or [{"date": "-", "reason": "none"}])
        w2.write("**Overloaded assignees**")
        w2.table(report["workload"]["overloaded_users"] or [{"assignee_id": "-", "reason": "none"}])

        st.subheader("D) Suggestions")
        for suggestion in report["suggestions"]:
            st.markdown(
                f"**{suggestion['title']}** · {suggestion['type']} · saves {suggestion['time_saved_minutes']} min "
                f"· confidence {suggestion['confidence']:.2f}"
            )
            st.caption(suggestion["description"])

        st.subheader("E) Proposed Moves")
        st.write("**Day redistribution**")
        st.table(report["redistribution"] or [{"item_id": "-", "reason": "no moves"}])
        st.write("**Reassignments**")
        st.table(report["workforce"] or [{"item_id": "-", "to_assignee": "-"}])

        st.subheader("F) Preview")
        p1, p2, p3 = st.columns(3)
        p1.write("**Before**")
        p1.json(result["preview"]["before"])
        p2.write("**After accepting all moves**")
        p2.json(result["preview"]["after"])
        p3.write("**Comparison**")
        p3.table([result["preview"]["comparison"]])

    except ValueError as exc:
        st.error(f"Input error: {exc}")
    except Exception:
        st.error("Something went wrong while running the demo. Please verify the input format.")


if __name__ == "__main__":
    main()
