from datetime import datetime
from typing import Any, Dict, List

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from formatting import format_rupiah

INCOME_COLOR = "#22C55E"
EXPENSE_COLOR = "#EF4444"

DAY_NAMES = ["Sen", "Sel", "Rab", "Kam", "Jum", "Sab", "Min"]
MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "Mei", "Jun", "Jul", "Agu", "Sep", "Okt", "Nov", "Des"]


def short_day(date_str: str) -> str:
    d = datetime.strptime(date_str, "%Y-%m-%d")
    return f"{DAY_NAMES[d.weekday()]} {d.day}"


def short_date(date_str: str) -> str:
    d = datetime.strptime(date_str, "%Y-%m-%d")
    return f"{d.day} {MONTH_NAMES[d.month - 1]}"


def series_frame(chart_data: List[Dict[str, Any]]) -> pd.DataFrame:
    df = pd.DataFrame(chart_data, columns=["date", "income", "expense"])
    df[["income", "expense"]] = df[["income", "expense"]].astype(float)
    return df


def bar_chart(chart_data: List[Dict[str, Any]]) -> go.Figure:
    df = series_frame(chart_data)
    labels = [short_day(d) for d in df["date"]]
    fig = go.Figure()
    fig.add_trace(go.Bar(x=labels, y=df["income"], name="Pemasukan", marker_color=INCOME_COLOR))
    fig.add_trace(go.Bar(x=labels, y=df["expense"], name="Pengeluaran", marker_color=EXPENSE_COLOR))
    fig.update_layout(title="Pemasukan vs Pengeluaran (7 Hari Terakhir)", barmode="group",
                      yaxis_tickprefix="Rp ", margin=dict(t=50, b=10, l=10, r=10))
    return fig


def doughnut_chart(summary: Dict[str, Any]) -> go.Figure:
    fig = go.Figure(go.Pie(
        labels=["Pemasukan", "Pengeluaran"],
        values=[summary.get("totalIncome", 0), summary.get("totalExpense", 0)],
        hole=0.5,
        marker_colors=[INCOME_COLOR, EXPENSE_COLOR],
    ))
    fig.update_layout(title="Distribusi Keuangan", margin=dict(t=50, b=10, l=10, r=10))
    return fig


def line_chart(chart_data: List[Dict[str, Any]]) -> go.Figure:
    df = series_frame(chart_data)
    df["label"] = [short_date(d) for d in df["date"]]
    long_df = df.melt(id_vars="label", value_vars=["income", "expense"], var_name="jenis", value_name="jumlah")
    long_df["jenis"] = long_df["jenis"].map({"income": "Pemasukan", "expense": "Pengeluaran"})
    fig = px.line(long_df, x="label", y="jumlah", color="jenis", markers=True,
                  color_discrete_map={"Pemasukan": INCOME_COLOR, "Pengeluaran": EXPENSE_COLOR},
                  labels={"label": "Tanggal", "jumlah": "Jumlah (Rp)", "jenis": ""},
                  title="Trend Keuangan")
    fig.update_layout(margin=dict(t=50, b=10, l=10, r=10))
    return fig


def transactions_frame(records: List[Dict[str, Any]]) -> pd.DataFrame:
    """Table rows for the recent transactions list."""
    rows = []
    for r in records:
        sign = "+" if r.get("type") == "masuk" else "-"
        rows.append({
            "Tanggal": pd.to_datetime(r.get("date"), utc=True).strftime("%d-%m-%Y %H:%M"),
            "Jenis": "Pemasukan" if r.get("type") == "masuk" else "Pengeluaran",
            "Keterangan": r.get("note") or "-",
            "Jumlah": f"{sign}Rp {format_rupiah(float(r.get('amount', 0)))}",
        })
    return pd.DataFrame(rows, columns=["Tanggal", "Jenis", "Keterangan", "Jumlah"])
