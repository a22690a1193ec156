from charts import bar_chart, doughnut_chart, line_chart, short_date, short_day, transactions_frame

CHART_DATA = [
    {"date": "2025-03-04", "income": 0, "expense": 0},
    {"date": "2025-03-05", "income": 50000, "expense": 0},
    {"date": "2025-03-06", "income": 0, "expense": 25000},
    {"date": "2025-03-07", "income": 0, "expense": 0},
    {"date": "2025-03-08", "income": 0, "expense": 0},
    {"date": "2025-03-09", "income": 100000, "expense": 0},
    {"date": "2025-03-10", "income": 0, "expense": 30000},
]


def test_labels():
    assert short_day("2025-03-10") == "Sen 10"
    assert short_date("2025-08-17") == "17 Agu"


def test_bar_chart_has_income_and_expense():
    fig = bar_chart(CHART_DATA)

    assert [t.name for t in fig.data] == ["Pemasukan", "Pengeluaran"]
    assert list(fig.data[0].y) == [0, 50000, 0, 0, 0, 100000, 0]
    assert fig.data[0].x[0] == "Sel 4"


def test_doughnut_uses_totals():
    fig = doughnut_chart({"totalIncome": 150000, "totalExpense": 30000, "balance": 120000})

    assert list(fig.data[0].values) == [150000, 30000]
    assert fig.data[0].hole == 0.5


def test_line_chart_traces():
    fig = line_chart(CHART_DATA)

    assert sorted(t.name for t in fig.data) == ["Pemasukan", "Pengeluaran"]
    assert all(len(t.x) == 7 for t in fig.data)


def test_transactions_frame():
    df = transactions_frame([
        {"id": 2, "type": "keluar", "amount": 25000, "note": "beli makan", "date": "2025-03-10T08:30:00Z"},
        {"id": 1, "type": "masuk", "amount": 50000, "note": "Pemasukan dari Telegram", "date": "2025-03-09T20:00:00Z"},
    ])

    assert list(df["Jumlah"]) == ["-Rp 25.000", "+Rp 50.000"]
    assert list(df["Jenis"]) == ["Pengeluaran", "Pemasukan"]
    assert df["Tanggal"][0] == "10-03-2025 08:30"


def test_transactions_frame_empty():
    assert transactions_frame([]).empty
