# streamlit_app.py
import time

import streamlit as st

from api_client import APIError, TransactionAPI
from charts import bar_chart, doughnut_chart, line_chart, transactions_frame
from formatting import format_rupiah

REFRESH_SECONDS = 10

st.set_page_config(page_title="Dashboard Keuangan", page_icon="💰", layout="wide")
st.title("💰 Dashboard Keuangan")
st.caption("Data dicatat melalui bot Telegram")

api = TransactionAPI()
auto_refresh = st.sidebar.toggle("Auto refresh (10 detik)", value=True)
if st.sidebar.button("🔄 Muat ulang"):
    st.rerun()

try:
    data = api.get_dashboard_data()
except APIError as e:
    st.error(f"❌ Error Loading Dashboard: {e}")
    st.stop()

summary = data["summary"]
recent = data["recentTransactions"]
chart_data = data["chartData"]

if not recent:
    st.subheader("Belum Ada Data")
    st.info("Mulai catat transaksi melalui bot Telegram.")
else:
    # --- Summary cards ---
    k1, k2, k3 = st.columns(3)
    with k1:
        st.metric("Total Pemasukan", f"Rp {format_rupiah(summary['totalIncome'])}")
    with k2:
        st.metric("Total Pengeluaran", f"Rp {format_rupiah(summary['totalExpense'])}")
    with k3:
        st.metric("Saldo", f"Rp {format_rupiah(summary['balance'])}")

    # --- Charts ---
    c1, c2 = st.columns([2, 1])
    with c1:
        if chart_data:
            st.plotly_chart(bar_chart(chart_data), use_container_width=True)
        else:
            st.warning("Data grafik tidak tersedia.")
    with c2:
        st.plotly_chart(doughnut_chart(summary), use_container_width=True)

    if chart_data:
        st.plotly_chart(line_chart(chart_data), use_container_width=True)

    # --- Recent transactions ---
    st.subheader("Transaksi Terbaru")
    st.dataframe(transactions_frame(recent), use_container_width=True, hide_index=True)

st.info(
    "💡 Cara Menggunakan via Telegram\n\n"
    "• Pemasukan: `Masuk 50000`\n\n"
    "• Pengeluaran: `Keluar 25000 Beli makan`"
)

if auto_refresh:
    time.sleep(REFRESH_SECONDS)
    st.rerun()
