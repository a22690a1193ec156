import asyncio
import logging
from typing import Optional

from telegram import Update
from telegram.ext import Application, ContextTypes, MessageHandler, filters

from commands import EXPENSE, CommandFormatError, parse_command
from database import RecordStore
from formatting import format_rupiah
from services import BalanceProvider

logger = logging.getLogger(__name__)

HELP_MESSAGE = (
    "Selamat datang di Bot Pencatatan Keuangan!\n\n"
    "Format input:\n"
    "• Pemasukan: \"Masuk 50000\"\n"
    "• Pengeluaran: \"Keluar 25000 Beli makan\"\n\n"
    "Contoh: \"Keluar 15000 Beli pulsa\""
)
UNKNOWN_MESSAGE = (
    "Format tidak dikenali. Gunakan:\n"
    "\"Masuk [jumlah]\" untuk pemasukan\n"
    "\"Keluar [jumlah] [keterangan]\" untuk pengeluaran"
)
INCOME_FORMAT_ERROR = "Format salah. Gunakan: \"Masuk 50000\""
EXPENSE_FORMAT_ERROR = "Format salah. Gunakan: \"Keluar 50000 Beli makan\""
RETRY_MESSAGE = "Terjadi kesalahan, coba lagi."


class FinanceBot:
    """Turns chat messages into stored records and reply text.

    Knows nothing about Telegram; see `build_application` for the transport.
    """

    def __init__(self, store: RecordStore, balance: BalanceProvider):
        self.store = store
        self.balance = balance

    def handle_text(self, chat_id: str, text: Optional[str]) -> str:
        try:
            command = parse_command(text, chat_id=chat_id)
        except CommandFormatError as e:
            return EXPENSE_FORMAT_ERROR if e.keyword == EXPENSE else INCOME_FORMAT_ERROR

        if command.action == "start":
            return HELP_MESSAGE
        if command.action == "unknown":
            return UNKNOWN_MESSAGE

        record = command.record
        record_id = self.store.insert(record)
        balance = self.balance.current_balance()
        logger.info("Recorded %s #%s of %s from chat %s", record.type, record_id, record.amount, chat_id)

        if record.type == EXPENSE:
            return (
                "✅ Pengeluaran berhasil dicatat!\n"
                f"Jumlah: Rp {format_rupiah(record.amount)}\n"
                f"Keterangan: {record.note}\n"
                f"Saldo saat ini: Rp {format_rupiah(balance)}"
            )
        return (
            "✅ Pemasukan berhasil dicatat!\n"
            f"Jumlah: Rp {format_rupiah(record.amount)}\n"
            f"Saldo saat ini: Rp {format_rupiah(balance)}"
        )

    async def on_message(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        message = update.message
        if message is None:
            return
        chat_id = str(message.chat_id)
        try:
            reply = await asyncio.to_thread(self.handle_text, chat_id, message.text)
        except Exception:
            logger.exception("Error handling message from chat %s", chat_id)
            reply = RETRY_MESSAGE
        await message.reply_text(reply)


def build_application(token: str, finance_bot: FinanceBot) -> Application:
    app = Application.builder().token(token).build()
    app.add_handler(MessageHandler(filters.UpdateType.MESSAGE, finance_bot.on_message))
    return app


async def start_polling(app: Application) -> None:
    await app.initialize()
    await app.start()
    await app.updater.start_polling()
    logger.info("Telegram bot polling started")


async def stop_polling(app: Application) -> None:
    await app.updater.stop()
    await app.stop()
    await app.shutdown()
    logger.info("Telegram bot stopped")
