# bookingsystem/bot.py - Telegram front end: add, list, remove and export bookings
import asyncio
import io
import logging
from datetime import datetime

import uvicorn
from telegram import Update, InlineKeyboardButton, InlineKeyboardMarkup, InputFile
from telegram.error import BadRequest
from telegram.ext import (
    ApplicationBuilder, CommandHandler, ContextTypes, ConversationHandler,
    MessageHandler, filters, CallbackQueryHandler
)

from bookingsystem.admin_web import create_app
from bookingsystem.calendar import build_month_keyboard, parse_callback
from bookingsystem.config import load_settings
from bookingsystem.exceptions import BookingError, NotFound, SelectionRejected
from bookingsystem.models import BookingEntry
from bookingsystem.export import bookings_csv
from bookingsystem.picker import DateRangeSelection
from bookingsystem.store import BookingStore
from bookingsystem.utils import format_date

logger = logging.getLogger(__name__)

# Conversation states
(NAME, DATES, FORM) = range(3)

PREFIX = 'range'


def now_in(tz) -> datetime:
    return datetime.now(tz) if tz is not None else datetime.now().astimezone()

def _now(context) -> datetime:
    return now_in(context.bot_data['settings'].timezone)

def _markup(kb_struct):
    return InlineKeyboardMarkup([[InlineKeyboardButton(cell['text'], callback_data=cell['callback_data']) for cell in row] for row in kb_struct])

def _picker_markup(context, year, month):
    form = context.user_data['form']
    kb_struct = build_month_keyboard(year, month, PREFIX, today=_now(context).date(), selection=form['selection'])
    return _markup(kb_struct)

def _summary(form) -> str:
    name = form.get('name') or '-'
    if form.get('arrival') and form.get('departure'):
        dates = f"{format_date(form['arrival'])} - {format_date(form['departure'])}"
    else:
        dates = '-'
    return f"Name: {name}\nDates: {dates}\n\n/save to store the booking, /dates to pick dates, send text to change the name, /cancel to abort."

async def start(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await update.message.reply_text(
        "Welcome to the booking bot!\nCommands:\n/add - add a booking\n/list - show bookings\n/remove <n> - remove booking number n\n/export_bookings - CSV export"
    )

async def add_start(update: Update, context: ContextTypes.DEFAULT_TYPE):
    context.user_data['form'] = {'name': None, 'arrival': None, 'departure': None, 'selection': DateRangeSelection()}
    await update.message.reply_text('Name for the booking?')
    return NAME

async def add_name(update: Update, context: ContextTypes.DEFAULT_TYPE):
    form = context.user_data['form']
    form['name'] = update.message.text
    return await _open_picker(update, context)

async def _open_picker(update: Update, context: ContextTypes.DEFAULT_TYPE):
    form = context.user_data['form']
    form['selection'] = DateRangeSelection(form.get('arrival'), form.get('departure'))
    today = _now(context).date()
    month = form['arrival'] or today
    await update.message.reply_text('Select arrival and departure, then press OK:', reply_markup=_picker_markup(context, month.year, month.month))
    return DATES

async def change_dates(update: Update, context: ContextTypes.DEFAULT_TYPE):
    return await _open_picker(update, context)

async def change_name(update: Update, context: ContextTypes.DEFAULT_TYPE):
    form = context.user_data['form']
    form['name'] = update.message.text
    await update.message.reply_text(_summary(form))
    return FORM

async def _edit_markup(query, markup):
    try:
        await query.edit_message_reply_markup(reply_markup=markup)
    except BadRequest as e:
        # telegram refuses edits that leave the keyboard as it is
        if 'not modified' not in str(e):
            raise

async def noop_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await update.callback_query.answer()

async def calendar_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    query = update.callback_query
    form = context.user_data['form']
    selection = form['selection']
    try:
        _, action, value = parse_callback(query.data)
        if action == 'month':
            y, m = map(int, value.split('-'))
            await query.answer()
            await _edit_markup(query, _picker_markup(context, y, m))
            return DATES
        if action == 'day':
            day = datetime.strptime(value, '%Y-%m-%d').date()
            selection.select(day)
            await query.answer()
            await _edit_markup(query, _picker_markup(context, day.year, day.month))
            return DATES
        if action == 'ok':
            try:
                arrival, departure = selection.confirm(_now(context), context.bot_data['settings'].picker_tolerance)
            except SelectionRejected as e:
                # picker stays open, nothing is committed
                await query.answer(e.message, show_alert=True)
                return DATES
            form['arrival'], form['departure'] = arrival, departure
            await query.answer()
            await query.edit_message_text(_summary(form))
            return FORM
        if action == 'cancel':
            await query.answer()
            await query.edit_message_text('Date selection cancelled.\n\n' + _summary(form))
            return FORM
        await query.answer()
        return DATES
    except Exception:
        logger.exception('calendar_callback')
        await query.edit_message_text('Calendar error. Try /dates again.')
        return FORM

async def save(update: Update, context: ContextTypes.DEFAULT_TYPE):
    store = context.bot_data['store']
    form = context.user_data['form']
    try:
        candidate = BookingEntry(form.get('name'), form.get('arrival'), form.get('departure'))
        entry = store.add(candidate, today=_now(context).date())
    except BookingError as e:
        # keep the form so the user can fix it
        await update.message.reply_text(f"Cannot save: {e.message}\n\n" + _summary(form))
        return FORM
    context.user_data.pop('form', None)
    await update.message.reply_text(f"Booking saved: {entry.display()}")
    return ConversationHandler.END

async def cancel(update: Update, context: ContextTypes.DEFAULT_TYPE):
    context.user_data.pop('form', None)
    await update.message.reply_text('Booking cancelled.')
    return ConversationHandler.END

async def list_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    entries = context.bot_data['store'].list_entries()
    if not entries:
        await update.message.reply_text('No bookings yet. Use /add.')
        return
    s = 'Bookings:\n'
    for i, e in enumerate(entries, start=1):
        s += f"{i}. {e.display()}\n"
    await update.message.reply_text(s)

async def remove_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    store = context.bot_data['store']
    args = context.args
    if not args or not args[0].isdigit():
        await update.message.reply_text('Send /remove <number> as shown by /list.')
        return
    idx = int(args[0])
    entries = store.list_entries()
    try:
        if not 1 <= idx <= len(entries):
            raise NotFound('booking not found')
        removed = store.remove_entry(entries[idx - 1])
    except NotFound as e:
        await update.message.reply_text(f"Cannot remove: {e.message}")
        return
    await update.message.reply_text(f"Removed: {removed.display()}")

async def export_bookings_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    data = bookings_csv(context.bot_data['store'].list_entries())
    await update.message.reply_document(document=InputFile(io.BytesIO(data.encode('utf-8')), filename='bookings.csv'))


def build_application(settings, store: BookingStore):
    application = ApplicationBuilder().token(settings.bot_token).build()
    application.bot_data['store'] = store
    application.bot_data['settings'] = settings

    add_conv = ConversationHandler(
        entry_points=[CommandHandler('add', add_start)],
        states={
            NAME: [MessageHandler(filters.TEXT & ~filters.COMMAND, add_name)],
            DATES: [CallbackQueryHandler(calendar_callback, pattern=f'^{PREFIX}:')],
            FORM: [
                CommandHandler('save', save),
                CommandHandler('dates', change_dates),
                MessageHandler(filters.TEXT & ~filters.COMMAND, change_name),
            ],
        },
        fallbacks=[CommandHandler('cancel', cancel)]
    )
    application.add_handler(add_conv)
    application.add_handler(CommandHandler('start', start))
    application.add_handler(CommandHandler('list', list_handler))
    application.add_handler(CommandHandler('remove', remove_handler))
    application.add_handler(CommandHandler('export_bookings', export_bookings_handler))
    application.add_handler(CallbackQueryHandler(noop_callback, pattern='^noop$'))
    return application


async def main():
    settings = load_settings()
    logging.basicConfig(level=settings.log_level)
    store = BookingStore(allow_overlap=settings.allow_overlap, clock=lambda: now_in(settings.timezone).date())
    application = build_application(settings, store)
    web = uvicorn.Server(uvicorn.Config(
        create_app(store, settings.master_password),
        host=settings.app_host, port=settings.app_port, log_level=settings.log_level.lower(),
    ))

    logger.info('Starting bot...')
    async with application:
        await application.start()
        await application.updater.start_polling()
        try:
            await web.serve()
        finally:
            await application.updater.stop()
            await application.stop()
            store.clear()

if __name__ == '__main__':
    asyncio.run(main())
