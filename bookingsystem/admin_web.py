# bookingsystem/admin_web.py - read-only admin page and CSV export
from datetime import datetime, timezone
from html import escape

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse, StreamingResponse

from bookingsystem.export import bookings_csv
from bookingsystem.utils import format_date


def create_app(store, token: str) -> FastAPI:
    app = FastAPI()

    def check_token(given: str):
        if given != token:
            raise HTTPException(status_code=401, detail='Unauthorized - provide ?token=MASTER_PASSWORD')

    @app.get('/', response_class=HTMLResponse)
    async def index(token: str = ''):
        check_token(token)
        entries = store.list_entries()
        html = f"""<html><head><title>Bookings Admin</title></head><body>
    <h1>Bookings</h1>
    <p>Total bookings: {len(entries)}</p>
    <ol>
    """
        for e in entries:
            html += f"<li>{escape(e.name)}: {format_date(e.arrival_date)} - {format_date(e.departure_date)} ({e.days} days)</li>"
        html += "</ol>"
        html += f"<p><a href='/export_bookings?token={escape(token)}'>Download bookings CSV</a></p>"
        html += "</body></html>"
        return HTMLResponse(content=html)

    @app.get('/bookings')
    async def bookings(token: str = ''):
        check_token(token)
        return [e.to_dict() for e in store.list_entries()]

    @app.get('/export_bookings')
    async def export_bookings(token: str = ''):
        check_token(token)
        data = bookings_csv(store.list_entries())
        filename = f'bookings_{datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")}.csv'
        return StreamingResponse(iter([data]), media_type='text/csv', headers={'Content-Disposition': f'attachment; filename="{filename}"'})

    return app
