# settings used across modules
from dataclasses import dataclass
from datetime import timedelta
from zoneinfo import ZoneInfo
import os

from dotenv import load_dotenv

load_dotenv()


def _flag(value: str) -> bool:
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass(frozen=True)
class Settings:
    bot_token: str | None
    master_password: str
    allow_overlap: bool
    picker_tolerance: timedelta
    timezone: ZoneInfo | None
    app_host: str
    app_port: int
    log_level: str


def load_settings() -> Settings:
    tz_name = os.getenv('TIMEZONE')
    return Settings(
        bot_token=os.getenv('BOT_TOKEN'),
        master_password=os.getenv('MASTER_PASSWORD', 'supersecretmasterpass'),
        allow_overlap=_flag(os.getenv('ALLOW_OVERLAP', 'true')),
        picker_tolerance=timedelta(seconds=int(os.getenv('PICKER_TOLERANCE_SECONDS', '0'))),
        timezone=ZoneInfo(tz_name) if tz_name else None,
        app_host=os.getenv('APP_HOST', '0.0.0.0'),
        app_port=int(os.getenv('APP_PORT', '8080')),
        log_level=os.getenv('LOG_LEVEL', 'INFO'),
    )
