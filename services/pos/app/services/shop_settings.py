from __future__ import annotations

from services.pos.app.db.models import Settings
from services.pos.app.models.settings import SettingsOut
from sqlalchemy.orm import Session

SETTINGS_ROW_ID = 1


def get_or_create_settings(db: Session) -> Settings:
    # Single-row table; defaults are written on first read.
    settings = db.get(Settings, SETTINGS_ROW_ID)
    if settings is None:
        settings = Settings(
            id=SETTINGS_ROW_ID,
            shop_name="My Restaurant",
            upi_id="",
            sound_notifications=True,
            auto_save_orders=False,
        )
        db.add(settings)
        db.commit()
        db.refresh(settings)
    return settings


def settings_to_out(settings: Settings) -> SettingsOut:
    return SettingsOut(
        shop_name=settings.shop_name,
        upi_id=settings.upi_id or "",
        sound_notifications=settings.sound_notifications,
        auto_save_orders=settings.auto_save_orders,
    )
