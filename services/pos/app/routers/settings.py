from __future__ import annotations

from fastapi import APIRouter, Depends
from services.pos.app.db.deps import get_db
from services.pos.app.models.settings import (
    SettingsOut,
    SettingsUpdateRequest,
    UpiIdResponse,
    UpiIdUpdateRequest,
)
from services.pos.app.services.shop_settings import get_or_create_settings, settings_to_out
from sqlalchemy.orm import Session

router = APIRouter()


@router.get("/v1/settings", response_model=SettingsOut)
def get_settings(db: Session = Depends(get_db)) -> SettingsOut:
    return settings_to_out(get_or_create_settings(db))


@router.put("/v1/settings", response_model=SettingsOut)
def update_settings(payload: SettingsUpdateRequest, db: Session = Depends(get_db)) -> SettingsOut:
    settings = get_or_create_settings(db)

    if payload.shop_name is not None and payload.shop_name.strip():
        settings.shop_name = payload.shop_name.strip()
    if payload.upi_id is not None:
        settings.upi_id = payload.upi_id.strip()
    if payload.sound_notifications is not None:
        settings.sound_notifications = payload.sound_notifications
    if payload.auto_save_orders is not None:
        settings.auto_save_orders = payload.auto_save_orders

    db.commit()
    db.refresh(settings)
    return settings_to_out(settings)


@router.put("/v1/settings/upi-id", response_model=UpiIdResponse)
def update_upi_id(payload: UpiIdUpdateRequest, db: Session = Depends(get_db)) -> UpiIdResponse:
    settings = get_or_create_settings(db)
    settings.upi_id = payload.upi_id.strip()
    db.commit()

    return UpiIdResponse(upi_id=settings.upi_id, message="UPI ID updated successfully")
