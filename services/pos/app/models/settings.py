from __future__ import annotations

from pydantic import BaseModel


class SettingsOut(BaseModel):
    shop_name: str
    upi_id: str
    sound_notifications: bool
    auto_save_orders: bool


class SettingsUpdateRequest(BaseModel):
    shop_name: str | None = None
    upi_id: str | None = None
    sound_notifications: bool | None = None
    auto_save_orders: bool | None = None


class UpiIdUpdateRequest(BaseModel):
    upi_id: str


class UpiIdResponse(BaseModel):
    upi_id: str
    message: str
