from __future__ import annotations

import logging
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException
from services.pos.app.db.deps import get_db
from services.pos.app.db.models import Category, MenuItem
from services.pos.app.models.menu import (
    CategoryCreateRequest,
    CategoryOut,
    CategoryUpdateRequest,
    MenuItemCreateRequest,
    MenuItemOut,
    MenuItemUpdateRequest,
)
from services.pos.app.models.order import MessageResponse
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

router = APIRouter()


def _menu_item_out(item: MenuItem) -> MenuItemOut:
    return MenuItemOut(
        id=item.id,
        name=item.name,
        category=item.category,
        description=item.description,
        price=item.price,
        image=item.image,
    )


def _category_out(category: Category) -> CategoryOut:
    return CategoryOut(id=category.id, name=category.name, display_order=category.display_order or 0)


@router.get("/v1/menu-items", response_model=list[MenuItemOut])
def list_menu_items(category: str | None = None, db: Session = Depends(get_db)) -> list[MenuItemOut]:
    q = db.query(MenuItem)
    if category:
        q = q.filter(MenuItem.category == category)
    return [_menu_item_out(r) for r in q.order_by(MenuItem.created_at.desc()).all()]


@router.get("/v1/menu-items/{item_id}", response_model=MenuItemOut)
def get_menu_item(item_id: str, db: Session = Depends(get_db)) -> MenuItemOut:
    item = db.get(MenuItem, item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return _menu_item_out(item)


@router.post("/v1/menu-items", response_model=MenuItemOut, status_code=201)
def create_menu_item(payload: MenuItemCreateRequest, db: Session = Depends(get_db)) -> MenuItemOut:
    item = MenuItem(
        id=uuid4().hex,
        name=payload.name,
        category=payload.category,
        description=payload.description.strip() if payload.description else None,
        price=payload.price,
        image=payload.image,
    )
    db.add(item)
    db.commit()
    db.refresh(item)

    logger.info("menu item created: %s", item.name)
    return _menu_item_out(item)


@router.put("/v1/menu-items/{item_id}", response_model=MenuItemOut)
def update_menu_item(
    item_id: str,
    payload: MenuItemUpdateRequest,
    db: Session = Depends(get_db),
) -> MenuItemOut:
    item = db.get(MenuItem, item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Menu item not found")

    if payload.name is not None:
        if not payload.name.strip():
            raise HTTPException(status_code=400, detail="Menu item name must not be blank")
        item.name = payload.name.strip()
    if payload.category is not None:
        if not payload.category.strip():
            raise HTTPException(status_code=400, detail="Category must not be blank")
        item.category = payload.category.strip()
    if payload.description is not None:
        item.description = payload.description.strip()
    if payload.price is not None:
        # Carts and pending orders keep the price they captured; only new adds see this.
        item.price = payload.price
    if payload.image is not None:
        item.image = payload.image

    db.commit()
    db.refresh(item)
    return _menu_item_out(item)


@router.delete("/v1/menu-items/{item_id}", response_model=MessageResponse)
def delete_menu_item(item_id: str, db: Session = Depends(get_db)) -> MessageResponse:
    item = db.get(MenuItem, item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Menu item not found")

    db.delete(item)
    db.commit()
    return MessageResponse(message="Menu item deleted successfully")


@router.get("/v1/categories", response_model=list[CategoryOut])
def list_categories(db: Session = Depends(get_db)) -> list[CategoryOut]:
    rows = db.query(Category).order_by(Category.display_order.asc(), Category.name.asc()).all()
    return [_category_out(r) for r in rows]


@router.get("/v1/categories/{category_id}", response_model=CategoryOut)
def get_category(category_id: str, db: Session = Depends(get_db)) -> CategoryOut:
    category = db.get(Category, category_id)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return _category_out(category)


@router.post("/v1/categories", response_model=CategoryOut, status_code=201)
def create_category(payload: CategoryCreateRequest, db: Session = Depends(get_db)) -> CategoryOut:
    name = payload.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Category name is required")

    if db.query(Category).filter(Category.name == name).first() is not None:
        raise HTTPException(status_code=400, detail="Category with this name already exists")

    category = Category(id=uuid4().hex, name=name, display_order=payload.display_order)
    db.add(category)
    db.commit()
    db.refresh(category)
    return _category_out(category)


@router.put("/v1/categories/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: str,
    payload: CategoryUpdateRequest,
    db: Session = Depends(get_db),
) -> CategoryOut:
    if payload.name is not None and not payload.name.strip():
        raise HTTPException(status_code=400, detail="Category name must be a non-empty string")

    category = db.get(Category, category_id)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")

    if payload.name is not None:
        name = payload.name.strip()
        if name != category.name:
            clash = db.query(Category).filter(Category.name == name).first()
            if clash is not None:
                raise HTTPException(status_code=400, detail="Category with this name already exists")
        category.name = name
    if payload.display_order is not None:
        category.display_order = payload.display_order

    db.commit()
    db.refresh(category)
    return _category_out(category)


@router.delete("/v1/categories/{category_id}", response_model=MessageResponse)
def delete_category(category_id: str, db: Session = Depends(get_db)) -> MessageResponse:
    category = db.get(Category, category_id)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")

    in_use = db.query(MenuItem).filter(MenuItem.category == category.name).count()
    if in_use > 0:
        raise HTTPException(
            status_code=400,
            detail=(
                f"Cannot delete category. {in_use} menu item(s) are using this category. "
                "Please reassign or delete those items first."
            ),
        )

    db.delete(category)
    db.commit()
    return MessageResponse(message="Category deleted successfully")
