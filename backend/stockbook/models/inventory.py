from __future__ import annotations

from ..extensions import db
from stockbook.time_utils import to_utc_z


STATUS_AVAILABLE = "available"
STATUS_SOLD = "sold"


class MainCategory(db.Model):
    """
    Top level of a boss's inventory tree. Names are free text and may repeat.
    """
    __tablename__ = "main_categories"
    __table_args__ = (
        db.Index("ix_main_categories_owner_name", "owner_id", "name"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    owner_id = db.Column(db.Integer, db.ForeignKey("profiles.id"), nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    owner = db.relationship("Profile", backref=db.backref("main_categories", lazy=True))
    sub_categories = db.relationship(
        "SubCategory",
        back_populates="main_category",
        cascade="all, delete-orphan",
        order_by="SubCategory.id",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<MainCategory id={self.id} name={self.name!r} owner_id={self.owner_id}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "name": self.name,
            "created_at": to_utc_z(self.created_at),
        }


class SubCategory(db.Model):
    """
    A priced product line. Every item under it sells at selling_price_cents
    and cost buying_price_cents.

    Prices are stored in cents. buying_price_cents is owner-only data; worker
    views are projected with it zeroed (see services.inventory_tree).
    """
    __tablename__ = "sub_categories"
    __table_args__ = (
        db.CheckConstraint("buying_price_cents >= 0", name="ck_sub_categories_buying_price"),
        db.CheckConstraint("selling_price_cents >= 0", name="ck_sub_categories_selling_price"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    main_category_id = db.Column(
        db.Integer, db.ForeignKey("main_categories.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = db.Column(db.String(255), nullable=False)

    buying_price_cents = db.Column(db.Integer, nullable=False, default=0)
    selling_price_cents = db.Column(db.Integer, nullable=False, default=0)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    main_category = db.relationship("MainCategory", back_populates="sub_categories")
    items = db.relationship(
        "Item",
        back_populates="sub_category",
        cascade="all, delete-orphan",
        order_by="Item.item_number",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<SubCategory id={self.id} name={self.name!r} main_category_id={self.main_category_id}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "main_category_id": self.main_category_id,
            "name": self.name,
            "buying_price_cents": self.buying_price_cents,
            "selling_price_cents": self.selling_price_cents,
            "created_at": to_utc_z(self.created_at),
        }


class Item(db.Model):
    """
    One serialized unit of stock.

    INVARIANTS:
    - item_number is dense 1..N within the sub-category (renumbered on delete)
    - status='sold' iff sold_date is set
    """
    __tablename__ = "items"
    __table_args__ = (
        db.UniqueConstraint("sub_category_id", "item_number", name="uq_items_sub_category_number"),
        db.CheckConstraint("item_number > 0", name="ck_items_item_number"),
        db.CheckConstraint(
            "(status = 'sold' AND sold_date IS NOT NULL) OR (status = 'available' AND sold_date IS NULL)",
            name="ck_items_status_sold_date",
        ),
        db.Index("ix_items_sub_category_status", "sub_category_id", "status"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    sub_category_id = db.Column(
        db.Integer, db.ForeignKey("sub_categories.id", ondelete="CASCADE"), nullable=False, index=True
    )
    item_number = db.Column(db.Integer, nullable=False)

    status = db.Column(db.String(16), nullable=False, default=STATUS_AVAILABLE)
    sold_date = db.Column(db.Date, nullable=True, index=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    sub_category = db.relationship("SubCategory", back_populates="items")

    def __repr__(self) -> str:
        return f"<Item id={self.id} #{self.item_number} status={self.status} sub_category_id={self.sub_category_id}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "sub_category_id": self.sub_category_id,
            "item_number": self.item_number,
            "status": self.status,
            "sold_date": self.sold_date.isoformat() if self.sold_date else None,
        }
