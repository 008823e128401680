# presetmarket/storage.py
"""
Relational storage for the marketplace.

Tables are declared with the SQLAlchemy 2.0 declarative API. The web
routes receive one ``Session`` per request through ``get_session``;
tests swap the engine for an in-memory SQLite database with
``configure_engine``.
"""

import uuid
from datetime import datetime, timezone
from typing import Iterator, List, Optional

from sqlalchemy import (
    DateTime,
    Enum as SAEnum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    Session,
    mapped_column,
    relationship,
    sessionmaker,
)

from .config import DATABASE_URL, SQL_ECHO
from .models import CartType, ItemType


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    pass


class SoundDesigner(Base):
    __tablename__ = "sound_designers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    username: Mapped[str] = mapped_column(String(80), unique=True)
    profile_image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)


class Genre(Base):
    __tablename__ = "genres"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(80), unique=True)


class Vst(Base):
    __tablename__ = "vsts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(120))
    # e.g. SYNTH, EFFECT, SAMPLER
    type: Mapped[str] = mapped_column(String(40), index=True)


class PresetUpload(Base):
    __tablename__ = "preset_uploads"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[float] = mapped_column(Float, default=0.0)
    preset_type: Mapped[Optional[str]] = mapped_column(String(40), nullable=True, index=True)
    sound_preview_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    genre_id: Mapped[Optional[str]] = mapped_column(ForeignKey("genres.id"), nullable=True)
    vst_id: Mapped[Optional[str]] = mapped_column(ForeignKey("vsts.id"), nullable=True)
    sound_designer_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("sound_designers.id"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)

    genre: Mapped[Optional[Genre]] = relationship()
    vst: Mapped[Optional[Vst]] = relationship()
    sound_designer: Mapped[Optional[SoundDesigner]] = relationship()


class PackPreset(Base):
    __tablename__ = "pack_presets"
    __table_args__ = (UniqueConstraint("pack_id", "preset_id", name="u_pack_preset"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    pack_id: Mapped[str] = mapped_column(ForeignKey("preset_packs.id", ondelete="CASCADE"))
    preset_id: Mapped[str] = mapped_column(ForeignKey("preset_uploads.id", ondelete="CASCADE"))
    position: Mapped[int] = mapped_column(Integer, default=0)

    preset: Mapped[PresetUpload] = relationship()


class PresetPack(Base):
    __tablename__ = "preset_packs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[float] = mapped_column(Float, default=0.0)
    sound_designer_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("sound_designers.id"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)

    sound_designer: Mapped[Optional[SoundDesigner]] = relationship()
    presets: Mapped[List[PackPreset]] = relationship(
        order_by=PackPreset.position,
        cascade="all, delete-orphan",
    )


class Cart(Base):
    __tablename__ = "carts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    type: Mapped[CartType] = mapped_column(SAEnum(CartType), unique=True)

    items: Mapped[List["CartItem"]] = relationship(
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItem.created_at",
    )


class CartItem(Base):
    """One item in a cart or a wishlist. ``preset_id`` and ``pack_id`` are exclusive."""

    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint("cart_id", "preset_id", name="u_cart_preset"),
        UniqueConstraint("cart_id", "pack_id", name="u_cart_pack"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    cart_id: Mapped[str] = mapped_column(ForeignKey("carts.id", ondelete="CASCADE"))
    item_type: Mapped[ItemType] = mapped_column(SAEnum(ItemType))
    preset_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("preset_uploads.id", ondelete="CASCADE"), nullable=True
    )
    pack_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("preset_packs.id", ondelete="CASCADE"), nullable=True
    )
    quantity: Mapped[int] = mapped_column(Integer, default=1)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    cart: Mapped[Cart] = relationship(back_populates="items")

    @property
    def item_id(self) -> str:
        return self.preset_id or self.pack_id or ""


# ---------------------------------------------------------------------------
# Engine and sessions


def _make_engine(url: str) -> Engine:
    kwargs = {"echo": SQL_ECHO}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
    return create_engine(url, **kwargs)


engine: Engine = _make_engine(DATABASE_URL)
SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)


def configure_engine(new_engine: Engine) -> None:
    """Point the session factory at another engine (used by tests)."""
    global engine
    engine = new_engine
    SessionLocal.configure(bind=new_engine)


def init_db() -> None:
    Base.metadata.create_all(engine)


def get_session() -> Iterator[Session]:
    """FastAPI dependency yielding one session per request."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def get_or_create_cart(session: Session, cart_type: CartType) -> Cart:
    cart = session.query(Cart).filter(Cart.type == cart_type).one_or_none()
    if cart is None:
        cart = Cart(type=cart_type)
        session.add(cart)
        session.flush()
    return cart
