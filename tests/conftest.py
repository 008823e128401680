"""
Pytest configuration and shared fixtures for the marketplace tests.
"""
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from presetmarket.client import ApiClient, AppState, Navigator, Toaster
from presetmarket.main import app
from presetmarket.storage import (
    Base,
    Genre,
    PackPreset,
    PresetPack,
    PresetUpload,
    SessionLocal,
    SoundDesigner,
    Vst,
    configure_engine,
)


def _at(day: int) -> datetime:
    return datetime(2024, 1, day, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def engine():
    """In-memory database shared by every session of one test."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    configure_engine(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db_session(engine):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded(db_session):
    """Two genres, two VSTs, six presets (p1 oldest, p6 newest) and one pack of all six."""
    designer = SoundDesigner(id="d1", username="synthwiz", profile_image="/img/synthwiz.png")
    trance = Genre(id="g-trance", name="Trance")
    techno = Genre(id="g-techno", name="Techno")
    serum = Vst(id="v-serum", name="Serum", type="SYNTH")
    valhalla = Vst(id="v-valhalla", name="Valhalla Room", type="EFFECT")
    db_session.add_all([designer, trance, techno, serum, valhalla])

    presets = [
        PresetUpload(id="p1", title="Deep Trance Lead", description="Uplifting supersaw",
                     price=4.99, genre_id="g-trance", vst_id="v-serum", preset_type="LEAD",
                     sound_preview_url="https://cdn.example.com/p1.mp3",
                     sound_designer_id="d1", created_at=_at(1)),
        PresetUpload(id="p2", title="Techno Bass", description="Rolling FOO bass",
                     price=2.50, genre_id="g-techno", vst_id="v-serum", preset_type="BASS",
                     sound_preview_url="https://cdn.example.com/p2.mp3",
                     sound_designer_id="d1", created_at=_at(2)),
        PresetUpload(id="p3", title="Ambient Pad", description=None,
                     price=0, genre_id="g-trance", vst_id="v-valhalla", preset_type="PAD",
                     sound_preview_url=None, sound_designer_id="d1", created_at=_at(3)),
        PresetUpload(id="p4", title="Foo Pluck", description="bright",
                     price=1.00, genre_id="g-techno", vst_id="v-valhalla", preset_type="PLUCK",
                     sound_preview_url="https://cdn.example.com/p4.mp3",
                     sound_designer_id="d1", created_at=_at(4)),
        PresetUpload(id="p5", title="Acid Arp", description="303 style",
                     price=3.00, genre_id="g-techno", vst_id="v-serum", preset_type="ARP",
                     sound_preview_url="https://cdn.example.com/p5.mp3", created_at=_at(5)),
        PresetUpload(id="p6", title="Hard Kick", description="punchy",
                     price=1.50, genre_id="g-techno", vst_id="v-serum", preset_type="DRUM",
                     sound_preview_url="https://cdn.example.com/p6.mp3", created_at=_at(6)),
    ]
    db_session.add_all(presets)

    pack = PresetPack(id="pack1", title="Festival Pack", description="Everything for the main stage",
                      price=19.99, sound_designer_id="d1", created_at=_at(7))
    pack.presets = [PackPreset(preset_id=p.id, position=i) for i, p in enumerate(presets)]
    db_session.add(pack)
    db_session.commit()
    return {"presets": [p.id for p in presets], "pack": pack.id}


@pytest.fixture
def client(engine, seeded):
    return TestClient(app)


@pytest.fixture
def api(client):
    """ApiClient talking to the app in-process."""
    return ApiClient(session=client, base_url="http://testserver")


@pytest.fixture
def state():
    return AppState()


@pytest.fixture
def toaster():
    return Toaster()


@pytest.fixture
def navigator():
    return Navigator("/dashboard/uploaded")
