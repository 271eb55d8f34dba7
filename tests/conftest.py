# tests/conftest.py

import pytest

from quake_mapsource.settings import settings_storage

CUBE_BRUSH = """{
( -16 0 -48 ) ( -16 1 -48 ) ( -16 0 -47 ) __TB_empty 0 0 0 1 1
( -16 0 -48 ) ( -16 0 -47 ) ( -15 0 -48 ) __TB_empty 0 0 0 1 1
( -16 0 -48 ) ( -15 0 -48 ) ( -16 1 -48 ) __TB_empty 0 0 0 1 1
( 80 80 -32 ) ( 80 81 -32 ) ( 81 80 -32 ) __TB_empty 0 0 0 1 1
( 80 96 -32 ) ( 81 96 -32 ) ( 80 96 -31 ) __TB_empty 0 0 0 1 1
( 80 80 -32 ) ( 80 80 -31 ) ( 80 81 -32 ) __TB_empty 0 0 0 1 1
}"""

FULL_MAP = """// Game: Quake
// Format: Valve
// entity 0
{
"mapversion" "220"
"classname" "worldspawn"
// brush 0
{
( -64 -64 -16 ) ( -64 -63 -16 ) ( -64 -64 -15 ) __TB_empty 0 0 0 1 1
( -64 -64 -16 ) ( -64 -64 -15 ) ( -63 -64 -16 ) __TB_empty 0 0 0 1 1
( -64 -64 -16 ) ( -63 -64 -16 ) ( -64 -63 -16 ) __TB_empty 0 0 0 1 1
( 64 64 16 ) ( 64 65 16 ) ( 65 64 16 ) __TB_empty 0 0 0 1 1
( 64 64 16 ) ( 65 64 16 ) ( 64 64 17 ) __TB_empty 0 0 0 1 1
( 64 64 16 ) ( 64 64 17 ) ( 64 65 16 ) __TB_empty 0 0 0 1 1
}
// brush 1
{
( -16 0 -16 ) ( -16 1 -16 ) ( -16 0 -15 ) __TB_empty 0 0 0 1 1
( -16 0 -16 ) ( -16 0 -15 ) ( -15 0 -16 ) __TB_empty 0 0 0 1 1
( -16 0 -16 ) ( -15 0 -16 ) ( -16 1 -16 ) __TB_empty 0 0 0 1 1
( 80 80 0 ) ( 80 81 0 ) ( 81 80 0 ) __TB_empty 0 0 0 1 1
( 80 96 0 ) ( 81 96 0 ) ( 80 96 1 ) __TB_empty 0 0 0 1 1
( 80 80 0 ) ( 80 80 1 ) ( 80 81 0 ) __TB_empty 0 0 0 1 1
}
}
// entity 1
{
"classname" "monster_dog"
"origin" "-16 -32 40"
"angle" "50"
}
// entity 2
{
"classname" "weapon_supershotgun"
"origin" "48 -32 16"
"angle" "270"
}"""


@pytest.fixture
def cube_brush() -> str:
    return CUBE_BRUSH


@pytest.fixture
def full_map() -> str:
    return FULL_MAP


@pytest.fixture
def map_file(tmp_path):
    path = tmp_path / "start.map"
    path.write_text(FULL_MAP, encoding="utf-8")
    return path


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point the settings location at a temporary directory."""
    cfg = tmp_path / "config"
    monkeypatch.setattr(settings_storage, "get_config_dir", lambda: cfg)
    return cfg
