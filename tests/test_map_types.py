"""
Tests for the parsed map data model.
"""

import dataclasses

import pytest

from quake_mapsource import parse
from quake_mapsource.map_types import Brush, BrushPlane, Entity, Map, TexParams


class TestEntity:
    def test_classname_and_get(self):
        entity = Entity(keys={"classname": "light", "light": "300"})
        assert entity.classname == "light"
        assert entity.get("light") == "300"
        assert entity.get("style", "0") == "0"

    def test_origin(self):
        assert Entity(keys={"origin": "-16 -32 40"}).origin == (-16.0, -32.0, 40.0)

    def test_missing_origin(self):
        assert Entity(keys={"classname": "worldspawn"}).origin is None

    def test_malformed_origin(self):
        with pytest.raises(ValueError):
            Entity(keys={"origin": "1 2"}).origin

    def test_point_and_brush_entities(self):
        plane = BrushPlane(p=(0, 0, 0), q=(0, 1, 0), r=(1, 0, 0), texname="sky")
        assert Entity().is_point_entity
        assert not Entity(brushes=(Brush(planes=(plane,)),)).is_point_entity


class TestMap:
    def test_worldspawn(self, full_map):
        level = parse(full_map)
        assert level.worldspawn is level.entities[0]

    def test_no_worldspawn(self):
        assert Map(entities=(Entity(keys={"classname": "light"}),)).worldspawn is None

    def test_find_by_classname(self, full_map):
        level = parse(full_map)
        dogs = level.find_by_classname("monster_dog")
        assert len(dogs) == 1
        assert dogs[0].origin == (-16.0, -32.0, 40.0)
        assert level.find_by_classname("monster_ogre") == ()

    def test_iteration(self, full_map):
        level = parse(full_map)
        assert list(level) == list(level.entities)

    def test_bounds(self, full_map):
        assert parse(full_map).bounds() == ((-64.0, -64.0, -16.0), (81.0, 96.0, 17.0))

    def test_bounds_without_brushes(self):
        assert parse('{\n"classname" "light"\n}').bounds() is None


class TestImmutability:
    def test_nodes_are_frozen(self, full_map):
        level = parse(full_map)
        with pytest.raises(dataclasses.FrozenInstanceError):
            level.entities = ()
        with pytest.raises(dataclasses.FrozenInstanceError):
            level.entities[0].brushes[0].planes[0].texname = "other"

    def test_sequences_are_tuples(self, full_map):
        level = parse(full_map)
        assert isinstance(level.entities, tuple)
        assert isinstance(level.entities[0].brushes, tuple)
        assert isinstance(level.entities[0].brushes[0].planes, tuple)

    def test_texparams_defaults(self):
        assert TexParams() == TexParams(offset=(0.0, 0.0), rotation=0.0, scale=(1.0, 1.0))

    def test_keys_are_read_only(self, full_map):
        level = parse(full_map)
        with pytest.raises(TypeError):
            level.entities[0].keys["classname"] = "hacked"
        assert level.entities[0].classname == "worldspawn"

    def test_keys_are_copied_on_construction(self):
        keys = {"classname": "light"}
        entity = Entity(keys=keys)
        keys["classname"] = "info_null"
        assert entity.classname == "light"

    def test_nodes_are_hashable(self, full_map):
        assert hash(parse(full_map)) == hash(parse(full_map))
        a = Entity(keys={"classname": "light", "light": "300"})
        b = Entity(keys={"light": "300", "classname": "light"})
        assert a == b
        assert len({a, b}) == 1
