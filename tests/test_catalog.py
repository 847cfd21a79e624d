import json

import pytest

from level_test_utils import corridor, crossroads
from prefab_levelgenerator.src.generators.errors import CatalogError, EmptyCatalogError
from prefab_levelgenerator.src.generators.rooms import (
    BUILTIN_TEMPLATES,
    EntranceFacing,
    RoomTemplateCatalog,
    builtin_catalog,
    catalog_from_dict,
    catalog_to_dict,
    load_catalog_from_path,
)


def test_catalog_keeps_authoring_order():
    catalog = RoomTemplateCatalog([corridor("B"), corridor("A"), crossroads("C")])
    assert catalog.ids() == ["B", "A", "C"]
    assert [t.template_id for t in catalog] == ["B", "A", "C"]
    assert len(catalog) == 3
    assert "A" in catalog
    assert "Z" not in catalog
    assert catalog.get("C").entrance_count == 4
    assert catalog.get("Z") is None


def test_catalog_rejects_empty_and_duplicates():
    with pytest.raises(EmptyCatalogError):
        RoomTemplateCatalog([])
    with pytest.raises(CatalogError, match="Duplicate"):
        RoomTemplateCatalog([corridor("A"), corridor("A")])


def test_require_unknown_template():
    catalog = RoomTemplateCatalog([corridor()])
    assert catalog.require("Corridor").template_id == "Corridor"
    with pytest.raises(CatalogError):
        catalog.require("Nope")


def test_builtin_catalog():
    catalog = builtin_catalog()
    assert len(catalog) == len(BUILTIN_TEMPLATES)
    assert catalog.templates()[0].template_id == "Crossroads"
    assert catalog.list_categories()


def test_template_entrances_are_tuples():
    template = corridor()
    assert isinstance(template.entrances, tuple)
    assert template.socket(1).facing == EntranceFacing.WEST
    hash(template)


def test_json_catalog_round_trip(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(catalog_to_dict([corridor("A"), crossroads("X")])), encoding="utf-8")
    catalog = load_catalog_from_path(path)
    assert catalog.ids() == ["A", "X"]
    assert catalog.get("A") == corridor("A")
    assert catalog.get("X").socket(2).facing == EntranceFacing.SOUTH


def test_json_catalog_defaults():
    catalog = catalog_from_dict({"templates": [{
        "id": "Box",
        "bounds": {"size": [2, 2, 2]},
        "entrances": [{"position": [1, 0, 0], "facing": "EAST"}],
    }]})
    template = catalog.get("Box")
    assert template.bounds.center == (0.0, 0.0, 0.0)
    assert template.bounds.yaw == 0.0
    assert template.socket(0).name == "entrance_0"
    assert template.socket(0).facing == EntranceFacing.EAST
    assert template.category == "Room"


@pytest.mark.parametrize("data", [
    [],
    {"rooms": []},
    {"templates": []},
    {"templates": [{"bounds": {"size": [1, 1, 1]}}]},
    {"templates": [{"id": "A"}]},
    {"templates": [{"id": "A", "bounds": {"size": [1, 1]}}]},
    {"templates": [{"id": "A", "bounds": {"size": ["x", 1, 1]}}]},
    {"templates": [{"id": "A", "bounds": {"size": [1, 1, 1]},
                    "entrances": [{"position": [0, 0, 0], "facing": "sideways"}]}]},
    ["Corridor"],
    {"templates": ["Corridor"]},
    {"templates": [{"id": "A", "bounds": {"size": [1, 1, 1]}, "entrances": ["east"]}]},
    {"templates": [{"id": "A", "bounds": {"size": [1, 1, 1]}, "entrances": {"facing": "east"}}]},
    {"templates": [{"id": "A", "bounds": {"size": [1, 1, 1], "yaw": "left"}}]},
    {"templates": [{"id": "A", "bounds": {"size": [1, 1, 1], "yaw": [90]}}]},
])
def test_malformed_catalog_data(data):
    with pytest.raises(CatalogError):
        catalog_from_dict(data)


def test_catalog_file_errors(tmp_path):
    with pytest.raises(CatalogError, match="not found"):
        load_catalog_from_path(tmp_path / "missing.json")
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogError, match="not valid JSON"):
        load_catalog_from_path(broken)


def test_null_entrances_give_sealed_template():
    catalog = catalog_from_dict({"templates": [
        {"id": "Vault", "bounds": {"size": [2, 2, 2]}, "entrances": None},
    ]})
    assert catalog.get("Vault").entrances == ()


def test_catalog_path_is_a_directory(tmp_path):
    with pytest.raises(CatalogError, match="could not be read"):
        load_catalog_from_path(tmp_path)
