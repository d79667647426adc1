import uuid

import pytest

from conftest import Building, Person
from cuse.converters import CallableIdConverter, IdConverterCatalog
from cuse.documents import Document
from cuse.exceptions import NotConfiguredIdConverterError, NotConfiguredIndexingStrategyError
from cuse.strategy import AttributeIndexingStrategy, IndexingStrategyCatalog

# ---------- Indexing strategies ----------


def test_attribute_strategy_builds_document() -> None:
    strategy = AttributeIndexingStrategy(Person, ["name", "status"])
    doc = strategy.to_document(Person(id=4, name="Ada", status="active"))
    assert doc == Document(doc_id="4", index_name="Person", fields={"name": "Ada", "status": "active"})


def test_attribute_strategy_skips_none_values() -> None:
    strategy = AttributeIndexingStrategy(Person, ["name", "status"], index_name="people")
    assert strategy.fields(Person(id=4, name="Ada")) == {"name": "Ada"}
    assert strategy.index_name == "people"


def test_attribute_strategy_custom_id_attribute() -> None:
    strategy = AttributeIndexingStrategy(Building, ["address"], id_attribute="address")
    assert strategy.document_id(Building(id=1, address="Main St")) == "Main St"


def test_attribute_strategy_rejects_missing_id() -> None:
    strategy = AttributeIndexingStrategy(Person, ["name"])
    with pytest.raises(ValueError):
        strategy.document_id(Person(id=None, name="Ada"))  # type: ignore[arg-type]


def test_strategy_catalog_lookup() -> None:
    strategy = AttributeIndexingStrategy(Person, ["name"])
    catalog = IndexingStrategyCatalog({Person: strategy})
    assert catalog.get(Person) is strategy
    assert catalog.get(Building) is None
    assert Person in catalog
    with pytest.raises(NotConfiguredIndexingStrategyError):
        catalog.require(Building)


# ---------- Id converters ----------


def test_default_converters() -> None:
    catalog = IdConverterCatalog.with_defaults()
    assert catalog.require(int).convert(["3", "1"]) == [3, 1]
    assert catalog.require(str).convert(["a"]) == ["a"]
    value = uuid.uuid4()
    assert catalog.require(uuid.UUID).convert([str(value)]) == [value]


def test_missing_converter() -> None:
    catalog = IdConverterCatalog()
    assert catalog.get_converter(int) is None
    with pytest.raises(NotConfiguredIdConverterError) as exc:
        catalog.require(int)
    assert exc.value.configured_type is int


def test_register_and_unregister_converter() -> None:
    catalog = IdConverterCatalog()
    converter = CallableIdConverter(lambda raw: raw.upper())
    catalog.register(str, converter)
    assert catalog.require(str).convert(["x", "y"]) == ["X", "Y"]
    catalog.unregister(str)
    assert catalog.get_converter(str) is None
