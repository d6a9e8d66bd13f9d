"""Tests for datasheet flattening and directory loading."""

import logging

from pqa.ingest.datasheet_loader import (
    JsonDirectorySource,
    flatten_product,
    format_value,
    ingest_documents,
    load_datasheet_dir,
)


class TestFlattenProduct:

    def test_dimension_by_symbol(self):
        doc = {"product": "6205", "dimensions": [{"symbol": "B", "value": 15, "unit": "mm"}]}
        store = ingest_documents([doc])
        assert store["6205"]["width"] == "15mm"

    def test_dimension_symbols_are_case_sensitive(self):
        _, attrs = flatten_product({
            "product": "6205",
            "dimensions": [
                {"symbol": "d", "value": 25, "unit": "mm"},
                {"symbol": "D", "value": 52, "unit": "mm"},
            ],
        })
        assert attrs == {"inner_diameter": "25mm", "outer_diameter": "52mm"}

    def test_dimension_by_name(self):
        _, attrs = flatten_product({
            "product": "6306",
            "dimensions": [
                {"name": "Bore diameter", "value": 30, "unit": "mm"},
                {"name": "Outer diameter", "value": 72.5, "unit": "mm"},
                {"name": "Diameter", "value": 10, "unit": "mm"},
                {"name": "Chamfer", "value": 1.1, "unit": "mm"},
            ],
        })
        assert attrs == {
            "inner_diameter": "30mm",
            "outer_diameter": "72.5mm",
            "diameter": "10mm",
        }

    def test_dimension_without_value_is_dropped(self):
        _, attrs = flatten_product({
            "product": "6205",
            "dimensions": [{"symbol": "B", "unit": "mm"}, {"symbol": "d", "value": None}],
        })
        assert attrs == {}

    def test_dimension_without_unit(self):
        _, attrs = flatten_product({"product": "6205", "dimensions": [{"symbol": "B", "value": 15.0}]})
        assert attrs["width"] == "15"

    def test_performance_unit_joined_with_space(self):
        _, attrs = flatten_product({
            "product": "6205",
            "performance": [
                {"name": "Limiting speed", "unit": "r/min", "value": 18000},
                {"name": "Fatigue load limit", "value": "0.335"},
                {"name": "", "value": 1},
                {"name": "Reference speed"},
            ],
        })
        assert attrs == {"limiting_speed": "18000 r/min", "fatigue_load_limit": "0.335"}

    def test_performance_later_entry_wins(self):
        _, attrs = flatten_product({
            "product": "6205",
            "performance": [
                {"name": "Limiting speed", "unit": "r/min", "value": 18000},
                {"name": "Limiting speed (grease)", "unit": "r/min", "value": 17000},
            ],
        })
        assert attrs == {"limiting_speed": "17000 r/min"}

    def test_properties_and_specifications_raw_value(self):
        _, attrs = flatten_product({
            "product": "6205",
            "properties": [
                {"name": "Material, bearing", "value": "Bearing steel"},
                {"name": "Coating", "value": ""},
            ],
            "specifications": [{"name": "Number of rows", "value": 1}],
        })
        assert attrs == {"material_bearing": "Bearing steel", "number_of_rows": "1"}

    def test_logistics_unit_joined_with_space(self):
        _, attrs = flatten_product({
            "product": "6205",
            "logistics": [
                {"name": "Product net weight", "value": 0.128, "unit": "kg"},
                {"name": "EAN code", "value": "7316577208349"},
            ],
        })
        assert attrs == {"product_net_weight": "0.128 kg", "ean_code": "7316577208349"}

    def test_other_fields_passthrough(self):
        _, attrs = flatten_product({"product": "6205", "Height": "19mm", "sealed": False, "rows": 1})
        assert attrs == {"Height": "19mm", "sealed": "false", "rows": "1"}

    def test_section_that_is_not_a_list_passes_through(self):
        _, attrs = flatten_product({"product": "6205", "dimensions": "see drawing"})
        assert attrs == {"dimensions": "see drawing"}

    def test_later_field_overwrites_same_key(self):
        _, attrs = flatten_product({
            "product": "6205",
            "width": "16mm",
            "dimensions": [{"symbol": "B", "value": 15, "unit": "mm"}],
        })
        assert attrs == {"width": "15mm"}

    def test_id_priority(self):
        product_id, attrs = flatten_product({"title": "Deep groove", "sku": "X1", "designation": "6205"})
        assert product_id == "6205"
        assert attrs == {}

    def test_blank_id_falls_back_to_next_field(self):
        product_id, _ = flatten_product({"product": "  ", "number": 6205})
        assert product_id == "6205"

    def test_object_without_id_is_dropped(self):
        assert flatten_product({"dimensions": [{"symbol": "B", "value": 15}]}) is None


class TestIngestDocuments:

    def test_single_object_and_array_documents(self, sample_documents):
        store = ingest_documents(sample_documents)
        assert set(store) == {"6205", "6205 N", "6306"}
        assert store["6306"] == {"Height": "19mm", "width": "19mm"}

    def test_later_product_replaces_earlier(self):
        store = ingest_documents([
            {"product": "6205", "dimensions": [{"symbol": "B", "value": 15, "unit": "mm"}]},
            {"product": "6205", "color": "grey"},
        ])
        assert store["6205"] == {"color": "grey"}

    def test_replacement_is_case_insensitive(self):
        store = ingest_documents([
            {"product": "6205 n", "a": "1"},
            {"product": "6205 N", "b": "2"},
        ])
        assert store == {"6205 N": {"b": "2"}}

    def test_malformed_document_is_skipped(self, caplog):
        with caplog.at_level(logging.ERROR):
            store = ingest_documents(["not a product", {"product": "6205", "x": "1"}, 42])
        assert store == {"6205": {"x": "1"}}
        assert "malformed" in caplog.text

    def test_non_object_array_items_ignored(self):
        store = ingest_documents([[1, "two", {"product": "6205"}]])
        assert store == {"6205": {}}


class TestFormatValue:

    def test_numbers_are_invariant(self):
        assert format_value(15) == "15"
        assert format_value(15.0) == "15"
        assert format_value(0.128) == "0.128"
        assert format_value(None) == ""

    def test_nested_values_as_compact_json(self):
        assert format_value({"a": [1, 2]}) == '{"a":[1,2]}'


class TestLoadDatasheetDir:

    def test_loads_every_json_file(self, datasheet_dir, sample_documents):
        docs = load_datasheet_dir(datasheet_dir)
        assert docs == sample_documents

    def test_unreadable_file_is_skipped(self, datasheet_dir, caplog):
        (datasheet_dir / "broken.json").write_text("{not json", encoding="utf-8")
        (datasheet_dir / "notes.txt").write_text("ignored", encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            docs = load_datasheet_dir(datasheet_dir)
        assert len(docs) == 2
        assert "broken.json" in caplog.text

    def test_missing_directory(self, tmp_path):
        assert load_datasheet_dir(tmp_path / "nope") == []

    def test_directory_source(self, datasheet_dir):
        source = JsonDirectorySource(datasheet_dir)
        assert source.data_dir == datasheet_dir
        assert len(source.load_documents()) == 2
