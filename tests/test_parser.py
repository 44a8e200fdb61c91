"""
Tests for definition discovery and parsing.
"""

from pathlib import Path

from lwm2m_objects.definitions.models import ValueKind
from lwm2m_objects.definitions.parser import (
    DefinitionParser,
    extract_item_blocks,
    extract_object_id,
    extract_tag,
    extract_text_block,
    get_object_info,
)
from lwm2m_objects.definitions.scanner import (
    find_definition_files,
    list_available_object_ids,
    object_id_from_filename,
)

from conftest import DEVICE_XML, TEMPERATURE_XML, write_definition


class TestScanner:
    """Directory scanning."""

    def test_matches_naming_convention_only(self, tmp_path: Path):
        for name in [
            "lwm2m-object-3303.xml",
            "lwm2m-object-3.xml",
            "lwm2m-object-abc.xml",
            "lwm2m-object-3303.xml.bak",
            "lwm2m-object-.xml",
            "object-3303.xml",
            "lwm2m-object-inventory.json",
        ]:
            (tmp_path / name).write_text("<ObjectID>1</ObjectID>")

        files = find_definition_files(tmp_path)

        assert [f.name for f in files] == ["lwm2m-object-3.xml", "lwm2m-object-3303.xml"]

    def test_not_recursive(self, tmp_path: Path):
        nested = tmp_path / "nested"
        nested.mkdir()
        write_definition(nested, "3303", TEMPERATURE_XML)

        assert find_definition_files(tmp_path) == []

    def test_numeric_order(self, tmp_path: Path):
        for object_id in ["3303", "10", "3", "200"]:
            write_definition(tmp_path, object_id, DEVICE_XML)

        assert list_available_object_ids(tmp_path) == ["3", "10", "200", "3303"]

    def test_missing_directory_returns_empty(self, tmp_path: Path, caplog):
        assert find_definition_files(tmp_path / "missing") == []
        assert "Cannot read definitions directory" in caplog.text

    def test_object_id_from_filename(self):
        assert object_id_from_filename("/x/lwm2m-object-3303.xml") == "3303"
        assert object_id_from_filename("lwm2m-object-x.xml") is None

    def test_ascii_digits_only(self, tmp_path: Path):
        for name in ["lwm2m-object-\u0663.xml", "lwm2m-object-4.xml\n", "lwm2m-object-\uff15.xml"]:
            (tmp_path / name).write_text("<ObjectID>1</ObjectID>")

        assert find_definition_files(tmp_path) == []
        assert object_id_from_filename("lwm2m-object-\u0663.xml") is None
        assert object_id_from_filename("lwm2m-object-4.xml\n") is None


class TestFieldExtractors:
    """Independent per-tag extractors."""

    def test_extract_tag(self):
        assert extract_tag("<Name>Device</Name><Name>Other</Name>", "Name") == "Device"
        assert extract_tag("<Units></Units>", "Units") == ""
        assert extract_tag("<Name></Name>", "Name") is None

    def test_extract_object_id_ascii_digits(self):
        assert extract_object_id("<ObjectID>3303</ObjectID>") == "3303"
        assert extract_object_id("<ObjectID>\u0663</ObjectID>") is None
        assert DefinitionParser().parse_text("<Name>X</Name><ObjectID>\u0663</ObjectID>") is None

    def test_extract_text_block_cdata_multiline(self):
        text = "<Description1><![CDATA[line one\nline two]]></Description1>"
        assert extract_text_block(text, "Description1") == "line one\nline two"

    def test_extract_text_block_plain(self):
        text = "<Description>plain</Description>"
        assert extract_text_block(text, "Description") == "plain"

    def test_item_blocks_do_not_leak(self):
        text = (
            '<Item ID="1"><Name>A</Name></Item>'
            '<Item ID="2"><Name>B</Name><Type>Integer</Type></Item>'
        )
        blocks = list(extract_item_blocks(text))
        assert len(blocks) == 2
        assert "<Type>" not in blocks[0]


class TestDefinitionParser:
    """Object and resource extraction."""

    def test_temperature_object(self):
        obj = DefinitionParser().parse_text(TEMPERATURE_XML)

        assert obj.object_id == "3303"
        assert obj.name == "Temperature"
        assert obj.description.startswith("This IPSO object")
        assert obj.description.endswith("temperature measurement.")
        assert "CDATA" not in obj.description
        assert obj.is_singleton is False

    def test_resources(self):
        obj = DefinitionParser().parse_text(TEMPERATURE_XML)

        value = obj.resources["5700"]
        assert value.name == "Sensor Value"
        assert value.type == "Float"
        assert value.mandatory is True
        assert value.operations == "R"
        assert value.units == "Cel"
        assert value.range_enumeration is None
        assert value.description == "Last or Current Measured Value from the Sensor."
        assert value.kind == ValueKind.FLOAT
        assert value.default_value == 0.0

        minimum = obj.resources["5601"]
        assert minimum.mandatory is False
        assert minimum.range_enumeration == "-40..85"
        assert minimum.default_value == -40.0

        units = obj.resources["5701"]
        assert units.units is None
        assert units.default_value == ""

    def test_execute_resource_dropped_by_default(self):
        obj = DefinitionParser().parse_text(TEMPERATURE_XML)
        assert "5605" not in obj.resources
        assert set(obj.resources) == {"5700", "5601", "5701"}

    def test_execute_resource_kept_when_requested(self):
        obj = DefinitionParser(include_execute=True).parse_text(TEMPERATURE_XML)

        reset = obj.resources["5605"]
        assert reset.kind == ValueKind.FUNCTION
        assert reset.default_value is None
        assert "defaultValue" not in reset.model_dump(by_alias=True, exclude_none=True)

    def test_singleton(self):
        obj = DefinitionParser().parse_text(DEVICE_XML)
        assert obj.is_singleton is True

    def test_missing_multiple_instances_is_not_singleton(self):
        # Known quirk: absence of the tag does not imply a singleton.
        text = "<ObjectID>7</ObjectID><Name>Conn</Name>"
        obj = DefinitionParser().parse_text(text)
        assert obj.is_singleton is False

    def test_defaults_when_fields_missing(self):
        obj = DefinitionParser().parse_text("<ObjectID>42</ObjectID>")
        assert obj.name == "Object 42"
        assert obj.description == ""
        assert obj.resources == {}

    def test_missing_object_id(self, caplog):
        assert DefinitionParser().parse_text("<Name>Nothing</Name>") is None
        assert "No ObjectID" in caplog.text

    def test_item_without_name_is_dropped(self):
        text = (
            "<ObjectID>9</ObjectID><Name>Obj</Name>"
            '<Item ID="1"><Type>Integer</Type></Item>'
            '<Item ID="2"><Name>Kept</Name><Type>Integer</Type></Item>'
        )
        obj = DefinitionParser().parse_text(text)
        assert list(obj.resources) == ["2"]

    def test_missing_item_fields_never_abort(self):
        text = '<ObjectID>9</ObjectID><Item ID="1"><Name>Flag</Name><Type>Boolean</Type></Item>'
        resource = DefinitionParser().parse_text(text).resources["1"]
        assert resource.operations == ""
        assert resource.mandatory is False
        assert resource.units is None
        assert resource.description is None
        assert resource.value_spec.operations == "R"
        assert resource.default_value is False

    def test_unreadable_file_is_skipped(self, tmp_path: Path, caplog):
        path = tmp_path / "lwm2m-object-1.xml"
        path.write_bytes(b"\xff\xfe<ObjectID>\x00")
        assert DefinitionParser().parse_file(path) is None
        assert DefinitionParser().parse_file(tmp_path / "missing.xml") is None

    def test_get_object_info(self, definitions_dir: Path):
        obj = get_object_info(definitions_dir, "3")
        assert obj.name == "Device"
        assert obj.source_path == definitions_dir / "lwm2m-object-3.xml"
        assert get_object_info(definitions_dir, "9999") is None
