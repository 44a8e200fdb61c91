"""
Shared fixtures: small LwM2M definition documents on disk.
"""

from pathlib import Path

import pytest

TEMPERATURE_XML = """<?xml version="1.0" encoding="utf-8"?>
<LWM2M xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" xsi:noNamespaceSchemaLocation="http://openmobilealliance.org/tech/profiles/LWM2M.xsd">
  <Object ObjectType="MODefinition">
    <Name>Temperature</Name>
    <Description1><![CDATA[This IPSO object should be used with a temperature sensor
to report a temperature measurement.]]></Description1>
    <ObjectID>3303</ObjectID>
    <ObjectURN>urn:oma:lwm2m:ext:3303</ObjectURN>
    <MultipleInstances>Multiple</MultipleInstances>
    <Mandatory>Optional</Mandatory>
    <Resources>
      <Item ID="5700">
        <Name>Sensor Value</Name>
        <Operations>R</Operations>
        <MultipleInstances>Single</MultipleInstances>
        <Mandatory>Mandatory</Mandatory>
        <Type>Float</Type>
        <RangeEnumeration></RangeEnumeration>
        <Units>Cel</Units>
        <Description><![CDATA[Last or Current Measured Value from the Sensor.]]></Description>
      </Item>
      <Item ID="5601">
        <Name>Min Measured Value</Name>
        <Operations>R</Operations>
        <MultipleInstances>Single</MultipleInstances>
        <Mandatory>Optional</Mandatory>
        <Type>Float</Type>
        <RangeEnumeration>-40..85</RangeEnumeration>
        <Units>Cel</Units>
        <Description>The minimum value measured by the sensor since power ON or reset.</Description>
      </Item>
      <Item ID="5605">
        <Name>Reset Min and Max Measured Values</Name>
        <Operations>E</Operations>
        <MultipleInstances>Single</MultipleInstances>
        <Mandatory>Optional</Mandatory>
        <Type></Type>
        <RangeEnumeration></RangeEnumeration>
        <Units></Units>
        <Description>Reset the Min and Max Measured Values to Current Value.</Description>
      </Item>
      <Item ID="5701">
        <Name>Sensor Units</Name>
        <Operations>R</Operations>
        <MultipleInstances>Single</MultipleInstances>
        <Mandatory>Optional</Mandatory>
        <Type>String</Type>
        <RangeEnumeration></RangeEnumeration>
        <Units></Units>
        <Description>Measurement Units Definition.</Description>
      </Item>
    </Resources>
    <Description2></Description2>
  </Object>
</LWM2M>
"""

DEVICE_XML = """<?xml version="1.0" encoding="utf-8"?>
<LWM2M>
  <Object ObjectType="MODefinition">
    <Name>Device</Name>
    <Description1>This LwM2M Object provides a range of device related information.</Description1>
    <ObjectID>3</ObjectID>
    <MultipleInstances>Single</MultipleInstances>
    <Mandatory>Mandatory</Mandatory>
    <Resources>
      <Item ID="0">
        <Name>Manufacturer</Name>
        <Operations>R</Operations>
        <Mandatory>Optional</Mandatory>
        <Type>String</Type>
        <Units></Units>
        <Description>Human readable manufacturer name</Description>
      </Item>
      <Item ID="4">
        <Name>Reboot</Name>
        <Operations>E</Operations>
        <Mandatory>Mandatory</Mandatory>
        <Type></Type>
        <Description>Reboot the LwM2M Device.</Description>
      </Item>
      <Item ID="9">
        <Name>Battery Level</Name>
        <Operations>R</Operations>
        <Mandatory>Optional</Mandatory>
        <Type>Integer</Type>
        <RangeEnumeration>0..100</RangeEnumeration>
        <Units>/100</Units>
        <Description>Contains the current battery level as a percentage.</Description>
      </Item>
      <Item ID="13">
        <Name>Current Time</Name>
        <Operations>RW</Operations>
        <Mandatory>Optional</Mandatory>
        <Type>Time</Type>
        <Description>Current UNIX time of the LwM2M Client.</Description>
      </Item>
    </Resources>
  </Object>
</LWM2M>
"""


def write_definition(directory: Path, object_id: str, text: str) -> Path:
    path = directory / f"lwm2m-object-{object_id}.xml"
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def definitions_dir(tmp_path: Path) -> Path:
    """A config/ directory with the Device and Temperature definitions."""
    directory = tmp_path / "config"
    directory.mkdir()
    write_definition(directory, "3303", TEMPERATURE_XML)
    write_definition(directory, "3", DEVICE_XML)
    return directory


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep LWM2M_* variables and a stray .env out of the settings."""
    import os

    for key in list(os.environ):
        if key.startswith("LWM2M_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
