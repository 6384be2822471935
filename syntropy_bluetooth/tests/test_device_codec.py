import pytest
from app.exceptions import ParseError
from app.models.bluetooth_model import DeviceInfo, StatusKind, StatusMessage
from app.models.config import PluginConfig
from app.services import device_codec


DEVICES = [
    DeviceInfo(address="AA:BB:CC:DD:EE:FF", name="AirPods Pro", connected=True),
    DeviceInfo(address="11-22-33-44-55-66", name="Magic Keyboard", connected=False),
    DeviceInfo(address="X", name="  spaced name ", connected=True),
]

ICON_PAIRS = [
    ("◍", "○"),
    ("*", "-"),
    (".", "+"),
    ("󰂱", "󰂯"),
    ("[x]", "[_]"),
]


def test_decode_empty_input():
    assert device_codec.decode("") == []
    assert device_codec.decode("   \n") == []
    assert device_codec.decode("[]") == []
    assert device_codec.decode(None) == []


def test_decode_blueutil_output():
    text = (
        '[{"address":"aa-bb-cc-dd-ee-ff","name":"AirPods","connected":true,'
        '"paired":true,"favourite":false,"recentAccessDate":"2024-01-01"},'
        '{"address":"11-22-33-44-55-66","name":null}]'
    )
    devices = device_codec.decode(text)

    assert [d.address for d in devices] == ["aa-bb-cc-dd-ee-ff", "11-22-33-44-55-66"]
    assert devices[0].connected is True
    assert devices[1].name == ""
    assert devices[1].connected is False


def test_decode_keeps_duplicates_in_order():
    devices = device_codec.decode('[{"address":"A","name":"one"},{"address":"A","name":"two"}]')
    assert [d.name for d in devices] == ["one", "two"]


@pytest.mark.parametrize("text", [
    "not json",
    '{"address": "A"}',
    '["A"]',
    '[{"name": "no address"}]',
    '[{"address": ""}]',
    '[{"address": "A", "name": "tab\\there"}]',
    '[{"address": "AA\\tBB", "name": "x"}]',
    '[{"address": "   ", "name": "x"}]',
])
def test_decode_rejects_malformed(text):
    with pytest.raises(ParseError):
        device_codec.decode(text)


def test_render_grammar():
    line = device_codec.render(DEVICES[0])
    assert line == "◍ AirPods Pro\tAA:BB:CC:DD:EE:FF"
    assert line.count("\t") == 1

    line = device_codec.render(DEVICES[1], "*", "-")
    assert line == "- Magic Keyboard\t11-22-33-44-55-66"


def test_render_unnamed_device():
    line = device_codec.render(DeviceInfo(address="A1"))
    assert line == "○ Unknown\tA1"


@pytest.mark.parametrize("connected_icon,disconnected_icon", ICON_PAIRS)
@pytest.mark.parametrize("device", DEVICES)
def test_round_trip(device, connected_icon, disconnected_icon):
    line = device_codec.render(device, connected_icon, disconnected_icon)

    assert device_codec.extract_address(line) == device.address
    assert device_codec.extract_name(line) == device.name
    assert device_codec.is_connected(line, connected_icon) == device.connected


def test_extract_without_tab():
    assert device_codec.extract_address("◍ Headphones") == ""
    assert device_codec.extract_name("◍ Headphones") == ""
    assert device_codec.extract_name("NoIcon\tAA") == ""


def test_extract_address_uses_last_tab():
    assert device_codec.extract_address("◍ a\tb\tAA:BB") == "AA:BB"


def test_is_connected_treats_icon_literally():
    assert device_codec.is_connected("x Device\tAA", ".") is False
    assert device_codec.is_connected(". Device\tAA", ".") is True
    assert device_codec.is_connected("aaa Device\tAA", "a*") is False
    assert device_codec.is_connected("◍Device\tAA", "◍") is False


def test_parse_line_device(config):
    item = device_codec.parse_line("◍ AirPods Pro\tAA:BB", config)
    assert item == DeviceInfo(address="AA:BB", name="AirPods Pro", connected=True)


@pytest.mark.parametrize("line,kind", [
    ("🔍 Scanning for devices... (auto-refresh every 10s)", StatusKind.SCANNING),
    ("💡 Tip: Put your device in pairing mode", StatusKind.TIP),
    ("Error: blueutil not installed. Install with: brew install blueutil", StatusKind.ERROR),
    ("No paired Bluetooth devices found", StatusKind.EMPTY),
    ("something without an address", StatusKind.NOTICE),
    ("Please wait for devices to appear in the scan", StatusKind.NOTICE),
])
def test_parse_line_status(config, line, kind):
    item = device_codec.parse_line(line, config)
    assert isinstance(item, StatusMessage)
    assert item.status == kind
    assert item.text == line


def test_parse_line_uses_configured_icon():
    config = PluginConfig(connected_icon="*", disconnected_icon="-")
    assert device_codec.parse_line("* Mouse\tAA", config).connected is True
    assert device_codec.parse_line("◍ Mouse\tAA", config).connected is False


def test_render_item(config):
    status = StatusMessage(status=StatusKind.EMPTY, text="No paired Bluetooth devices found")
    assert device_codec.render_item(status, config) == "No paired Bluetooth devices found"
    assert device_codec.render_item(DEVICES[1], config) == "○ Magic Keyboard\t11-22-33-44-55-66"
