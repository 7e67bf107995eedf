"""
Inspection record model and loaders.

A record arrives as the form's JSON payload (camelCase keys) or as an XML
dataset with the same element names. Every field is optional; values that
cannot be interpreted are dropped to ``None`` / ``""`` rather than raising,
so the renderer always gets something it can lay out.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from lxml import etree

from .errors import RecordError

logger = logging.getLogger(__name__)

TRI_STATES = ("Yes", "No", "N/A")

CONTROL_PANEL_KEYS = "abcdefghijk"
FUNCTIONAL_TEST_KEYS = "abcdef"
POST_TEST_KEYS = "abcde"

# XML containers whose children are list items rather than named fields
LIST_FIELDS = {"notifyEntities", "equipmentTested"}


# ── value coercion ────────────────────────────────────────────────────────────
def _str(v):
    if v is None:
        return None
    return str(v)

def _tri(v):
    return v if v in TRI_STATES else ""

def _int(v):
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v
    s = str(v).strip()
    if not s:
        return None
    try:
        return int(s)
    except ValueError:
        pass
    # "12.0", "1e3": go through float, which can overflow or be NaN
    try:
        return int(float(s))
    except (ValueError, OverflowError):
        logger.debug("Ignoring non-numeric value %r", v)
        return None

def _items(v):
    return v if isinstance(v, (list, tuple)) else ()

def _bool(v):
    if isinstance(v, bool) or v is None:
        return v
    s = str(v).strip().lower()
    if s in ("true", "yes", "1", "on"):
        return True
    if s in ("false", "no", "0", "off"):
        return False
    return None

def _answers(raw, keys):
    raw = raw if isinstance(raw, dict) else {}
    return {k: _tri(raw.get(k)) for k in keys}


# ── model ─────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class NotifyEntity:
    entity: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None

    @classmethod
    def from_dict(cls, d):
        d = d if isinstance(d, dict) else {}
        return cls(_str(d.get("entity")), _str(d.get("name")), _str(d.get("phone")))


@dataclass(frozen=True)
class EquipmentRow:
    label: Optional[str] = None
    total_number: Optional[int] = None
    total_tested: Optional[int] = None
    function_ok: str = ""

    @classmethod
    def from_dict(cls, d):
        d = d if isinstance(d, dict) else {}
        # totalNumberTested may exceed totalNumber; the form does not forbid it
        return cls(
            label=_str(d.get("equipmentLabel")),
            total_number=_int(d.get("totalNumber")),
            total_tested=_int(d.get("totalNumberTested")),
            function_ok=_tri(d.get("functionOK")),
        )


@dataclass(frozen=True)
class SignOffBlock:
    name: Optional[str] = None
    title: Optional[str] = None
    date: Optional[str] = None
    signature: Optional[str] = None  # PNG data URL or bare base64

    @classmethod
    def from_dict(cls, d):
        d = d if isinstance(d, dict) else {}
        return cls(_str(d.get("name")), _str(d.get("title")),
                   _str(d.get("date")), _str(d.get("signature")) or None)


@dataclass(frozen=True)
class FireAlarmReport:
    # Section 1 - Property Information
    property_name: Optional[str] = None
    street: Optional[str] = None
    city_state_zip: Optional[str] = None
    contact: Optional[str] = None
    phone: Optional[str] = None
    frequency_of_inspection: Optional[str] = None
    date: Optional[str] = None
    # Section 2 - Notify Prior to Testing
    notify_entities: Tuple[NotifyEntity, ...] = ()
    # Section 3 - Control Panel Status
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    control_panel_status: Dict[str, str] = field(default_factory=dict)
    put_system_in_test_at: Optional[str] = None
    comments: Optional[str] = None
    # Section 4 - Equipment Tested
    system_type: Optional[str] = None
    equipment_tested: Tuple[EquipmentRow, ...] = ()
    # Section 5 - Functional Test of Output Devices
    functional_test: Dict[str, str] = field(default_factory=dict)
    # Section 6 - System Power Supplies
    primary_power: Optional[str] = None
    nominal_voltage: Optional[str] = None
    nominal_voltage_amps: Optional[str] = None
    overcurrent_protection: Optional[str] = None
    overcurrent_protection_amps: Optional[str] = None
    panel_breaker_location: Optional[str] = None
    battery_test_reading: Optional[str] = None
    storage_battery: Optional[str] = None
    hours_system_must_operate: Optional[str] = None
    emergency_generator_connected: Optional[bool] = None
    fuel_source_location: Optional[str] = None
    # Section 7 - Post Test
    post_test: Dict[str, str] = field(default_factory=dict)
    return_to_service_at: Optional[str] = None
    # Section 8 - Comments
    incorrectly_operating_equipment: Optional[str] = None
    # Section 9 - Test Verification
    owner_signoff: SignOffBlock = field(default_factory=SignOffBlock)
    technician_signoff: SignOffBlock = field(default_factory=SignOffBlock)

    @classmethod
    def from_dict(cls, d):
        """Build a record from the form payload (camelCase keys)."""
        if not isinstance(d, dict):
            raise RecordError(f"record must be a mapping, got {type(d).__name__}")
        g = d.get
        return cls(
            property_name=_str(g("propertyName")),
            street=_str(g("street")),
            city_state_zip=_str(g("cityStateZip")),
            contact=_str(g("contact")),
            phone=_str(g("phone")),
            frequency_of_inspection=_str(g("frequencyOfInspection")),
            date=_str(g("date")),
            notify_entities=tuple(NotifyEntity.from_dict(e) for e in _items(g("notifyEntities"))),
            manufacturer=_str(g("manufacturer")),
            model=_str(g("model")),
            control_panel_status=_answers(g("controlPanelStatus"), CONTROL_PANEL_KEYS),
            put_system_in_test_at=_str(g("putSystemInTestAt")),
            comments=_str(g("comments")),
            system_type=_str(g("systemType")),
            equipment_tested=tuple(EquipmentRow.from_dict(e) for e in _items(g("equipmentTested"))),
            functional_test=_answers(g("functionalTest"), FUNCTIONAL_TEST_KEYS),
            primary_power=_str(g("primaryPower")),
            nominal_voltage=_str(g("nominalVoltage")),
            nominal_voltage_amps=_str(g("nominalVoltageAmps")),
            overcurrent_protection=_str(g("overcurrentProtection")),
            overcurrent_protection_amps=_str(g("overcurrentProtectionAmps")),
            panel_breaker_location=_str(g("panelBreakerLocation")),
            battery_test_reading=_str(g("batteryTestReading")),
            storage_battery=_str(g("storageBattery")),
            hours_system_must_operate=_str(g("hoursSystemMustOperate")),
            emergency_generator_connected=_bool(g("emergencyGeneratorConnected")),
            fuel_source_location=_str(g("fuelSourceLocation")),
            post_test=_answers(g("postTest"), POST_TEST_KEYS),
            return_to_service_at=_str(g("returnToServiceAt")),
            incorrectly_operating_equipment=_str(g("incorrectlyOperatingEquipment")),
            owner_signoff=SignOffBlock.from_dict(g("testVerificationOwner")),
            technician_signoff=SignOffBlock.from_dict(g("testVerificationCEC")),
        )


# ── XML helpers ───────────────────────────────────────────────────────────────
def local(el):
    t = el.tag
    if not isinstance(t, str):
        return ""
    return t.split("}")[-1] if "}" in t else t

def element_to_value(el):
    """Leaf -> text, list container -> list, anything else -> dict."""
    children = [c for c in el if local(c)]
    if not children:
        return (el.text or "").strip()
    if local(el) in LIST_FIELDS:
        return [element_to_value(c) for c in children]
    out = {}
    for c in children:
        k = local(c)
        if k not in out:
            out[k] = element_to_value(c)
    return out

def parse_xml_record(raw):
    """Read an XML dataset; an XFA-style ``<data>`` wrapper is accepted."""
    try:
        root = etree.fromstring(raw)
    except etree.XMLSyntaxError as ex:
        raise RecordError(f"invalid XML record: {ex}") from ex
    data_el = next((c for c in root.iter() if local(c) == "data"), None)
    if data_el is not None:
        root = next((c for c in data_el if local(c)), data_el)
    value = element_to_value(root)
    return FireAlarmReport.from_dict(value if isinstance(value, dict) else {})


def load_record(path):
    """Load a record from a ``.json`` or ``.xml`` file."""
    if not os.path.exists(path):
        raise RecordError(f"Not found: {path}")
    with open(path, "rb") as fh:
        raw = fh.read()
    if path.lower().endswith(".xml"):
        return parse_xml_record(raw)
    try:
        payload = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as ex:
        raise RecordError(f"invalid JSON record: {ex}") from ex
    return FireAlarmReport.from_dict(payload)
