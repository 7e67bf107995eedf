"""Shared builders for the unit tests."""

import base64
import io

from PIL import Image


def png_bytes(width=40, height=20, color=(20, 80, 140)):
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buf, "PNG")
    return buf.getvalue()


def jpeg_bytes(width=40, height=20):
    buf = io.BytesIO()
    Image.new("RGB", (width, height), (200, 30, 30)).save(buf, "JPEG")
    return buf.getvalue()


def data_url(data):
    return "data:image/png;base64," + base64.b64encode(data).decode("ascii")


def full_payload():
    """A completely filled-in form payload, as the web form submits it."""
    return {
        "propertyName": "Maple Court Apartments",
        "street": "12 Maple Court",
        "cityStateZip": "Springfield, IL 62701",
        "contact": "Jordan Lee",
        "phone": "555-0100",
        "frequencyOfInspection": "Annual",
        "date": "2024-05-02",
        "notifyEntities": [
            {"entity": "Fire Dept", "name": "Dispatch", "phone": "555-0111"},
            {"entity": "Monitoring", "name": "Acme Alarm", "phone": "555-0122"},
            {"entity": "", "name": "Nobody", "phone": ""},
            {"entity": "Owner", "name": "R. Diaz", "phone": "555-0133"},
        ],
        "manufacturer": "Notifier",
        "model": "NFS2-3030",
        "controlPanelStatus": {k: "Yes" for k in "abcdefghijk"},
        "putSystemInTestAt": "09:15",
        "comments": "Panel clean, batteries replaced last year.",
        "systemType": "Addressable",
        "equipmentTested": [
            {"equipmentLabel": "A. Remote Annunciators", "totalNumber": 2,
             "totalNumberTested": 2, "functionOK": "Yes"},
            {"equipmentLabel": "B. Manual Pull Stations", "totalNumber": 14,
             "totalNumberTested": 14, "functionOK": "Yes"},
        ],
        "functionalTest": {k: "N/A" for k in "abcdef"},
        "primaryPower": "120V",
        "nominalVoltage": "24",
        "nominalVoltageAmps": "3",
        "overcurrentProtection": "Breaker",
        "overcurrentProtectionAmps": "20",
        "panelBreakerLocation": "Panel B, breaker 12, basement electrical room",
        "batteryTestReading": "26.1 V",
        "storageBattery": "18",
        "hoursSystemMustOperate": "24",
        "emergencyGeneratorConnected": True,
        "fuelSourceLocation": "",
        "postTest": {k: "Yes" for k in "abcde"},
        "returnToServiceAt": "11:40",
        "incorrectlyOperatingEquipment": "",
        "testVerificationOwner": {"name": "R. Diaz", "title": "Manager",
                                  "date": "2024-05-02", "signature": ""},
        "testVerificationCEC": {"name": "T. Nguyen", "title": "Technician",
                                "date": "2024-05-02", "signature": ""},
    }
