#!/usr/bin/env python3
"""Record model and JSON / XML loaders"""

import json
import os
import tempfile
import unittest

from firereport.errors import RecordError
from firereport.record import FireAlarmReport, load_record, parse_xml_record

from support import full_payload

XML_RECORD = b"""<?xml version="1.0" encoding="UTF-8"?>
<xfa:datasets xmlns:xfa="http://www.xfa.org/schema/xfa-data/1.0/">
  <xfa:data>
    <fireAlarmReport>
      <propertyName>Test Site</propertyName>
      <date>2024-05-02</date>
      <notifyEntities>
        <notifyEntity><entity>Fire Dept</entity><name>Dispatch</name><phone>555-0111</phone></notifyEntity>
        <notifyEntity><entity></entity><name>Skipped</name></notifyEntity>
      </notifyEntities>
      <controlPanelStatus><a>Yes</a><b>No</b><c>Maybe</c></controlPanelStatus>
      <equipmentTested>
        <item><equipmentLabel>Pull Stations</equipmentLabel><totalNumber>4</totalNumber>
              <totalNumberTested>3</totalNumberTested><functionOK>Yes</functionOK></item>
        <item><equipmentLabel>Duct Detectors</equipmentLabel></item>
      </equipmentTested>
      <emergencyGeneratorConnected>true</emergencyGeneratorConnected>
      <testVerificationOwner><name>Pat Owner</name><title>Manager</title></testVerificationOwner>
      <testVerificationCEC><name>Sam Tech</name></testVerificationCEC>
    </fireAlarmReport>
  </xfa:data>
</xfa:datasets>
"""


class TestFromDict(unittest.TestCase):
    def test_empty_payload(self):
        r = FireAlarmReport.from_dict({})
        self.assertIsNone(r.property_name)
        self.assertEqual(r.notify_entities, ())
        self.assertEqual(r.equipment_tested, ())
        self.assertEqual(set(r.control_panel_status), set("abcdefghijk"))
        self.assertTrue(all(v == "" for v in r.control_panel_status.values()))
        self.assertEqual(len(r.functional_test), 6)
        self.assertEqual(len(r.post_test), 5)
        self.assertIsNone(r.owner_signoff.name)
        self.assertIsNone(r.technician_signoff.signature)

    def test_full_payload(self):
        r = FireAlarmReport.from_dict(full_payload())
        self.assertEqual(r.property_name, "Maple Court Apartments")
        self.assertEqual(len(r.notify_entities), 4)
        self.assertEqual(r.equipment_tested[1].total_number, 14)
        self.assertEqual(r.control_panel_status["k"], "Yes")
        self.assertTrue(r.emergency_generator_connected)
        self.assertEqual(r.technician_signoff.name, "T. Nguyen")
        self.assertIsNone(r.owner_signoff.signature)

    def test_coercion(self):
        r = FireAlarmReport.from_dict({
            "equipmentTested": [{"equipmentLabel": "A", "totalNumber": "3",
                                 "totalNumberTested": 5, "functionOK": "maybe"},
                                {"equipmentLabel": "B", "totalNumber": "lots"}],
            "emergencyGeneratorConnected": "no",
            "postTest": {"a": "N/A", "b": "yes"},
        })
        first, second = r.equipment_tested
        self.assertEqual((first.total_number, first.total_tested), (3, 5))
        self.assertEqual(first.function_ok, "")
        self.assertIsNone(second.total_number)
        self.assertIs(r.emergency_generator_connected, False)
        self.assertEqual(r.post_test["a"], "N/A")
        self.assertEqual(r.post_test["b"], "")

    def test_tested_may_exceed_total(self):
        r = FireAlarmReport.from_dict({"equipmentTested": [
            {"equipmentLabel": "A", "totalNumber": 1, "totalNumberTested": 9}]})
        self.assertEqual(r.equipment_tested[0].total_tested, 9)

    def test_counts_keep_precision_and_never_overflow(self):
        r = FireAlarmReport.from_dict({"equipmentTested": [
            {"equipmentLabel": "A", "totalNumber": 12345678901234567891,
             "totalNumberTested": "98765432109876543210"},
            {"equipmentLabel": "B", "totalNumber": "1e400", "totalNumberTested": float("inf")},
            {"equipmentLabel": "C", "totalNumber": "12.0", "totalNumberTested": " 7 "},
            {"equipmentLabel": "D", "totalNumber": "nan"},
        ]})
        a, b, c, d = r.equipment_tested
        self.assertEqual(a.total_number, 12345678901234567891)
        self.assertEqual(a.total_tested, 98765432109876543210)
        self.assertIsNone(b.total_number)
        self.assertIsNone(b.total_tested)
        self.assertEqual((c.total_number, c.total_tested), (12, 7))
        self.assertIsNone(d.total_number)

    def test_overflowing_count_from_json(self):
        payload = json.loads('{"equipmentTested": [{"equipmentLabel": "X", "totalNumber": 1e400}]}')
        r = FireAlarmReport.from_dict(payload)
        self.assertIsNone(r.equipment_tested[0].total_number)

    def test_non_list_rows_ignored(self):
        r = FireAlarmReport.from_dict({"notifyEntities": 5, "equipmentTested": "Pull Stations"})
        self.assertEqual(r.notify_entities, ())
        self.assertEqual(r.equipment_tested, ())

    def test_rejects_non_mapping(self):
        with self.assertRaises(RecordError):
            FireAlarmReport.from_dict(["not", "a", "record"])


class TestXml(unittest.TestCase):
    def test_xfa_dataset(self):
        r = parse_xml_record(XML_RECORD)
        self.assertEqual(r.property_name, "Test Site")
        self.assertEqual([e.entity for e in r.notify_entities], ["Fire Dept", ""])
        self.assertEqual(r.control_panel_status["a"], "Yes")
        self.assertEqual(r.control_panel_status["b"], "No")
        self.assertEqual(r.control_panel_status["c"], "")
        self.assertEqual(len(r.equipment_tested), 2)
        self.assertEqual(r.equipment_tested[0].total_tested, 3)
        self.assertIsNone(r.equipment_tested[1].total_number)
        self.assertTrue(r.emergency_generator_connected)
        self.assertEqual(r.owner_signoff.title, "Manager")
        self.assertEqual(r.technician_signoff.name, "Sam Tech")

    def test_bare_record_element(self):
        r = parse_xml_record(b"<fireAlarmReport><propertyName>Bare</propertyName></fireAlarmReport>")
        self.assertEqual(r.property_name, "Bare")

    def test_invalid_xml(self):
        with self.assertRaises(RecordError):
            parse_xml_record(b"<fireAlarmReport><oops></fireAlarmReport>")


class TestLoadRecord(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp.cleanup()

    def write(self, name, data):
        path = os.path.join(self.tmp.name, name)
        with open(path, "wb") as fh:
            fh.write(data)
        return path

    def test_json_file(self):
        path = self.write("record.json", json.dumps(full_payload()).encode())
        self.assertEqual(load_record(path).model, "NFS2-3030")

    def test_xml_file(self):
        path = self.write("record.xml", XML_RECORD)
        self.assertEqual(load_record(path).property_name, "Test Site")

    def test_missing_file(self):
        with self.assertRaises(RecordError):
            load_record(os.path.join(self.tmp.name, "nope.json"))

    def test_bad_json(self):
        path = self.write("broken.json", b"{not json")
        with self.assertRaises(RecordError):
            load_record(path)


if __name__ == '__main__':
    unittest.main()
