"""Tests for the web API, driven through FastAPI's TestClient."""

from __future__ import annotations

import os
import tempfile
import unittest
import xml.etree.ElementTree as ET
from unittest import mock

from fastapi.testclient import TestClient

from src.projects import PLACEMENTS_FILE, load_project
from src.web import server
from tests.schematic_fixture import make_demo_dict


class ServerTestCase(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        patcher = mock.patch.dict(os.environ, {"SCHEMATIC_PROJECTS_DIR": self._tmp.name})
        patcher.start()
        self.addCleanup(patcher.stop)
        server._sessions.clear()
        self.addCleanup(server._sessions.clear)
        self.client = TestClient(server.app)

    def _create(self, name="bridge"):
        resp = self.client.post("/api/projects", json={
            "name": name, "schematic": make_demo_dict(),
        })
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()


class TestStatelessLayout(ServerTestCase):

    def test_layout(self):
        resp = self.client.post("/api/layout", json={"schematic": make_demo_dict()})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["positions"]["U1"], {"x": 60, "y": 60, "w": 220, "h": 160})
        self.assertEqual(data["positions"]["U2"], {"x": 420, "y": 60, "w": 220, "h": 140})
        self.assertEqual([r["id"] for r in data["routes"]], ["TX-0", "PWR-0"])
        self.assertEqual(data["routes"][1]["color"], "#dc2626")
        self.assertEqual(data["warnings"], [])
        self.assertEqual(data["skipped_nets"], [])

    def test_layout_keeps_given_positions(self):
        resp = self.client.post("/api/layout", json={
            "schematic": make_demo_dict(),
            "positions": {"U1": {"x": 600, "y": 600, "w": 220, "h": 160}},
        })
        positions = resp.json()["positions"]
        self.assertEqual(positions["U1"]["x"], 600)
        self.assertIn("U2", positions)

    def test_incomplete_position_rejected(self):
        resp = self.client.post("/api/layout", json={
            "schematic": make_demo_dict(),
            "positions": {"U1": {"x": 60, "y": 60}},
        })
        self.assertEqual(resp.status_code, 422)

    def test_off_grid_positions_are_snapped(self):
        resp = self.client.post("/api/layout", json={
            "schematic": make_demo_dict(),
            "positions": {"U1": {"x": 65, "y": 67, "w": 225, "h": 143}},
        })
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["positions"]["U1"], {"x": 60, "y": 60, "w": 240, "h": 160})
        for p in resp.json()["positions"].values():
            self.assertEqual([v % 20 for v in p.values()], [0, 0, 0, 0])

    def test_invalid_schematic(self):
        bad = {"components": [{"id": "U1", "pins": "oops"}], "nets": []}
        resp = self.client.post("/api/layout", json={"schematic": bad})
        self.assertEqual(resp.status_code, 422)


class TestProjects(ServerTestCase):

    def test_create_and_fetch(self):
        created = self._create()
        pid = created["project"]["id"]
        self.assertEqual(len(created["routes"]), 2)

        resp = self.client.get(f"/api/projects/{pid}")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["project"]["name"], "bridge")
        self.assertEqual(set(body["positions"]), {"U1", "U2"})
        self.assertEqual(body["schematic"]["components"][0]["id"], "U1")

        listed = self.client.get("/api/projects").json()["projects"]
        self.assertEqual([p["id"] for p in listed], [pid])

    def test_move_persists_snapped_position(self):
        pid = self._create()["project"]["id"]
        resp = self.client.post(f"/api/projects/{pid}/move", json={"id": "U2", "x": 515, "y": 93})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["positions"]["U2"]["x"], 520)
        self.assertEqual(resp.json()["positions"]["U2"]["y"], 100)

        # A fresh session reloads positions from disk.
        server._sessions.clear()
        again = self.client.post(f"/api/projects/{pid}/layout").json()
        self.assertEqual(again["positions"]["U2"]["x"], 520)

    def test_stored_placements_snapped_or_discarded(self):
        created = self._create()
        pid = created["project"]["id"]
        project = load_project(pid)

        project.write_artifact(PLACEMENTS_FILE, {"U1": {"x": 65, "y": 67, "w": 225, "h": 143}})
        server._sessions.clear()
        resp = self.client.post(f"/api/projects/{pid}/layout")
        self.assertEqual(resp.json()["positions"]["U1"], {"x": 60, "y": 60, "w": 240, "h": 160})

        project.write_artifact(PLACEMENTS_FILE, {"U1": {"x": 60}})
        server._sessions.clear()
        with self.assertLogs("src.web.server", level="WARNING"):
            resp = self.client.post(f"/api/projects/{pid}/layout")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["positions"], created["positions"])

    def test_move_unknown_component(self):
        pid = self._create()["project"]["id"]
        resp = self.client.post(f"/api/projects/{pid}/move", json={"id": "ZZ", "x": 0, "y": 0})
        self.assertEqual(resp.status_code, 404)

    def test_reset_layout(self):
        pid = self._create()["project"]["id"]
        self.client.post(f"/api/projects/{pid}/move", json={"id": "U1", "x": 900, "y": 900})
        resp = self.client.post(f"/api/projects/{pid}/reset_layout")
        self.assertEqual(resp.json()["positions"]["U1"]["x"], 60)

    def test_export_eagle(self):
        pid = self._create(name="my board")["project"]["id"]
        resp = self.client.get(f"/api/projects/{pid}/export/eagle")
        self.assertEqual(resp.status_code, 200)
        self.assertIn('filename="my_board.sch"', resp.headers["content-disposition"])
        root = ET.fromstring(resp.content)
        self.assertEqual(len(root.findall(".//instances/instance")), 2)

    def test_delete(self):
        pid = self._create()["project"]["id"]
        self.assertEqual(self.client.delete(f"/api/projects/{pid}").status_code, 200)
        self.assertEqual(self.client.get(f"/api/projects/{pid}").status_code, 404)
        self.assertEqual(self.client.delete(f"/api/projects/{pid}").status_code, 404)

    def test_unknown_project(self):
        self.assertEqual(self.client.post("/api/projects/nope/layout").status_code, 404)


if __name__ == "__main__":
    unittest.main()
