"""
FastAPI web server — layout, routing and export endpoints for projects.
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel

from src.projects import (
    Project, SCHEMATIC_FILE, PLACEMENTS_FILE,
    create_project, load_project, list_projects, delete_project,
)
from src.schematic.design import parse_schematic, schematic_to_dict
from src.schematic.export import generate_eagle_schematic, clean_name
from src.schematic.placer import PlacementError, parse_placements, placements_to_dict
from src.schematic.router import UnresolvedPinError
from src.schematic.session import LayoutSession


log = logging.getLogger(__name__)


# ── .env loader ────────────────────────────────────────────────────

def _load_env():
    root = Path(__file__).resolve().parents[2]
    for name in (".env", ".env.local"):
        p = root / name
        if p.exists():
            for line in p.read_text(encoding="utf-8").splitlines():
                line = line.strip()
                if line and "=" in line and not line.startswith("#"):
                    k, v = line.split("=", 1)
                    k = k.strip()
                    v = v.strip().strip('"').strip("'")
                    if k and k not in os.environ:
                        os.environ[k] = v

_load_env()

# ── App ────────────────────────────────────────────────────────────

app = FastAPI(title="Schematic Autolayout")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Session state (persists across requests) ───────────────────────

_sessions: dict[str, LayoutSession] = {}     # project id -> live layout
_sessions_lock = threading.Lock()


# ── Models ─────────────────────────────────────────────────────────

class SchematicPayload(BaseModel):
    components: list[dict[str, Any]]
    nets: list[dict[str, Any]] = []


class CreateProjectRequest(BaseModel):
    name: str = ""
    description: str = ""
    main_component: str = ""
    schematic: SchematicPayload


class PositionModel(BaseModel):
    x: int
    y: int
    w: int
    h: int


class LayoutRequest(BaseModel):
    schematic: SchematicPayload
    positions: dict[str, PositionModel] | None = None


class MoveRequest(BaseModel):
    id: str
    x: float
    y: float


# ── Helpers ────────────────────────────────────────────────────────

def _parse(payload: SchematicPayload):
    try:
        return parse_schematic(payload.model_dump())
    except (KeyError, ValueError) as e:
        raise HTTPException(422, f"Invalid schematic: {e}")


def _layout_response(session: LayoutSession) -> dict:
    with session.lock:
        try:
            snap = session.snapshot()
        except UnresolvedPinError as e:
            raise HTTPException(422, str(e))
        result = session.routing()
        snap["warnings"] = session.warnings()
    snap["fallback_routes"] = result.fallback_routes
    snap["skipped_nets"] = list(result.skipped_nets)
    return snap


def _project_or_404(project_id: str) -> Project:
    project = load_project(project_id)
    if project is None:
        raise HTTPException(404, f"Project {project_id} not found.")
    return project


def _session_for(project: Project) -> LayoutSession:
    with _sessions_lock:
        session = _sessions.get(project.id)
        if session is not None:
            return session
        data = project.read_artifact(SCHEMATIC_FILE)
        if data is None:
            raise HTTPException(400, "Project has no schematic data.")
        schematic = parse_schematic(data)
        stored = project.read_artifact(PLACEMENTS_FILE)
        placements = None
        if stored:
            try:
                placements = parse_placements(stored)
            except ValueError as e:
                log.warning("Server: discarding stored placements of %s: %s", project.id, e)
        session = LayoutSession(schematic, placements)
        _sessions[project.id] = session
        project.write_artifact(PLACEMENTS_FILE, placements_to_dict(session.placements))
        return session


# ── Routes ─────────────────────────────────────────────────────────

@app.post("/api/layout")
def layout(req: LayoutRequest):
    """Stateless layout: schematic (and optional positions) in, layout out."""
    schematic = _parse(req.schematic)
    placements = None
    if req.positions:
        placements = parse_placements({cid: p.model_dump() for cid, p in req.positions.items()})
    return _layout_response(LayoutSession(schematic, placements))


@app.get("/api/projects")
def get_projects():
    return {"projects": list_projects()}


@app.post("/api/projects")
def new_project(req: CreateProjectRequest):
    schematic = _parse(req.schematic)
    project = create_project(
        name=req.name,
        description=req.description,
        main_component=req.main_component,
    )
    project.write_artifact(SCHEMATIC_FILE, schematic_to_dict(schematic))
    session = _session_for(project)
    return {"project": project.meta(), **_layout_response(session)}


@app.get("/api/projects/{project_id}")
def get_project(project_id: str):
    project = _project_or_404(project_id)
    return {
        "project": project.meta(),
        "schematic": project.read_artifact(SCHEMATIC_FILE),
        "positions": project.read_artifact(PLACEMENTS_FILE) or {},
    }


@app.delete("/api/projects/{project_id}")
def remove_project(project_id: str):
    with _sessions_lock:
        _sessions.pop(project_id, None)
    if not delete_project(project_id):
        raise HTTPException(404, f"Project {project_id} not found.")
    return {"status": "ok"}


@app.post("/api/projects/{project_id}/layout")
def project_layout(project_id: str):
    project = _project_or_404(project_id)
    return _layout_response(_session_for(project))


@app.post("/api/projects/{project_id}/move")
def move(project_id: str, req: MoveRequest):
    """Drag one component; positions are snapped and persisted."""
    project = _project_or_404(project_id)
    session = _session_for(project)
    with session.lock:
        try:
            session.move_component(req.id, req.x, req.y)
        except PlacementError as e:
            raise HTTPException(404, str(e))
        project.write_artifact(PLACEMENTS_FILE, placements_to_dict(session.placements))
    return _layout_response(session)


@app.post("/api/projects/{project_id}/reset_layout")
def reset_layout(project_id: str):
    project = _project_or_404(project_id)
    session = _session_for(project)
    with session.lock:
        session.reset_layout()
        project.write_artifact(PLACEMENTS_FILE, placements_to_dict(session.placements))
    return _layout_response(session)


@app.get("/api/projects/{project_id}/export/eagle")
def export_eagle(project_id: str):
    project = _project_or_404(project_id)
    session = _session_for(project)
    with session.lock:
        try:
            routes = session.routing().routes
        except UnresolvedPinError as e:
            raise HTTPException(422, str(e))
        xml = generate_eagle_schematic(session.schematic, session.placements, routes)
    filename = f"{clean_name(project.name or project.id)}.sch"
    return Response(
        content=xml,
        media_type="application/xml",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def main(host: str = "127.0.0.1", port: int = 8000):
    import uvicorn
    uvicorn.run("src.web.server:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
