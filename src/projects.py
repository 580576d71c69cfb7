"""
Project store — each project is a folder on disk holding the schematic
data and its component positions.

Projects are identified by a short timestamp-based ID and stored under
  <SCHEMATIC_PROJECTS_DIR>/<project_id>/      (default outputs/projects)

A project folder contains:
  project.json     — metadata (created, last_modified, name, description)
  schematic.json   — components and nets
  placements.json  — component positions {id: {x, y, w, h}}

Routes are never stored; they are recomputed from the two artifacts.
"""

from __future__ import annotations

import json
import logging
import os
import shutil
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


log = logging.getLogger(__name__)

ROOT = Path(__file__).resolve().parent.parent

SCHEMATIC_FILE = "schematic.json"
PLACEMENTS_FILE = "placements.json"


def projects_dir() -> Path:
    """Storage root, overridable with SCHEMATIC_PROJECTS_DIR."""
    env = os.environ.get("SCHEMATIC_PROJECTS_DIR")
    return Path(env) if env else ROOT / "outputs" / "projects"


@dataclass
class Project:
    id: str
    path: Path
    created: str                         # ISO 8601
    last_modified: str                   # ISO 8601
    name: str = ""
    description: str = ""
    main_component: str = ""

    def save(self) -> None:
        """Persist project metadata to project.json."""
        self.last_modified = datetime.now(timezone.utc).isoformat()
        self.path.mkdir(parents=True, exist_ok=True)
        (self.path / "project.json").write_text(
            json.dumps(self.meta(), indent=2), encoding="utf-8")

    def meta(self) -> dict:
        return {
            "id": self.id,
            "created": self.created,
            "last_modified": self.last_modified,
            "name": self.name,
            "description": self.description,
            "main_component": self.main_component,
        }

    def write_artifact(self, filename: str, data: Any) -> Path:
        """Write a JSON artifact to the project folder."""
        p = self.path / filename
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        self.save()  # update last_modified
        return p

    def read_artifact(self, filename: str) -> Any | None:
        """Read a JSON artifact from the project folder. Returns None if missing."""
        p = self.path / filename
        if not p.exists():
            return None
        return json.loads(p.read_text(encoding="utf-8"))

    def has_artifact(self, filename: str) -> bool:
        return (self.path / filename).exists()


def _generate_project_id() -> str:
    """Generate a short, unique, human-readable project ID."""
    return datetime.now().strftime("%Y%m%d_%H%M%S_%f")


def create_project(
    name: str = "",
    description: str = "",
    main_component: str = "",
) -> Project:
    """Create a new project with a fresh folder on disk."""
    base = projects_dir()
    pid = _generate_project_id()
    path = base / pid

    while path.exists():
        time.sleep(0.001)
        pid = _generate_project_id()
        path = base / pid

    now = datetime.now(timezone.utc).isoformat()
    project = Project(
        id=pid,
        path=path,
        created=now,
        last_modified=now,
        name=name,
        description=description,
        main_component=main_component,
    )
    project.save()
    log.info("Projects: created %s (%s)", pid, name or "unnamed")
    return project


def load_project(project_id: str) -> Project | None:
    """Load an existing project by ID. Returns None if not found."""
    path = projects_dir() / project_id
    meta_path = path / "project.json"
    if not meta_path.exists():
        return None
    try:
        meta = json.loads(meta_path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError):
        log.warning("Projects: unreadable metadata for %s", project_id)
        return None
    return Project(
        id=meta["id"],
        path=path,
        created=meta["created"],
        last_modified=meta["last_modified"],
        name=meta.get("name", ""),
        description=meta.get("description", ""),
        main_component=meta.get("main_component", ""),
    )


def list_projects() -> list[dict]:
    """List all projects, newest first. Returns lightweight metadata dicts."""
    projects = []
    base = projects_dir()
    if not base.exists():
        return projects
    for d in sorted(base.iterdir(), reverse=True):
        if not d.is_dir():
            continue
        meta_path = d / "project.json"
        if not meta_path.exists():
            continue
        try:
            projects.append(json.loads(meta_path.read_text(encoding="utf-8")))
        except (json.JSONDecodeError, OSError):
            continue
    return projects


def delete_project(project_id: str) -> bool:
    """Remove a project folder. Returns True if it existed."""
    project = load_project(project_id)
    if project is None:
        return False
    shutil.rmtree(project.path)
    log.info("Projects: deleted %s", project_id)
    return True
