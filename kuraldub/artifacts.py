"""Project directory management, script.json artifacts, and clip freshness."""

import json
import os
import re
import shutil
from collections.abc import Sequence
from datetime import datetime, timezone

from kuraldub.constants import OUTPUT_DIR, VERSION
from kuraldub.models import ScriptLine

SUBDIRS = ("clips", "final")


def slug_from_path(transcript_path: str) -> str:
    """Convert transcript filename to output directory slug.

    "Vikram Trailer.txt" → "vikram_trailer"
    "/path/to/scene-04.txt" → "scene_04"
    """
    basename = os.path.splitext(os.path.basename(transcript_path))[0]
    # Replace non-alphanumeric with underscore, collapse multiples, strip edges
    return re.sub(r"[^a-zA-Z0-9]+", "_", basename).strip("_").lower()


def init_output_dir(transcript_path: str, output_base: str = OUTPUT_DIR) -> str:
    """Create output/<slug>/ and its subdirectories.

    Returns the project directory path.
    """
    project_dir = os.path.join(output_base, slug_from_path(transcript_path))
    for subdir in SUBDIRS:
        os.makedirs(os.path.join(project_dir, subdir), exist_ok=True)
    return project_dir


def clear_outputs(project_dir: str, subdirs: Sequence[str] = SUBDIRS) -> list[str]:
    """Empty derived-output subdirectories, leaving them in place.

    Returns names of the subdirectories that existed and were cleared.
    """
    cleared = []
    for subdir in subdirs:
        path = os.path.join(project_dir, subdir)
        if os.path.exists(path):
            shutil.rmtree(path)
            os.makedirs(path)
            cleared.append(subdir)
    return cleared


def write_artifact(project_dir: str, filename: str, data: dict) -> str:
    """Write JSON artifact to project_dir/filename.

    Returns path to the written file.
    """
    path = os.path.join(project_dir, filename)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    return path


def load_artifact(project_dir: str, filename: str) -> dict | None:
    """Read JSON artifact. Returns None if file doesn't exist."""
    path = os.path.join(project_dir, filename)
    if not os.path.exists(path):
        return None
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def build_script_artifact(
    lines: Sequence[ScriptLine],
    source: str,
    media: str | None = None,
) -> dict:
    """script.json payload for a freshly decoded transcript."""
    return {
        "source": source,
        "media": media,
        "decoded_at": datetime.now(timezone.utc).isoformat(),
        "version": VERSION,
        "lines": [line.to_dict() for line in lines],
    }


def load_script_lines(project_dir: str) -> list[ScriptLine] | None:
    """Rebuild ScriptLines from script.json, or None if there is none."""
    script = load_artifact(project_dir, "script.json")
    if script is None:
        return None
    return [ScriptLine.from_dict(record) for record in script.get("lines", [])]


def get_project_status(project_dir: str) -> dict:
    """Return dict describing the state of each project step."""
    status = {}

    script = load_artifact(project_dir, "script.json")
    if script is not None:
        lines = script.get("lines", [])
        actions = sum(1 for line in lines if line.get("action_description"))
        status["decode"] = {
            "state": "done",
            "lines": len(lines),
            "dialogue": len(lines) - actions,
            "actions": actions,
        }
    else:
        status["decode"] = {"state": "pending"}

    clips_dir = os.path.join(project_dir, "clips")
    clips = []
    if os.path.isdir(clips_dir):
        clips = [f for f in os.listdir(clips_dir) if not f.startswith(".")]
    status["clips"] = {"state": "done", "files": len(clips)} if clips else {"state": "pending"}

    final_dir = os.path.join(project_dir, "final")
    exports = []
    if os.path.isdir(final_dir):
        exports = sorted(f for f in os.listdir(final_dir) if f.endswith(".txt"))
    status["export"] = {"state": "done", "files": exports} if exports else {"state": "pending"}

    return status


def list_projects(output_base: str = OUTPUT_DIR) -> list[str]:
    """List all project slugs under the output directory.

    Returns sorted list of directory names that contain a script.json.
    """
    if not os.path.exists(output_base):
        return []
    projects = []
    for name in os.listdir(output_base):
        script = os.path.join(output_base, name, "script.json")
        if os.path.exists(script):
            projects.append(name)
    return sorted(projects)


def clips_fresh(project_dir: str, input_paths: list[str]) -> bool:
    """True if clips/ holds files newer than every existing input.

    An empty or missing clips/ is never fresh.
    """
    clips_dir = os.path.join(project_dir, "clips")
    if not os.path.isdir(clips_dir):
        return False
    contents = os.listdir(clips_dir)
    if not contents:
        return False

    oldest_clip = min(os.path.getmtime(os.path.join(clips_dir, f)) for f in contents)
    return all(
        os.path.getmtime(path) <= oldest_clip
        for path in input_paths
        if os.path.exists(path)
    )
